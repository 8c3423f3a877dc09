"""DRF exception handler that renders domain errors consistently."""

from __future__ import annotations

import logging

from django.db import DatabaseError  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.errors import DomainError, StorageError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):  # type: ignore
    """
    Map ``DomainError`` subclasses to ``{"error": code, "detail": ...}``.

    Raw database failures that escaped a service are reported as a generic
    storage error without leaking driver messages. Anything else falls through
    to DRF's default handling.
    """
    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.exception("Database failure in %s", view.__class__.__name__ if view else "request")
        exc = StorageError("The operation could not be completed. Please try again.")

    if isinstance(exc, DomainError):
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.code, exc.detail)
        return Response(exc.as_payload(), status=exc.status_code)

    return exception_handler(exc, context)
