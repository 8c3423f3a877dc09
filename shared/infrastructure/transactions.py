"""Transaction helpers shared by the mutation services."""

from __future__ import annotations

import functools
import logging

from django.db import DatabaseError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.domain.errors import StorageError

logger = logging.getLogger(__name__)


def lock_queryset_if_possible(queryset):  # type: ignore
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def atomic_operation(func):  # type: ignore
    """
    Run a service function in one transaction.

    Database failures roll the whole operation back and surface as
    ``StorageError``. They are logged once here and never retried.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):  # type: ignore
        try:
            with transaction.atomic():
                return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("Storage failure in %s", func.__qualname__)
            raise StorageError("The operation could not be completed. Please try again.") from exc

    return wrapper
