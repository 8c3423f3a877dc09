"""
Domain error taxonomy

Every failure path of the booking core raises one of these. The API layer
maps them to HTTP responses in ``shared.infrastructure.exception_handler``,
so services never build responses themselves.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable


class DomainError(Exception):
    """Base class for failures the caller is expected to handle."""

    code = "error"
    status_code = 400

    def __init__(self, detail: str = "", **extra: Any) -> None:
        super().__init__(detail)
        self.detail = detail
        self.extra = extra

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "detail": self.detail}
        payload.update(self.extra)
        return payload


class ValidationError(DomainError):
    """Missing field, inverted interval or non-positive price."""

    code = "validation_error"
    status_code = 400


class ConflictError(DomainError):
    """The requested dates collide with an active booking or a block."""

    code = "conflict"
    status_code = 409

    def __init__(self, property_names: Iterable[str], detail: str = "") -> None:
        self.property_names = list(property_names)
        if not detail:
            detail = "Dates are not available for: " + ", ".join(self.property_names)
        super().__init__(detail, property_names=self.property_names)


class PricingIncompleteError(DomainError):
    """Some nights of the stay have no covering price range."""

    code = "pricing_incomplete"
    status_code = 400

    def __init__(self, missing_dates: Iterable[date], detail: str = "") -> None:
        self.missing_dates = list(missing_dates)
        if not detail:
            detail = "No price is defined for every night of the stay."
        super().__init__(detail, missing_dates=[d.isoformat() for d in self.missing_dates])


class NotFoundError(DomainError):
    code = "not_found"
    status_code = 404


class StorageError(DomainError):
    """The database failed underneath an operation. Never retried here."""

    code = "storage_error"
    status_code = 500
