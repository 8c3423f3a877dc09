"""
Availability checks for bookings and blocked dates.

A candidate stay or block is compared against the active bookings and the
blocked dates of one property. Which interval semantics applies depends on
the call site:

- ``Mode.STAY`` (bookings): half-open against other bookings, so a stay may
  start on the day another one checks out. Against blocked dates the stay is
  treated as closed, as it is when the block is the newcomer.
- ``Mode.BLOCK`` (blocked dates): everything is closed, existing bookings
  included. A block may not start on a checkout day.

All functions here only read. Callers that write afterwards hold the
property row lock for the whole check-and-write.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from django.conf import settings  # type: ignore

from apps.bookings.models import Booking
from shared.domain.errors import ConflictError, NotFoundError
from shared.domain.intervals import (
    as_date,
    closed_ranges_overlap,
    days_of,
    is_same_day_turnover,
    nights_of,
    stays_overlap,
)

from .models import BlockedDate, Property

logger = logging.getLogger(__name__)


class Mode(str, enum.Enum):
    STAY = "stay"
    BLOCK = "block"


@dataclass(frozen=True)
class Conflict:
    property_id: int
    property_name: str
    kind: str
    record_id: int


def resolve_property(property_or_id: Property | int) -> Property:
    if isinstance(property_or_id, Property):
        return property_or_id
    try:
        return Property.objects.get(pk=property_or_id)
    except (Property.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Property {property_or_id} not found.") from None


def _booking_collides(start: date, end: date, booking: Booking, mode: Mode) -> bool:
    if mode is Mode.BLOCK:
        return closed_ranges_overlap(start, end, booking.check_in, booking.check_out)
    if is_same_day_turnover(start, booking.check_out):
        return False
    return stays_overlap(start, end, booking.check_in, booking.check_out)


def check_conflict(
    property_id: Property | int,
    start: date | str,
    end: date | str,
    *,
    exclude_booking_id: int | None = None,
    exclude_blocked_id: int | None = None,
    mode: Mode = Mode.STAY,
) -> Conflict | None:
    """
    Return the first record that collides with ``[start, end]`` or None.

    For ``Mode.STAY`` the candidate is a stay with ``end`` as checkout day,
    for ``Mode.BLOCK`` ``end`` is the last blocked day.
    """
    property_obj = resolve_property(property_id)
    start, end = as_date(start), as_date(end)

    # Closed bounds are a superset of both tests; the exact rule runs below.
    bookings = Booking.objects.filter(
        property=property_obj,
        status=Booking.Status.ACTIVE,
        check_in__lte=end,
        check_out__gte=start,
    ).order_by("check_in", "id")
    if exclude_booking_id is not None:
        bookings = bookings.exclude(pk=exclude_booking_id)

    for booking in bookings:
        if _booking_collides(start, end, booking, mode):
            return Conflict(property_obj.pk, property_obj.name, "booking", booking.pk)

    blocks = BlockedDate.objects.filter(
        property=property_obj,
        start_date__lte=end,
        end_date__gte=start,
    ).order_by("start_date", "id")
    if exclude_blocked_id is not None:
        blocks = blocks.exclude(pk=exclude_blocked_id)

    for block in blocks:
        if closed_ranges_overlap(start, end, block.start_date, block.end_date):
            return Conflict(property_obj.pk, property_obj.name, "blocked_date", block.pk)

    return None


def check_conflicts(
    property_ids: Iterable[Property | int],
    start: date | str,
    end: date | str,
    **options,
) -> list[Conflict]:
    """Check every property on its own and collect all conflicts."""
    conflicts = []
    for property_id in property_ids:
        conflict = check_conflict(property_id, start, end, **options)
        if conflict is not None:
            conflicts.append(conflict)
    return conflicts


def ensure_available(
    property_ids: Iterable[Property | int],
    start: date | str,
    end: date | str,
    **options,
) -> None:
    """Raise ``ConflictError`` naming every property that is not free."""
    conflicts = check_conflicts(property_ids, start, end, **options)
    if conflicts:
        names = [conflict.property_name for conflict in conflicts]
        logger.warning(
            "Availability conflict for %s between %s and %s",
            ", ".join(names),
            start,
            end,
        )
        raise ConflictError(names)


def blocked_days(
    property_ids: Iterable[Property | int],
    *,
    exclude_blocked_id: int | None = None,
) -> list[date]:
    """Every day covered by a blocked date of the selected properties, sorted."""
    ids = [resolve_property(property_id).pk for property_id in property_ids]
    blocks = BlockedDate.objects.filter(property_id__in=ids)
    if exclude_blocked_id is not None:
        blocks = blocks.exclude(pk=exclude_blocked_id)
    days: set[date] = set()
    for start_date, end_date in blocks.values_list("start_date", "end_date"):
        days.update(days_of(start_date, end_date))
    return sorted(days)


def disabled_dates(
    property_ids: Iterable[Property | int],
    *,
    exclude_booking_id: int | None = None,
    exclude_blocked_id: int | None = None,
    include_blocks: bool = True,
) -> list[date]:
    """
    Days the calendar should grey out for the selected properties.

    Booked nights are disabled but checkout days are not, so a new stay can
    start on them. Blocked dates contribute every day including both edges.
    """
    ids = [resolve_property(property_id).pk for property_id in property_ids]
    disabled: set[date] = set()

    bookings = Booking.objects.filter(property_id__in=ids, status=Booking.Status.ACTIVE)
    if exclude_booking_id is not None:
        bookings = bookings.exclude(pk=exclude_booking_id)
    for check_in, check_out in bookings.values_list("check_in", "check_out"):
        disabled.update(nights_of(check_in, check_out))

    if include_blocks:
        disabled.update(blocked_days(ids, exclude_blocked_id=exclude_blocked_id))

    return sorted(disabled)


def disabled_checkout_dates(
    start: date | str,
    disabled: Iterable[date],
    horizon_days: int | None = None,
    *,
    blocked: Iterable[date] = (),
) -> list[date]:
    """
    Checkout days that would make a stay from ``start`` cross a disabled day.

    Days strictly between ``start`` and the checkout must be free. The
    checkout day itself may be a booked night, since it is not slept, but not
    a ``blocked`` day: stays and blocks are compared as closed ranges.
    """
    start = as_date(start)
    if horizon_days is None:
        horizon_days = settings.BOOKING_CHECKOUT_HORIZON_DAYS
    disabled_set = set(disabled)
    blocked_set = set(blocked)

    result = []
    crossed = False
    for offset in range(1, horizon_days + 1):
        checkout = start + timedelta(days=offset)
        # Each step adds exactly one interior day: the night before checkout.
        last_night = checkout - timedelta(days=1)
        if last_night > start and last_night in disabled_set:
            crossed = True
        if checkout in blocked_set:
            crossed = True
        if crossed:
            result.append(checkout)
    return result
