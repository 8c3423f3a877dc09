"""
Interval arithmetic for stays, blocks and price lists

Two interval flavours live side by side in the booking domain and must never
be mixed:

- Stays are half-open ``[check_in, check_out)``: the checkout day is neither
  billed nor occupied, so one guest may leave on the day the next arrives.
- Blocked dates and price ranges are closed ``[from, to]``: both edge days are
  covered.

Everything here works on calendar dates only. Datetimes are truncated to their
date and ISO strings are parsed, so callers can hand in whatever the transport
layer produced.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

from shared.domain.errors import ValidationError

ONE_DAY = timedelta(days=1)


def as_date(value: date | datetime | str) -> date:
    """Normalise a date, datetime or ISO-8601 string to a calendar date."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        # Only a time part may follow the date.
        if text[10:] and text[10] not in "T ":
            raise ValidationError(f"Invalid date: {value!r}")
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}") from None
    raise ValidationError(f"Invalid date: {value!r}")


def stays_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Half-open overlap test used for booking against booking."""

    return a_start < b_end and a_end > b_start


def closed_ranges_overlap(a_from: date, a_to: date, b_from: date, b_to: date) -> bool:
    """Closed overlap test used for blocked dates and price ranges."""

    return a_from <= b_to and a_to >= b_from


def is_same_day_turnover(candidate_start: date | datetime, other_end: date | datetime) -> bool:
    """True when the candidate starts on the very day the other stay ends."""

    return as_date(candidate_start) == as_date(other_end)


def nights_of(check_in: date, check_out: date) -> Iterator[date]:
    """
    Yield every billable night of a stay.

    Produces each calendar date from ``check_in`` up to but excluding
    ``check_out``. Yields nothing when ``check_out <= check_in``.
    """

    current = check_in
    while current < check_out:
        yield current
        current += ONE_DAY


def days_of(start: date, end: date) -> Iterator[date]:
    """Yield every day of the closed range ``[start, end]``."""

    current = start
    while current <= end:
        yield current
        current += ONE_DAY


def nights_count(check_in: date, check_out: date) -> int:
    return max((check_out - check_in).days, 0)
