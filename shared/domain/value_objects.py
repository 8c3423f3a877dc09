"""
Common Value Objects

Value objects used across the booking domain:
- round_money: cent rounding shared by pricing and payments
- StayRange: half-open range of nights (check-in to check-out)
- ClosedDateRange: inclusive range of days (blocked dates, price ranges)
"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator

from shared.domain.base import ValueObject
from shared.domain.errors import ValidationError
from shared.domain.intervals import (
    closed_ranges_overlap,
    days_of,
    nights_count,
    nights_of,
    stays_overlap,
)

CENT = Decimal("0.01")


def round_money(value) -> Decimal:
    """Round to two decimal places, half up."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class StayRange(ValueObject):
    """
    Stay value object

    Represents the nights from start_date (inclusive) to end_date (exclusive).
    Adjacent stays do not overlap: StayRange(25, 28) and StayRange(28, 31)
    share the 28th only as a turnover day.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValidationError("Check-out must be after check-in.")

    def overlaps_with(self, other: 'StayRange') -> bool:
        if not isinstance(other, StayRange):
            raise TypeError("Can only check overlap with another StayRange")
        return stays_overlap(self.start_date, self.end_date, other.start_date, other.end_date)

    def nights(self) -> Iterator[date]:
        return nights_of(self.start_date, self.end_date)

    def __len__(self) -> int:
        return nights_count(self.start_date, self.end_date)

    def __str__(self):
        return f"{self.start_date:%d/%m/%Y} - {self.end_date:%d/%m/%Y}"


@dataclass(frozen=True)
class ClosedDateRange(ValueObject):
    """Inclusive range of days; both edges are covered."""
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValidationError("End date must not be before start date.")

    def overlaps_with(self, other: 'ClosedDateRange') -> bool:
        if not isinstance(other, ClosedDateRange):
            raise TypeError("Can only check overlap with another ClosedDateRange")
        return closed_ranges_overlap(self.start_date, self.end_date, other.start_date, other.end_date)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def days(self) -> Iterator[date]:
        return days_of(self.start_date, self.end_date)

    def __len__(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def __str__(self):
        return f"{self.start_date:%d/%m/%Y} - {self.end_date:%d/%m/%Y}"
