"""
Nightly price aggregation.

Every night of a stay must fall inside exactly one price range of the
property. Nights are rounded to the cent before they are summed and the
total is rounded again, so the breakdown always adds up to the total.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Hashable, Mapping, TypeVar

from shared.domain.errors import PricingIncompleteError
from shared.domain.intervals import as_date
from shared.domain.value_objects import StayRange, round_money

from .availability import resolve_property
from .models import PriceRange, Property

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class NightPrice:
    date: date
    price: Decimal


@dataclass(frozen=True)
class PriceQuote:
    success: bool
    nights_count: int
    total_price: Decimal | None = None
    breakdown: tuple[NightPrice, ...] = ()
    missing_dates: tuple[date, ...] = field(default_factory=tuple)

    def raise_if_incomplete(self) -> "PriceQuote":
        if not self.success:
            raise PricingIncompleteError(self.missing_dates)
        return self


@dataclass(frozen=True)
class Allocation:
    price: Decimal
    advance_payment: Decimal
    remaining_balance: Decimal


def calculate_price(
    property_id: Property | int,
    check_in: date | str,
    check_out: date | str,
) -> PriceQuote:
    """
    Price a stay night by night.

    Returns a failed quote listing every uncovered night instead of raising,
    so previews can show all gaps at once. Booking creation turns a failed
    quote into ``PricingIncompleteError`` via ``raise_if_incomplete``.
    """
    property_obj = resolve_property(property_id)
    stay = StayRange(as_date(check_in), as_date(check_out))

    ranges = list(
        PriceRange.objects.filter(
            property=property_obj,
            date_from__lt=stay.end_date,
            date_to__gte=stay.start_date,
        ).order_by("date_from")
    )

    breakdown = []
    missing = []
    for night in stay.nights():
        covering = next((price_range for price_range in ranges if price_range.covers(night)), None)
        if covering is None:
            missing.append(night)
        else:
            breakdown.append(NightPrice(night, round_money(covering.price_per_night)))

    if missing:
        logger.warning(
            "No price for %d night(s) of %s at property %s",
            len(missing),
            stay,
            property_obj.pk,
        )
        return PriceQuote(success=False, nights_count=len(stay), missing_dates=tuple(missing))

    total = round_money(sum((night.price for night in breakdown), Decimal("0")))
    return PriceQuote(
        success=True,
        nights_count=len(stay),
        total_price=total,
        breakdown=tuple(breakdown),
    )


def allocate_advance(advance: Decimal, prices: Mapping[K, Decimal]) -> dict[K, Allocation]:
    """
    Split one advance payment across several properties by price share.

    Each share is rounded to the cent on its own, so the shares may differ
    from ``advance`` by a cent in total.
    """
    advance = round_money(advance or 0)
    total = sum(prices.values(), Decimal("0"))
    allocations = {}
    for key, price in prices.items():
        price = round_money(price)
        share = round_money(advance * price / total) if total > 0 else Decimal("0.00")
        allocations[key] = Allocation(price=price, advance_payment=share, remaining_balance=price - share)
    return allocations
