"""Domain services for blocked dates and price ranges."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable

from apps.businesses.models import Business
from shared.domain.errors import NotFoundError, ValidationError
from shared.domain.intervals import as_date
from shared.domain.value_objects import ClosedDateRange, round_money
from shared.infrastructure.transactions import atomic_operation, lock_queryset_if_possible

from .availability import Mode, ensure_available
from .models import BlockedDate, PriceRange, Property

logger = logging.getLogger(__name__)


def lock_properties(property_ids: Iterable[Property | int]) -> list[Property]:
    """
    Lock the given property rows and return them in the caller's order.

    Rows are locked in primary key order so concurrent batches over the same
    properties cannot deadlock. Must run inside ``transaction.atomic()``.
    """
    try:
        ids = list(dict.fromkeys(int(getattr(item, "pk", item)) for item in property_ids))
    except (TypeError, ValueError):
        raise ValidationError("Property ids must be integers.") from None
    if not ids:
        raise ValidationError("Select at least one property.")

    queryset = lock_queryset_if_possible(Property.objects.filter(pk__in=ids).order_by("pk"))
    found = {property_obj.pk: property_obj for property_obj in queryset}
    missing = [pk for pk in ids if pk not in found]
    if missing:
        raise NotFoundError(
            "Property not found: " + ", ".join(str(pk) for pk in missing),
            property_ids=missing,
        )
    return [found[pk] for pk in ids]


def _blocked_range(start_date, end_date) -> ClosedDateRange:  # type: ignore
    if not start_date or not end_date:
        raise ValidationError("Start date and end date are required.")
    return ClosedDateRange(as_date(start_date), as_date(end_date))


def _get_blocked_date(blocked_id: int) -> BlockedDate:
    try:
        return BlockedDate.objects.select_related("property").get(pk=blocked_id)
    except BlockedDate.DoesNotExist:
        raise NotFoundError(f"Blocked date {blocked_id} not found.") from None


@atomic_operation
def create_blocked_dates(
    property_ids: Iterable[Property | int],
    start_date: date | str,
    end_date: date | str,
    reason: str = "",
) -> list[BlockedDate]:
    """
    Block the same days on every given property.

    All properties are checked before anything is written; one conflicting
    property aborts the whole batch and every conflicting name is reported.
    """
    days = _blocked_range(start_date, end_date)
    properties = lock_properties(property_ids)
    ensure_available(properties, days.start_date, days.end_date, mode=Mode.BLOCK)

    created = [
        BlockedDate.objects.create(
            property=property_obj,
            start_date=days.start_date,
            end_date=days.end_date,
            reason=reason or "",
        )
        for property_obj in properties
    ]
    logger.info(
        "Blocked %s on properties %s (ids %s)",
        days,
        [p.pk for p in properties],
        [b.pk for b in created],
    )
    return created


@atomic_operation
def update_blocked_date(
    blocked_id: int,
    *,
    start_date: date | str | None = None,
    end_date: date | str | None = None,
    reason: str | None = None,
) -> BlockedDate:
    blocked = _get_blocked_date(blocked_id)
    days = _blocked_range(start_date or blocked.start_date, end_date or blocked.end_date)
    (property_obj,) = lock_properties([blocked.property_id])
    ensure_available(
        [property_obj],
        days.start_date,
        days.end_date,
        exclude_blocked_id=blocked.pk,
        mode=Mode.BLOCK,
    )

    blocked.start_date = days.start_date
    blocked.end_date = days.end_date
    if reason is not None:
        blocked.reason = reason
    blocked.save(update_fields=["start_date", "end_date", "reason", "updated_at"])
    logger.info("Updated blocked date %s to %s", blocked.pk, days)
    return blocked


@atomic_operation
def delete_blocked_date(blocked_id: int) -> None:
    blocked = _get_blocked_date(blocked_id)
    blocked.delete()
    logger.info("Deleted blocked date %s", blocked_id)


@atomic_operation
def bulk_delete_blocked_dates(ids: Iterable[int], *, property_id: int | None = None) -> int:
    queryset = BlockedDate.objects.filter(pk__in=list(ids))
    if property_id is not None:
        queryset = queryset.filter(property_id=property_id)
    deleted, _ = queryset.delete()
    logger.info("Bulk deleted %d blocked date(s)", deleted)
    return deleted


def _price_range_values(date_from, date_to, price_per_night) -> tuple[date, date, Decimal]:  # type: ignore
    if not date_from or not date_to or price_per_night in (None, ""):
        raise ValidationError("Start date, end date and price per night are required.")
    date_from, date_to = as_date(date_from), as_date(date_to)
    if date_from >= date_to:
        raise ValidationError("End date must be after start date.")
    try:
        price = round_money(price_per_night)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid price: {price_per_night!r}") from None
    if price <= 0:
        raise ValidationError("Price per night must be greater than zero.")
    return date_from, date_to, price


def _overlapping_price_range(
    property_obj: Property,
    date_from: date,
    date_to: date,
    exclude_id: int | None = None,
) -> PriceRange | None:
    queryset = PriceRange.objects.filter(
        property=property_obj,
        date_from__lte=date_to,
        date_to__gte=date_from,
    )
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)
    return queryset.order_by("date_from").first()


def _get_price_range(range_id: int) -> PriceRange:
    try:
        return PriceRange.objects.select_related("property").get(pk=range_id)
    except PriceRange.DoesNotExist:
        raise NotFoundError(f"Price range {range_id} not found.") from None


def _overlap_error(existing: PriceRange) -> ValidationError:
    return ValidationError(
        "Price range overlaps an existing range "
        f"({existing.date_from:%d/%m/%Y} - {existing.date_to:%d/%m/%Y}).",
        property_names=[existing.property.name],
    )


@atomic_operation
def create_price_range(
    property_id: Property | int,
    date_from: date | str,
    date_to: date | str,
    price_per_night: Decimal | str,
) -> PriceRange:
    if not property_id:
        raise ValidationError("Property is required.", fields=["property"])
    date_from, date_to, price = _price_range_values(date_from, date_to, price_per_night)
    (property_obj,) = lock_properties([property_id])

    existing = _overlapping_price_range(property_obj, date_from, date_to)
    if existing is not None:
        logger.warning("Rejected overlapping price range on property %s", property_obj.pk)
        raise _overlap_error(existing)

    price_range = PriceRange.objects.create(
        property=property_obj,
        date_from=date_from,
        date_to=date_to,
        price_per_night=price,
    )
    logger.info("Created price range %s on property %s", price_range.pk, property_obj.pk)
    return price_range


@atomic_operation
def update_price_range(
    range_id: int,
    *,
    date_from: date | str | None = None,
    date_to: date | str | None = None,
    price_per_night: Decimal | str | None = None,
) -> PriceRange:
    price_range = _get_price_range(range_id)
    date_from, date_to, price = _price_range_values(
        date_from or price_range.date_from,
        date_to or price_range.date_to,
        price_per_night if price_per_night is not None else price_range.price_per_night,
    )
    (property_obj,) = lock_properties([price_range.property_id])

    existing = _overlapping_price_range(property_obj, date_from, date_to, exclude_id=price_range.pk)
    if existing is not None:
        logger.warning("Rejected overlapping update of price range %s", price_range.pk)
        raise _overlap_error(existing)

    price_range.date_from = date_from
    price_range.date_to = date_to
    price_range.price_per_night = price
    price_range.save(update_fields=["date_from", "date_to", "price_per_night", "updated_at"])
    logger.info("Updated price range %s", price_range.pk)
    return price_range


@atomic_operation
def apply_price_range_to_business(
    business_id: Business | int,
    date_from: date | str,
    date_to: date | str,
    price_per_night: Decimal | str,
) -> list[PriceRange]:
    """
    Create the same price range on every active property of a business.

    Nothing is written when any property already has an overlapping range;
    the error names every such property.
    """
    date_from, date_to, price = _price_range_values(date_from, date_to, price_per_night)
    business_pk = getattr(business_id, "pk", business_id)
    if not Business.objects.filter(pk=business_pk).exists():
        raise NotFoundError(f"Business {business_pk} not found.")

    active_ids = list(
        Property.objects.filter(business_id=business_pk, is_active=True).order_by("name").values_list("pk", flat=True)
    )
    if not active_ids:
        raise ValidationError("The business has no active properties.")
    properties = lock_properties(active_ids)

    overlapping = [
        property_obj.name
        for property_obj in properties
        if _overlapping_price_range(property_obj, date_from, date_to) is not None
    ]
    if overlapping:
        logger.warning("Rejected business-wide price range; overlaps on %s", ", ".join(overlapping))
        raise ValidationError(
            "Price range overlaps existing ranges for: " + ", ".join(overlapping),
            property_names=overlapping,
        )

    created = [
        PriceRange.objects.create(
            property=property_obj,
            date_from=date_from,
            date_to=date_to,
            price_per_night=price,
        )
        for property_obj in properties
    ]
    logger.info("Applied price range to %d properties of business %s", len(created), business_pk)
    return created


@atomic_operation
def delete_price_range(range_id: int) -> None:
    price_range = _get_price_range(range_id)
    price_range.delete()
    logger.info("Deleted price range %s", range_id)


@atomic_operation
def bulk_delete_price_ranges(ids: Iterable[int], *, property_id: int | None = None) -> int:
    queryset = PriceRange.objects.filter(pk__in=list(ids))
    if property_id is not None:
        queryset = queryset.filter(property_id=property_id)
    deleted, _ = queryset.delete()
    logger.info("Bulk deleted %d price range(s)", deleted)
    return deleted
