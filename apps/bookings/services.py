"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional

from django.utils import timezone  # type: ignore

from apps.properties.availability import Mode, ensure_available
from apps.properties.models import Property
from apps.properties.pricing import allocate_advance, calculate_price
from apps.properties.services import lock_properties
from shared.domain.errors import NotFoundError, ValidationError
from shared.domain.intervals import as_date
from shared.domain.value_objects import StayRange, round_money
from shared.infrastructure.transactions import atomic_operation

from .models import Booking

logger = logging.getLogger(__name__)

ARRIVALS_WINDOW_DAYS = 10


@dataclass
class BookingInput:
    property_id: Optional[int] = None
    customer_name: str = ""
    check_in: Optional[date | str] = None
    check_out: Optional[date | str] = None
    contact_info: str = ""
    contact_channel: str = ""
    total_price: Optional[Decimal] = None
    advance_payment: Optional[Decimal] = None
    remaining_balance: Optional[Decimal] = None
    advance_payment_method: str = ""
    advance_payment_date: Optional[date] = None
    extra_bed: bool = False
    extra_bed_price: Optional[Decimal] = None
    notes: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BookingInput":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def stay(self) -> StayRange:
        missing = [name for name in ("customer_name", "check_in", "check_out") if not getattr(self, name)]
        if missing:
            raise ValidationError("Missing required fields: " + ", ".join(missing), fields=missing)
        return StayRange(as_date(self.check_in), as_date(self.check_out))


def _money(value: Any, label: str) -> Decimal:
    try:
        amount = round_money(value)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid {label}: {value!r}") from None
    if amount < 0:
        raise ValidationError(f"{label.capitalize()} cannot be negative.")
    return amount


def _stay_price(property_obj: Property, stay: StayRange, explicit: Any) -> Decimal:
    """Caller-supplied totals are trusted as-is; otherwise every night must be priced."""
    if explicit is not None and explicit != "":
        return _money(explicit, "total price")
    quote = calculate_price(property_obj, stay.start_date, stay.end_date).raise_if_incomplete()
    return quote.total_price


def _new_booking(
    property_obj: Property,
    data: BookingInput,
    stay: StayRange,
    total_price: Decimal,
    advance_payment: Decimal,
    remaining_balance: Decimal,
) -> Booking:
    return Booking.objects.create(
        property=property_obj,
        customer_name=data.customer_name,
        contact_info=data.contact_info or "",
        contact_channel=data.contact_channel or "",
        check_in=stay.start_date,
        check_out=stay.end_date,
        status=Booking.Status.ACTIVE,
        total_price=total_price,
        advance_payment=advance_payment,
        remaining_balance=remaining_balance,
        advance_payment_method=data.advance_payment_method or "",
        advance_payment_date=data.advance_payment_date,
        extra_bed=bool(data.extra_bed),
        extra_bed_price=(
            _money(data.extra_bed_price, "extra bed price") if data.extra_bed_price not in (None, "") else None
        ),
        notes=data.notes or "",
    )


@atomic_operation
def create_booking(data: BookingInput) -> Booking:
    """
    Create one booking after checking availability and pricing the stay.

    The property row stays locked from the availability check until the
    booking is written, so two requests for the same dates cannot both pass.
    """
    if not data.property_id:
        raise ValidationError("Missing required fields: property_id", fields=["property_id"])
    stay = data.stay()
    (property_obj,) = lock_properties([data.property_id])
    ensure_available([property_obj], stay.start_date, stay.end_date, mode=Mode.STAY)

    total_price = _stay_price(property_obj, stay, data.total_price)
    advance = _money(data.advance_payment or 0, "advance payment")
    if data.remaining_balance is not None and data.remaining_balance != "":
        remaining = round_money(data.remaining_balance)
    else:
        remaining = total_price - advance

    booking = _new_booking(property_obj, data, stay, total_price, advance, remaining)
    logger.info("Created booking %s on property %s for %s", booking.pk, property_obj.pk, stay)
    return booking


@atomic_operation
def create_bookings(property_ids: Iterable[Property | int], data: BookingInput) -> list[Booking]:
    """
    Book the same stay on several properties at once.

    Either every booking is created or none is. The stay is priced once
    against the first property and that price applies to every property;
    one combined advance is split across them in proportion to price. Each
    balance follows from that split, so an explicit ``remaining_balance`` is
    rejected.
    """
    if data.remaining_balance is not None and data.remaining_balance != "":
        raise ValidationError(
            "Remaining balance cannot be set when booking several properties.",
            fields=["remaining_balance"],
        )
    stay = data.stay()
    properties = lock_properties(property_ids)
    ensure_available(properties, stay.start_date, stay.end_date, mode=Mode.STAY)

    price = _stay_price(properties[0], stay, data.total_price)
    allocations = allocate_advance(
        _money(data.advance_payment or 0, "advance payment"),
        {property_obj.pk: price for property_obj in properties},
    )

    bookings = []
    for property_obj in properties:
        allocation = allocations[property_obj.pk]
        bookings.append(
            _new_booking(
                property_obj,
                data,
                stay,
                allocation.price,
                allocation.advance_payment,
                allocation.remaining_balance,
            )
        )
    logger.info(
        "Created %d bookings (%s) for %s",
        len(bookings),
        ", ".join(str(b.pk) for b in bookings),
        stay,
    )
    return bookings


def _get_booking(booking_id: int) -> Booking:
    try:
        return Booking.objects.select_related("property").get(pk=booking_id)
    except (Booking.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Booking {booking_id} not found.") from None


_EDITABLE_FIELDS = {f.name for f in fields(BookingInput)}


@atomic_operation
def update_booking(booking_id: int, changes: Mapping[str, Any]) -> Booking:
    """
    Apply a partial update to an active booking.

    Availability ignores the booking itself. The stay is repriced only when
    the dates or the property change and no explicit ``total_price`` is given.
    """
    booking = _get_booking(booking_id)
    if booking.status != Booking.Status.ACTIVE:
        raise ValidationError("Cancelled bookings cannot be edited.")

    unknown = sorted(set(changes) - _EDITABLE_FIELDS)
    if unknown:
        raise ValidationError("Unknown fields: " + ", ".join(unknown), fields=unknown)

    merged = BookingInput(
        property_id=changes.get("property_id") or booking.property_id,
        customer_name=changes.get("customer_name", booking.customer_name),
        check_in=changes.get("check_in") or booking.check_in,
        check_out=changes.get("check_out") or booking.check_out,
    )
    stay = merged.stay()
    (property_obj,) = lock_properties([merged.property_id])
    ensure_available(
        [property_obj],
        stay.start_date,
        stay.end_date,
        exclude_booking_id=booking.pk,
        mode=Mode.STAY,
    )

    stay_changed = stay != booking.stay() or property_obj.pk != booking.property_id
    explicit_total = changes.get("total_price")
    if explicit_total is not None and explicit_total != "":
        total_price = _money(explicit_total, "total price")
    elif stay_changed:
        total_price = _stay_price(property_obj, stay, None)
    else:
        total_price = booking.total_price

    advance = booking.advance_payment
    if "advance_payment" in changes:
        advance = _money(changes["advance_payment"] or 0, "advance payment")

    if changes.get("remaining_balance") not in (None, ""):
        remaining = round_money(changes["remaining_balance"])
    elif total_price != booking.total_price or advance != booking.advance_payment:
        remaining = total_price - advance
    else:
        remaining = booking.remaining_balance

    booking.property = property_obj
    booking.customer_name = merged.customer_name
    booking.check_in = stay.start_date
    booking.check_out = stay.end_date
    booking.total_price = total_price
    booking.advance_payment = advance
    booking.remaining_balance = remaining
    for name in ("contact_info", "contact_channel", "advance_payment_method", "notes"):
        if name in changes:
            setattr(booking, name, changes[name] or "")
    if "advance_payment_date" in changes:
        booking.advance_payment_date = changes["advance_payment_date"]
    if "extra_bed" in changes:
        booking.extra_bed = bool(changes["extra_bed"])
    if "extra_bed_price" in changes:
        value = changes["extra_bed_price"]
        booking.extra_bed_price = _money(value, "extra bed price") if value not in (None, "") else None
    booking.save()

    logger.info("Updated booking %s (%s)", booking.pk, ", ".join(sorted(changes)) or "no changes")
    return booking


@atomic_operation
def cancel_booking(booking_id: int, reason: str = "") -> Booking:
    """Soft-cancel a booking. Cancelling twice is a no-op."""
    booking = _get_booking(booking_id)
    if booking.status == Booking.Status.CANCELLED:
        return booking
    booking.mark_cancelled(reason or "")
    logger.info("Cancelled booking %s", booking.pk)
    return booking


def arrivals(
    business_id: int,
    start: date | str | None = None,
    end: date | str | None = None,
) -> list[tuple[date, list[Booking]]]:
    """
    Active bookings checking in between ``start`` and ``end`` inclusive.

    Defaults to today and the following ten days. Grouped by check-in date in
    ascending order.
    """
    start = as_date(start) if start else timezone.localdate()
    end = as_date(end) if end else start + timedelta(days=ARRIVALS_WINDOW_DAYS)
    if end < start:
        raise ValidationError("End date must not be before start date.")

    bookings = (
        Booking.objects.select_related("property")
        .filter(
            property__business_id=business_id,
            status=Booking.Status.ACTIVE,
            check_in__gte=start,
            check_in__lte=end,
        )
        .order_by("check_in", "property__name", "id")
    )
    grouped: dict[date, list[Booking]] = {}
    for booking in bookings:
        grouped.setdefault(booking.check_in, []).append(booking)
    return list(grouped.items())
