from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.bookings import services
from apps.bookings.models import Booking
from apps.bookings.services import BookingInput
from apps.businesses.models import Business
from apps.properties.models import BlockedDate, PriceRange, Property
from shared.domain.errors import ConflictError, PricingIncompleteError, ValidationError


@pytest.fixture
def business():
    return Business.objects.create(name="Evaggelia Rental Apartments", email="info@example.com")


@pytest.fixture
def apartments(business):
    properties = [Property.objects.create(business=business, name=f"Apartment {n}") for n in (1, 2, 3)]
    for property_obj in properties:
        PriceRange.objects.create(
            property=property_obj,
            date_from=date(2024, 6, 1),
            date_to=date(2024, 6, 30),
            price_per_night=Decimal("100.00"),
        )
    return properties


def _input(property_obj=None, check_in=date(2024, 6, 1), check_out=date(2024, 6, 5), **extra):
    return BookingInput(
        property_id=property_obj.pk if property_obj is not None else None,
        customer_name=extra.pop("customer_name", "Maria Papadaki"),
        check_in=check_in,
        check_out=check_out,
        **extra,
    )


@pytest.mark.django_db
def test_booking_is_priced_from_price_ranges(apartments):
    booking = services.create_booking(_input(apartments[0], advance_payment=Decimal("100")))

    assert booking.status == Booking.Status.ACTIVE
    assert booking.total_price == Decimal("400.00")
    assert booking.advance_payment == Decimal("100.00")
    assert booking.remaining_balance == Decimal("300.00")
    assert booking.nights_count() == 4


@pytest.mark.django_db
def test_turnover_day_accepted_and_overlap_rejected(apartments):
    apartment = apartments[0]
    services.create_booking(_input(apartment, date(2024, 6, 1), date(2024, 6, 5)))

    turnover = services.create_booking(_input(apartment, date(2024, 6, 5), date(2024, 6, 8)))
    assert turnover.check_in == date(2024, 6, 5)

    with pytest.raises(ConflictError) as excinfo:
        services.create_booking(_input(apartment, date(2024, 6, 4), date(2024, 6, 8)))
    assert excinfo.value.property_names == ["Apartment 1"]

    with pytest.raises(ConflictError):
        services.create_booking(_input(apartment, date(2024, 6, 1), date(2024, 6, 2)))
    assert Booking.objects.count() == 2


@pytest.mark.django_db
def test_stay_may_not_touch_blocked_day(apartments):
    apartment = apartments[0]
    BlockedDate.objects.create(property=apartment, start_date=date(2024, 6, 10), end_date=date(2024, 6, 12))

    with pytest.raises(ConflictError):
        services.create_booking(_input(apartment, date(2024, 6, 12), date(2024, 6, 14)))
    assert services.create_booking(_input(apartment, date(2024, 6, 13), date(2024, 6, 14))).pk


@pytest.mark.django_db
def test_explicit_total_skips_pricing(business):
    unpriced = Property.objects.create(business=business, name="Villa 1")

    booking = services.create_booking(
        _input(unpriced, total_price=Decimal("250"), advance_payment=Decimal("50"))
    )

    assert booking.total_price == Decimal("250.00")
    assert booking.remaining_balance == Decimal("200.00")


@pytest.mark.django_db
def test_explicit_remaining_balance_is_kept(apartments):
    booking = services.create_booking(
        _input(apartments[0], advance_payment=Decimal("100"), remaining_balance=Decimal("0"))
    )

    assert booking.remaining_balance == Decimal("0.00")


@pytest.mark.django_db
def test_missing_prices_refuse_the_booking(apartments):
    with pytest.raises(PricingIncompleteError) as excinfo:
        services.create_booking(_input(apartments[0], date(2024, 6, 29), date(2024, 7, 2)))

    assert excinfo.value.missing_dates == [date(2024, 7, 1)]
    assert not Booking.objects.exists()


@pytest.mark.django_db
def test_missing_fields_are_named(apartments):
    with pytest.raises(ValidationError) as excinfo:
        services.create_booking(_input(apartments[0], customer_name="", check_out=None))

    assert excinfo.value.extra["fields"] == ["customer_name", "check_out"]

    with pytest.raises(ValidationError):
        services.create_booking(_input(apartments[0], date(2024, 6, 5), date(2024, 6, 5)))


@pytest.mark.django_db
def test_batch_splits_advance_by_price(apartments):
    bookings = services.create_bookings(
        [p.pk for p in apartments],
        _input(advance_payment=Decimal("100")),
    )

    assert [b.property.name for b in bookings] == ["Apartment 1", "Apartment 2", "Apartment 3"]
    assert all(b.total_price == Decimal("400.00") for b in bookings)
    assert all(b.advance_payment == Decimal("33.33") for b in bookings)
    assert all(b.remaining_balance == Decimal("366.67") for b in bookings)


@pytest.mark.django_db
def test_batch_with_one_conflict_creates_nothing(apartments):
    services.create_booking(_input(apartments[2], date(2024, 6, 3), date(2024, 6, 4)))

    with pytest.raises(ConflictError) as excinfo:
        services.create_bookings([p.pk for p in apartments], _input())

    assert excinfo.value.property_names == ["Apartment 3"]
    assert Booking.objects.count() == 1


@pytest.mark.django_db
def test_update_ignores_own_dates_and_reprices(apartments):
    apartment = apartments[0]
    booking = services.create_booking(_input(apartment, advance_payment=Decimal("100")))

    updated = services.update_booking(booking.pk, {"check_in": date(2024, 6, 2), "check_out": date(2024, 6, 8)})

    assert updated.check_in == date(2024, 6, 2)
    assert updated.total_price == Decimal("600.00")
    assert updated.remaining_balance == Decimal("500.00")


@pytest.mark.django_db
def test_update_keeps_price_when_stay_unchanged(apartments):
    booking = services.create_booking(_input(apartments[0], total_price=Decimal("999")))

    updated = services.update_booking(booking.pk, {"notes": "Late arrival", "contact_channel": "viber"})

    assert updated.total_price == Decimal("999.00")
    assert updated.notes == "Late arrival"
    assert updated.contact_channel == Booking.ContactChannel.VIBER


@pytest.mark.django_db
def test_update_into_other_booking_conflicts(apartments):
    apartment = apartments[0]
    booking = services.create_booking(_input(apartment, date(2024, 6, 1), date(2024, 6, 5)))
    services.create_booking(_input(apartment, date(2024, 6, 7), date(2024, 6, 9)))

    with pytest.raises(ConflictError):
        services.update_booking(booking.pk, {"check_out": date(2024, 6, 8)})

    booking.refresh_from_db()
    assert booking.check_out == date(2024, 6, 5)


@pytest.mark.django_db
def test_cancel_is_idempotent_and_frees_dates(apartments):
    apartment = apartments[0]
    booking = services.create_booking(_input(apartment))

    cancelled = services.cancel_booking(booking.pk, "Guest changed plans")
    first_cancelled_at = cancelled.cancelled_at
    again = services.cancel_booking(booking.pk, "Second click")

    assert again.status == Booking.Status.CANCELLED
    assert again.cancelled_at == first_cancelled_at
    assert again.cancellation_reason == "Guest changed plans"
    assert services.create_booking(_input(apartment)).pk != booking.pk


@pytest.mark.django_db
def test_cancelled_booking_cannot_be_edited(apartments):
    booking = services.create_booking(_input(apartments[0]))
    services.cancel_booking(booking.pk)

    with pytest.raises(ValidationError):
        services.update_booking(booking.pk, {"notes": "too late"})


@pytest.mark.django_db
def test_arrivals_are_grouped_by_check_in(business, apartments):
    first, second, third = apartments
    services.create_booking(_input(second, date(2024, 6, 2), date(2024, 6, 4)))
    services.create_booking(_input(first, date(2024, 6, 2), date(2024, 6, 3)))
    services.create_booking(_input(third, date(2024, 6, 4), date(2024, 6, 6)))
    cancelled = services.create_booking(_input(first, date(2024, 6, 3), date(2024, 6, 4)))
    services.cancel_booking(cancelled.pk)

    groups = services.arrivals(business.pk, "2024-06-01", "2024-06-10")

    assert [day for day, _ in groups] == [date(2024, 6, 2), date(2024, 6, 4)]
    assert [b.property.name for b in groups[0][1]] == ["Apartment 1", "Apartment 2"]


@pytest.mark.django_db
def test_arrivals_default_to_next_ten_days(business):
    villa = Property.objects.create(business=business, name="Villa 1")
    today = timezone.localdate()
    for offset in (0, 10, 11):
        services.create_booking(
            _input(
                villa,
                today + timedelta(days=offset),
                today + timedelta(days=offset + 1),
                total_price=Decimal("100"),
            )
        )

    groups = services.arrivals(business.pk)

    assert [day for day, _ in groups] == [today, today + timedelta(days=10)]


@pytest.mark.django_db
def test_batch_rejects_explicit_remaining_balance(apartments):
    with pytest.raises(ValidationError) as excinfo:
        services.create_bookings(
            [p.pk for p in apartments],
            _input(advance_payment=Decimal("100"), remaining_balance=Decimal("0")),
        )

    assert excinfo.value.extra["fields"] == ["remaining_balance"]
    assert not Booking.objects.exists()
