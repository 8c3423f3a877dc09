from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.models import Booking
from apps.bookings.services import BookingInput, create_booking
from apps.businesses.models import Business
from apps.properties.availability import (
    Mode,
    blocked_days,
    check_conflict,
    disabled_checkout_dates,
    disabled_dates,
    ensure_available,
)
from apps.properties.models import BlockedDate, PriceRange, Property
from shared.domain.errors import ConflictError, NotFoundError


@pytest.fixture
def apartment():
    business = Business.objects.create(name="Evaggelia Rental Apartments", email="info@example.com")
    return Property.objects.create(business=business, name="Apartment 1")


def _book(property_obj, check_in, check_out, **extra):
    return Booking.objects.create(
        property=property_obj,
        customer_name=extra.pop("customer_name", "Guest"),
        check_in=check_in,
        check_out=check_out,
        **extra,
    )


@pytest.mark.django_db
def test_new_stay_may_start_on_checkout_day(apartment):
    _book(apartment, date(2024, 6, 1), date(2024, 6, 5))

    assert check_conflict(apartment.pk, date(2024, 6, 5), date(2024, 6, 8)) is None

    conflict = check_conflict(apartment.pk, date(2024, 6, 4), date(2024, 6, 8))
    assert conflict is not None
    assert conflict.kind == "booking"
    assert conflict.property_name == "Apartment 1"


@pytest.mark.django_db
def test_new_stay_may_end_on_next_check_in(apartment):
    _book(apartment, date(2024, 6, 10), date(2024, 6, 12))

    assert check_conflict(apartment, "2024-06-08", "2024-06-10") is None


@pytest.mark.django_db
def test_same_check_in_conflicts(apartment):
    _book(apartment, date(2024, 6, 1), date(2024, 6, 5))

    assert check_conflict(apartment, date(2024, 6, 1), date(2024, 6, 2)) is not None


@pytest.mark.django_db
def test_cancelled_and_excluded_bookings_do_not_conflict(apartment):
    _book(apartment, date(2024, 6, 1), date(2024, 6, 5), status=Booking.Status.CANCELLED)
    own = _book(apartment, date(2024, 6, 10), date(2024, 6, 15))

    assert check_conflict(apartment, date(2024, 6, 2), date(2024, 6, 4)) is None
    assert check_conflict(apartment, date(2024, 6, 11), date(2024, 6, 16), exclude_booking_id=own.pk) is None


@pytest.mark.django_db
def test_block_may_not_start_on_checkout_day(apartment):
    _book(apartment, date(2024, 6, 1), date(2024, 6, 5))

    conflict = check_conflict(apartment, date(2024, 6, 5), date(2024, 6, 7), mode=Mode.BLOCK)

    assert conflict is not None
    assert conflict.kind == "booking"
    assert check_conflict(apartment, date(2024, 6, 6), date(2024, 6, 7), mode=Mode.BLOCK) is None


@pytest.mark.django_db
def test_blocks_are_closed_on_both_edges(apartment):
    block = BlockedDate.objects.create(property=apartment, start_date=date(2024, 6, 10), end_date=date(2024, 6, 12))

    assert check_conflict(apartment, date(2024, 6, 12), date(2024, 6, 14), mode=Mode.BLOCK).kind == "blocked_date"
    assert check_conflict(apartment, date(2024, 6, 12), date(2024, 6, 14)) is not None
    assert check_conflict(apartment, date(2024, 6, 13), date(2024, 6, 14)) is None
    assert (
        check_conflict(apartment, date(2024, 6, 10), date(2024, 6, 12), mode=Mode.BLOCK, exclude_blocked_id=block.pk)
        is None
    )


@pytest.mark.django_db
def test_ensure_available_reports_every_conflicting_property(apartment):
    second = Property.objects.create(business=apartment.business, name="Apartment 2")
    third = Property.objects.create(business=apartment.business, name="Apartment 3")
    _book(apartment, date(2024, 6, 1), date(2024, 6, 5))
    BlockedDate.objects.create(property=third, start_date=date(2024, 6, 3), end_date=date(2024, 6, 3))

    with pytest.raises(ConflictError) as excinfo:
        ensure_available([apartment, second, third], date(2024, 6, 2), date(2024, 6, 4))

    assert excinfo.value.property_names == ["Apartment 1", "Apartment 3"]
    assert excinfo.value.as_payload()["error"] == "conflict"


@pytest.mark.django_db
def test_unknown_property_is_not_found():
    with pytest.raises(NotFoundError):
        check_conflict(424242, date(2024, 6, 1), date(2024, 6, 2))


@pytest.mark.django_db
def test_disabled_dates_cover_nights_and_block_days(apartment):
    _book(apartment, date(2024, 6, 1), date(2024, 6, 3))
    _book(apartment, date(2024, 6, 20), date(2024, 6, 22), status=Booking.Status.CANCELLED)
    BlockedDate.objects.create(property=apartment, start_date=date(2024, 6, 5), end_date=date(2024, 6, 6))

    days = disabled_dates([apartment.pk])

    assert days == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 5), date(2024, 6, 6)]
    assert disabled_dates([apartment.pk], include_blocks=False) == [date(2024, 6, 1), date(2024, 6, 2)]


@pytest.mark.django_db
def test_disabled_dates_merge_selected_properties(apartment):
    second = Property.objects.create(business=apartment.business, name="Apartment 2")
    editing = _book(apartment, date(2024, 6, 1), date(2024, 6, 2))
    _book(second, date(2024, 6, 4), date(2024, 6, 5))

    assert disabled_dates([apartment, second]) == [date(2024, 6, 1), date(2024, 6, 4)]
    assert disabled_dates([apartment, second], exclude_booking_id=editing.pk) == [date(2024, 6, 4)]


def test_disabled_checkout_dates_start_after_first_crossed_day():
    disabled = [date(2024, 6, 4), date(2024, 6, 5)]

    result = disabled_checkout_dates(date(2024, 6, 1), disabled, horizon_days=6)

    # Checking out on the 4th is fine: that night is not slept.
    assert result == [date(2024, 6, 5), date(2024, 6, 6), date(2024, 6, 7)]


def test_disabled_checkout_dates_ignore_disabled_start_day():
    result = disabled_checkout_dates(date(2024, 6, 1), [date(2024, 6, 1)], horizon_days=3)

    assert result == []


@pytest.mark.django_db
def test_checkout_onto_blocked_day_is_disabled_and_refused(apartment):
    BlockedDate.objects.create(property=apartment, start_date=date(2024, 6, 10), end_date=date(2024, 6, 12))
    PriceRange.objects.create(
        property=apartment,
        date_from=date(2024, 6, 1),
        date_to=date(2024, 6, 30),
        price_per_night=Decimal("80.00"),
    )

    offered = disabled_checkout_dates(
        date(2024, 6, 7),
        disabled_dates([apartment]),
        horizon_days=5,
        blocked=blocked_days([apartment]),
    )

    assert offered == [date(2024, 6, 10), date(2024, 6, 11), date(2024, 6, 12)]
    with pytest.raises(ConflictError):
        create_booking(
            BookingInput(property_id=apartment.pk, customer_name="Guest", check_in="2024-06-07", check_out="2024-06-10")
        )
    assert create_booking(
        BookingInput(property_id=apartment.pk, customer_name="Guest", check_in="2024-06-07", check_out="2024-06-09")
    ).pk


@pytest.mark.django_db
def test_checkout_onto_booked_night_stays_allowed(apartment):
    _book(apartment, date(2024, 6, 10), date(2024, 6, 12))

    offered = disabled_checkout_dates(
        date(2024, 6, 7),
        disabled_dates([apartment]),
        horizon_days=5,
        blocked=blocked_days([apartment]),
    )

    assert date(2024, 6, 10) not in offered
    assert offered == [date(2024, 6, 11), date(2024, 6, 12)]
    assert check_conflict(apartment, date(2024, 6, 7), date(2024, 6, 10)) is None
