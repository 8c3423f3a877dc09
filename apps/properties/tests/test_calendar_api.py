"""Tests for property, blocked date, price range and calendar endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.businesses.models import Business
from apps.properties.models import BlockedDate, PriceRange, Property


class PropertyCalendarAPITests(APITestCase):
    def setUp(self) -> None:
        self.business = Business.objects.create(
            name="Evaggelia Rental Apartments",
            email="info@evaggelias-apts.com",
        )
        self.property = Property.objects.create(business=self.business, name="Apartment 1")
        self.other = Property.objects.create(business=self.business, name="Apartment 2")

    def _blocked_url(self, property_id=None):
        return reverse(
            "property-blocked-date-list",
            kwargs={"property_id": property_id or self.property.id},
        )

    def _price_url(self, property_id=None):
        return reverse(
            "property-price-range-list",
            kwargs={"property_id": property_id or self.property.id},
        )

    def test_list_properties_of_business(self) -> None:
        elsewhere = Business.objects.create(name="Elegancia Luxury Villas", email="info@elegancia.test")
        Property.objects.create(business=elsewhere, name="Villa 1")

        response = self.client.get(reverse("property-list"), {"business": self.business.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["name"] for item in response.data], ["Apartment 1", "Apartment 2"])

    def test_create_property(self) -> None:
        response = self.client.post(
            reverse("property-list"),
            {"business": self.business.id, "name": "Apartment 3"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["business_id"], self.business.id)
        self.assertTrue(response.data["is_active"])

    def test_block_dates_on_nested_route(self) -> None:
        payload = {"start_date": "2024-06-10", "end_date": "2024-06-12", "reason": "Maintenance"}
        response = self.client.post(self._blocked_url(), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["property_id"], self.property.id)

        listing = self.client.get(self._blocked_url())
        self.assertEqual(len(listing.data), 1)
        self.assertEqual(listing.data[0]["reason"], "Maintenance")

    def test_block_several_properties_conflict_returns_409(self) -> None:
        Booking.objects.create(
            property=self.other,
            customer_name="Guest",
            check_in=date(2024, 6, 1),
            check_out=date(2024, 6, 5),
        )
        payload = {
            "property_ids": [self.property.id, self.other.id],
            "start_date": "2024-06-05",
            "end_date": "2024-06-06",
        }
        response = self.client.post(reverse("blocked-date-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["error"], "conflict")
        self.assertEqual(response.data["property_names"], ["Apartment 2"])
        self.assertFalse(BlockedDate.objects.exists())

    def test_block_without_property_is_rejected(self) -> None:
        payload = {"start_date": "2024-06-05", "end_date": "2024-06-06"}
        response = self.client.post(reverse("blocked-date-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["error"], "validation_error")

    def test_update_and_delete_blocked_date(self) -> None:
        blocked = BlockedDate.objects.create(
            property=self.property,
            start_date=date(2024, 6, 10),
            end_date=date(2024, 6, 12),
        )
        url = reverse("blocked-date-detail", kwargs={"pk": blocked.id})

        response = self.client.patch(url, {"end_date": "2024-06-15"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["end_date"], "2024-06-15")

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(BlockedDate.objects.exists())

    def test_bulk_delete_blocked_dates(self) -> None:
        ids = [
            BlockedDate.objects.create(
                property=self.property,
                start_date=date(2024, 6, day),
                end_date=date(2024, 6, day),
            ).id
            for day in (1, 3, 5)
        ]
        url = reverse("property-blocked-date-bulk-delete", kwargs={"property_id": self.property.id})
        response = self.client.post(url, {"ids": ids[:2]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["deleted"], 2)
        self.assertEqual(BlockedDate.objects.count(), 1)

    def test_create_price_range_and_reject_overlap(self) -> None:
        payload = {"date_from": "2024-08-05", "date_to": "2024-08-15", "price_per_night": "90.00"}
        response = self.client.post(self._price_url(), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["price_per_night"], "90.00")

        overlapping = {"date_from": "2024-08-01", "date_to": "2024-08-10", "price_per_night": "150.00"}
        response = self.client.post(self._price_url(), overlapping, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(PriceRange.objects.count(), 1)

    def test_price_range_single_day_is_rejected(self) -> None:
        payload = {
            "property": self.property.id,
            "date_from": "2024-08-05",
            "date_to": "2024-08-05",
            "price_per_night": "90.00",
        }
        response = self.client.post(reverse("price-range-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_apply_price_range_to_business(self) -> None:
        payload = {
            "business": self.business.id,
            "date_from": "2024-09-01",
            "date_to": "2024-09-30",
            "price_per_night": "75.00",
        }
        response = self.client.post(reverse("price-range-apply-to-business"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(PriceRange.objects.filter(price_per_night=Decimal("75.00")).count(), 2)

    def test_disabled_dates_for_selected_properties(self) -> None:
        Booking.objects.create(
            property=self.property,
            customer_name="Guest",
            check_in=date(2024, 6, 1),
            check_out=date(2024, 6, 3),
        )
        BlockedDate.objects.create(
            property=self.other,
            start_date=date(2024, 6, 5),
            end_date=date(2024, 6, 5),
        )

        response = self.client.get(
            reverse("property-calendar-disabled-dates"),
            {"property": [self.property.id, self.other.id], "start": "2024-06-03"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["disabled_dates"], ["2024-06-01", "2024-06-02", "2024-06-05"])
        # Checking out onto the blocked 5th is refused like booking into it.
        self.assertEqual(response.data["disabled_checkout_dates"][0], "2024-06-05")

    def test_disabled_dates_requires_property(self) -> None:
        response = self.client.get(reverse("property-calendar-disabled-dates"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_full_update_of_calendar_records_requires_dates(self) -> None:
        blocked = BlockedDate.objects.create(
            property=self.property,
            start_date=date(2024, 6, 10),
            end_date=date(2024, 6, 12),
        )
        price_range = PriceRange.objects.create(
            property=self.property,
            date_from=date(2024, 8, 1),
            date_to=date(2024, 8, 10),
            price_per_night=Decimal("90.00"),
        )
        blocked_url = reverse("blocked-date-detail", kwargs={"pk": blocked.id})
        price_url = reverse("price-range-detail", kwargs={"pk": price_range.id})

        response = self.client.put(blocked_url, {"reason": "Painting"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(set(response.data), {"start_date", "end_date"})

        response = self.client.put(price_url, {"price_per_night": "95.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(set(response.data), {"date_from", "date_to"})

        response = self.client.put(
            price_url,
            {"date_from": "2024-08-01", "date_to": "2024-08-12", "price_per_night": "95.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["date_to"], "2024-08-12")
