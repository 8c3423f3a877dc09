"""URL routing for the properties domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import (
    BlockedDateViewSet,
    DisabledDatesView,
    PriceRangeViewSet,
    PropertyViewSet,
)

router = DefaultRouter()
router.register(r"properties", PropertyViewSet, basename="property")
router.register(r"blocked-dates", BlockedDateViewSet, basename="blocked-date")
router.register(r"price-ranges", PriceRangeViewSet, basename="price-range")

property_blocked_dates = BlockedDateViewSet.as_view({"get": "list", "post": "create"})
property_blocked_dates_bulk_delete = BlockedDateViewSet.as_view({"post": "bulk_delete"})

property_price_ranges = PriceRangeViewSet.as_view({"get": "list", "post": "create"})
property_price_ranges_bulk_delete = PriceRangeViewSet.as_view({"post": "bulk_delete"})

urlpatterns = [
    # Calendar helpers
    path(
        "properties/calendar/disabled-dates/",
        DisabledDatesView.as_view(),
        name="property-calendar-disabled-dates",
    ),
    # Per-property blocked dates
    path(
        "properties/<int:property_id>/blocked-dates/",
        property_blocked_dates,
        name="property-blocked-date-list",
    ),
    path(
        "properties/<int:property_id>/blocked-dates/bulk-delete/",
        property_blocked_dates_bulk_delete,
        name="property-blocked-date-bulk-delete",
    ),
    # Per-property price ranges
    path(
        "properties/<int:property_id>/price-ranges/",
        property_price_ranges,
        name="property-price-range-list",
    ),
    path(
        "properties/<int:property_id>/price-ranges/bulk-delete/",
        property_price_ranges_bulk_delete,
        name="property-price-range-bulk-delete",
    ),
    path("", include(router.urls)),
]
