"""FilterSet definitions for properties and their calendars."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import BlockedDate, PriceRange, Property


class PropertyFilterSet(django_filters.FilterSet):
    business = django_filters.NumberFilter(field_name="business_id", lookup_expr="exact")
    is_active = django_filters.BooleanFilter(field_name="is_active")
    search = django_filters.CharFilter(field_name="name", lookup_expr="icontains")

    class Meta:
        model = Property
        fields = ["business", "is_active"]


class BlockedDateFilterSet(django_filters.FilterSet):
    """``start``/``end`` keep every block that touches the window."""

    business = django_filters.NumberFilter(field_name="property__business_id", lookup_expr="exact")
    property = django_filters.NumberFilter(field_name="property_id", lookup_expr="exact")
    start = django_filters.DateFilter(field_name="end_date", lookup_expr="gte")
    end = django_filters.DateFilter(field_name="start_date", lookup_expr="lte")

    class Meta:
        model = BlockedDate
        fields = ["business", "property"]


class PriceRangeFilterSet(django_filters.FilterSet):
    business = django_filters.NumberFilter(field_name="property__business_id", lookup_expr="exact")
    property = django_filters.NumberFilter(field_name="property_id", lookup_expr="exact")
    start = django_filters.DateFilter(field_name="date_to", lookup_expr="gte")
    end = django_filters.DateFilter(field_name="date_from", lookup_expr="lte")

    class Meta:
        model = PriceRange
        fields = ["business", "property"]
