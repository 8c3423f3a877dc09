"""FilterSet definitions for the bookings list."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    business = django_filters.NumberFilter(field_name="property__business_id", lookup_expr="exact")
    property = django_filters.NumberFilter(field_name="property_id", lookup_expr="exact")
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    check_in_after = django_filters.DateFilter(field_name="check_in", lookup_expr="gte")
    check_in_before = django_filters.DateFilter(field_name="check_in", lookup_expr="lte")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Booking
        fields = ["business", "property", "status"]

    def filter_search(self, queryset, name, value):  # type: ignore
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(customer_name__icontains=value)
            | Q(contact_info__icontains=value)
            | Q(notes__icontains=value)
        )
