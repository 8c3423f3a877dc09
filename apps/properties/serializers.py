"""Serializers for the properties domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.infrastructure.serializers import FullUpdateRequiredMixin

from .models import BlockedDate, PriceRange, Property


class PropertySerializer(serializers.ModelSerializer):
    business_id = serializers.ReadOnlyField(source="business.id")
    business_name = serializers.ReadOnlyField(source="business.name")

    class Meta:
        model = Property
        fields = [
            "id",
            "business_id",
            "business_name",
            "name",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PropertyWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Property
        fields = ["business", "name", "is_active"]


class BlockedDateSerializer(serializers.ModelSerializer):
    property_id = serializers.ReadOnlyField(source="property.id")
    property_name = serializers.ReadOnlyField(source="property.name")

    class Meta:
        model = BlockedDate
        fields = [
            "id",
            "property_id",
            "property_name",
            "start_date",
            "end_date",
            "reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BlockedDateWriteSerializer(serializers.Serializer):
    """
    Payload for blocking dates on one or more properties.

    ``property_ids`` is filled from the URL on the nested per-property route.
    Range checks happen in the service so every caller gets the same errors.
    """

    property_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
        required=False,
    )
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class BlockedDateUpdateSerializer(FullUpdateRequiredMixin, serializers.Serializer):
    full_update_fields = ("start_date", "end_date")

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True)


class PriceRangeSerializer(serializers.ModelSerializer):
    property_id = serializers.ReadOnlyField(source="property.id")
    property_name = serializers.ReadOnlyField(source="property.name")

    class Meta:
        model = PriceRange
        fields = [
            "id",
            "property_id",
            "property_name",
            "date_from",
            "date_to",
            "price_per_night",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PriceRangeWriteSerializer(serializers.Serializer):
    property = serializers.IntegerField(min_value=1, required=False)
    date_from = serializers.DateField()
    date_to = serializers.DateField()
    price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2)


class PriceRangeUpdateSerializer(FullUpdateRequiredMixin, serializers.Serializer):
    full_update_fields = ("date_from", "date_to", "price_per_night")

    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)


class ApplyPriceRangeSerializer(serializers.Serializer):
    business = serializers.IntegerField(min_value=1)
    date_from = serializers.DateField()
    date_to = serializers.DateField()
    price_per_night = serializers.DecimalField(max_digits=10, decimal_places=2)


class BulkDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=True)


class DisabledDatesQuerySerializer(serializers.Serializer):
    property = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
    start = serializers.DateField(required=False)
    exclude_booking = serializers.IntegerField(required=False)
    exclude_blocked = serializers.IntegerField(required=False)
    include_blocks = serializers.BooleanField(required=False, default=True)
