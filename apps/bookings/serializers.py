"""Serializers for the booking domain."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.infrastructure.serializers import FullUpdateRequiredMixin

from .models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Read representation of a booking."""

    property_id = serializers.ReadOnlyField(source="property.id")
    property_name = serializers.ReadOnlyField(source="property.name")
    business_id = serializers.ReadOnlyField(source="property.business_id")
    nights_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "property_id",
            "property_name",
            "business_id",
            "customer_name",
            "contact_info",
            "contact_channel",
            "check_in",
            "check_out",
            "nights_count",
            "status",
            "total_price",
            "advance_payment",
            "remaining_balance",
            "advance_payment_method",
            "advance_payment_date",
            "extra_bed",
            "extra_bed_price",
            "notes",
            "cancelled_at",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class _BookingFieldsSerializer(serializers.Serializer):
    contact_info = serializers.CharField(max_length=255, required=False, allow_blank=True)
    contact_channel = serializers.ChoiceField(
        choices=Booking.ContactChannel.choices,
        required=False,
        allow_blank=True,
    )
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    advance_payment = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    remaining_balance = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    advance_payment_method = serializers.CharField(max_length=20, required=False, allow_blank=True)
    advance_payment_date = serializers.DateField(required=False, allow_null=True)
    extra_bed = serializers.BooleanField(required=False)
    extra_bed_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class BookingCreateSerializer(_BookingFieldsSerializer):
    """
    Payload for creating a booking.

    Send ``property`` for one booking or ``property_ids`` to book the same
    stay on several properties in one all-or-nothing batch.
    """

    property = serializers.IntegerField(min_value=1, required=False)
    property_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
        required=False,
    )
    customer_name = serializers.CharField(max_length=255)
    check_in = serializers.DateField()
    check_out = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if not attrs.get("property") and not attrs.get("property_ids"):
            raise serializers.ValidationError({"property": ["Select at least one property."]})
        return attrs


class BookingUpdateSerializer(FullUpdateRequiredMixin, _BookingFieldsSerializer):
    full_update_fields = ("customer_name", "check_in", "check_out")

    property = serializers.IntegerField(min_value=1, required=False)
    customer_name = serializers.CharField(max_length=255, required=False)
    check_in = serializers.DateField(required=False)
    check_out = serializers.DateField(required=False)


class BookingCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class PriceCalculationSerializer(serializers.Serializer):
    property = serializers.IntegerField(min_value=1)
    check_in = serializers.DateField()
    check_out = serializers.DateField()


class NightPriceSerializer(serializers.Serializer):
    date = serializers.DateField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class PriceQuoteSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    nights_count = serializers.IntegerField()
    breakdown = NightPriceSerializer(many=True)
    missing_dates = serializers.ListField(child=serializers.DateField())
    currency = serializers.SerializerMethodField()

    def get_currency(self, obj) -> str:  # type: ignore
        return settings.DEFAULT_CURRENCY


class ArrivalsQuerySerializer(serializers.Serializer):
    business = serializers.IntegerField(min_value=1)
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)
