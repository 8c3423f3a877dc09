"""Serializers for businesses, payment methods and email templates."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Business, EmailTemplate, PaymentMethod
from .payment_details import BANK, WESTERN_UNION


class BusinessSerializer(serializers.ModelSerializer):
    properties_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Business
        fields = ["id", "name", "slug", "email", "properties_count", "created_at", "updated_at"]
        read_only_fields = fields


class PaymentMethodSerializer(serializers.ModelSerializer):
    business_id = serializers.ReadOnlyField(source="business.id")

    class Meta:
        model = PaymentMethod
        fields = ["id", "business_id", "type", "label", "details", "created_at", "updated_at"]
        read_only_fields = ["id", "business_id", "created_at", "updated_at"]

    def validate_details(self, value):  # type: ignore
        if not isinstance(value, dict):
            raise serializers.ValidationError("Details must be an object.")
        return value


class EmailTemplateSerializer(serializers.ModelSerializer):
    business_id = serializers.ReadOnlyField(source="business.id")

    class Meta:
        model = EmailTemplate
        fields = [
            "id",
            "business_id",
            "name",
            "subject",
            "body",
            "image_url",
            "include_image_by_default",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "business_id", "name", "created_at", "updated_at"]


class DateRangeSerializer(serializers.Serializer):
    start = serializers.CharField()
    end = serializers.CharField()


class EmailComposeSerializer(serializers.Serializer):
    """Input for previewing or sending a templated email."""

    template_name = serializers.CharField()
    recipient_name = serializers.CharField(required=False, allow_blank=True, default="")
    check_in = serializers.DateField(required=False, allow_null=True, default=None)
    check_out = serializers.DateField(required=False, allow_null=True, default=None)
    alternative_dates = DateRangeSerializer(many=True, required=False, allow_null=True, default=None)
    payment_method = serializers.ChoiceField(
        choices=[("", "None"), (BANK, "Bank transfer"), (WESTERN_UNION, "Western Union")],
        required=False,
        allow_blank=True,
        default="",
    )


class EmailSendSerializer(EmailComposeSerializer):
    recipient_email = serializers.EmailField()


class ComposedEmailSerializer(serializers.Serializer):
    subject = serializers.CharField()
    body = serializers.CharField()
    html_body = serializers.CharField()
    from_email = serializers.EmailField()
