"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "customer_name",
        "property",
        "status",
        "check_in",
        "check_out",
        "total_price",
        "advance_payment",
        "remaining_balance",
        "created_at",
    )
    list_filter = ("status", "property__business", "contact_channel", "check_in")
    search_fields = ("customer_name", "contact_info", "property__name")
    readonly_fields = ("created_at", "updated_at", "cancelled_at")
