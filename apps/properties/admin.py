"""Admin registration for properties and their calendars."""

from __future__ import annotations

from django.contrib import admin

from .models import BlockedDate, PriceRange, Property


class BlockedDateInline(admin.TabularInline):
    model = BlockedDate
    extra = 0
    fields = ("start_date", "end_date", "reason")


class PriceRangeInline(admin.TabularInline):
    model = PriceRange
    extra = 0
    fields = ("date_from", "date_to", "price_per_night")


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "business", "is_active", "created_at")
    list_filter = ("business", "is_active")
    search_fields = ("name", "business__name")
    inlines = [BlockedDateInline, PriceRangeInline]


@admin.register(BlockedDate)
class BlockedDateAdmin(admin.ModelAdmin):
    list_display = ("property", "start_date", "end_date", "reason")
    list_filter = ("property__business",)
    date_hierarchy = "start_date"


@admin.register(PriceRange)
class PriceRangeAdmin(admin.ModelAdmin):
    list_display = ("property", "date_from", "date_to", "price_per_night")
    list_filter = ("property__business",)
    date_hierarchy = "date_from"
