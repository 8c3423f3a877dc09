"""Admin registration for businesses."""

from __future__ import annotations

from django.contrib import admin

from .models import Business, EmailTemplate, PaymentMethod


class PaymentMethodInline(admin.TabularInline):
    model = PaymentMethod
    extra = 0


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "email", "created_at")
    search_fields = ("name", "email")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [PaymentMethodInline]


@admin.register(EmailTemplate)
class EmailTemplateAdmin(admin.ModelAdmin):
    list_display = ("name", "business", "subject", "updated_at")
    list_filter = ("business",)
    search_fields = ("name", "subject", "body")
