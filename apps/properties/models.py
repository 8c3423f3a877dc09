"""Property domain models for StayLedger.

A property is a single rentable unit of a business. Its calendar is made of
two kinds of closed date ranges: blocked dates, which make days unavailable,
and price ranges, which give each night its price. Bookings live in their own
app and reference the property by foreign key.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.businesses.models import Business


class Property(models.Model):
    """Rentable unit (apartment, villa) owned by a business."""

    business = models.ForeignKey(
        Business,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    name = models.CharField(max_length=255)
    is_active = models.BooleanField(
        default=True,
        help_text=_("Inactive properties are skipped when applying business-wide price ranges."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["business", "name"]
        constraints = [
            models.UniqueConstraint(
                fields=["business", "name"],
                name="property_unique_name_per_business",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class BlockedDate(models.Model):
    """Days a property cannot be booked. Both edges are blocked."""

    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name="blocked_dates",
    )
    start_date = models.DateField()
    end_date = models.DateField(help_text=_("Last blocked day (inclusive)."))
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Blocked date")
        verbose_name_plural = _("Blocked dates")
        ordering = ["start_date"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="blocked_date_valid_date_range",
            ),
        ]
        indexes = [
            models.Index(fields=["property", "start_date", "end_date"], name="blocked_property_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.property.name}: {self.start_date} - {self.end_date}"


class PriceRange(models.Model):
    """Price per night for every night between date_from and date_to inclusive."""

    property = models.ForeignKey(
        Property,
        on_delete=models.CASCADE,
        related_name="price_ranges",
    )
    date_from = models.DateField()
    date_to = models.DateField(help_text=_("Last priced night (inclusive)."))
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Price range")
        verbose_name_plural = _("Price ranges")
        ordering = ["date_from"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(date_to__gt=models.F("date_from")),
                name="price_range_valid_date_range",
            ),
            models.CheckConstraint(
                condition=models.Q(price_per_night__gt=0),
                name="price_range_positive_price",
            ),
        ]
        indexes = [
            models.Index(fields=["property", "date_from", "date_to"], name="price_property_dates_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.property.name}: {self.date_from} - {self.date_to} @ {self.price_per_night}"

    def covers(self, night) -> bool:  # type: ignore
        return self.date_from <= night <= self.date_to
