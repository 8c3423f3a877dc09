"""Booking domain models for StayLedger."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import StayRange


class Booking(models.Model):
    """A guest's stay at one property, from check-in up to the checkout day."""

    class Status(models.TextChoices):
        ACTIVE = "active", _("Active")
        CANCELLED = "cancelled", _("Cancelled")

    class ContactChannel(models.TextChoices):
        NONE = "", _("Not specified")
        PHONE = "phone", _("Phone")
        EMAIL = "email", _("Email")
        VIBER = "viber", _("Viber")
        MESSENGER = "messenger", _("Messenger")

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    customer_name = models.CharField(max_length=255)
    contact_info = models.CharField(max_length=255, blank=True)
    contact_channel = models.CharField(
        max_length=20,
        choices=ContactChannel.choices,
        blank=True,
        default=ContactChannel.NONE,
    )
    check_in = models.DateField()
    check_out = models.DateField(help_text=_("Departure day; not billed and free for the next arrival."))
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    advance_payment = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    remaining_balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    advance_payment_method = models.CharField(
        max_length=20,
        blank=True,
        help_text=_("Payment method type the advance was paid with."),
    )
    advance_payment_date = models.DateField(null=True, blank=True)
    extra_bed = models.BooleanField(default=False)
    extra_bed_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["check_in", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["property", "status", "check_in", "check_out"], name="booking_property_stay_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.customer_name} ({self.check_in} - {self.check_out})"

    def stay(self) -> StayRange:
        return StayRange(self.check_in, self.check_out)

    def nights_count(self) -> int:
        return len(self.stay())

    def mark_cancelled(self, reason: str = "") -> None:
        self.status = self.Status.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = timezone.now()
        self.save(update_fields=["status", "cancellation_reason", "cancelled_at", "updated_at"])
