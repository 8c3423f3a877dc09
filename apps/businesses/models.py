"""Business domain models for StayLedger."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.text import slugify  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Business(models.Model):
    """Rental business that owns properties, payment methods and templates."""

    name = models.CharField(max_length=255)
    slug = models.SlugField(
        max_length=100,
        unique=True,
        blank=True,
        help_text=_("Stable key used to look up payment details in settings."),
    )
    email = models.EmailField(help_text=_("Sender address for guest emails."))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Business")
        verbose_name_plural = _("Businesses")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):  # type: ignore
        if not self.slug:
            base_slug = slugify(self.name)[:90] or "business"
            candidate = base_slug
            counter = 1
            while self.__class__.objects.filter(slug=candidate).exclude(pk=self.pk).exists():
                counter += 1
                candidate = f"{base_slug}-{counter}"
            self.slug = candidate
        super().save(*args, **kwargs)


class PaymentMethod(models.Model):
    """Account details a business asks guests to pay the advance into."""

    class Type(models.TextChoices):
        BANK_BUSINESS = "bank_business", _("Business bank account")
        BANK_PERSONAL = "bank_personal", _("Personal bank account")
        WESTERN_UNION = "western_union", _("Western Union")

    business = models.ForeignKey(
        Business,
        on_delete=models.CASCADE,
        related_name="payment_methods",
    )
    type = models.CharField(max_length=20, choices=Type.choices)
    label = models.CharField(max_length=255)
    details = models.JSONField(
        default=dict,
        blank=True,
        help_text=_("bank_name/account_name/iban/swift or full_name/country/city/phone."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Payment method")
        verbose_name_plural = _("Payment methods")
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"{self.business}: {self.label}"


class EmailTemplate(models.Model):
    """Named email body with ``{{PLACEHOLDER}}`` markers."""

    business = models.ForeignKey(
        Business,
        on_delete=models.CASCADE,
        related_name="email_templates",
    )
    name = models.CharField(max_length=100)
    subject = models.CharField(max_length=255)
    body = models.TextField()
    image_url = models.URLField(blank=True)
    include_image_by_default = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Email template")
        verbose_name_plural = _("Email templates")
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["business", "name"],
                name="email_template_unique_name_per_business",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.business}: {self.name}"
