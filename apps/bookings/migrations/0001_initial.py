from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("properties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_name", models.CharField(max_length=255)),
                ("contact_info", models.CharField(blank=True, max_length=255)),
                (
                    "contact_channel",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("", "Not specified"),
                            ("phone", "Phone"),
                            ("email", "Email"),
                            ("viber", "Viber"),
                            ("messenger", "Messenger"),
                        ],
                        default="",
                        max_length=20,
                    ),
                ),
                ("check_in", models.DateField()),
                (
                    "check_out",
                    models.DateField(help_text="Departure day; not billed and free for the next arrival."),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("cancelled", "Cancelled")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("advance_payment", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("remaining_balance", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                (
                    "advance_payment_method",
                    models.CharField(
                        blank=True,
                        help_text="Payment method type the advance was paid with.",
                        max_length=20,
                    ),
                ),
                ("advance_payment_date", models.DateField(blank=True, null=True)),
                ("extra_bed", models.BooleanField(default=False)),
                ("extra_bed_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("notes", models.TextField(blank=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="properties.property",
                    ),
                ),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["check_in", "id"],
                "indexes": [
                    models.Index(
                        fields=["property", "status", "check_in", "check_out"],
                        name="booking_property_stay_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("check_out__gt", models.F("check_in"))),
                        name="booking_valid_dates",
                    ),
                ],
            },
        ),
    ]
