from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("businesses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Property",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Inactive properties are skipped when applying business-wide price ranges.",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="properties",
                        to="businesses.business",
                    ),
                ),
            ],
            options={
                "verbose_name": "Property",
                "verbose_name_plural": "Properties",
                "ordering": ["business", "name"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("business", "name"),
                        name="property_unique_name_per_business",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="BlockedDate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField(help_text="Last blocked day (inclusive).")),
                ("reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="blocked_dates",
                        to="properties.property",
                    ),
                ),
            ],
            options={
                "verbose_name": "Blocked date",
                "verbose_name_plural": "Blocked dates",
                "ordering": ["start_date"],
                "indexes": [
                    models.Index(
                        fields=["property", "start_date", "end_date"],
                        name="blocked_property_dates_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("end_date__gte", models.F("start_date"))),
                        name="blocked_date_valid_date_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PriceRange",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date_from", models.DateField()),
                ("date_to", models.DateField(help_text="Last priced night (inclusive).")),
                (
                    "price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="price_ranges",
                        to="properties.property",
                    ),
                ),
            ],
            options={
                "verbose_name": "Price range",
                "verbose_name_plural": "Price ranges",
                "ordering": ["date_from"],
                "indexes": [
                    models.Index(
                        fields=["property", "date_from", "date_to"],
                        name="price_property_dates_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("date_to__gt", models.F("date_from"))),
                        name="price_range_valid_date_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("price_per_night__gt", 0)),
                        name="price_range_positive_price",
                    ),
                ],
            },
        ),
    ]
