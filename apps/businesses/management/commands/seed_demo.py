from __future__ import annotations

from django.core.management.base import BaseCommand  # type: ignore
from django.db import transaction  # type: ignore

from apps.businesses.models import Business, EmailTemplate
from apps.properties.models import Property

BUSINESSES = [
    {
        "name": "Evaggelia Rental Apartments",
        "slug": "evaggelia",
        "email": "info@evaggelias-apts.com",
        "properties": ["Apartment 1", "Apartment 2", "Apartment 3", "Apartment 4"],
    },
    {
        "name": "Elegancia Luxury Villas",
        "slug": "elegancia",
        "email": "info@elegancialuxuryvillas.com",
        "properties": ["Villa 1", "Villa 2", "Villa 3"],
    },
]

TEMPLATES = [
    (
        "no_availability",
        "No Availability for Your Requested Dates",
        "Thank you very much for your interest in staying with us.\n\n"
        "Unfortunately, there is no availability for the dates you requested.\n\n"
        "We hope to have the pleasure of hosting you on another occasion.",
    ),
    (
        "alternative_dates",
        "Alternative Dates for Your Stay",
        "Thank you for your request.\n\n"
        "Unfortunately, we are fully booked for your selected dates, but we can "
        "accommodate you on the following available dates:\n\n"
        "{{ALTERNATIVE_DATES}}\n\n"
        "Please let us know if any of these periods work for you.",
    ),
    (
        "availability_confirmation",
        "Availability for Your Requested Dates",
        "Thank you for your inquiry.\n\n"
        "We are pleased to confirm that the dates you requested are available.\n\n"
        "Please let us know if you would like to proceed with your booking.",
    ),
    (
        "booking_confirmation",
        "Booking Confirmation",
        "Thank you very much for your booking.\n\n"
        "Your stay has been confirmed for the following dates: {{CHECK_IN}} to {{CHECK_OUT}}.\n\n"
        "{{PAYMENT_INFO}}\n\n"
        "Once the payment is completed, please send us the transfer confirmation.",
    ),
]


class Command(BaseCommand):
    help = "Creates the demo businesses, their properties and default email templates"

    @transaction.atomic
    def handle(self, *args, **options):  # type: ignore
        for entry in BUSINESSES:
            business, created = Business.objects.get_or_create(
                slug=entry["slug"],
                defaults={"name": entry["name"], "email": entry["email"]},
            )
            for name in entry["properties"]:
                Property.objects.get_or_create(business=business, name=name)
            for name, subject, body in TEMPLATES:
                EmailTemplate.objects.get_or_create(
                    business=business,
                    name=name,
                    defaults={
                        "subject": subject,
                        "body": f"{body}\n\nBest regards,\n{business.name}",
                    },
                )
            verb = "Created" if created else "Updated"
            self.stdout.write(self.style.SUCCESS(f"{verb} {business.name}"))
