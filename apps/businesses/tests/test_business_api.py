"""Integration tests for business, payment method and email endpoints."""

from __future__ import annotations

from io import StringIO

from django.core import mail
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.businesses.models import Business, EmailTemplate, PaymentMethod
from apps.properties.models import Property


class BusinessAPITests(APITestCase):
    def setUp(self) -> None:
        self.business = Business.objects.create(
            name="Seaside Rentals",
            slug="seaside",
            email="hello@seaside.test",
        )
        Property.objects.create(business=self.business, name="Apartment 1")
        Property.objects.create(business=self.business, name="Apartment 2")
        self.template = EmailTemplate.objects.create(
            business=self.business,
            name="booking_confirmation",
            subject="Booking Confirmation",
            body="Dear {{CUSTOMER_NAME}}, see you on {{CHECK_IN}}.\n{{PAYMENT_INFO}}",
        )

    def test_list_businesses_includes_property_count(self) -> None:
        response = self.client.get(reverse("business-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data[0]["slug"], "seaside")
        self.assertEqual(response.data[0]["properties_count"], 2)

    def test_slug_is_generated_from_name(self) -> None:
        business = Business.objects.create(name="Elegancia Luxury Villas", email="info@elegancia.test")
        self.assertEqual(business.slug, "elegancia-luxury-villas")

    def test_create_payment_method(self) -> None:
        url = reverse("business-payment-method-list", kwargs={"business_id": self.business.id})
        payload = {
            "type": PaymentMethod.Type.WESTERN_UNION,
            "label": "Western Union",
            "details": {"full_name": "Eva Papadopoulou", "city": "Chania", "country": "Greece"},
        }
        response = self.client.post(url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(self.business.payment_methods.count(), 1)
        self.assertEqual(response.data["business_id"], self.business.id)

    def test_update_email_template_text(self) -> None:
        url = reverse(
            "business-email-template-detail",
            kwargs={"business_id": self.business.id, "pk": self.template.id},
        )
        response = self.client.patch(url, {"subject": "Your booking"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.template.refresh_from_db()
        self.assertEqual(self.template.subject, "Your booking")

    def test_compose_preview(self) -> None:
        url = reverse("business-email-compose", kwargs={"business_id": self.business.id})
        payload = {
            "template_name": "booking_confirmation",
            "recipient_name": "Nikos",
            "check_in": "2024-06-01",
            "payment_method": "bank",
        }
        response = self.client.post(url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("Dear Nikos, see you on 01/06/2024.", response.data["body"])
        self.assertIn("Bank: Piraeus Bank", response.data["body"])
        self.assertEqual(response.data["from_email"], "hello@seaside.test")

    def test_compose_unknown_template_returns_not_found(self) -> None:
        url = reverse("business-email-compose", kwargs={"business_id": self.business.id})
        response = self.client.post(url, {"template_name": "missing"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["error"], "not_found")

    def test_send_delivers_email(self) -> None:
        url = reverse("business-email-send", kwargs={"business_id": self.business.id})
        payload = {
            "template_name": "booking_confirmation",
            "recipient_email": "guest@example.com",
            "recipient_name": "Nikos",
        }
        response = self.client.post(url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED, response.data)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["guest@example.com"])
        self.assertEqual(mail.outbox[0].from_email, "hello@seaside.test")
        self.assertEqual(mail.outbox[0].subject, "Booking Confirmation")

    def test_send_requires_recipient_email(self) -> None:
        url = reverse("business-email-send", kwargs={"business_id": self.business.id})
        response = self.client.post(url, {"template_name": "booking_confirmation"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(len(mail.outbox), 0)

    def test_health_check(self) -> None:
        response = self.client.get(reverse("health"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["database"], "ok")


class SeedDemoCommandTests(APITestCase):
    def test_seed_is_idempotent(self) -> None:
        call_command("seed_demo", stdout=StringIO())
        call_command("seed_demo", stdout=StringIO())

        self.assertEqual(Business.objects.count(), 2)
        self.assertEqual(Property.objects.filter(business__slug="evaggelia").count(), 4)
        self.assertEqual(Property.objects.filter(business__slug="elegancia").count(), 3)
        self.assertEqual(EmailTemplate.objects.count(), 8)
        confirmation = EmailTemplate.objects.get(business__slug="elegancia", name="booking_confirmation")
        self.assertIn("{{PAYMENT_INFO}}", confirmation.body)
        self.assertTrue(confirmation.body.endswith("Elegancia Luxury Villas"))
