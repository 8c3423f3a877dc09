"""Business API views: payment methods, email templates, email composer."""

from __future__ import annotations

import logging

from django.db import connection  # type: ignore
from django.db.models import Count  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .emails import compose_email
from .models import Business, EmailTemplate, PaymentMethod
from .serializers import (
    BusinessSerializer,
    ComposedEmailSerializer,
    EmailComposeSerializer,
    EmailSendSerializer,
    EmailTemplateSerializer,
    PaymentMethodSerializer,
)
from .tasks import send_composed_email

logger = logging.getLogger(__name__)


class BusinessViewSet(viewsets.ReadOnlyModelViewSet):
    """Businesses are created by the seed command or the admin."""

    serializer_class = BusinessSerializer
    queryset = Business.objects.annotate(properties_count=Count("properties")).order_by("name")


class BusinessScopedMixin:
    """Resolves the ``business_id`` URL kwarg once per request."""

    business_lookup_url_kwarg = "business_id"

    def initial(self, request, *args, **kwargs):  # type: ignore
        super().initial(request, *args, **kwargs)
        self.business_object = get_object_or_404(Business, pk=kwargs.get(self.business_lookup_url_kwarg))

    def get_business(self) -> Business:
        return self.business_object


class PaymentMethodViewSet(BusinessScopedMixin, viewsets.ModelViewSet):
    serializer_class = PaymentMethodSerializer
    queryset = PaymentMethod.objects.select_related("business").all()

    def get_queryset(self):  # type: ignore
        return super().get_queryset().filter(business=self.get_business())

    def perform_create(self, serializer):  # type: ignore
        serializer.save(business=self.get_business())


class EmailTemplateViewSet(
    BusinessScopedMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """Templates are seeded per business; staff only edit their text."""

    serializer_class = EmailTemplateSerializer
    queryset = EmailTemplate.objects.select_related("business").all()

    def get_queryset(self):  # type: ignore
        return super().get_queryset().filter(business=self.get_business())


class EmailComposeView(BusinessScopedMixin, APIView):
    """Preview a filled-in template without sending it."""

    input_serializer_class = EmailComposeSerializer

    def _compose(self, request):  # type: ignore
        serializer = self.input_serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        composed = compose_email(
            self.get_business(),
            data["template_name"],
            recipient_name=data["recipient_name"],
            check_in=data["check_in"],
            check_out=data["check_out"],
            alternative_dates=data["alternative_dates"],
            payment_method=data["payment_method"],
        )
        return data, composed

    def post(self, request, business_id):  # type: ignore
        _, composed = self._compose(request)
        return Response(ComposedEmailSerializer(composed).data)


class EmailSendView(EmailComposeView):
    """Compose a template and queue it for delivery."""

    input_serializer_class = EmailSendSerializer

    def post(self, request, business_id):  # type: ignore
        data, composed = self._compose(request)
        result = send_composed_email.delay(
            data["recipient_email"],
            composed.subject,
            composed.body,
            composed.html_body,
            composed.from_email,
        )
        logger.info(
            "Queued %s email for business %s to %s",
            data["template_name"],
            self.get_business().pk,
            data["recipient_email"],
        )
        return Response(
            {"queued": True, "task_id": result.id, "message": "Email queued for delivery"},
            status=status.HTTP_202_ACCEPTED,
        )


class HealthCheckView(APIView):
    """Round-trips to the database so uptime monitors keep it warm."""

    def get(self, request):  # type: ignore
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        return Response({"status": "ok", "database": "ok"})
