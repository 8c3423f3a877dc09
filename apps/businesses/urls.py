"""URL routing for businesses and their per-business resources."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import (
    BusinessViewSet,
    EmailComposeView,
    EmailSendView,
    EmailTemplateViewSet,
    PaymentMethodViewSet,
)

router = SimpleRouter()
router.register(r"", BusinessViewSet, basename="business")

payment_method_list = PaymentMethodViewSet.as_view({"get": "list", "post": "create"})
payment_method_detail = PaymentMethodViewSet.as_view(
    {"patch": "partial_update", "put": "update", "delete": "destroy", "get": "retrieve"}
)

email_template_list = EmailTemplateViewSet.as_view({"get": "list"})
email_template_detail = EmailTemplateViewSet.as_view(
    {"patch": "partial_update", "put": "update", "get": "retrieve"}
)

urlpatterns = [
    path(
        "<int:business_id>/payment-methods/",
        payment_method_list,
        name="business-payment-method-list",
    ),
    path(
        "<int:business_id>/payment-methods/<int:pk>/",
        payment_method_detail,
        name="business-payment-method-detail",
    ),
    path(
        "<int:business_id>/email-templates/",
        email_template_list,
        name="business-email-template-list",
    ),
    path(
        "<int:business_id>/email-templates/<int:pk>/",
        email_template_detail,
        name="business-email-template-detail",
    ),
    path(
        "<int:business_id>/email/compose/",
        EmailComposeView.as_view(),
        name="business-email-compose",
    ),
    path(
        "<int:business_id>/email/send/",
        EmailSendView.as_view(),
        name="business-email-send",
    ),
    path("", include(router.urls)),
]
