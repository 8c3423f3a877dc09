"""Guest email composition from stored templates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping

from django.utils.html import escape  # type: ignore

from shared.domain.errors import NotFoundError
from shared.domain.intervals import as_date

from .models import Business, EmailTemplate
from .payment_details import PaymentDetailsProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComposedEmail:
    subject: str
    body: str
    html_body: str
    from_email: str


def _format_day(value: date | str) -> str:
    return as_date(value).strftime("%d/%m/%Y")


def _alternative_dates_text(ranges: Iterable[Mapping[str, str]]) -> str:
    return "\n".join(f"• {item['start']} to {item['end']}" for item in ranges)


def compose_email(
    business: Business | int,
    template_name: str,
    *,
    recipient_name: str = "",
    check_in: date | str | None = None,
    check_out: date | str | None = None,
    alternative_dates: Iterable[Mapping[str, str]] | None = None,
    payment_method: str = "",
    provider: PaymentDetailsProvider | None = None,
) -> ComposedEmail:
    """
    Fill an email template's ``{{PLACEHOLDER}}`` markers.

    Placeholders whose value was not supplied stay in the text untouched,
    except ``{{PAYMENT_INFO}}`` which is always replaced (empty when no payment
    method is given).
    """
    if not isinstance(business, Business):
        try:
            business = Business.objects.get(pk=business)
        except Business.DoesNotExist:
            raise NotFoundError("Business not found.") from None

    try:
        template = EmailTemplate.objects.get(business=business, name=template_name)
    except EmailTemplate.DoesNotExist:
        raise NotFoundError(f"Template '{template_name}' not found.") from None

    body = template.body
    if recipient_name:
        body = body.replace("{{CUSTOMER_NAME}}", recipient_name)
    if alternative_dates is not None:
        body = body.replace("{{ALTERNATIVE_DATES}}", _alternative_dates_text(alternative_dates))
    if check_in:
        body = body.replace("{{CHECK_IN}}", _format_day(check_in))
    if check_out:
        body = body.replace("{{CHECK_OUT}}", _format_day(check_out))

    details = (provider or PaymentDetailsProvider()).details_for(business, payment_method)
    body = body.replace("{{PAYMENT_INFO}}", details.render() if details else "")

    logger.debug("Composed %s email for business %s", template_name, business.pk)
    return ComposedEmail(
        subject=template.subject,
        body=body,
        html_body=escape(body).replace("\n", "<br>"),
        from_email=business.email,
    )
