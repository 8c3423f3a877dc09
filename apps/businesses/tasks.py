"""Celery tasks for guest email delivery."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.core.mail import send_mail  # type: ignore

logger = logging.getLogger(__name__)


@shared_task(name="businesses.send_composed_email")
def send_composed_email(
    recipient_email: str,
    subject: str,
    body: str,
    html_body: str,
    from_email: str,
) -> int:
    """
    Deliver an already composed email.

    Delivery failures are logged and re-raised so the broker records the task
    as failed.

    Returns:
        int: number of messages sent (0 or 1)
    """
    try:
        sent = send_mail(
            subject,
            body,
            from_email,
            [recipient_email],
            html_message=html_body,
        )
    except Exception:
        logger.exception("Failed to send email '%s' to %s", subject, recipient_email)
        raise
    logger.info("Sent email '%s' to %s", subject, recipient_email)
    return sent
