"""Payment details quoted to guests, resolved per business."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from django.conf import settings  # type: ignore

from .models import Business, PaymentMethod

BANK = "bank"
WESTERN_UNION = "western_union"

_BANK_LINES = (
    ("bank_name", "Bank", "Bank Name"),
    ("iban", "IBAN", "IBAN"),
    ("account_holder", "Account Holder", "Account Holder"),
)
_WESTERN_UNION_LINES = (
    ("recipient", "Recipient Name", "Recipient Name"),
    ("city", "City", "City"),
    ("country", "Country", "Country"),
)


@dataclass(frozen=True)
class PaymentDetails:
    kind: str
    values: dict[str, str] = field(default_factory=dict)

    def render(self) -> str:
        if self.kind == BANK:
            heading, lines = "Please make a deposit via Bank Transfer:", _BANK_LINES
        else:
            heading, lines = "Please make a deposit via Western Union:", _WESTERN_UNION_LINES
        body = "\n".join(
            f"{label}: {self.values.get(key) or placeholder}" for key, label, placeholder in lines
        )
        return f"{heading}\n\n{body}"


class PaymentDetailsProvider:
    """
    Resolve bank or Western Union details for a business.

    Lookup order: the business's stored PaymentMethod of a matching type, then
    ``settings.PAYMENT_DETAILS[business.slug][kind]``. Missing values render as
    their field name so the email still reads sensibly.
    """

    def __init__(self, configured: Mapping[str, Mapping[str, Mapping[str, str]]] | None = None) -> None:
        self._configured = configured if configured is not None else getattr(settings, "PAYMENT_DETAILS", {})

    def details_for(self, business: Business, kind: str) -> PaymentDetails | None:
        if kind not in (BANK, WESTERN_UNION):
            return None
        values = dict(self._configured.get(business.slug, {}).get(kind, {}))
        values.update(self._from_stored_method(business, kind))
        return PaymentDetails(kind=kind, values=values)

    @staticmethod
    def _from_stored_method(business: Business, kind: str) -> dict[str, str]:
        if kind == BANK:
            types = [PaymentMethod.Type.BANK_BUSINESS, PaymentMethod.Type.BANK_PERSONAL]
        else:
            types = [PaymentMethod.Type.WESTERN_UNION]
        method = (
            business.payment_methods.filter(type__in=types)
            .order_by("created_at", "id")
            .first()
        )
        if method is None:
            return {}
        details = method.details or {}
        if kind == BANK:
            values = {
                "bank_name": details.get("bank_name", ""),
                "iban": details.get("iban") or details.get("account_number", ""),
                "account_holder": details.get("account_name", ""),
            }
        else:
            values = {
                "recipient": details.get("full_name", ""),
                "city": details.get("city", ""),
                "country": details.get("country", ""),
            }
        return {key: value for key, value in values.items() if value}
