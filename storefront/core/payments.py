"""
Payment gateway adapter.

Charges go straight to the Stripe REST API with ``requests`` and are never
retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests
from requests import RequestException

from storefront.domain.errors import PaymentError

from .config import get_settings
from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Charge:
    id: str
    amount: int


class StripeGateway:
    def __init__(self, secret_key: Optional[str] = None, base_url: Optional[str] = None, timeout: Optional[int] = None):
        settings = get_settings()
        self.secret_key = secret_key if secret_key is not None else settings.stripe_secret_key
        self.base_url = (base_url or settings.stripe_api_base).rstrip("/")
        self.timeout = timeout or settings.payment_timeout

    def charge(self, amount: int, currency: str, source: str) -> Charge:
        if not self.secret_key:
            raise PaymentError("Payment gateway is not configured")
        if not source:
            raise PaymentError("A payment token is required")
        url = f"{self.base_url}/v1/charges"
        logger.info("Charging %s %s via %s", amount, currency, url)
        try:
            resp = requests.post(
                url,
                data={"amount": int(amount), "currency": currency, "source": source},
                auth=(self.secret_key, ""),
                timeout=self.timeout,
            )
        except RequestException as exc:
            logger.error("Payment gateway unreachable: %s", exc)
            raise PaymentError("Payment gateway unavailable") from exc

        try:
            body = resp.json()
        except ValueError:
            body = {}
        if resp.status_code >= 400:
            error = body.get("error") or {}
            message = error.get("message") or f"Payment declined (HTTP {resp.status_code})"
            logger.warning("Charge rejected: %s", message)
            raise PaymentError(message)
        try:
            return Charge(id=str(body["id"]), amount=int(body["amount"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise PaymentError("Malformed response from payment gateway") from exc
