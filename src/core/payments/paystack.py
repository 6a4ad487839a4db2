"""Paystack API client: transaction verification and payment links."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from core.config import Config
from core.errors import GatewayError
from core.models import GatewayTransactionRecord, PaymentLinkRequest

from .interface import GatewayVerifier

logger = logging.getLogger(__name__)


class PaystackClient(GatewayVerifier):
    """Async Paystack client.

    Use as an async context manager so the underlying HTTP connection pool is
    closed when the invocation ends. Pass ``client`` to reuse or fake the
    transport.
    """

    def __init__(self, config: Config, client: httpx.AsyncClient | None = None):
        self._config = config
        self._client = client or httpx.AsyncClient(
            base_url=config.paystack_base_url,
            timeout=config.paystack_timeout_seconds,
        )
        self._headers = {
            "Authorization": f"Bearer {config.paystack_secret_key}",
            "Content-Type": "application/json",
        }

    async def verify_transaction(self, reference: str) -> GatewayTransactionRecord:
        try:
            response = await self._client.get(
                f"/transaction/verify/{quote(reference, safe='')}",
                headers=self._headers,
            )
        except httpx.HTTPError as e:
            raise GatewayError(f"Paystack verify request failed: {e}") from e

        if not response.is_success:
            raise GatewayError(f"Paystack verify returned HTTP {response.status_code}")

        try:
            return GatewayTransactionRecord.from_paystack(response.json())
        except (ValueError, AttributeError, ValidationError) as e:
            raise GatewayError(f"Malformed Paystack verify response: {e}") from e

    async def initialize_transaction(self, request: PaymentLinkRequest) -> str:
        """Create a one-time payment and return its authorization URL."""
        body = {
            "amount": request.amount_in_kobo,
            "email": request.email,
            "reference": request.reference,
            "currency": self._config.paystack_currency,
            "metadata": {"booking_reference": request.reference, **(request.metadata or {})},
        }
        response = await self._client.post("/transaction/initialize", json=body, headers=self._headers)
        payload = _json_or_none(response)

        if not response.is_success:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise GatewayError(
                message or "Paystack API error",
                status_code=response.status_code,
                details=payload,
            )

        data = payload.get("data") if isinstance(payload, dict) else None
        auth_url = data.get("authorization_url") if isinstance(data, dict) else None
        if not auth_url or not isinstance(auth_url, str):
            raise GatewayError("Paystack did not return a payment URL", status_code=500)

        logger.info("Created Paystack payment link for reference %s", request.reference)
        return auth_url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "PaystackClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
