"""Brevo transactional email client."""

import logging
from typing import Any

import httpx

from core.config import Config
from core.errors import EmailDeliveryError
from core.models import EmailRequest

logger = logging.getLogger(__name__)


class BrevoClient:
    def __init__(self, config: Config, client: httpx.AsyncClient | None = None):
        self._config = config
        self._client = client or httpx.AsyncClient(base_url=config.brevo_base_url, timeout=10.0)

    async def send_email(self, request: EmailRequest) -> None:
        body: dict[str, Any] = {
            "sender": {"email": self._config.brevo_sender_email, "name": self._config.brevo_sender_name},
            "to": [recipient.model_dump(exclude_none=True) for recipient in request.to],
            "subject": request.subject,
        }
        if request.html:
            body["htmlContent"] = request.html
        if request.text:
            body["textContent"] = request.text
        response = await self._client.post(
            "/v3/smtp/email",
            json=body,
            headers={"api-key": self._config.brevo_api_key, "Content-Type": "application/json"},
        )
        if not response.is_success:
            raise EmailDeliveryError(
                f"Brevo returned HTTP {response.status_code}",
                details=response.text,
            )
        logger.info("Sent email to %d recipient(s)", len(request.to))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BrevoClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
