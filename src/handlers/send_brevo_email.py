"""Transactional email handler wrapping the Brevo SMTP API."""

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from core.config import Config, get_config
from core.errors import EmailDeliveryError
from core.http import (
    error_response,
    json_response,
    method_not_allowed,
    parse_json_body,
    request_method,
    unexpected_error_response,
)
from core.models import EmailRequest
from core.notifications import BrevoClient

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    if request_method(event) != "POST":
        return method_not_allowed()

    try:
        config = get_config()
        if config.missing("brevo_api_key", "brevo_sender_email"):
            return json_response(500, {"error": "Missing Brevo configuration"})

        body = parse_json_body(event)
        try:
            request = EmailRequest.model_validate(body if isinstance(body, dict) else {})
        except ValidationError:
            return json_response(400, {"error": "Missing required fields"})

        asyncio.run(_send(request, config))
    except EmailDeliveryError as e:
        logger.warning("Brevo send failed: %s", e.message)
        return error_response(e)
    except Exception as e:
        logger.exception("Unexpected error sending email")
        return unexpected_error_response(e)

    return json_response(200, {"success": True})


async def _send(request: EmailRequest, config: Config) -> None:
    async with BrevoClient(config) as client:
        await client.send_email(request)
