"""Paystack payment link handler."""

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from core.config import Config, get_config
from core.errors import GatewayError
from core.http import json_response, method_not_allowed, parse_json_body, request_method
from core.models import PaymentLinkRequest
from core.payments import PaystackClient

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "Paystack is not configured. Set PAYSTACK_SECRET_KEY in the function's secrets."
MISSING_FIELDS = "Missing required fields: amount_in_kobo, email, reference"


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    if request_method(event) != "POST":
        return method_not_allowed()

    try:
        config = get_config()
        if not config.paystack_secret_key.strip():
            return json_response(500, {"error": NOT_CONFIGURED})

        body = parse_json_body(event)
        try:
            request = PaymentLinkRequest.model_validate(body if isinstance(body, dict) else {})
        except ValidationError:
            return json_response(400, {"error": MISSING_FIELDS})

        link = asyncio.run(_create_link(request, config))
    except GatewayError as e:
        logger.warning("Paystack initialize failed: %s", e.message)
        payload: dict[str, Any] = {"error": e.message}
        if e.details is not None:
            payload["details"] = e.details
        return json_response(e.status_code, payload)
    except Exception as e:
        logger.exception("Failed to create payment link")
        return json_response(500, {"error": "Failed to create payment link", "details": str(e)})

    return json_response(200, {"link": link})


async def _create_link(request: PaymentLinkRequest, config: Config) -> str:
    async with PaystackClient(config) as gateway:
        return await gateway.initialize_transaction(request)
