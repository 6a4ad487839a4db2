"""Guest booking payment verification handler.

Re-verifies a client's payment claim with Paystack, cross-checks it against
the stored booking and confirms the booking. Confirmation happens at most once
per request and only after every check passes.
"""

import asyncio
import logging
from typing import Any

from core.config import Config, get_config
from core.db import PostgresBookingStore
from core.errors import BookingPaymentsError, MisconfigurationError
from core.http import (
    error_response,
    json_response,
    method_not_allowed,
    parse_json_body,
    request_method,
    unexpected_error_response,
)
from core.models import PaymentVerificationRequest
from core.payments import PaystackClient
from core.services.reconciliation import PaymentReconciler, parse_verification_request

logger = logging.getLogger(__name__)


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    if request_method(event) != "POST":
        return method_not_allowed()

    try:
        config = get_config()
        missing = config.missing_store_settings() + config.missing("paystack_secret_key")
        if missing:
            raise MisconfigurationError(f"Missing configuration: {', '.join(missing)}")

        request = parse_verification_request(parse_json_body(event))
        # Collaborator calls are async; asyncio.run() bridges this sync Lambda handler.
        asyncio.run(_reconcile(request, config))
    except BookingPaymentsError as e:
        logger.warning("Payment verification rejected [%s]: %s", e.code.value, e.message)
        return error_response(e)
    except Exception as e:
        logger.exception("Unexpected error verifying payment")
        return unexpected_error_response(e)

    return json_response(200, {"success": True})


async def _reconcile(request: PaymentVerificationRequest, config: Config) -> None:
    async with PaystackClient(config) as gateway, PostgresBookingStore(config) as store:
        await PaymentReconciler(gateway, store).reconcile(request)
