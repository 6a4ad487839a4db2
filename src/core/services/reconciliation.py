"""Guest booking payment verification and reconciliation.

A client claims a booking was paid. The claim is re-verified against the
payment gateway, cross-checked against the stored booking, and only then is
the store's confirm transition invoked, exactly once.

    Received -> Validated -> GatewayVerified -> BookingLoaded
             -> ConsistencyChecked -> Confirmed

Every stage is terminal on failure and nothing is retried.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from core.db.interface import BookingStore
from core.errors import (
    BookingMismatchError,
    InvalidRequestError,
    PaymentMismatchError,
    PaymentNotSuccessfulError,
)
from core.models import (
    ONLINE_PAYMENT_METHOD,
    SUCCESS_STATUS,
    BookingConfirmation,
    BookingRecord,
    GatewayTransactionRecord,
    PaymentVerificationRequest,
)
from core.payments.interface import GatewayVerifier

logger = logging.getLogger(__name__)


def parse_verification_request(body: Any) -> PaymentVerificationRequest:
    """Validate an untrusted request body.

    Accepts a JSON string or an already decoded object. Unparseable input is
    treated the same as missing fields.
    """
    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            body = None
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body is not a JSON object")
    try:
        return PaymentVerificationRequest.model_validate(body)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise InvalidRequestError(f"Invalid or missing fields: {', '.join(fields)}") from e


def check_consistency(
    request: PaymentVerificationRequest,
    transaction: GatewayTransactionRecord,
    booking: BookingRecord,
) -> None:
    """Raise on the first disagreement between claim, gateway and booking."""
    claimed_email = request.guest_email.lower()

    if booking.payment_reference != request.payment_reference:
        raise BookingMismatchError(f"Booking {booking.id} was created with a different payment reference")
    if booking.guest_email.lower() != claimed_email:
        raise BookingMismatchError(f"Booking {booking.id} belongs to a different guest email")

    # Minor units on both sides; no tolerance.
    if booking.total_amount != transaction.amount:
        raise PaymentMismatchError(
            f"Booking {booking.id} total {booking.total_amount} != paid amount {transaction.amount}"
        )
    if transaction.payer_email != claimed_email:
        raise PaymentMismatchError(f"Payer email for {request.payment_reference} does not match the guest email")


class PaymentReconciler:
    def __init__(self, verifier: GatewayVerifier, store: BookingStore):
        self._verifier = verifier
        self._store = store

    async def reconcile(self, request: PaymentVerificationRequest) -> BookingConfirmation:
        transaction = await self._verifier.verify_transaction(request.payment_reference)
        if transaction.status != SUCCESS_STATUS:
            raise PaymentNotSuccessfulError(
                f"Transaction {request.payment_reference} has status {transaction.status!r}"
            )

        booking = await self._store.get_booking(request.booking_id)
        check_consistency(request, transaction, booking)

        confirmation = BookingConfirmation(
            booking_id=request.booking_id,
            paid_amount=transaction.amount,
            payment_reference=request.payment_reference,
            payment_method=ONLINE_PAYMENT_METHOD,
            guest_email=request.guest_email,
        )
        await self._store.confirm_booking(confirmation)
        logger.info("Confirmed booking %s for reference %s", request.booking_id, request.payment_reference)
        return confirmation
