"""
Pydantic models for guest booking payments.
"""

from core.models.email import EmailRecipient, EmailRequest
from core.models.payment import (
    ONLINE_PAYMENT_METHOD,
    SUCCESS_STATUS,
    BookingConfirmation,
    BookingRecord,
    GatewayTransactionRecord,
    PaymentLinkRequest,
    PaymentVerificationRequest,
)

__all__ = [
    "BookingConfirmation",
    "BookingRecord",
    "EmailRecipient",
    "EmailRequest",
    "GatewayTransactionRecord",
    "ONLINE_PAYMENT_METHOD",
    "PaymentLinkRequest",
    "PaymentVerificationRequest",
    "SUCCESS_STATUS",
]
