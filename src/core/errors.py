"""
Custom exceptions and error handling for guest booking payments.

Defines application-specific exceptions with error codes so every handler
turns a failure into the same client-facing JSON error and HTTP status.

Usage:
    from core.errors import BookingNotFoundError

    raise BookingNotFoundError(f"No booking with id {booking_id}")
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Request errors
    INVALID_REQUEST = "INVALID_REQUEST"

    # Configuration errors
    MISCONFIGURATION = "MISCONFIGURATION"

    # Gateway errors
    GATEWAY_ERROR = "GATEWAY_ERROR"
    PAYMENT_NOT_SUCCESSFUL = "PAYMENT_NOT_SUCCESSFUL"

    # Booking store errors
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    BOOKING_MISMATCH = "BOOKING_MISMATCH"
    PAYMENT_MISMATCH = "PAYMENT_MISMATCH"
    CONFIRMATION_FAILED = "CONFIRMATION_FAILED"

    # Email errors
    EMAIL_DELIVERY_FAILED = "EMAIL_DELIVERY_FAILED"

    # System errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_REQUEST: "Missing required fields",
    ErrorCode.MISCONFIGURATION: "Missing server configuration",
    ErrorCode.GATEWAY_ERROR: "Payment verification failed",
    ErrorCode.PAYMENT_NOT_SUCCESSFUL: "Payment not successful",
    ErrorCode.BOOKING_NOT_FOUND: "Booking not found",
    ErrorCode.BOOKING_MISMATCH: "Booking details mismatch",
    ErrorCode.PAYMENT_MISMATCH: "Payment details mismatch",
    ErrorCode.CONFIRMATION_FAILED: "Failed to confirm booking",
    ErrorCode.EMAIL_DELIVERY_FAILED: "Brevo send failed",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred",
}

STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.MISCONFIGURATION: 500,
    ErrorCode.GATEWAY_ERROR: 400,
    ErrorCode.PAYMENT_NOT_SUCCESSFUL: 400,
    ErrorCode.BOOKING_NOT_FOUND: 404,
    ErrorCode.BOOKING_MISMATCH: 400,
    ErrorCode.PAYMENT_MISMATCH: 400,
    ErrorCode.CONFIRMATION_FAILED: 400,
    ErrorCode.EMAIL_DELIVERY_FAILED: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}


class BookingPaymentsError(Exception):
    """Base exception for all booking payment errors."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        *,
        status_code: int | None = None,
        details: Any = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details
        self._status_code = status_code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])

    @property
    def status_code(self) -> int:
        if self._status_code is not None:
            return self._status_code
        return STATUS_CODES.get(self.code, 500)


class InvalidRequestError(BookingPaymentsError):
    """Request body is missing, unparseable or lacks a required field."""

    default_code = ErrorCode.INVALID_REQUEST


class MisconfigurationError(BookingPaymentsError):
    """A required secret or endpoint is not configured."""

    default_code = ErrorCode.MISCONFIGURATION


class GatewayError(BookingPaymentsError):
    """Payment gateway unreachable or answered with a non-success status."""

    default_code = ErrorCode.GATEWAY_ERROR


class PaymentNotSuccessfulError(BookingPaymentsError):
    """Gateway verified the transaction but it did not succeed."""

    default_code = ErrorCode.PAYMENT_NOT_SUCCESSFUL


class BookingNotFoundError(BookingPaymentsError):
    default_code = ErrorCode.BOOKING_NOT_FOUND


class BookingMismatchError(BookingPaymentsError):
    """Stored booking disagrees with the client's claim."""

    default_code = ErrorCode.BOOKING_MISMATCH


class PaymentMismatchError(BookingPaymentsError):
    """Gateway record disagrees with the stored booking or the client's claim."""

    default_code = ErrorCode.PAYMENT_MISMATCH


class ConfirmationFailedError(BookingPaymentsError):
    """The store's confirm transition raised."""

    default_code = ErrorCode.CONFIRMATION_FAILED


class EmailDeliveryError(BookingPaymentsError):
    default_code = ErrorCode.EMAIL_DELIVERY_FAILED
