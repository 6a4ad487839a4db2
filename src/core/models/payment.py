"""Pydantic models for payment verification and payment links.

All amounts are integers in the currency's minor unit (kobo for NGN).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUCCESS_STATUS = "success"
ONLINE_PAYMENT_METHOD = "online"


class PaymentVerificationRequest(BaseModel):
    """Client claim that a booking has been paid. Untrusted."""

    model_config = ConfigDict(strict=True)

    booking_id: str = Field(..., min_length=1)
    payment_reference: str = Field(..., min_length=1)
    guest_email: str = Field(..., min_length=1)


class GatewayTransactionRecord(BaseModel):
    """The gateway's authoritative record of a transaction."""

    status: str
    amount: int
    payer_email: str

    @field_validator("payer_email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @classmethod
    def from_paystack(cls, payload: dict[str, Any]) -> "GatewayTransactionRecord":
        data = payload.get("data") or {}
        customer = data.get("customer") or {}
        return cls(
            status=str(data.get("status") or ""),
            amount=data.get("amount") or 0,
            payer_email=str(customer.get("email") or ""),
        )


class BookingRecord(BaseModel):
    id: str
    total_amount: int
    guest_email: str
    payment_reference: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: object) -> str:
        return str(value)

    @field_validator("total_amount", mode="before")
    @classmethod
    def default_amount(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("guest_email", mode="before")
    @classmethod
    def default_email(cls, value: object) -> object:
        return "" if value is None else value


class BookingConfirmation(BaseModel):
    """Arguments for the store's atomic confirm transition."""

    model_config = ConfigDict(frozen=True)

    booking_id: str
    paid_amount: int
    payment_reference: str
    payment_method: str = ONLINE_PAYMENT_METHOD
    guest_email: str


class PaymentLinkRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    amount_in_kobo: int = Field(..., gt=0)
    email: str = Field(..., min_length=1)
    reference: str = Field(..., min_length=1)
    metadata: dict[str, Any] | None = None
