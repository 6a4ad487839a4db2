import uuid
from decimal import Decimal

import pytest
from pydantic import ValidationError

from core.models import (
    BookingConfirmation,
    BookingRecord,
    EmailRequest,
    GatewayTransactionRecord,
    PaymentLinkRequest,
    PaymentVerificationRequest,
)

VALID_REQUEST = dict(booking_id="b-1", payment_reference="PZ-1001", guest_email="a@x.com")


# --- PaymentVerificationRequest ---


def test_verification_request_valid():
    request = PaymentVerificationRequest(**VALID_REQUEST)
    assert request.model_dump() == VALID_REQUEST


@pytest.mark.parametrize("field", ["booking_id", "payment_reference", "guest_email"])
def test_verification_request_rejects_empty_field(field):
    with pytest.raises(ValidationError):
        PaymentVerificationRequest(**{**VALID_REQUEST, field: ""})


def test_verification_request_rejects_non_string():
    with pytest.raises(ValidationError):
        PaymentVerificationRequest.model_validate({**VALID_REQUEST, "booking_id": 42})


# --- GatewayTransactionRecord ---


def test_gateway_record_from_paystack_lowercases_email():
    record = GatewayTransactionRecord.from_paystack(
        {"status": True, "data": {"status": "success", "amount": 500000, "customer": {"email": "A@X.com"}}}
    )
    assert record.status == "success"
    assert record.amount == 500000
    assert record.payer_email == "a@x.com"


def test_gateway_record_defaults_when_fields_missing():
    record = GatewayTransactionRecord.from_paystack({"data": {"status": "abandoned"}})
    assert record.amount == 0
    assert record.payer_email == ""


def test_gateway_record_rejects_fractional_amount():
    with pytest.raises(ValidationError):
        GatewayTransactionRecord.from_paystack({"data": {"status": "success", "amount": 500000.5}})


# --- BookingRecord ---


def test_booking_record_from_row():
    booking_id = uuid.uuid4()
    record = BookingRecord.model_validate(
        {"id": booking_id, "total_amount": Decimal("500000"), "guest_email": "a@x.com", "payment_reference": "PZ-1"}
    )
    assert record.id == str(booking_id)
    assert record.total_amount == 500000
    assert isinstance(record.total_amount, int)


def test_booking_record_null_columns():
    record = BookingRecord.model_validate(
        {"id": "b-1", "total_amount": None, "guest_email": None, "payment_reference": None}
    )
    assert record.total_amount == 0
    assert record.guest_email == ""
    assert record.payment_reference is None


# --- BookingConfirmation ---


def test_confirmation_defaults_to_online():
    confirmation = BookingConfirmation(
        booking_id="b-1", paid_amount=500000, payment_reference="PZ-1001", guest_email="a@x.com"
    )
    assert confirmation.payment_method == "online"


# --- PaymentLinkRequest ---


def test_payment_link_request_requires_positive_amount():
    with pytest.raises(ValidationError):
        PaymentLinkRequest(amount_in_kobo=0, email="a@x.com", reference="PZ-1")


def test_payment_link_request_metadata_optional():
    request = PaymentLinkRequest(amount_in_kobo=100, email="a@x.com", reference="PZ-1")
    assert request.metadata is None


# --- EmailRequest ---


def test_email_request_requires_content():
    with pytest.raises(ValidationError, match="html or text"):
        EmailRequest(to=[{"email": "a@x.com"}], subject="Booking confirmed")


def test_email_request_requires_recipient():
    with pytest.raises(ValidationError):
        EmailRequest(to=[], subject="Booking confirmed", text="Hi")


def test_email_request_valid():
    request = EmailRequest(to=[{"email": "a@x.com", "name": "Ada"}], subject="Booking confirmed", html="<p>Hi</p>")
    assert request.to[0].name == "Ada"
