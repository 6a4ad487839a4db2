"""Payment gateway abstraction layer."""

from core.payments.interface import GatewayVerifier
from core.payments.paystack import PaystackClient

__all__ = ["GatewayVerifier", "PaystackClient"]
