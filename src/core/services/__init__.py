"""
Business services for guest booking payments.

- reconciliation.py: payment verification and booking confirmation workflow
- migration.py: Alembic migrations for the booking store
"""

from core.services.reconciliation import PaymentReconciler, check_consistency, parse_verification_request

__all__ = ["PaymentReconciler", "check_consistency", "parse_verification_request"]
