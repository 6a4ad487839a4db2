"""Shared test fixtures for guest booking payments."""

import os
import sys
import uuid
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env file for test configuration
load_dotenv()

# Unset AWS_PROFILE for local testing
if "AWS_PROFILE" in os.environ:
    del os.environ["AWS_PROFILE"]

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture
def configured_env(monkeypatch):
    """Environment with every secret the handlers need."""
    from core.config import _reset_config

    monkeypatch.setenv("DATABASE_URL", "postgresql://bookings@localhost:5432/bookings")
    monkeypatch.setenv("DATABASE_PASSWORD", "localdev")
    monkeypatch.delenv("DATABASE_SECRET_ARN", raising=False)
    monkeypatch.setenv("PAYSTACK_SECRET_KEY", "sk_test_paystack")
    monkeypatch.setenv("BREVO_API_KEY", "xkeysib-test")
    monkeypatch.setenv("BREVO_SENDER_EMAIL", "bookings@pzedhomes.com")
    _reset_config()
    yield
    _reset_config()


# PostgreSQL fixtures
@pytest.fixture
def pg_connection():
    """Provide a PostgreSQL connection for integration tests."""
    import psycopg

    conn = psycopg.connect(
        os.environ.get("DATABASE_URL", "postgresql://bookings@localhost:5432/bookings"),
        password=os.environ.get("DATABASE_PASSWORD", "localdev"),
        autocommit=True,
    )
    yield conn
    conn.close()


@pytest.fixture
def unpaid_booking(pg_connection):
    """Insert an unpaid booking and remove it (and its income row) afterwards."""
    reference = f"PZ-{uuid.uuid4().hex[:10]}"
    with pg_connection.cursor() as cur:
        cur.execute(
            """
            INSERT INTO bookings (guest_name, guest_email, total_amount, payment_reference)
            VALUES (%s, %s, %s, %s)
            RETURNING id
            """,
            ("Ada Guest", "a@x.com", 500000, reference),
        )
        booking_id = str(cur.fetchone()[0])

    yield {"id": booking_id, "reference": reference, "email": "a@x.com", "total_amount": 500000}

    with pg_connection.cursor() as cur:
        cur.execute("DELETE FROM income_records WHERE booking_id = %s::uuid", (booking_id,))
        cur.execute("DELETE FROM bookings WHERE id = %s::uuid", (booking_id,))
