"""Unit tests for the PostgreSQL booking store (psycopg mocked)."""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import psycopg
import pytest

from core.config import Config
from core.db import BookingStore, PostgresBookingStore
from core.errors import BookingNotFoundError, ConfirmationFailedError
from core.models import BookingConfirmation

CONFIG = Config(
    aws_region="us-east-1",
    environment="test",
    database_url="postgresql://bookings@localhost:5432/bookings",
    database_password="localdev",
)

BOOKING_ID = str(uuid.uuid4())


def _mock_connection(rows=None, execute_error=None):
    cur = MagicMock()
    cur.execute = AsyncMock(side_effect=execute_error)
    cur.fetchall = AsyncMock(return_value=rows or [])
    conn = MagicMock()
    conn.closed = False
    conn.close = AsyncMock()
    conn.cursor.return_value.__aenter__.return_value = cur
    return conn, cur


def test_postgres_store_is_a_booking_store():
    assert issubclass(PostgresBookingStore, BookingStore)


@pytest.mark.asyncio
async def test_connect_uses_config_credentials():
    conn, _ = _mock_connection()
    with patch("core.db.bookings.psycopg.AsyncConnection.connect", new=AsyncMock(return_value=conn)) as mock_connect:
        store = PostgresBookingStore(CONFIG)
        await store.connect()

    mock_connect.assert_awaited_once_with(
        "postgresql://bookings@localhost:5432/bookings",
        autocommit=True,
        connect_timeout=10,
        password="localdev",
    )


@pytest.mark.asyncio
async def test_connect_uses_resolved_secret_credentials():
    creds = {"username": "svc", "password": "s3cret", "host": "db.internal", "port": 5432, "dbname": "bookings"}
    config = CONFIG.model_copy(
        update={"database_password": "", "database_secret_arn": "arn:aws:secretsmanager:db", "database_credentials": creds}
    )
    conn, _ = _mock_connection()
    with patch("core.db.bookings.psycopg.AsyncConnection.connect", new=AsyncMock(return_value=conn)) as mock_connect:
        store = PostgresBookingStore(config)
        await store.connect()

    kwargs = mock_connect.await_args.kwargs
    assert kwargs["user"] == "svc"
    assert kwargs["password"] == "s3cret"
    assert kwargs["host"] == "db.internal"
    assert kwargs["dbname"] == "bookings"


@pytest.mark.asyncio
async def test_get_booking_returns_record():
    row = {"id": uuid.UUID(BOOKING_ID), "total_amount": 500000, "guest_email": "a@x.com", "payment_reference": "PZ-1"}
    conn, cur = _mock_connection(rows=[row])
    with patch("core.db.bookings.psycopg.AsyncConnection.connect", new=AsyncMock(return_value=conn)):
        async with PostgresBookingStore(CONFIG) as store:
            booking = await store.get_booking(BOOKING_ID)

    assert booking.id == BOOKING_ID
    assert booking.total_amount == 500000
    assert cur.execute.await_args.args[1] == (BOOKING_ID,)
    conn.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_booking_zero_rows_is_not_found():
    conn, _ = _mock_connection(rows=[])
    with patch("core.db.bookings.psycopg.AsyncConnection.connect", new=AsyncMock(return_value=conn)):
        async with PostgresBookingStore(CONFIG) as store:
            with pytest.raises(BookingNotFoundError):
                await store.get_booking(BOOKING_ID)


@pytest.mark.asyncio
async def test_get_booking_database_error_is_not_found():
    conn, _ = _mock_connection(execute_error=psycopg.errors.InvalidTextRepresentation("invalid input syntax for type uuid"))
    with patch("core.db.bookings.psycopg.AsyncConnection.connect", new=AsyncMock(return_value=conn)):
        async with PostgresBookingStore(CONFIG) as store:
            with pytest.raises(BookingNotFoundError):
                await store.get_booking("not-a-uuid")


@pytest.mark.asyncio
async def test_get_booking_connection_failure_is_not_found():
    connect = AsyncMock(side_effect=psycopg.OperationalError("connection refused"))
    with patch("core.db.bookings.psycopg.AsyncConnection.connect", new=connect):
        store = PostgresBookingStore(CONFIG)
        with pytest.raises(BookingNotFoundError, match="connection refused"):
            await store.get_booking(BOOKING_ID)


@pytest.mark.asyncio
async def test_confirm_booking_calls_store_function():
    conn, cur = _mock_connection()
    confirmation = BookingConfirmation(
        booking_id=BOOKING_ID, paid_amount=500000, payment_reference="PZ-1", guest_email="a@x.com"
    )
    with patch("core.db.bookings.psycopg.AsyncConnection.connect", new=AsyncMock(return_value=conn)):
        async with PostgresBookingStore(CONFIG) as store:
            await store.confirm_booking(confirmation)

    sql, params = cur.execute.await_args.args
    assert "confirm_guest_booking" in sql
    assert params == (BOOKING_ID, 500000, "PZ-1", "online", "a@x.com")
    cur.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_confirm_booking_failure_is_confirmation_failed():
    conn, _ = _mock_connection(execute_error=psycopg.errors.UniqueViolation("booking already confirmed"))
    confirmation = BookingConfirmation(
        booking_id=BOOKING_ID, paid_amount=500000, payment_reference="PZ-1", guest_email="a@x.com"
    )
    with patch("core.db.bookings.psycopg.AsyncConnection.connect", new=AsyncMock(return_value=conn)):
        async with PostgresBookingStore(CONFIG) as store:
            with pytest.raises(ConfirmationFailedError, match="already confirmed"):
                await store.confirm_booking(confirmation)


@pytest.mark.asyncio
async def test_connection_is_reused_within_a_request():
    row = {"id": BOOKING_ID, "total_amount": 1, "guest_email": "a@x.com", "payment_reference": "PZ-1"}
    conn, _ = _mock_connection(rows=[row])
    connect = AsyncMock(return_value=conn)
    with patch("core.db.bookings.psycopg.AsyncConnection.connect", new=connect):
        async with PostgresBookingStore(CONFIG) as store:
            await store.get_booking(BOOKING_ID)
            await store.get_booking(BOOKING_ID)

    connect.assert_awaited_once()

