"""PostgreSQL booking store."""

from typing import Any

import psycopg
from psycopg.rows import dict_row
from pydantic import ValidationError

from core.config import Config
from core.errors import BookingNotFoundError, ConfirmationFailedError
from core.models import BookingConfirmation, BookingRecord

from .interface import BookingStore

_SELECT_BOOKING_SQL = """
    SELECT id, total_amount, guest_email, payment_reference
    FROM bookings
    WHERE id = %s::uuid
"""

_CONFIRM_BOOKING_SQL = "SELECT confirm_guest_booking(%s::uuid, %s::bigint, %s, %s, %s)"


class PostgresBookingStore(BookingStore):
    """Booking store backed by PostgreSQL.

    The connection is opened on first use and runs in autocommit mode: the
    only write is a single call to the ``confirm_guest_booking`` function,
    which is atomic on its own.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._conn: psycopg.AsyncConnection[Any] | None = None

    def _get_credentials(self) -> dict[str, Any]:
        return self._config.database_credentials or {"password": self._config.database_password}

    async def connect(self) -> None:
        creds = self._get_credentials()
        overrides: dict[str, Any] = {}
        for key, param in (("host", "host"), ("port", "port"), ("dbname", "dbname"), ("username", "user")):
            if creds.get(key):
                overrides[param] = creds[key]
        if creds.get("password"):
            overrides["password"] = creds["password"]
        self._conn = await psycopg.AsyncConnection.connect(
            self._config.database_url,
            autocommit=True,
            connect_timeout=self._config.database_connect_timeout,
            **overrides,
        )

    async def disconnect(self) -> None:
        if self._conn and not self._conn.closed:
            await self._conn.close()
        self._conn = None

    async def _ensure_connection(self) -> psycopg.AsyncConnection[Any]:
        if self._conn is None or self._conn.closed:
            await self.connect()
        assert self._conn is not None
        return self._conn

    async def get_booking(self, booking_id: str) -> BookingRecord:
        try:
            conn = await self._ensure_connection()
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(_SELECT_BOOKING_SQL, (booking_id,))
                rows = await cur.fetchall()
        except psycopg.Error as e:
            raise BookingNotFoundError(f"Booking lookup failed for {booking_id}: {e}") from e

        if len(rows) != 1:
            raise BookingNotFoundError(f"Expected one booking with id {booking_id}, found {len(rows)}")

        try:
            return BookingRecord.model_validate(rows[0])
        except ValidationError as e:
            raise BookingNotFoundError(f"Booking {booking_id} is unreadable: {e}") from e

    async def confirm_booking(self, confirmation: BookingConfirmation) -> None:
        try:
            conn = await self._ensure_connection()
            async with conn.cursor() as cur:
                await cur.execute(
                    _CONFIRM_BOOKING_SQL,
                    (
                        confirmation.booking_id,
                        confirmation.paid_amount,
                        confirmation.payment_reference,
                        confirmation.payment_method,
                        confirmation.guest_email,
                    ),
                )
        except psycopg.Error as e:
            raise ConfirmationFailedError(
                f"confirm_guest_booking failed for {confirmation.booking_id}: {e}"
            ) from e

    async def __aenter__(self) -> "PostgresBookingStore":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.disconnect()
