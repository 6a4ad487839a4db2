"""
Booking store interface, PostgreSQL client and ORM models.

Importing this package registers all models on Base.metadata,
which Alembic needs for autogenerate.
"""

from core.db.bookings import PostgresBookingStore
from core.db.interface import BookingStore
from core.db.schemas.base import Base
from core.db.schemas.booking import Booking
from core.db.schemas.income_record import IncomeRecord

__all__ = ["Base", "Booking", "BookingStore", "IncomeRecord", "PostgresBookingStore"]
