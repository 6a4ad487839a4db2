"""SQLAlchemy ORM model for the income_records table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, String, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db.schemas.base import Base

if TYPE_CHECKING:
    from core.db.schemas.booking import Booking


class IncomeRecord(Base):
    __tablename__ = "income_records"

    id: Mapped[str] = mapped_column(UUID, primary_key=True, server_default=text("gen_random_uuid()"))
    # One income row per booking: a second confirmation cannot credit twice.
    booking_id: Mapped[str] = mapped_column(
        UUID, ForeignKey("bookings.id", ondelete="RESTRICT"), nullable=False, unique=True
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payment_reference: Mapped[str] = mapped_column(String(100), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)
    source: Mapped[str] = mapped_column(String(20), nullable=False, server_default="booking")
    created_at = mapped_column(TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()"))

    booking: Mapped[Booking] = relationship(back_populates="income_record")

    __table_args__ = (CheckConstraint("amount > 0", name="chk_income_records_amount"),)
