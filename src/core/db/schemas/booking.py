"""SQLAlchemy ORM model for the bookings table."""

from typing import Optional

from sqlalchemy import BigInteger, CheckConstraint, Index, String, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db.schemas.base import Base


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(UUID, primary_key=True, server_default=text("gen_random_uuid()"))
    guest_name: Mapped[str | None] = mapped_column(String(255))
    guest_email: Mapped[str] = mapped_column(String(320), nullable=False)
    total_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payment_reference: Mapped[str | None] = mapped_column(String(100), unique=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, server_default="pending")
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, server_default="unpaid")
    payment_method: Mapped[str | None] = mapped_column(String(20))
    paid_amount: Mapped[int | None] = mapped_column(BigInteger)
    notes: Mapped[str | None] = mapped_column(Text)
    paid_at = mapped_column(TIMESTAMP(timezone=True))
    created_at = mapped_column(TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()"))
    updated_at = mapped_column(TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()"))

    income_record: Mapped[Optional["IncomeRecord"]] = relationship(back_populates="booking")

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="chk_bookings_total_amount"),
        CheckConstraint("status IN ('pending', 'confirmed', 'cancelled')", name="chk_bookings_status"),
        CheckConstraint("payment_status IN ('unpaid', 'paid')", name="chk_bookings_payment_status"),
        Index("idx_bookings_payment_status", "payment_status"),
    )


# Avoid circular import — IncomeRecord is resolved by string reference above
from core.db.schemas.income_record import IncomeRecord  # noqa: E402, F401
