"""create_bookings_and_income_records

Revision ID: 4b7e2c91a0d3
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b7e2c91a0d3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    # Amounts are BIGINT minor units (kobo)
    op.execute("""
        CREATE TABLE bookings (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            guest_name VARCHAR(255),
            guest_email VARCHAR(320) NOT NULL,
            total_amount BIGINT NOT NULL,
            payment_reference VARCHAR(100) UNIQUE,
            status VARCHAR(20) NOT NULL DEFAULT 'pending',
            payment_status VARCHAR(20) NOT NULL DEFAULT 'unpaid',
            payment_method VARCHAR(20),
            paid_amount BIGINT,
            notes TEXT,
            paid_at TIMESTAMPTZ,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_bookings_total_amount CHECK (total_amount >= 0),
            CONSTRAINT chk_bookings_status CHECK (status IN ('pending', 'confirmed', 'cancelled')),
            CONSTRAINT chk_bookings_payment_status CHECK (payment_status IN ('unpaid', 'paid'))
        )
    """)

    op.execute("""
        CREATE INDEX idx_bookings_payment_status
        ON bookings (payment_status)
    """)

    # UNIQUE booking_id: at most one income row per booking
    op.execute("""
        CREATE TABLE income_records (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            booking_id UUID NOT NULL UNIQUE REFERENCES bookings (id) ON DELETE RESTRICT,
            amount BIGINT NOT NULL,
            payment_reference VARCHAR(100) NOT NULL,
            payment_method VARCHAR(20) NOT NULL,
            source VARCHAR(20) NOT NULL DEFAULT 'booking',
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT chk_income_records_amount CHECK (amount > 0)
        )
    """)

    # Atomic confirm transition. The row lock serializes concurrent calls;
    # the loser sees payment_status = 'paid' and raises.
    op.execute("""
        CREATE OR REPLACE FUNCTION confirm_guest_booking(
            p_booking_id UUID,
            p_paid_amount BIGINT,
            p_payment_reference TEXT,
            p_payment_method TEXT,
            p_guest_email TEXT
        ) RETURNS VOID
        LANGUAGE plpgsql
        AS $$
        DECLARE
            v_booking bookings%ROWTYPE;
        BEGIN
            SELECT * INTO v_booking FROM bookings WHERE id = p_booking_id FOR UPDATE;

            IF NOT FOUND THEN
                RAISE EXCEPTION 'booking % not found', p_booking_id
                    USING ERRCODE = 'no_data_found';
            END IF;

            IF v_booking.payment_status = 'paid' THEN
                RAISE EXCEPTION 'booking % already confirmed', p_booking_id
                    USING ERRCODE = 'unique_violation';
            END IF;

            IF v_booking.payment_reference IS DISTINCT FROM p_payment_reference
               OR lower(v_booking.guest_email) <> lower(p_guest_email) THEN
                RAISE EXCEPTION 'booking % details mismatch', p_booking_id
                    USING ERRCODE = 'check_violation';
            END IF;

            IF v_booking.total_amount <> p_paid_amount THEN
                RAISE EXCEPTION 'booking % paid amount % does not match total %',
                    p_booking_id, p_paid_amount, v_booking.total_amount
                    USING ERRCODE = 'check_violation';
            END IF;

            UPDATE bookings
            SET status = 'confirmed',
                payment_status = 'paid',
                paid_amount = p_paid_amount,
                payment_method = p_payment_method,
                paid_at = NOW(),
                updated_at = NOW()
            WHERE id = p_booking_id;

            INSERT INTO income_records (booking_id, amount, payment_reference, payment_method)
            VALUES (p_booking_id, p_paid_amount, p_payment_reference, p_payment_method);
        END;
        $$
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP FUNCTION IF EXISTS confirm_guest_booking(UUID, BIGINT, TEXT, TEXT, TEXT)")
    op.execute("DROP TABLE IF EXISTS income_records")
    op.execute("DROP INDEX IF EXISTS idx_bookings_payment_status")
    op.execute("DROP TABLE IF EXISTS bookings")
