"""create scheduling tables

Revision ID: 5b2f0c7e91a4
Revises:
Create Date: 2026-10-18 10:12:41.302117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5b2f0c7e91a4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_STATUS_FILTER = sa.text("status IN ('pending', 'confirmed')")


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Services
    op.create_table(
        'services',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('display_order', sa.Integer(), server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('duration > 0', name='ck_services_duration_positive')
    )
    op.create_index('ix_services_is_active', 'services', ['is_active'])

    # 2. Staff
    op.create_table(
        'staff',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('role', sa.String(100), server_default='stylist'),
        sa.Column('services', sa.JSON(), nullable=True),
        sa.Column('schedule', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('ix_staff_is_active', 'staff', ['is_active'])

    # 3. Weekly hours and date overrides
    op.create_table(
        'business_hours',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('day_of_week', sa.Integer(), nullable=False, unique=True),
        sa.Column('open_time', sa.String(5), nullable=True),
        sa.Column('close_time', sa.String(5), nullable=True),
        sa.Column('is_closed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_business_hours_day_of_week')
    )

    op.create_table(
        'holidays',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False, unique=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('is_closed', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('custom_open_time', sa.String(5), nullable=True),
        sa.Column('custom_close_time', sa.String(5), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )

    # 4. Appointments
    op.create_table(
        'appointments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('service_id', sa.String(36), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('service_name', sa.String(200), nullable=False),
        sa.Column('staff_id', sa.String(36), sa.ForeignKey('staff.id'), nullable=True),
        sa.Column('staff_name', sa.String(200), nullable=True),
        sa.Column('customer_name', sa.String(200), nullable=False),
        sa.Column('customer_phone', sa.String(20), nullable=False),
        sa.Column('customer_email', sa.String(255), nullable=True),
        sa.Column('appointment_date', sa.Date(), nullable=False),
        sa.Column('appointment_time', sa.String(5), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True)
    )

    # Indexes for appointments
    op.create_index('ix_appointments_customer_email', 'appointments', ['customer_email'])
    op.create_index('ix_appointments_date_status', 'appointments', ['appointment_date', 'status'])
    op.create_index(
        'uq_appointments_active_staff_slot',
        'appointments',
        ['staff_id', 'appointment_date', 'appointment_time'],
        unique=True,
        postgresql_where=ACTIVE_STATUS_FILTER,
        sqlite_where=ACTIVE_STATUS_FILTER
    )

    # 5. Per-date booking guard rows
    op.create_table(
        'booking_guards',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('guard_date', sa.Date(), nullable=False, unique=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='0')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('booking_guards')

    op.drop_index('uq_appointments_active_staff_slot', table_name='appointments')
    op.drop_index('ix_appointments_date_status', table_name='appointments')
    op.drop_index('ix_appointments_customer_email', table_name='appointments')
    op.drop_table('appointments')

    op.drop_table('holidays')
    op.drop_table('business_hours')

    op.drop_index('ix_staff_is_active', table_name='staff')
    op.drop_table('staff')

    op.drop_index('ix_services_is_active', table_name='services')
    op.drop_table('services')
