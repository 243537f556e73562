"""initial schema

Revision ID: 4c1d2e7a9b10
Revises:
Create Date: 2026-10-19 09:12:03.418257

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d2e7a9b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


userrole_enum = sa.Enum('CLIENT', 'CAREGIVER', 'ADMIN', name='userrole')
caregiverstatus_enum = sa.Enum('PENDING_APPROVAL', 'APPROVED', 'SUSPENDED', 'REJECTED', name='caregiverstatus')
bookingstatus_enum = sa.Enum('PENDING', 'CONFIRMED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED', name='bookingstatus')


def _timestamps(*names):
    return [
        sa.Column(name, sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)
        for name in names
    ]


def upgrade() -> None:
    op.create_table(
        'auth_identities',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('last_sign_in_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps('created_at'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_auth_identities_email'), 'auth_identities', ['email'], unique=True)

    op.create_table(
        'auth_sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('identity_id', sa.Uuid(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps('created_at'),
        sa.ForeignKeyConstraint(['identity_id'], ['auth_identities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_auth_sessions_identity', 'auth_sessions', ['identity_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', userrole_enum, nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        *_timestamps('created_at', 'updated_at'),
        sa.ForeignKeyConstraint(['id'], ['auth_identities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'client_profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('emergency_contact_name', sa.String(length=200), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(length=20), nullable=True),
        sa.Column('medical_conditions', sa.JSON(), nullable=True),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        *_timestamps('created_at', 'updated_at'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'caregiver_profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('experience_years', sa.Integer(), nullable=True),
        sa.Column('hourly_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('service_radius', sa.Integer(), nullable=True),
        sa.Column('zip_code', sa.String(length=10), nullable=True),
        sa.Column('status', caregiverstatus_enum, nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('total_reviews', sa.Integer(), nullable=False),
        sa.Column('total_jobs_completed', sa.Integer(), nullable=False),
        sa.Column('background_check_verified', sa.Boolean(), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        *_timestamps('created_at', 'updated_at'),
        sa.CheckConstraint('rating >= 0 AND rating <= 5', name='check_caregiver_rating_range'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('idx_caregiver_profiles_zip', 'caregiver_profiles', ['zip_code'])

    op.create_table(
        'services',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('base_price', sa.Numeric(precision=10, scale=2), nullable=False),
        *_timestamps('created_at'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'certifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps('created_at'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'caregiver_services',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('caregiver_id', sa.Uuid(), nullable=False),
        sa.Column('service_id', sa.Uuid(), nullable=False),
        sa.Column('custom_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        *_timestamps('created_at'),
        sa.ForeignKeyConstraint(['caregiver_id'], ['caregiver_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('caregiver_id', 'service_id', name='uq_caregiver_service'),
    )

    op.create_table(
        'caregiver_certifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('caregiver_id', sa.Uuid(), nullable=False),
        sa.Column('certification_id', sa.Uuid(), nullable=False),
        sa.Column('verified', sa.Boolean(), nullable=False),
        *_timestamps('created_at'),
        sa.ForeignKeyConstraint(['caregiver_id'], ['caregiver_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['certification_id'], ['certifications.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('caregiver_id', 'certification_id', name='uq_caregiver_certification'),
    )

    op.create_table(
        'caregiver_availability',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('caregiver_id', sa.Uuid(), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        *_timestamps('created_at'),
        sa.CheckConstraint('day_of_week >= 0 AND day_of_week <= 6', name='check_availability_day_of_week'),
        sa.ForeignKeyConstraint(['caregiver_id'], ['caregiver_profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_caregiver_availability_caregiver', 'caregiver_availability', ['caregiver_id'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('client_id', sa.Uuid(), nullable=False),
        sa.Column('caregiver_id', sa.Uuid(), nullable=False),
        sa.Column('service_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('duration_hours', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('status', bookingstatus_enum, nullable=False),
        sa.Column('service_address', sa.Text(), nullable=False),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        *_timestamps('created_at', 'updated_at'),
        sa.ForeignKeyConstraint(['client_id'], ['client_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['caregiver_id'], ['caregiver_profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_bookings_service_date', 'bookings', ['service_date'])
    op.create_index('idx_bookings_status', 'bookings', ['status'])
    op.create_index('idx_bookings_client', 'bookings', ['client_id'])
    op.create_index('idx_bookings_caregiver', 'bookings', ['caregiver_id'])

    op.create_table(
        'booking_services',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.Column('service_id', sa.Uuid(), nullable=False),
        sa.Column('rate', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'messages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('sender_id', sa.Uuid(), nullable=False),
        sa.Column('recipient_id', sa.Uuid(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        *_timestamps('created_at'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipient_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_messages_sender', 'messages', ['sender_id'])
    op.create_index('idx_messages_recipient', 'messages', ['recipient_id'])
    op.create_index('idx_messages_created', 'messages', ['created_at'])


def downgrade() -> None:
    op.drop_table('messages')
    op.drop_table('booking_services')
    op.drop_table('bookings')
    op.drop_table('caregiver_availability')
    op.drop_table('caregiver_certifications')
    op.drop_table('caregiver_services')
    op.drop_table('certifications')
    op.drop_table('services')
    op.drop_table('caregiver_profiles')
    op.drop_table('client_profiles')
    op.drop_table('users')
    op.drop_table('auth_sessions')
    op.drop_table('auth_identities')

    # Drop the enum types
    bookingstatus_enum.drop(op.get_bind(), checkfirst=True)
    caregiverstatus_enum.drop(op.get_bind(), checkfirst=True)
    userrole_enum.drop(op.get_bind(), checkfirst=True)
