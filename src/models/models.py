# src/models/models.py

from datetime import datetime, timezone
import uuid
import enum

from sqlalchemy import (
    JSON, Boolean, CheckConstraint, Column, Date, Float, ForeignKey,
    Index, Integer, Numeric, String, Text, DateTime, Time, Uuid,
    Enum as SAEnum, UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship, backref

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# ENUMS
# ============================================================================

class UserRole(enum.Enum):
    CLIENT = "client"
    CAREGIVER = "caregiver"
    ADMIN = "admin"


class CaregiverStatus(enum.Enum):
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    SUSPENDED = "suspended"
    REJECTED = "rejected"


class BookingStatus(enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ============================================================================
# AUTH PROVIDER MODELS
# ============================================================================

class AuthIdentity(Base):
    """Login identity owned by the auth provider; users.id reuses this id."""
    __tablename__ = "auth_identities"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    last_sign_in_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    def __repr__(self):
        return f"<AuthIdentity(id={self.id}, email={self.email})>"


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    identity_id = Column(Uuid, ForeignKey("auth_identities.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    identity = relationship("AuthIdentity", backref=backref("sessions", lazy="dynamic", cascade="all, delete-orphan"))

    __table_args__ = (
        Index("idx_auth_sessions_identity", "identity_id"),
    )

    def __repr__(self):
        return f"<AuthSession(id={self.id}, identity_id={self.identity_id})>"


# ============================================================================
# USER MODELS
# ============================================================================

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, ForeignKey("auth_identities.id", ondelete="CASCADE"), primary_key=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(SAEnum(UserRole), nullable=False, default=UserRole.CLIENT)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"


class ClientProfile(Base):
    __tablename__ = "client_profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    address = Column(Text, nullable=True)
    emergency_contact_name = Column(String(200), nullable=True)
    emergency_contact_phone = Column(String(20), nullable=True)
    medical_conditions = Column(JSON, nullable=True)
    special_instructions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    user = relationship("User", backref=backref("client_profile", uselist=False, cascade="all, delete-orphan"))

    def __repr__(self):
        return f"<ClientProfile(id={self.id}, user_id={self.user_id})>"


class CaregiverProfile(Base):
    __tablename__ = "caregiver_profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    bio = Column(Text, nullable=True)
    experience_years = Column(Integer, nullable=True)
    hourly_rate = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    service_radius = Column(Integer, nullable=True)
    zip_code = Column(String(10), nullable=True)
    status = Column(SAEnum(CaregiverStatus), default=CaregiverStatus.PENDING_APPROVAL, nullable=False)
    rating = Column(Float, default=0.0, nullable=False)
    total_reviews = Column(Integer, default=0, nullable=False)
    total_jobs_completed = Column(Integer, default=0, nullable=False)
    background_check_verified = Column(Boolean, default=False, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    user = relationship("User", backref=backref("caregiver_profile", uselist=False, cascade="all, delete-orphan"))
    services = relationship("CaregiverService", back_populates="caregiver", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="check_caregiver_rating_range"),
        Index("idx_caregiver_profiles_zip", "zip_code"),
    )

    def __repr__(self):
        return f"<CaregiverProfile(id={self.id}, user_id={self.user_id}, status={self.status.value})>"


# ============================================================================
# CATALOG MODELS
# ============================================================================

class Service(Base):
    __tablename__ = "services"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    base_price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name})>"


class CaregiverService(Base):
    __tablename__ = "caregiver_services"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    caregiver_id = Column(Uuid, ForeignKey("caregiver_profiles.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(Uuid, ForeignKey("services.id", ondelete="CASCADE"), nullable=False)
    custom_rate = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    caregiver = relationship("CaregiverProfile", back_populates="services")
    service = relationship("Service")

    __table_args__ = (
        UniqueConstraint("caregiver_id", "service_id", name="uq_caregiver_service"),
    )


class Certification(Base):
    __tablename__ = "certifications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    name = Column(String(200), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())


class CaregiverCertification(Base):
    __tablename__ = "caregiver_certifications"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    caregiver_id = Column(Uuid, ForeignKey("caregiver_profiles.id", ondelete="CASCADE"), nullable=False)
    certification_id = Column(Uuid, ForeignKey("certifications.id", ondelete="CASCADE"), nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("caregiver_id", "certification_id", name="uq_caregiver_certification"),
    )


class CaregiverAvailability(Base):
    __tablename__ = "caregiver_availability"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    caregiver_id = Column(Uuid, ForeignKey("caregiver_profiles.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday ... 6 = Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="check_availability_day_of_week"),
        Index("idx_caregiver_availability_caregiver", "caregiver_id"),
    )


# ============================================================================
# BOOKING MODELS
# ============================================================================

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    client_id = Column(Uuid, ForeignKey("client_profiles.id", ondelete="CASCADE"), nullable=False)
    caregiver_id = Column(Uuid, ForeignKey("caregiver_profiles.id", ondelete="CASCADE"), nullable=False)
    service_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    duration_hours = Column(Integer, nullable=False)
    total_amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    status = Column(SAEnum(BookingStatus), default=BookingStatus.PENDING, nullable=False)
    service_address = Column(Text, nullable=False)
    special_instructions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    client = relationship("ClientProfile", backref=backref("bookings", lazy="dynamic", cascade="all, delete-orphan"))
    caregiver = relationship("CaregiverProfile", backref=backref("bookings", lazy="dynamic", cascade="all, delete-orphan"))
    booking_services = relationship("BookingService", back_populates="booking", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_bookings_service_date", "service_date"),
        Index("idx_bookings_status", "status"),
        Index("idx_bookings_client", "client_id"),
        Index("idx_bookings_caregiver", "caregiver_id"),
    )

    def __repr__(self):
        return f"<Booking(id={self.id}, date={self.service_date}, status={self.status.value})>"


class BookingService(Base):
    __tablename__ = "booking_services"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    booking_id = Column(Uuid, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(Uuid, ForeignKey("services.id", ondelete="CASCADE"), nullable=False)
    rate = Column(Numeric(10, 2, asdecimal=False), nullable=False)

    booking = relationship("Booking", back_populates="booking_services")
    service = relationship("Service")


# ============================================================================
# MESSAGING MODELS
# ============================================================================

class Message(Base):
    """A directed message; conversations are derived by grouping on the counterpart."""
    __tablename__ = "messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    sender_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    recipient_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    sender = relationship("User", foreign_keys=[sender_id])
    recipient = relationship("User", foreign_keys=[recipient_id])

    __table_args__ = (
        Index("idx_messages_sender", "sender_id"),
        Index("idx_messages_recipient", "recipient_id"),
        Index("idx_messages_created", "created_at"),
    )

    def __repr__(self):
        return f"<Message(id={self.id}, sender={self.sender_id}, recipient={self.recipient_id})>"
