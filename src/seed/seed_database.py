# src/seed/seed_database.py
"""
Database seed script for Elder Care Connect.
Loads the service and certification catalogs, and optionally demo accounts.

Usage:
    python -m src.seed.seed_database

Options:
    --clear     Clear existing data before seeding
    --demo      Also create demo client and caregiver accounts
"""

import asyncio
import argparse
from datetime import date, time, timedelta
from typing import Dict, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.auth_provider import hash_password
from src.common.database.database import async_session
from src.models.models import (
    AuthIdentity, AuthSession, User, UserRole, ClientProfile, CaregiverProfile,
    CaregiverStatus, Service, CaregiverService, Certification, CaregiverCertification,
    CaregiverAvailability, Booking, BookingService, BookingStatus, Message
)


# ============================================================================
# CATALOGS
# ============================================================================

SERVICES_DATA = [
    ("Personal Care", "Bathing, dressing, grooming assistance", 30),
    ("Companionship", "Social interaction and emotional support", 25),
    ("Medication Management", "Medication reminders and organization", 28),
    ("Running Errands", "Shopping, appointments, transportation", 22),
    ("Household Chores", "Cleaning, laundry, meal preparation", 20),
]

CERTIFICATIONS_DATA = [
    ("CPR Certification", "Cardiopulmonary resuscitation"),
    ("First Aid Certification", "Basic first aid"),
    ("CNA (Certified Nursing Assistant)", "State-certified nursing assistant"),
    ("HHA (Home Health Aide)", "Home health aide training"),
    ("Alzheimer's/Dementia Care Training", "Memory care training"),
    ("Medication Administration Training", "Safe medication handling"),
]

# ============================================================================
# DEMO ACCOUNTS
# ============================================================================

DEMO_PASSWORD = "CareDemo@123"

DEMO_CLIENTS = [
    ("margaret.hill@example.com", "Margaret", "Hill", "555-0101", "14 Orchard Lane, Springfield"),
    ("robert.nguyen@example.com", "Robert", "Nguyen", "555-0102", "220 Lakeview Drive, Springfield"),
]

DEMO_CAREGIVERS = [
    # email, first, last, bio, years, zip, services
    ("sarah.johnson@example.com", "Sarah", "Johnson",
     "Compassionate caregiver with a background in memory care.", 8, "62701",
     ["Personal Care", "Companionship", "Medication Management"]),
    ("david.okafor@example.com", "David", "Okafor",
     "Reliable helper for errands, meals and light housekeeping.", 3, "62702",
     ["Running Errands", "Household Chores", "Companionship"]),
    ("linda.martinez@example.com", "Linda", "Martinez",
     "Certified nursing assistant offering personal care.", 12, "62704",
     ["Personal Care"]),
]


async def create_catalog(session: AsyncSession) -> Dict[str, Service]:
    """Insert catalog rows that don't exist yet."""
    existing = {s.name: s for s in (await session.execute(select(Service))).scalars().all()}
    for name, description, price in SERVICES_DATA:
        if name not in existing:
            service = Service(name=name, description=description, base_price=price)
            session.add(service)
            existing[name] = service

    existing_certs = set((await session.execute(select(Certification.name))).scalars().all())
    for name, description in CERTIFICATIONS_DATA:
        if name not in existing_certs:
            session.add(Certification(name=name, description=description))

    await session.flush()
    print(f"✓ Catalog ready: {len(SERVICES_DATA)} services, {len(CERTIFICATIONS_DATA)} certifications")
    return existing


async def _create_account(
    session: AsyncSession,
    email: str,
    first_name: str,
    last_name: str,
    role: UserRole,
    phone: str = None
) -> User:
    identity = AuthIdentity(email=email, password_hash=hash_password(DEMO_PASSWORD))
    session.add(identity)
    await session.flush()

    user = User(
        id=identity.id,
        email=email,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=role,
    )
    session.add(user)
    await session.flush()
    return user


async def create_demo_accounts(session: AsyncSession, services: Dict[str, Service]) -> None:
    clients: List[ClientProfile] = []
    for email, first, last, phone, address in DEMO_CLIENTS:
        user = await _create_account(session, email, first, last, UserRole.CLIENT, phone)
        profile = ClientProfile(user_id=user.id, address=address, medical_conditions=[])
        session.add(profile)
        clients.append(profile)

    caregivers: List[CaregiverProfile] = []
    for email, first, last, bio, years, zip_code, offered in DEMO_CAREGIVERS:
        user = await _create_account(session, email, first, last, UserRole.CAREGIVER)
        rates = [float(services[name].base_price) + 2 for name in offered]
        profile = CaregiverProfile(
            user_id=user.id,
            bio=bio,
            experience_years=years,
            hourly_rate=min(rates),
            service_radius=10,
            zip_code=zip_code,
            status=CaregiverStatus.APPROVED,
            rating=4.5 + (years % 5) / 10,
            total_reviews=years * 3,
            background_check_verified=True,
        )
        session.add(profile)
        await session.flush()

        for name, rate in zip(offered, rates):
            session.add(CaregiverService(caregiver_id=profile.id, service_id=services[name].id, custom_rate=rate))
        for day in (1, 6):
            session.add(CaregiverAvailability(
                caregiver_id=profile.id, day_of_week=day, start_time=time(6, 0), end_time=time(12, 0)
            ))
        caregivers.append(profile)

    await session.flush()
    print(f"✓ Created {len(clients)} clients and {len(caregivers)} caregivers")

    certs = (await session.execute(select(Certification).order_by(Certification.name))).scalars().all()
    for caregiver, cert in zip(caregivers, certs):
        session.add(CaregiverCertification(caregiver_id=caregiver.id, certification_id=cert.id, verified=True))

    # A few bookings in different states for the dashboards
    today = date.today()
    personal_care = services["Personal Care"]
    plan = [
        (clients[0], caregivers[0], today + timedelta(days=2), BookingStatus.PENDING),
        (clients[0], caregivers[0], today - timedelta(days=5), BookingStatus.COMPLETED),
        (clients[1], caregivers[0], today + timedelta(days=1), BookingStatus.CONFIRMED),
        (clients[1], caregivers[2], today - timedelta(days=9), BookingStatus.COMPLETED),
    ]
    for client, caregiver, service_date, status in plan:
        booking = Booking(
            client_id=client.id,
            caregiver_id=caregiver.id,
            service_date=service_date,
            start_time=time(9, 0),
            end_time=time(11, 0),
            duration_hours=2,
            total_amount=float(personal_care.base_price) * 2,
            status=status,
            service_address=client.address,
        )
        session.add(booking)
        await session.flush()
        session.add(BookingService(
            booking_id=booking.id, service_id=personal_care.id, rate=float(personal_care.base_price)
        ))
    print(f"✓ Created {len(plan)} bookings")

    session.add_all([
        Message(sender_id=clients[0].user_id, recipient_id=caregivers[0].user_id,
                content="Hi Sarah, could you arrive a little early on Thursday?"),
        Message(sender_id=caregivers[0].user_id, recipient_id=clients[0].user_id,
                content="Of course, I'll be there by 8:45."),
    ])
    print("✓ Created demo messages")


async def clear_database(session: AsyncSession):
    """Delete all seeded data"""
    print("\n🗑️  Clearing existing data...")

    # Delete in reverse order of dependencies
    tables = [
        Message, BookingService, Booking,
        CaregiverAvailability, CaregiverCertification, CaregiverService,
        CaregiverProfile, ClientProfile, User,
        AuthSession, AuthIdentity,
        Certification, Service,
    ]

    for table in tables:
        await session.execute(delete(table))

    await session.commit()
    print("✓ Database cleared")


async def seed_database(clear: bool = False, demo: bool = False):
    """Main seeding function"""
    print("\n" + "=" * 60)
    print("🌱 ELDER CARE CONNECT DATABASE SEEDER")
    print("=" * 60 + "\n")

    async with async_session() as session:
        try:
            if clear:
                await clear_database(session)

            services = await create_catalog(session)
            if demo:
                await create_demo_accounts(session, services)

            await session.commit()

            print("\n" + "=" * 60)
            print("✅ DATABASE SEEDING COMPLETE!")
            print("=" * 60)
            if demo:
                print("\n📋 Demo Credentials (password for all: " + DEMO_PASSWORD + "):")
                print("-" * 40)
                print(f"Client:    {DEMO_CLIENTS[0][0]}")
                print(f"Caregiver: {DEMO_CAREGIVERS[0][0]}")
                print("-" * 40 + "\n")

        except Exception as e:
            await session.rollback()
            print(f"\n❌ Error during seeding: {e}")
            raise


def main():
    parser = argparse.ArgumentParser(description="Seed Elder Care Connect database")
    parser.add_argument("--clear", action="store_true", help="Clear existing data before seeding")
    parser.add_argument("--demo", action="store_true", help="Create demo client and caregiver accounts")
    args = parser.parse_args()

    asyncio.run(seed_database(clear=args.clear, demo=args.demo))


if __name__ == "__main__":
    main()
