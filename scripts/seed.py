#!/usr/bin/env python3
"""
Seed Demo Data
==============

Creates the demo accounts (admin, staff, two users) and three sample
complaints walked through the normal lifecycle transitions.

Usage:
    python scripts/seed.py            # create tables and add missing demo data
    python scripts/seed.py --reset    # drop every table first
"""

import argparse
import asyncio
from datetime import timedelta
from uuid import uuid4

# Add project root to path
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.accounts.domain import User
from src.accounts.infrastructure.repositories import SQLAlchemyUserRepository
from src.accounts.infrastructure.security import hash_password
from src.complaints.domain import apply_status_change, assign_complaint, open_complaint
from src.complaints.infrastructure.repositories import SQLAlchemyComplaintRepository
from src.config import Role
from src.core.timeutils import utcnow
from src.infrastructure.database import (
    close_database,
    create_tables,
    drop_tables,
    get_session_context,
    init_database,
)

DEMO_USERS = [
    {"name": "Admin User", "email": "admin@example.com", "password": "Admin@123", "role": Role.ADMIN},
    {"name": "Staff Member", "email": "staff@example.com", "password": "Staff@123", "role": Role.STAFF, "department": "IT"},
    {"name": "John Doe", "email": "john@example.com", "password": "User@123", "role": Role.USER},
    {"name": "Jane Smith", "email": "jane@example.com", "password": "User@123", "role": Role.USER},
]


def demo_complaints(author_id: str, staff_id: str, admin_id: str):
    """Three complaints: one pending, one in progress, one resolved two days ago."""
    now = utcnow()

    wifi = open_complaint(
        author_id, "Wi-Fi not working in Library", "IT",
        "The wireless network connection keeps dropping in the central library. "
        "This has been happening for the past 3 days and is affecting my research work.",
        priority="high", at=now - timedelta(hours=6),
    )

    chairs = open_complaint(
        author_id, "Broken chairs in classroom 301", "Infrastructure",
        "Multiple chairs in classroom 301 are broken and need immediate replacement. "
        "This is causing inconvenience during lectures.",
        at=now - timedelta(days=3),
    )
    chairs = assign_complaint(chairs, staff_id, admin_id, at=now - timedelta(days=3) + timedelta(hours=1))
    chairs = apply_status_change(
        chairs, "in-progress", "Assigned to maintenance team", staff_id, at=now - timedelta(days=2)
    )

    ac = open_complaint(
        author_id, "AC not cooling in Hostel Room 205", "Hostel",
        "The air conditioning unit in hostel room 205 is not cooling properly. "
        "It makes loud noises but does not reduce the temperature.",
        at=now - timedelta(days=5),
    )
    ac = assign_complaint(ac, staff_id, admin_id, at=now - timedelta(days=5) + timedelta(hours=1))
    ac = apply_status_change(ac, "in-progress", "Technician assigned", staff_id, at=now - timedelta(days=4))
    ac = apply_status_change(
        ac, "resolved", "AC serviced and refrigerant refilled. Working properly now.",
        staff_id, at=now - timedelta(days=2),
    )

    return [wifi, chairs, ac]


async def seed(reset: bool) -> None:
    init_database()
    if reset:
        await drop_tables()
        print("Dropped existing tables")
    await create_tables()

    async with get_session_context() as session:
        users = SQLAlchemyUserRepository(session)
        complaints = SQLAlchemyComplaintRepository(session)

        created = {}
        for data in DEMO_USERS:
            existing = await users.get_by_email(data["email"])
            if existing:
                created[data["email"]] = existing
                continue
            now = utcnow()
            created[data["email"]] = await users.create(User(
                id=str(uuid4()),
                name=data["name"],
                email=data["email"],
                password_hash=hash_password(data["password"]),
                role=data["role"],
                is_active=True,
                department=data.get("department"),
                created_at=now,
                updated_at=now,
            ))
        print(f"Users ready: {len(created)}")

        author = created["john@example.com"]
        if await complaints.count({"user_id": author.id}) == 0:
            samples = demo_complaints(
                author.id, created["staff@example.com"].id, created["admin@example.com"].id
            )
            for complaint in samples:
                await complaints.create(complaint)
            print(f"Created {len(samples)} complaints")
        else:
            print("Sample complaints already present")

    await close_database()

    print("\n" + "=" * 60)
    print("Database seeded. Sample login credentials:")
    print("=" * 60)
    for data in DEMO_USERS[:3]:
        print(f"  {data['role'].value:<6} {data['email']} / {data['password']}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the complaint desk database with demo data")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    args = parser.parse_args()
    asyncio.run(seed(args.reset))


if __name__ == "__main__":
    main()
