#!/usr/bin/env python3
"""
Seed a doctor and a patient for local development and print bearer tokens.

Usage:
    python scripts/seed_demo.py
    python scripts/seed_demo.py --days 7 --slots 09:00 10:00 11:00
"""

import argparse
import asyncio
from datetime import timedelta

from sqlalchemy import insert

from app.core.clock import utc_today
from app.core.security import issue_token
from app.database import AsyncSessionLocal, engine
from app.models import doctor_availability, doctors, metadata, patients, users


async def seed(days: int, slots: list[str]) -> None:
    """Create tables, one doctor with open slots and one patient."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    async with AsyncSessionLocal() as db:
        doctor_user_id = (
            await db.execute(
                insert(users)
                .values(email="doctor@example.com", full_name="Ada Lovelace", role="doctor")
                .returning(users.c.id)
            )
        ).scalar_one()
        patient_user_id = (
            await db.execute(
                insert(users)
                .values(email="patient@example.com", full_name="Alan Turing", role="patient")
                .returning(users.c.id)
            )
        ).scalar_one()

        doctor_id = (
            await db.execute(
                insert(doctors)
                .values(
                    user_id=doctor_user_id,
                    name="Ada Lovelace",
                    specialization="Cardiology",
                    qualification="MBBS, MD",
                    experience_years=12,
                    rating=4.8,
                )
                .returning(doctors.c.id)
            )
        ).scalar_one()
        await db.execute(
            insert(patients).values(
                user_id=patient_user_id,
                name="Alan Turing",
                age=41,
                gender="Male",
                blood_group="O+",
            )
        )

        today = utc_today()
        await db.execute(
            insert(doctor_availability),
            [
                {
                    "doctor_id": doctor_id,
                    "date": today + timedelta(days=offset),
                    "time_slot": slot,
                    "is_available": True,
                }
                for offset in range(days)
                for slot in slots
            ],
        )
        await db.commit()

    await engine.dispose()

    print(f"Doctor ID:     {doctor_id}")
    print(f"Doctor token:  {issue_token(doctor_user_id, timedelta(days=1))}")
    print(f"Patient token: {issue_token(patient_user_id, timedelta(days=1))}")


def main() -> None:
    """Parse arguments and seed the database."""
    parser = argparse.ArgumentParser(description="Seed demo doctor and patient")
    parser.add_argument("--days", type=int, default=5, help="Days of availability to create")
    parser.add_argument(
        "--slots",
        nargs="+",
        default=["09:00", "10:00", "11:00"],
        help="Time slot labels per day",
    )
    args = parser.parse_args()
    asyncio.run(seed(args.days, args.slots))


if __name__ == "__main__":
    main()
