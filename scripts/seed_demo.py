"""Seed script for Casework demo data in MongoDB."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

from casework.api.main import seed_default_users
from casework.core.database import database_manager
from casework.models import ComplaintCreate, MeetingCreate, ScenarioCreate, UserCreate
from casework.storage import MongoStorage

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def seed_records(storage: MongoStorage) -> None:
    await seed_default_users(storage)
    manager = await storage.get_user_by_phone("+1234567890")
    employee = await storage.get_user_by_phone("+1987654321")
    if employee is None:
        employee = await storage.create_user(
            UserCreate(
                username="alex.rivera",
                password="password123",
                email="alex.rivera@company.com",
                phone="+1987654321",
                name="Alex Rivera",
                department="Engineering",
            )
        )

    complaint = await storage.create_complaint(
        ComplaintCreate(
            title="Repeated schedule changes",
            description="My shifts have been changed at short notice three times this month.",
            submitter_id=employee.id,
        )
    )
    await storage.create_meeting(
        MeetingCreate(
            title="Schedule review",
            organizer_id=manager.id,
            attendee_ids=[employee.id],
            scheduled_date=datetime.now(timezone.utc) + timedelta(days=2),
            related_complaint_id=complaint.id,
        )
    )
    await storage.create_scenario(
        ScenarioCreate(scenario="A team lead raises their voice at a colleague during a stand-up meeting.")
    )
    logger.info("Seeded demo complaint %s with follow-up meeting", complaint.id)


async def main() -> None:
    await database_manager.initialize()
    try:
        await seed_records(MongoStorage(database_manager.database))
    finally:
        await database_manager.close()


if __name__ == "__main__":
    asyncio.run(main())
