"""MongoDB-backed record store using the motor async driver."""

from __future__ import annotations

import functools
import logging
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from casework.core.exceptions import StorageError
from casework.models import (
    Complaint,
    ComplaintCreate,
    Meeting,
    MeetingCreate,
    Notification,
    NotificationCreate,
    Scenario,
    ScenarioCreate,
    User,
    UserCreate,
)
from casework.models.base import as_utc

from .base import MonotonicClock, clean_changes
from .records import build_complaint, build_meeting, build_notification, build_scenario, build_user

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)
F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

# BSON datetimes carry millisecond precision.
BSON_RESOLUTION = timedelta(milliseconds=1)


def _guarded(func: F) -> F:
    """Translate driver failures into ``StorageError``."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PyMongoError as exc:
            logger.error("MongoDB operation %s failed: %s", func.__name__, exc)
            raise StorageError("Record store unavailable") from exc

    return wrapper  # type: ignore[return-value]


def _to_document(record: BaseModel) -> Dict[str, Any]:
    document = record.model_dump(mode="python")
    document["_id"] = document.pop("id")
    return document


def _from_document(model: Type[RecordT], document: Optional[Mapping[str, Any]]) -> Optional[RecordT]:
    if document is None:
        return None
    data = dict(document)
    data["id"] = data.pop("_id")
    # Clients opened without tz_aware hand back naive UTC datetimes.
    for key, value in data.items():
        if isinstance(value, datetime):
            data[key] = as_utc(value)
    return model.model_validate(data)


class MongoStorage:
    """MongoDB implementation of :class:`casework.storage.base.Storage`.

    Each entity lives in its own collection; the record id is the document ``_id``.
    """

    def __init__(self, database: AsyncIOMotorDatabase, clock: MonotonicClock | None = None) -> None:
        self.db = database
        self.clock = clock or MonotonicClock(BSON_RESOLUTION)

    async def _find_one(self, collection: str, model: Type[RecordT], query: Dict[str, Any]) -> Optional[RecordT]:
        return _from_document(model, await self.db[collection].find_one(query))

    async def _find(
        self,
        collection: str,
        model: Type[RecordT],
        query: Dict[str, Any],
        sort: List[tuple[str, int]],
    ) -> List[RecordT]:
        cursor = self.db[collection].find(query).sort(sort)
        return [_from_document(model, document) async for document in cursor]  # type: ignore[misc]

    async def _insert(self, collection: str, record: RecordT) -> RecordT:
        await self.db[collection].insert_one(_to_document(record))
        return record

    async def _merge(
        self, collection: str, model: Type[RecordT], record_id: str, changes: Mapping[str, Any]
    ) -> Optional[RecordT]:
        if not changes:
            return await self._find_one(collection, model, {"_id": record_id})
        document = await self.db[collection].find_one_and_update(
            {"_id": record_id},
            {"$set": dict(changes)},
            return_document=ReturnDocument.AFTER,
        )
        return _from_document(model, document)

    # Users -----------------------------------------------------------------

    @_guarded
    async def get_user(self, user_id: str) -> Optional[User]:
        return await self._find_one("users", User, {"_id": user_id})

    @_guarded
    async def list_users(self) -> List[User]:
        return await self._find("users", User, {}, [("created_at", ASCENDING)])

    @_guarded
    async def get_user_by_phone(self, phone: str) -> Optional[User]:
        return await self._find_one("users", User, {"phone": phone})

    @_guarded
    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self._find_one("users", User, {"username": username})

    @_guarded
    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self._find_one("users", User, {"email": email})

    @_guarded
    async def create_user(self, payload: UserCreate) -> User:
        return await self._insert("users", build_user(payload, self.clock.now()))

    @_guarded
    async def update_user(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        return await self._merge("users", User, user_id, clean_changes(changes))

    # Complaints ------------------------------------------------------------

    @_guarded
    async def list_complaints(self) -> List[Complaint]:
        return await self._find("complaints", Complaint, {}, [("created_at", DESCENDING)])

    @_guarded
    async def get_complaint(self, complaint_id: str) -> Optional[Complaint]:
        return await self._find_one("complaints", Complaint, {"_id": complaint_id})

    @_guarded
    async def create_complaint(self, payload: ComplaintCreate) -> Complaint:
        return await self._insert("complaints", build_complaint(payload, self.clock.now()))

    @_guarded
    async def update_complaint(self, complaint_id: str, changes: Mapping[str, Any]) -> Optional[Complaint]:
        updates = clean_changes(changes)
        updates["updated_at"] = self.clock.now()
        return await self._merge("complaints", Complaint, complaint_id, updates)

    @_guarded
    async def list_complaints_by_submitter(self, user_id: str) -> List[Complaint]:
        return await self._find("complaints", Complaint, {"submitter_id": user_id}, [("created_at", DESCENDING)])

    # Meetings --------------------------------------------------------------

    @_guarded
    async def list_meetings(self) -> List[Meeting]:
        return await self._find("meetings", Meeting, {}, [("scheduled_date", ASCENDING)])

    @_guarded
    async def get_meeting(self, meeting_id: str) -> Optional[Meeting]:
        return await self._find_one("meetings", Meeting, {"_id": meeting_id})

    @_guarded
    async def create_meeting(self, payload: MeetingCreate) -> Meeting:
        return await self._insert("meetings", build_meeting(payload, self.clock.now()))

    @_guarded
    async def update_meeting(self, meeting_id: str, changes: Mapping[str, Any]) -> Optional[Meeting]:
        return await self._merge("meetings", Meeting, meeting_id, clean_changes(changes))

    @_guarded
    async def list_meetings_for_user(self, user_id: str) -> List[Meeting]:
        query = {"$or": [{"organizer_id": user_id}, {"attendee_ids": user_id}]}
        return await self._find("meetings", Meeting, query, [("scheduled_date", ASCENDING)])

    # Scenarios -------------------------------------------------------------

    @_guarded
    async def list_scenarios(self) -> List[Scenario]:
        return await self._find("scenarios", Scenario, {}, [("created_at", DESCENDING)])

    @_guarded
    async def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        return await self._find_one("scenarios", Scenario, {"_id": scenario_id})

    @_guarded
    async def create_scenario(self, payload: ScenarioCreate) -> Scenario:
        return await self._insert("scenarios", build_scenario(payload, self.clock.now()))

    @_guarded
    async def update_scenario(self, scenario_id: str, changes: Mapping[str, Any]) -> Optional[Scenario]:
        return await self._merge("scenarios", Scenario, scenario_id, clean_changes(changes))

    # Notifications ---------------------------------------------------------

    @_guarded
    async def list_notifications(self, user_id: str) -> List[Notification]:
        return await self._find("notifications", Notification, {"user_id": user_id}, [("created_at", DESCENDING)])

    @_guarded
    async def create_notification(self, payload: NotificationCreate) -> Notification:
        return await self._insert("notifications", build_notification(payload, self.clock.now()))

    @_guarded
    async def mark_notification_read(self, notification_id: str) -> bool:
        result = await self.db["notifications"].update_one({"_id": notification_id}, {"$set": {"is_read": True}})
        return result.matched_count > 0


__all__ = ["MongoStorage"]
