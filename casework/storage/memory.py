"""Process-local record store backed by plain dictionaries."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Generic, Iterator, List, Mapping, Optional, TypeVar

from pydantic import BaseModel

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

from .base import MonotonicClock, clean_changes
from .records import build_complaint, build_meeting, build_notification, build_scenario, build_user

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class _Collection(Generic[RecordT]):
    """Arena of records keyed by id. Lookups other than by id are full scans."""

    def __init__(self) -> None:
        self._records: Dict[str, RecordT] = {}

    def get(self, record_id: str) -> Optional[RecordT]:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def put(self, record: RecordT) -> RecordT:
        self._records[record.id] = record  # type: ignore[attr-defined]
        return record.model_copy(deep=True)

    def scan(self, predicate: Callable[[RecordT], bool] | None = None) -> Iterator[RecordT]:
        for record in self._records.values():
            if predicate is None or predicate(record):
                yield record.model_copy(deep=True)

    def merge(self, record_id: str, changes: Mapping[str, Any]) -> Optional[RecordT]:
        current = self._records.get(record_id)
        if current is None:
            return None
        return self.put(current.model_copy(update=dict(changes), deep=True))


class MemoryStorage:
    """In-memory implementation of :class:`casework.storage.base.Storage`."""

    def __init__(self, clock: MonotonicClock | None = None) -> None:
        self.clock = clock or MonotonicClock()
        self.users: _Collection[User] = _Collection()
        self.complaints: _Collection[Complaint] = _Collection()
        self.meetings: _Collection[Meeting] = _Collection()
        self.scenarios: _Collection[Scenario] = _Collection()
        self.notifications: _Collection[Notification] = _Collection()

    # Users -----------------------------------------------------------------

    async def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def list_users(self) -> List[User]:
        return sorted(self.users.scan(), key=lambda user: user.created_at)

    async def get_user_by_phone(self, phone: str) -> Optional[User]:
        return next(self.users.scan(lambda user: user.phone == phone), None)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return next(self.users.scan(lambda user: user.username == username), None)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return next(self.users.scan(lambda user: user.email == email), None)

    async def create_user(self, payload: UserCreate) -> User:
        user = self.users.put(build_user(payload, self.clock.now()))
        logger.debug("user.created id=%s role=%s", user.id, user.role)
        return user

    async def update_user(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]:
        return self.users.merge(user_id, clean_changes(changes))

    # Complaints ------------------------------------------------------------

    async def list_complaints(self) -> List[Complaint]:
        return sorted(self.complaints.scan(), key=lambda complaint: complaint.created_at, reverse=True)

    async def get_complaint(self, complaint_id: str) -> Optional[Complaint]:
        return self.complaints.get(complaint_id)

    async def create_complaint(self, payload: ComplaintCreate) -> Complaint:
        complaint = self.complaints.put(build_complaint(payload, self.clock.now()))
        logger.debug("complaint.created id=%s", complaint.id)
        return complaint

    async def update_complaint(self, complaint_id: str, changes: Mapping[str, Any]) -> Optional[Complaint]:
        if self.complaints.get(complaint_id) is None:
            return None
        updates = clean_changes(changes)
        updates["updated_at"] = self.clock.now()
        return self.complaints.merge(complaint_id, updates)

    async def list_complaints_by_submitter(self, user_id: str) -> List[Complaint]:
        matches = self.complaints.scan(lambda complaint: complaint.submitter_id == user_id)
        return sorted(matches, key=lambda complaint: complaint.created_at, reverse=True)

    # Meetings --------------------------------------------------------------

    async def list_meetings(self) -> List[Meeting]:
        return sorted(self.meetings.scan(), key=lambda meeting: meeting.scheduled_date)

    async def get_meeting(self, meeting_id: str) -> Optional[Meeting]:
        return self.meetings.get(meeting_id)

    async def create_meeting(self, payload: MeetingCreate) -> Meeting:
        meeting = self.meetings.put(build_meeting(payload, self.clock.now()))
        logger.debug("meeting.created id=%s scheduled=%s", meeting.id, meeting.scheduled_date.isoformat())
        return meeting

    async def update_meeting(self, meeting_id: str, changes: Mapping[str, Any]) -> Optional[Meeting]:
        return self.meetings.merge(meeting_id, clean_changes(changes))

    async def list_meetings_for_user(self, user_id: str) -> List[Meeting]:
        def _involves(meeting: Meeting) -> bool:
            return meeting.organizer_id == user_id or user_id in (meeting.attendee_ids or [])

        return sorted(self.meetings.scan(_involves), key=lambda meeting: meeting.scheduled_date)

    # Scenarios -------------------------------------------------------------

    async def list_scenarios(self) -> List[Scenario]:
        return sorted(self.scenarios.scan(), key=lambda scenario: scenario.created_at, reverse=True)

    async def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        return self.scenarios.get(scenario_id)

    async def create_scenario(self, payload: ScenarioCreate) -> Scenario:
        return self.scenarios.put(build_scenario(payload, self.clock.now()))

    async def update_scenario(self, scenario_id: str, changes: Mapping[str, Any]) -> Optional[Scenario]:
        return self.scenarios.merge(scenario_id, clean_changes(changes))

    # Notifications ---------------------------------------------------------

    async def list_notifications(self, user_id: str) -> List[Notification]:
        matches = self.notifications.scan(lambda notification: notification.user_id == user_id)
        return sorted(matches, key=lambda notification: notification.created_at, reverse=True)

    async def create_notification(self, payload: NotificationCreate) -> Notification:
        return self.notifications.put(build_notification(payload, self.clock.now()))

    async def mark_notification_read(self, notification_id: str) -> bool:
        return self.notifications.merge(notification_id, {"is_read": True}) is not None


__all__ = ["MemoryStorage"]
