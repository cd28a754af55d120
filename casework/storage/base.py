"""Record store contract shared by the in-memory and MongoDB backends."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, List, Mapping, Optional, Protocol

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

# Fields owned by the store; partial updates may never overwrite them.
PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


def new_id() -> str:
    return str(uuid.uuid4())


def clean_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in changes.items() if key not in PROTECTED_FIELDS}


class MonotonicClock:
    """UTC clock that never returns the same instant twice.

    ``resolution`` is the smallest step the backing store can represent;
    timestamps are truncated to it and bumped by one step on collision.
    """

    def __init__(self, resolution: timedelta = timedelta(microseconds=1)) -> None:
        self.resolution = resolution
        self._last: Optional[datetime] = None

    def now(self) -> datetime:
        current = datetime.now(timezone.utc)
        step_us = self.resolution // timedelta(microseconds=1)
        if step_us > 1:
            current = current.replace(microsecond=current.microsecond - current.microsecond % step_us)
        if self._last is not None and current <= self._last:
            current = self._last + self.resolution
        self._last = current
        return current


class Storage(Protocol):
    """CRUD access to the five Casework collections.

    ``update_*`` returns ``None`` for an unknown id instead of raising.
    """

    # Users
    async def get_user(self, user_id: str) -> Optional[User]: ...

    async def list_users(self) -> List[User]: ...

    async def get_user_by_phone(self, phone: str) -> Optional[User]: ...

    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    async def get_user_by_email(self, email: str) -> Optional[User]: ...

    async def create_user(self, payload: UserCreate) -> User: ...

    async def update_user(self, user_id: str, changes: Mapping[str, Any]) -> Optional[User]: ...

    # Complaints
    async def list_complaints(self) -> List[Complaint]: ...

    async def get_complaint(self, complaint_id: str) -> Optional[Complaint]: ...

    async def create_complaint(self, payload: ComplaintCreate) -> Complaint: ...

    async def update_complaint(self, complaint_id: str, changes: Mapping[str, Any]) -> Optional[Complaint]: ...

    async def list_complaints_by_submitter(self, user_id: str) -> List[Complaint]: ...

    # Meetings
    async def list_meetings(self) -> List[Meeting]: ...

    async def get_meeting(self, meeting_id: str) -> Optional[Meeting]: ...

    async def create_meeting(self, payload: MeetingCreate) -> Meeting: ...

    async def update_meeting(self, meeting_id: str, changes: Mapping[str, Any]) -> Optional[Meeting]: ...

    async def list_meetings_for_user(self, user_id: str) -> List[Meeting]: ...

    # Scenarios
    async def list_scenarios(self) -> List[Scenario]: ...

    async def get_scenario(self, scenario_id: str) -> Optional[Scenario]: ...

    async def create_scenario(self, payload: ScenarioCreate) -> Scenario: ...

    async def update_scenario(self, scenario_id: str, changes: Mapping[str, Any]) -> Optional[Scenario]: ...

    # Notifications
    async def list_notifications(self, user_id: str) -> List[Notification]: ...

    async def create_notification(self, payload: NotificationCreate) -> Notification: ...

    async def mark_notification_read(self, notification_id: str) -> bool: ...


__all__ = ["MonotonicClock", "PROTECTED_FIELDS", "Storage", "clean_changes", "new_id"]
