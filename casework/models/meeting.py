from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, PositiveInt, field_validator

from .base import CamelModel, as_utc, reject_null


class MeetingStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MeetingCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    organizer_id: str = Field(..., min_length=1)
    attendee_ids: Optional[List[str]] = None
    scheduled_date: datetime
    duration: PositiveInt = 30
    status: MeetingStatus = MeetingStatus.SCHEDULED
    meeting_link: Optional[str] = None
    related_complaint_id: Optional[str] = None

    _utc = field_validator("scheduled_date")(as_utc)


class MeetingUpdate(CamelModel):
    """Partial update. A supplied ``attendeeIds`` list replaces the stored one."""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    organizer_id: Optional[str] = Field(None, min_length=1)
    attendee_ids: Optional[List[str]] = None
    scheduled_date: Optional[datetime] = None
    duration: Optional[PositiveInt] = None
    status: Optional[MeetingStatus] = None
    meeting_link: Optional[str] = None
    related_complaint_id: Optional[str] = None

    _not_null = field_validator(
        "title", "organizer_id", "scheduled_date", "duration", "status", mode="before"
    )(reject_null)
    _utc = field_validator("scheduled_date")(as_utc)


class Meeting(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    organizer_id: str
    attendee_ids: Optional[List[str]] = None
    scheduled_date: datetime
    duration: int = 30
    status: MeetingStatus
    meeting_link: Optional[str] = None
    related_complaint_id: Optional[str] = None
    created_at: datetime

    _utc = field_validator("scheduled_date")(as_utc)
