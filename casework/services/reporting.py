"""Dashboard statistics derived on demand from the record store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from casework.models import CamelModel, ComplaintStatus, MeetingStatus
from casework.models.base import as_utc
from casework.storage.base import Storage

ACTIVE_STATUSES = {ComplaintStatus.OPEN.value, ComplaintStatus.IN_PROGRESS.value}

STATIC_ACTIVITY_FEED: List[Dict[str, str]] = [
    {"title": "New complaint submitted", "time": "2 hours ago"},
    {"title": "Meeting scheduled", "time": "4 hours ago"},
    {"title": "User registered", "time": "6 hours ago"},
]


class AdminStats(CamelModel):
    total_users: int
    total_complaints: int
    active_complaints: int
    total_meetings: int
    pending_reviews: int
    resolved_complaints: int
    in_progress_complaints: int
    open_complaints: int


class AnalyticsStats(CamelModel):
    active_issues: int
    resolved_this_month: int
    upcoming_meetings: int
    ai_recommendations: int


class ActivityItem(CamelModel):
    title: str
    time: str


async def admin_stats(storage: Storage) -> AdminStats:
    users = await storage.list_users()
    complaints = await storage.list_complaints()
    meetings = await storage.list_meetings()

    def _count(status: ComplaintStatus) -> int:
        return sum(1 for complaint in complaints if complaint.status == status.value)

    return AdminStats(
        total_users=len(users),
        total_complaints=len(complaints),
        active_complaints=sum(1 for complaint in complaints if complaint.status in ACTIVE_STATUSES),
        total_meetings=sum(1 for meeting in meetings if meeting.status == MeetingStatus.SCHEDULED.value),
        pending_reviews=_count(ComplaintStatus.OPEN),
        resolved_complaints=_count(ComplaintStatus.RESOLVED),
        in_progress_complaints=_count(ComplaintStatus.IN_PROGRESS),
        open_complaints=_count(ComplaintStatus.OPEN),
    )


async def analytics_stats(storage: Storage, now: Optional[datetime] = None) -> AnalyticsStats:
    """Compute analytics counters relative to ``now`` (UTC, defaults to the wall clock)."""

    now = as_utc(now) or datetime.now(timezone.utc)
    today = now.date()
    complaints = await storage.list_complaints()
    meetings = await storage.list_meetings()

    resolved_this_month = 0
    for complaint in complaints:
        created = as_utc(complaint.created_at)
        if (
            complaint.status == ComplaintStatus.RESOLVED.value
            and created.year == now.year
            and created.month == now.month
        ):
            resolved_this_month += 1

    upcoming = sum(
        1
        for meeting in meetings
        if meeting.status == MeetingStatus.SCHEDULED.value and as_utc(meeting.scheduled_date).date() >= today
    )

    return AnalyticsStats(
        active_issues=sum(1 for complaint in complaints if complaint.status in ACTIVE_STATUSES),
        resolved_this_month=resolved_this_month,
        upcoming_meetings=upcoming,
        ai_recommendations=sum(1 for complaint in complaints if complaint.ai_recommendations),
    )


def admin_activity() -> List[ActivityItem]:
    """Placeholder activity feed; not derived from stored records."""

    return [ActivityItem(**item) for item in STATIC_ACTIVITY_FEED]
