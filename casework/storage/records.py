"""Builders turning validated create payloads into stored records."""

from __future__ import annotations

from datetime import datetime

from casework.core.security import hash_password
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

from .base import new_id


def build_user(payload: UserCreate, now: datetime) -> User:
    data = payload.model_dump(exclude={"password"})
    return User(
        **data,
        id=new_id(),
        password_hash=hash_password(payload.password),
        last_login=None,
        created_at=now,
    )


def build_complaint(payload: ComplaintCreate, now: datetime) -> Complaint:
    return Complaint(
        **payload.model_dump(),
        id=new_id(),
        ai_analysis=None,
        ai_recommendations=None,
        sentiment_score=None,
        confidence_score=None,
        created_at=now,
        updated_at=now,
    )


def build_meeting(payload: MeetingCreate, now: datetime) -> Meeting:
    return Meeting(**payload.model_dump(), id=new_id(), created_at=now)


def build_scenario(payload: ScenarioCreate, now: datetime) -> Scenario:
    return Scenario(
        **payload.model_dump(),
        id=new_id(),
        ai_response=None,
        recommended_actions=None,
        risk_level=None,
        created_at=now,
    )


def build_notification(payload: NotificationCreate, now: datetime) -> Notification:
    return Notification(**payload.model_dump(), id=new_id(), created_at=now)
