from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel, Priority, reject_null


class ComplaintStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class ComplaintCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    submitter_id: str = Field(..., min_length=1)
    status: ComplaintStatus = ComplaintStatus.OPEN
    priority: Priority = Priority.MEDIUM
    category: Optional[str] = None
    assigned_to: Optional[str] = None
    is_anonymous: bool = False


class ComplaintUpdate(CamelModel):
    """Partial update; only fields present in the payload are applied."""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[ComplaintStatus] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    assigned_to: Optional[str] = None
    ai_analysis: Optional[str] = None
    ai_recommendations: Optional[str] = None
    sentiment_score: Optional[float] = None
    confidence_score: Optional[float] = None
    is_anonymous: Optional[bool] = None

    _not_null = field_validator("title", "description", "status", "priority", "is_anonymous", mode="before")(
        reject_null
    )


class Complaint(CamelModel):
    id: str
    title: str
    description: str
    submitter_id: str
    status: ComplaintStatus
    priority: Priority
    category: Optional[str] = None
    assigned_to: Optional[str] = None
    ai_analysis: Optional[str] = None
    ai_recommendations: Optional[str] = None  # JSON-encoded list of strings
    sentiment_score: Optional[float] = None
    confidence_score: Optional[float] = None
    is_anonymous: bool = False
    created_at: datetime
    updated_at: datetime
