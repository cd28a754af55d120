from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class NotificationCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    related_entity_id: Optional[str] = None
    related_entity_type: Optional[str] = None
    is_read: bool = False


class Notification(CamelModel):
    id: str
    user_id: str
    message: str
    related_entity_id: Optional[str] = None
    related_entity_type: Optional[str] = None
    is_read: bool = False
    created_at: datetime
