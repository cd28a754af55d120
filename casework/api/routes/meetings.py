"""Meeting scheduling endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from casework.api.dependencies import get_storage
from casework.core.exceptions import NotFoundError
from casework.models import Meeting, MeetingCreate, MeetingUpdate
from casework.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meetings", tags=["meetings"])


@router.get("", response_model=List[Meeting])
async def list_meetings(storage: Storage = Depends(get_storage)) -> List[Meeting]:
    return await storage.list_meetings()


@router.get("/{meeting_id}", response_model=Meeting)
async def get_meeting(meeting_id: str, storage: Storage = Depends(get_storage)) -> Meeting:
    meeting = await storage.get_meeting(meeting_id)
    if meeting is None:
        raise NotFoundError("Meeting not found")
    return meeting


@router.post("", response_model=Meeting, status_code=status.HTTP_201_CREATED)
async def create_meeting(payload: MeetingCreate, storage: Storage = Depends(get_storage)) -> Meeting:
    meeting = await storage.create_meeting(payload)
    logger.info("Meeting %s scheduled for %s", meeting.id, meeting.scheduled_date.isoformat())
    return meeting


@router.patch("/{meeting_id}", response_model=Meeting)
async def update_meeting(
    meeting_id: str,
    payload: MeetingUpdate,
    storage: Storage = Depends(get_storage),
) -> Meeting:
    meeting = await storage.update_meeting(meeting_id, payload.model_dump(exclude_unset=True))
    if meeting is None:
        raise NotFoundError("Meeting not found")
    return meeting
