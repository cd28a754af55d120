"""In-app notification endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from casework.api.dependencies import get_storage
from casework.core.exceptions import NotFoundError
from casework.models import Notification, NotificationCreate
from casework.storage.base import Storage

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/{user_id}", response_model=List[Notification])
async def list_notifications(user_id: str, storage: Storage = Depends(get_storage)) -> List[Notification]:
    return await storage.list_notifications(user_id)


@router.post("", response_model=Notification, status_code=status.HTTP_201_CREATED)
async def create_notification(
    payload: NotificationCreate,
    storage: Storage = Depends(get_storage),
) -> Notification:
    return await storage.create_notification(payload)


@router.patch("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(notification_id: str, storage: Storage = Depends(get_storage)) -> None:
    if not await storage.mark_notification_read(notification_id):
        raise NotFoundError("Notification not found")
