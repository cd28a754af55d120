"""User record endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from casework.api.dependencies import get_storage
from casework.core.exceptions import NotFoundError
from casework.models import Complaint, Meeting, UserCreate, UserPublic
from casework.storage.base import Storage

router = APIRouter(prefix="/users", tags=["users"])


async def _require_user(storage: Storage, user_id: str) -> UserPublic:
    user = await storage.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user.public()


@router.get("", response_model=List[UserPublic])
async def list_users(storage: Storage = Depends(get_storage)) -> List[UserPublic]:
    return [user.public() for user in await storage.list_users()]


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(user_id: str, storage: Storage = Depends(get_storage)) -> UserPublic:
    return await _require_user(storage, user_id)


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, storage: Storage = Depends(get_storage)) -> UserPublic:
    user = await storage.create_user(payload)
    return user.public()


@router.get("/{user_id}/complaints", response_model=List[Complaint])
async def list_user_complaints(user_id: str, storage: Storage = Depends(get_storage)) -> List[Complaint]:
    """Complaints submitted by the user, newest first."""

    await _require_user(storage, user_id)
    return await storage.list_complaints_by_submitter(user_id)


@router.get("/{user_id}/meetings", response_model=List[Meeting])
async def list_user_meetings(user_id: str, storage: Storage = Depends(get_storage)) -> List[Meeting]:
    """Meetings the user organizes or attends, soonest first."""

    await _require_user(storage, user_id)
    return await storage.list_meetings_for_user(user_id)
