"""Complaint intake and case management endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from casework.api.dependencies import get_annotator, get_storage
from casework.core.exceptions import NotFoundError
from casework.models import Complaint, ComplaintCreate, ComplaintUpdate
from casework.services.annotation import AnnotationService
from casework.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/complaints", tags=["complaints"])


@router.get("", response_model=List[Complaint])
async def list_complaints(storage: Storage = Depends(get_storage)) -> List[Complaint]:
    return await storage.list_complaints()


@router.get("/{complaint_id}", response_model=Complaint)
async def get_complaint(complaint_id: str, storage: Storage = Depends(get_storage)) -> Complaint:
    complaint = await storage.get_complaint(complaint_id)
    if complaint is None:
        raise NotFoundError("Complaint not found")
    return complaint


@router.post("", response_model=Complaint, status_code=status.HTTP_201_CREATED)
async def create_complaint(
    payload: ComplaintCreate,
    storage: Storage = Depends(get_storage),
    annotator: AnnotationService = Depends(get_annotator),
) -> Complaint:
    """Store the complaint, then attach AI analysis if the model answers."""

    complaint = await storage.create_complaint(payload)
    logger.info("Complaint %s submitted by %s", complaint.id, complaint.submitter_id)
    return await annotator.annotate_complaint(storage, complaint)


@router.patch("/{complaint_id}", response_model=Complaint)
async def update_complaint(
    complaint_id: str,
    payload: ComplaintUpdate,
    storage: Storage = Depends(get_storage),
) -> Complaint:
    complaint = await storage.update_complaint(complaint_id, payload.model_dump(exclude_unset=True))
    if complaint is None:
        raise NotFoundError("Complaint not found")
    return complaint
