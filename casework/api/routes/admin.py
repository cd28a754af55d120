"""Administrative dashboard endpoints for HR managers."""

from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, Depends, Request

from casework.api.dependencies import get_storage
from casework.services import reporting
from casework.services.reporting import ActivityItem, AdminStats
from casework.storage.base import Storage

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/health")
async def healthcheck(request: Request) -> Dict[str, str]:
    """Liveness probe."""

    settings = request.app.state.settings
    return {"status": "ok", "environment": settings.ENVIRONMENT, "storage": settings.STORAGE_BACKEND}


@router.get("/stats", response_model=AdminStats)
async def stats(storage: Storage = Depends(get_storage)) -> AdminStats:
    return await reporting.admin_stats(storage)


@router.get("/activity", response_model=List[ActivityItem])
async def activity() -> List[ActivityItem]:
    return reporting.admin_activity()
