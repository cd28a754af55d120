"""Analytics counters for the HR dashboard."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from casework.api.dependencies import get_storage
from casework.services import reporting
from casework.services.reporting import AnalyticsStats
from casework.storage.base import Storage

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/stats", response_model=AnalyticsStats)
async def stats(storage: Storage = Depends(get_storage)) -> AnalyticsStats:
    return await reporting.analytics_stats(storage)
