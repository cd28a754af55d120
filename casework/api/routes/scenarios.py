"""Training scenario endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from casework.api.dependencies import get_annotator, get_storage
from casework.core.exceptions import NotFoundError
from casework.models import Scenario, ScenarioCreate, ScenarioUpdate
from casework.services.annotation import AnnotationService
from casework.storage.base import Storage

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


@router.get("", response_model=List[Scenario])
async def list_scenarios(storage: Storage = Depends(get_storage)) -> List[Scenario]:
    return await storage.list_scenarios()


@router.get("/{scenario_id}", response_model=Scenario)
async def get_scenario(scenario_id: str, storage: Storage = Depends(get_storage)) -> Scenario:
    scenario = await storage.get_scenario(scenario_id)
    if scenario is None:
        raise NotFoundError("Scenario not found")
    return scenario


@router.post("", response_model=Scenario, status_code=status.HTTP_201_CREATED)
async def create_scenario(
    payload: ScenarioCreate,
    storage: Storage = Depends(get_storage),
    annotator: AnnotationService = Depends(get_annotator),
) -> Scenario:
    scenario = await storage.create_scenario(payload)
    return await annotator.annotate_scenario(storage, scenario)


@router.patch("/{scenario_id}", response_model=Scenario)
async def update_scenario(
    scenario_id: str,
    payload: ScenarioUpdate,
    storage: Storage = Depends(get_storage),
) -> Scenario:
    scenario = await storage.update_scenario(scenario_id, payload.model_dump(exclude_unset=True))
    if scenario is None:
        raise NotFoundError("Scenario not found")
    return scenario
