from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel, Priority, reject_null


class ScenarioCreate(CamelModel):
    scenario: str = Field(..., min_length=1)


class ScenarioUpdate(CamelModel):
    scenario: Optional[str] = Field(None, min_length=1)
    ai_response: Optional[str] = None
    recommended_actions: Optional[str] = None
    risk_level: Optional[Priority] = None

    _not_null = field_validator("scenario", mode="before")(reject_null)


class Scenario(CamelModel):
    id: str
    scenario: str
    ai_response: Optional[str] = None
    recommended_actions: Optional[str] = None  # JSON-encoded list of strings
    risk_level: Optional[Priority] = None
    created_at: datetime
