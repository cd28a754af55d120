"""Best-effort AI annotation of complaints and training scenarios.

Every call here is a single exchange with the language model. Whatever goes
wrong (no provider configured, network failure, timeout, output that is not
the JSON we asked for) is logged and reported as ``AnnotationSkipped``; the
caller keeps the record it already stored and carries on.
"""

from __future__ import annotations

import asyncio
import json
import logging
import textwrap
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Protocol, Type, TypeVar, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from casework.core.exceptions import StorageError
from casework.models import CamelModel, Complaint, Priority, Scenario
from casework.storage.base import Storage
from casework.utils.monitoring import observe_annotation

logger = logging.getLogger(__name__)

FALLBACK_HR_RESPONSE = (
    "I apologize, but I'm unable to process your request at this time. "
    "Please contact HR directly for assistance."
)

COMPLAINT_SYSTEM_PROMPT = textwrap.dedent(
    """
    You are an experienced HR case analyst. Classify the workplace complaint you are given
    and answer with a single JSON object with exactly these keys:
      "category": short label such as "harassment", "discrimination", "workload",
                  "compensation", "safety", "management" or "other";
      "priority": one of "low", "medium", "high";
      "summary": two or three neutral sentences summarising the issue;
      "recommendations": list of concrete next steps for the HR team;
      "sentiment": number from -1 (very negative) to 1 (very positive);
      "confidence": number from 0 to 1 describing how sure you are.
    """
).strip()

SCENARIO_SYSTEM_PROMPT = textwrap.dedent(
    """
    You are an HR training coach. Assess the workplace scenario you are given and answer
    with a single JSON object with exactly these keys:
      "response": guidance for handling the situation, written for an HR professional;
      "recommendedActions": list of concrete actions in the order they should happen;
      "riskLevel": one of "low", "medium", "high".
    """
).strip()

HR_ASSISTANT_SYSTEM_PROMPT = (
    "You are a helpful HR assistant. Answer employee and manager questions about workplace "
    "policies, conflict resolution and wellbeing clearly, professionally and with empathy. "
    "Recommend speaking to an HR representative when a question needs case-specific advice."
)

DataT = TypeVar("DataT", bound=BaseModel)


class ChatProvider(Protocol):
    async def chat(self, messages: List[Dict[str, str]], *, json_mode: bool = False) -> str:
        ...


@dataclass(frozen=True)
class AnnotationApplied(Generic[DataT]):
    data: DataT


@dataclass(frozen=True)
class AnnotationSkipped:
    reason: str


AnnotationResult = Union[AnnotationApplied[DataT], AnnotationSkipped]


def _normalize_level(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


class ComplaintAnalysis(BaseModel):
    category: str = Field(..., min_length=1)
    priority: Priority
    summary: str
    recommendations: List[str] = Field(default_factory=list)
    sentiment: float
    confidence: float

    _level = field_validator("priority", mode="before")(_normalize_level)

    @field_validator("sentiment")
    @classmethod
    def _clamp_sentiment(cls, value: float) -> float:
        return max(-1.0, min(1.0, value))

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return max(0.0, min(1.0, value))

    def as_changes(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "priority": self.priority.value,
            "ai_analysis": self.summary,
            "ai_recommendations": json.dumps(self.recommendations),
            "sentiment_score": self.sentiment,
            "confidence_score": self.confidence,
        }


class ScenarioAssessment(CamelModel):
    response: str = Field(..., min_length=1)
    recommended_actions: List[str] = Field(default_factory=list)
    risk_level: Priority

    _level = field_validator("risk_level", mode="before")(_normalize_level)

    def as_changes(self) -> Dict[str, Any]:
        return {
            "ai_response": self.response,
            "recommended_actions": json.dumps(self.recommended_actions),
            "risk_level": self.risk_level,
        }


def _strip_fences(raw: str) -> str:
    text = raw.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


class AnnotationService:
    """Wrap the LLM client with the prompts and parsing used for HR records."""

    def __init__(self, llm: ChatProvider, *, timeout_seconds: float = 20.0) -> None:
        self.llm = llm
        self.timeout_seconds = timeout_seconds

    async def analyze_complaint(self, title: str, description: str) -> AnnotationResult[ComplaintAnalysis]:
        messages = [
            {"role": "system", "content": COMPLAINT_SYSTEM_PROMPT},
            {"role": "user", "content": f"Title: {title}\n\nDescription:\n{description}"},
        ]
        return await self._structured(messages, ComplaintAnalysis, "complaint")

    async def generate_scenario_response(self, scenario: str) -> AnnotationResult[ScenarioAssessment]:
        messages = [
            {"role": "system", "content": SCENARIO_SYSTEM_PROMPT},
            {"role": "user", "content": scenario},
        ]
        return await self._structured(messages, ScenarioAssessment, "scenario")

    async def generate_hr_response(self, question: str) -> str:
        messages = [
            {"role": "system", "content": HR_ASSISTANT_SYSTEM_PROMPT},
            {"role": "user", "content": question},
        ]
        try:
            answer = await asyncio.wait_for(self.llm.chat(messages), timeout=self.timeout_seconds)
        except Exception as exc:
            logger.error("HR assistant response failed: %r", exc)
            return FALLBACK_HR_RESPONSE
        return answer.strip() or FALLBACK_HR_RESPONSE

    async def annotate_complaint(self, storage: Storage, complaint: Complaint) -> Complaint:
        """Analyze a stored complaint and merge the result; return the newest record."""

        result = await self.analyze_complaint(complaint.title, complaint.description)
        observe_annotation("complaint", isinstance(result, AnnotationApplied))
        if isinstance(result, AnnotationSkipped):
            logger.warning("AI analysis skipped for complaint %s: %s", complaint.id, result.reason)
            return complaint
        try:
            updated = await storage.update_complaint(complaint.id, result.data.as_changes())
        except StorageError:
            logger.exception("Storing AI analysis failed for complaint %s", complaint.id)
            return complaint
        return updated or complaint

    async def annotate_scenario(self, storage: Storage, scenario: Scenario) -> Scenario:
        result = await self.generate_scenario_response(scenario.scenario)
        observe_annotation("scenario", isinstance(result, AnnotationApplied))
        if isinstance(result, AnnotationSkipped):
            logger.warning("AI scenario analysis skipped for scenario %s: %s", scenario.id, result.reason)
            return scenario
        try:
            updated = await storage.update_scenario(scenario.id, result.data.as_changes())
        except StorageError:
            logger.exception("Storing AI assessment failed for scenario %s", scenario.id)
            return scenario
        return updated or scenario

    async def _structured(
        self, messages: List[Dict[str, str]], model: Type[DataT], label: str
    ) -> AnnotationResult[DataT]:
        try:
            raw: Optional[str] = await asyncio.wait_for(
                self.llm.chat(messages, json_mode=True),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error("AI %s analysis timed out after %.1fs", label, self.timeout_seconds)
            return AnnotationSkipped("timeout")
        except Exception as exc:
            logger.error("AI %s analysis failed: %r", label, exc)
            return AnnotationSkipped(f"provider error: {exc.__class__.__name__}")

        try:
            data = model.model_validate_json(_strip_fences(raw or ""))
        except ValidationError as exc:
            logger.error("AI %s analysis returned malformed output: %s", label, exc.errors(include_url=False))
            return AnnotationSkipped("malformed model output")
        return AnnotationApplied(data)


__all__ = [
    "AnnotationApplied",
    "AnnotationResult",
    "AnnotationService",
    "AnnotationSkipped",
    "ChatProvider",
    "ComplaintAnalysis",
    "FALLBACK_HR_RESPONSE",
    "ScenarioAssessment",
]
