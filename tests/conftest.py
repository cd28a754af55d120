import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from casework.api.main import create_app
from casework.core.config import Settings
from casework.services.annotation import AnnotationService
from casework.storage import MemoryStorage

COMPLAINT_ANALYSIS = {
    "category": "harassment",
    "priority": "high",
    "summary": "Employee reports repeated inappropriate comments from a supervisor.",
    "recommendations": ["Open a formal investigation", "Offer counseling support"],
    "sentiment": -0.8,
    "confidence": 0.9,
}

SCENARIO_ASSESSMENT = {
    "response": "Address the behaviour privately and document the incident.",
    "recommendedActions": ["Meet with the team lead", "Record the incident"],
    "riskLevel": "medium",
}


class StubLLM:
    """Scripted chat provider; replies are consumed in order, the last one repeats."""

    def __init__(self, *replies, error=None, delay=0.0):
        self.replies = list(replies)
        self.error = error
        self.delay = delay
        self.calls = []

    async def chat(self, messages, *, json_mode=False):
        self.calls.append({"messages": messages, "json_mode": json_mode})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0] if self.replies else ""


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def llm():
    return StubLLM(json.dumps(COMPLAINT_ANALYSIS))


@pytest.fixture
def settings():
    return Settings(SEED_DEFAULT_USERS=False)


@pytest.fixture
def client(settings, storage, llm):
    app = create_app(settings, storage=storage, annotator=AnnotationService(llm, timeout_seconds=1.0))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def stub_llm_factory():
    return StubLLM


@pytest.fixture
def complaint_analysis():
    return dict(COMPLAINT_ANALYSIS)


@pytest.fixture
def scenario_assessment():
    return dict(SCENARIO_ASSESSMENT)


@pytest.fixture
def user_payload():
    def _build(**overrides):
        payload = {
            "username": "jordan.lee",
            "password": "s3cret-pass",
            "email": "jordan.lee@company.com",
            "phone": "+15550001111",
            "name": "Jordan Lee",
            "department": "Finance",
        }
        payload.update(overrides)
        return payload

    return _build
