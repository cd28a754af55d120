import json

from fastapi.testclient import TestClient

from casework.api.main import create_app
from casework.core.exceptions import StorageError
from casework.services.annotation import AnnotationService
from casework.storage import MemoryStorage


class UnavailableStorage(MemoryStorage):
    async def list_complaints(self):
        raise StorageError("mongodb://admin:hunter2@db refused connection")


class CrashingStorage(MemoryStorage):
    async def list_meetings(self):
        raise KeyError("scheduled_date")


class ReadOnlyStorage(MemoryStorage):
    """Accepts new records but fails every later write."""

    async def update_complaint(self, complaint_id, changes):
        raise StorageError("write refused")

    async def update_scenario(self, scenario_id, changes):
        raise StorageError("write refused")


def _app(settings, storage, llm):
    return create_app(settings, storage=storage, annotator=AnnotationService(llm, timeout_seconds=1.0))


def test_storage_failure_is_a_generic_500(settings, llm):
    with TestClient(_app(settings, UnavailableStorage(), llm)) as client:
        response = client.get("/api/complaints")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert "hunter2" not in response.text


def test_unexpected_exception_is_a_generic_500(settings, llm):
    app = _app(settings, CrashingStorage(), llm)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/meetings")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert "scheduled_date" not in response.text


def test_complaint_created_when_storing_analysis_fails(settings, llm):
    storage = ReadOnlyStorage()

    with TestClient(_app(settings, storage, llm)) as client:
        response = client.post("/api/complaints", json={"title": "t", "description": "d", "submitterId": "u1"})
        listed = client.get("/api/complaints").json()

    assert response.status_code == 201
    assert response.json()["aiAnalysis"] is None
    assert response.json()["category"] is None
    assert [complaint["id"] for complaint in listed] == [response.json()["id"]]
    assert len(llm.calls) == 1


def test_scenario_created_when_storing_assessment_fails(settings, stub_llm_factory, scenario_assessment):
    llm = stub_llm_factory(json.dumps(scenario_assessment))

    with TestClient(_app(settings, ReadOnlyStorage(), llm)) as client:
        response = client.post("/api/scenarios", json={"scenario": "A lead shouts at a colleague."})

    assert response.status_code == 201
    assert response.json()["aiResponse"] is None
    assert response.json()["riskLevel"] is None
