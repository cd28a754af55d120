import json
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from casework.api.main import create_app
from casework.services.annotation import AnnotationService

COMPLAINT = {"title": "Harassment", "description": "My supervisor keeps making comments.", "submitterId": "u1"}


def _parse(stamp):
    return datetime.fromisoformat(stamp.replace("Z", "+00:00"))


def test_create_complaint_applies_defaults_and_ai_analysis(client, llm):
    response = client.post("/api/complaints", json=COMPLAINT)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "open"
    assert body["submitterId"] == "u1"
    assert body["category"] == "harassment"
    assert body["priority"] == "high"
    assert body["aiAnalysis"].startswith("Employee reports")
    assert json.loads(body["aiRecommendations"]) == ["Open a formal investigation", "Offer counseling support"]
    assert body["sentimentScore"] == -0.8
    assert len(llm.calls) == 1

    stored = client.get(f"/api/complaints/{body['id']}").json()
    assert stored == body


@pytest.mark.parametrize(
    "failure",
    [
        {"error": ConnectionError("model unreachable")},
        {"reply": "not json at all"},
    ],
)
def test_create_complaint_survives_ai_failure(settings, storage, stub_llm_factory, failure):
    llm = stub_llm_factory(failure.get("reply", ""), error=failure.get("error"))
    app = create_app(settings, storage=storage, annotator=AnnotationService(llm, timeout_seconds=1.0))

    with TestClient(app) as client:
        response = client.post("/api/complaints", json=COMPLAINT)
        fetched = client.get(f"/api/complaints/{response.json()['id']}")

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "open"
    assert body["priority"] == "medium"
    assert body["category"] is None
    assert body["aiAnalysis"] is None
    assert body["aiRecommendations"] is None
    assert fetched.json()["aiAnalysis"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"title": "Missing fields"},
        {**COMPLAINT, "status": "escalated"},
        {**COMPLAINT, "title": ""},
    ],
)
def test_create_complaint_rejects_invalid_payload(client, llm, payload):
    response = client.post("/api/complaints", json=payload)

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid complaint data"}
    assert client.get("/api/complaints").json() == []
    assert llm.calls == []


def test_get_unknown_complaint_is_404(client):
    response = client.get("/api/complaints/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"message": "Complaint not found"}


def test_list_complaints_newest_first(client):
    assert client.get("/api/complaints").json() == []

    ids = [client.post("/api/complaints", json={**COMPLAINT, "title": f"c{i}"}).json()["id"] for i in range(3)]

    listed = client.get("/api/complaints").json()
    assert [item["id"] for item in listed] == list(reversed(ids))


def test_patch_complaint_merges_and_bumps_updated_at(client):
    created = client.post("/api/complaints", json=COMPLAINT).json()

    response = client.patch(f"/api/complaints/{created['id']}", json={"status": "in_progress", "assignedTo": "hr1"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "in_progress"
    assert body["assignedTo"] == "hr1"
    assert body["title"] == created["title"]
    assert body["category"] == created["category"]
    assert body["createdAt"] == created["createdAt"]
    assert _parse(body["updatedAt"]) > _parse(created["updatedAt"])


def test_patch_cannot_overwrite_identity(client):
    created = client.post("/api/complaints", json=COMPLAINT).json()

    body = client.patch(f"/api/complaints/{created['id']}", json={"id": "forged", "title": "Renamed"}).json()

    assert body["id"] == created["id"]
    assert body["title"] == "Renamed"


def test_patch_unknown_complaint_is_404(client):
    response = client.patch("/api/complaints/missing", json={"status": "resolved"})

    assert response.status_code == 404
    assert response.json() == {"message": "Complaint not found"}


def test_patch_rejects_null_status(client):
    created = client.post("/api/complaints", json=COMPLAINT).json()

    response = client.patch(f"/api/complaints/{created['id']}", json={"status": None})

    assert response.status_code == 400
