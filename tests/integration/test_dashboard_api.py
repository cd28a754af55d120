from datetime import datetime, timedelta, timezone


def test_health_reports_environment(client, settings):
    response = client.get("/api/admin/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "storage": settings.STORAGE_BACKEND,
    }


def test_admin_stats_reflect_stored_records(client, user_payload):
    client.post("/api/users", json=user_payload())
    open_one = client.post("/api/complaints", json={"title": "a", "description": "d", "submitterId": "u1"}).json()
    resolved = client.post("/api/complaints", json={"title": "b", "description": "d", "submitterId": "u1"}).json()
    client.patch(f"/api/complaints/{resolved['id']}", json={"status": "resolved"})
    client.post(
        "/api/meetings",
        json={
            "title": "Follow-up",
            "organizerId": "hr1",
            "scheduledDate": (datetime.now(timezone.utc) + timedelta(days=2)).isoformat(),
            "relatedComplaintId": open_one["id"],
        },
    )

    stats = client.get("/api/admin/stats").json()

    assert stats == {
        "totalUsers": 1,
        "totalComplaints": 2,
        "activeComplaints": 1,
        "totalMeetings": 1,
        "pendingReviews": 1,
        "resolvedComplaints": 1,
        "inProgressComplaints": 0,
        "openComplaints": 1,
    }

    analytics = client.get("/api/analytics/stats").json()
    assert analytics == {
        "activeIssues": 1,
        "resolvedThisMonth": 1,
        "upcomingMeetings": 1,
        "aiRecommendations": 2,
    }


def test_stats_on_empty_store(client):
    assert client.get("/api/analytics/stats").json() == {
        "activeIssues": 0,
        "resolvedThisMonth": 0,
        "upcomingMeetings": 0,
        "aiRecommendations": 0,
    }
    assert client.get("/api/admin/stats").json()["totalComplaints"] == 0


def test_activity_feed_is_static(client):
    first = client.get("/api/admin/activity").json()

    client.post("/api/complaints", json={"title": "a", "description": "d", "submitterId": "u1"})

    assert client.get("/api/admin/activity").json() == first
    assert [item["title"] for item in first] == [
        "New complaint submitted",
        "Meeting scheduled",
        "User registered",
    ]


def test_metrics_endpoint_exposes_request_counters(client):
    client.get("/api/complaints")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "casework_http_requests_total" in response.text
    assert "casework_ai_annotations_total" in response.text


def test_unknown_route_returns_404(client):
    assert client.get("/api/unknown").status_code == 404


def test_request_id_is_echoed_or_generated(client):
    echoed = client.get("/api/complaints", headers={"X-Request-ID": "trace-123"})
    generated = client.get("/api/complaints")

    assert echoed.headers["X-Request-ID"] == "trace-123"
    assert len(generated.headers["X-Request-ID"]) == 32
