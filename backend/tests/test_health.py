def test_health_endpoints(client):
    health = client.get("/api/health")
    assert health.status_code == 200
    assert health.json() == {"status": "ok"}

    live = client.get("/api/health/live")
    assert live.status_code == 200
    payload = live.json()
    assert payload["status"] == "ok"
    assert payload["workspace"]["courses"] == 3
    assert payload["workspace"]["rooms"] == 6
    # Startup generates the first version.
    assert payload["workspace"]["versions"] == 1


def test_responses_carry_timing_header(client):
    response = client.get("/api/health")

    assert "X-Process-Time-Ms" in response.headers


def test_oversized_request_is_rejected(client):
    response = client.post(
        "/api/rooms/",
        content=b"x" * 1_000_001,
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 413
