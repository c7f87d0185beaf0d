from scorecard.config import reset_settings_cache

BEST_ON_HOLE = {
    "scoreUserFilter": "eachUser",
    "roundUserFilter": "everyone",
    "accumulationMode": "best",
    "scope": "hole",
}


def _hidden() -> dict:
    return {"value": "", "visible": False}


def test_corner_value_endpoint(api_client):
    client, _, _ = api_client

    response = client.post(
        "/api/corners/value",
        json={"venueId": "v1", "playerId": "a", "holeNumber": 1, "config": BEST_ON_HOLE},
    )

    assert response.status_code == 200
    assert response.json() == {"value": 3, "visible": True}


def test_corner_value_excludes_current_round(api_client):
    client, _, _ = api_client

    response = client.post(
        "/api/corners/value",
        json={
            "venueId": "v1",
            "playerId": "a",
            "holeNumber": 1,
            "excludeFrom": "2024-01-02T00:00:00Z",
            "config": BEST_ON_HOLE,
        },
    )

    assert response.json() == {"value": 4, "visible": True}


def test_corner_value_rejects_bad_payload(api_client):
    client, _, _ = api_client

    missing_hole = client.post(
        "/api/corners/value", json={"venueId": "v1", "playerId": "a"}
    )
    bad_config = client.post(
        "/api/corners/value",
        json={
            "venueId": "v1",
            "playerId": "a",
            "holeNumber": 1,
            "config": {**BEST_ON_HOLE, "roundSelection": "bestRounds9"},
        },
    )

    assert missing_hole.status_code == 422
    assert bad_config.status_code == 422


def test_cell_without_any_config_is_hidden(api_client):
    client, _, _ = api_client

    response = client.post(
        "/api/corners/cell", json={"venueId": "v1", "playerId": "a", "holeNumber": 1}
    )

    assert response.status_code == 200
    assert response.json() == {
        "topLeft": _hidden(),
        "topRight": _hidden(),
        "bottomLeft": _hidden(),
        "bottomRight": _hidden(),
    }


def test_stored_config_drives_cell_and_totals(api_client):
    client, _, _ = api_client

    assert client.get("/api/corners/config").json() is None
    saved = client.put("/api/corners/config", json={"topLeft": BEST_ON_HOLE})
    assert saved.status_code == 200
    assert client.get("/api/corners/config").json()["topLeft"]["scope"] == "hole"

    cell = client.post(
        "/api/corners/cell", json={"venueId": "v1", "playerId": "a", "holeNumber": 2}
    ).json()
    assert cell["topLeft"] == {"value": 4, "visible": True}
    assert cell["topRight"] == _hidden()

    totals = client.post(
        "/api/corners/totals",
        json={
            "venueId": "v1",
            "playerId": "a",
            "scores": [
                {"holeNumber": 1, "value": 4, "complete": True},
                {"holeNumber": 2, "value": 5, "complete": True},
            ],
        },
    ).json()
    assert totals["topLeft"] == {"value": 7, "visible": True}


def test_presets_endpoint(api_client):
    client, _, _ = api_client

    presets = client.get("/api/corners/presets").json()

    assert len(presets) == 10
    assert presets[0]["name"] == "Personal Best on Hole"
    assert presets[0]["config"]["roundUserFilter"] == "todaysPlayers"


def test_column_visibility_endpoints(api_client):
    client, _, _ = api_client

    defaults = client.get("/api/corners/columns").json()
    assert defaults["distance"] is True
    assert defaults["par"] is False
    assert defaults["gStats"] is True

    updated = client.put("/api/corners/columns", json={"par": True, "gStats": False})
    assert updated.status_code == 200
    stored = client.get("/api/corners/columns").json()
    assert stored["par"] is True
    assert stored["gStats"] is False


def test_hole_statistics_endpoints(api_client):
    client, _, _ = api_client

    holes = client.get("/api/holes/v1/statistics", params={"holes": [1, 2]})
    assert holes.status_code == 200
    body = holes.json()
    assert set(body) == {"1", "2"}
    assert body["1"]["best"] == 3
    assert body["1"]["worst"] == 5

    totals = client.get("/api/holes/v1/totals").json()
    assert totals["best"] == 9
    assert totals["worst"] == 11


def test_hole_statistics_unknown_venue_is_empty(api_client):
    client, _, _ = api_client

    response = client.get("/api/holes/elsewhere/totals")

    assert response.status_code == 200
    assert response.json()["best"] is None


def test_api_key_required_when_enabled(api_client, settings_env):
    client, _, _ = api_client
    settings_env.setenv("REQUIRE_API_KEY", "1")
    settings_env.setenv("API_KEY", "secret, other")
    reset_settings_cache()

    denied = client.get("/api/corners/presets")
    by_header = client.get("/api/corners/presets", headers={"x-api-key": "secret"})
    by_query = client.get("/api/corners/presets", params={"apiKey": "other"})

    assert denied.status_code == 401
    assert by_header.status_code == 200
    assert by_query.status_code == 200


def test_health_and_metrics(api_client):
    client, _, _ = api_client

    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "ok"

    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert "scorecard_http_requests_total" in metrics.text
    assert 'route="/health"' in metrics.text
