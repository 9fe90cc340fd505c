import uuid


def _basic_payload(client, target=1000):
    template = client.get("/api/templates/basic_load_balancer").get_json()
    return {
        "graph": template["initialState"],
        "entryPointId": template["entryPointId"],
        "targetThroughput": target,
    }


def test_validate_route(client, reference_graph):
    response = client.post("/api/validate", json={"graph": reference_graph, "entryPointId": "lb1"})
    payload = response.get_json()

    assert response.status_code == 200
    assert payload["isValid"] is True
    assert payload["errors"] == []
    assert "Consider adding a cache layer for improved performance" in payload["warnings"]


def test_validate_route_rejects_malformed_graph(client):
    response = client.post("/api/validate", json={"graph": {"nodes": [{"id": "x", "type": "toaster"}]}})
    assert response.status_code == 400
    assert "toaster" in response.get_json()["error"]


def test_simulate_route(client, reference_graph):
    response = client.post(
        "/api/simulate",
        json={"graph": reference_graph, "entryPointId": "lb1", "targetThroughput": 1000},
    )
    payload = response.get_json()

    assert response.status_code == 200
    assert payload["metrics"]["totalThroughput"] == 1000
    assert payload["metrics"]["systemHealth"] == 100
    assert payload["metrics"]["bottleneckNodes"] == []
    assert payload["validation"]["isValid"] is True
    assert len(payload["state"]["nodes"]) == 5
    assert payload["cost"]["monthly"] > 0
    assert payload["recommendations"]


def test_simulate_route_rejects_negative_target(client, reference_graph):
    response = client.post("/api/simulate", json={"graph": reference_graph, "targetThroughput": -5})
    assert response.status_code == 400


def test_simulate_route_empty_graph(client):
    response = client.post("/api/simulate", json={"graph": {"nodes": [], "edges": []}})
    payload = response.get_json()

    assert response.status_code == 200
    assert payload["metrics"]["totalThroughput"] == 0
    assert payload["validation"]["errors"][0] == "No entry point defined"


def test_presets_route(client):
    presets = client.get("/api/presets").get_json()["presets"]
    assert {"Load Balancer", "Database Server"} <= {preset["name"] for preset in presets}


def test_templates_routes(client):
    templates = client.get("/api/templates").get_json()["templates"]
    assert [template["id"] for template in templates] == ["basic_load_balancer", "cached_web_app", "microservices"]
    assert client.get("/api/templates/unknown").status_code == 404


def test_levels_routes(client):
    levels = client.get("/api/levels").get_json()["levels"]
    assert len(levels) == 5

    response = client.post("/api/levels/1/evaluate", json=_basic_payload(client, 5000))
    assert response.status_code == 200
    assert response.get_json()["complete"] is True

    assert client.post("/api/levels/99/evaluate", json={}).status_code == 404


def test_progress_is_recorded_once(client):
    player = f"player-{uuid.uuid4()}"
    payload = _basic_payload(client, 5000)

    first = client.post(f"/api/progress/{player}/levels/1", json=payload).get_json()
    assert first["progress"]["totalPoints"] == 150
    assert first["progress"]["completedLevels"] == [1]
    assert first["progress"]["currentLevel"] == 2
    assert first["progress"]["unlockedAchievements"] == ["l1-efficient"]

    second = client.post(f"/api/progress/{player}/levels/1", json=payload).get_json()
    assert second["progress"]["totalPoints"] == 150

    stored = client.get(f"/api/progress/{player}").get_json()
    assert stored["totalPoints"] == 150


def test_progress_reset(client):
    player = f"player-{uuid.uuid4()}"
    assert client.delete(f"/api/progress/{player}").status_code == 404

    client.post(f"/api/progress/{player}/levels/1", json=_basic_payload(client))
    assert client.delete(f"/api/progress/{player}").status_code == 200

    fresh = client.get(f"/api/progress/{player}").get_json()
    assert fresh["totalPoints"] == 0
    assert fresh["currentLevel"] == 1


def test_failed_level_awards_no_points(client):
    player = f"player-{uuid.uuid4()}"
    response = client.post(f"/api/progress/{player}/levels/2", json=_basic_payload(client))
    progress = response.get_json()["progress"]

    assert progress["totalPoints"] == 0
    assert progress["completedLevels"] == []
    assert progress["currentLevel"] == 1
