import pytest
from fastapi.testclient import TestClient

import api.app as api_app

TURRETS = [[0, 0], [4, 4], [1, 3]]


@pytest.fixture
def client():
    api_app.runner = None
    return TestClient(api_app.app)


def start(client, **overrides):
    payload = {"turrets": TURRETS, "seed": 1, "randomize_tokens": False}
    payload.update(overrides)
    response = client.post("/start", json=payload)
    assert response.status_code == 200
    return response.json()


def test_requires_an_active_game(client):
    assert client.get("/status").json() == {"active": False}
    assert client.get("/state").status_code == 400
    assert client.post("/round").status_code == 400


def test_bad_setup_is_a_400(client):
    response = client.post("/start", json={"turrets": [[2, 2], [0, 0], [1, 1]]})
    assert response.status_code == 400
    assert "turret_cannot_be_at_center" in response.json()["detail"]


def test_human_red_then_human_blue(client):
    body = start(client)
    assert body["state"]["current_round_token"] == "110"
    assert "turrets" not in body["state"]

    response = client.post("/kill_batch", json={
        "actions": [
            {"turret_index": 0, "target": [0, 2], "mode": 0},
            {"turret_index": 1, "target": [3, 4], "mode": 1},
        ],
        "strategy_token": "110",
    })
    data = response.json()
    assert data["ok"] is True
    assert [a["killed"] for a in data["actions"]] == [True, True]
    assert data["state"]["kill_phase_closed"] is True

    data = client.post("/monitor", json={"locks": TURRETS}).json()
    assert data["ok"] is True
    assert data["winner"] == "blue"
    assert client.get("/status").json()["done"] is True


def test_rule_failures_are_ok_false(client):
    start(client)
    data = client.post("/kill", json={"turret_index": 0, "target": [0, 1], "mode": 0, "strategy_token": "111"}).json()
    assert data["ok"] is False
    assert data["reason"] == "strategy_token_not_available"

    data = client.post("/monitor", json={"locks": TURRETS}).json()
    assert data["reason"] == "must_kill_before_monitor"


def test_consume_token_and_ai_blue(client):
    start(client)
    assert client.post("/consume_token", json={"token": "110"}).json()["ok"] is True

    data = client.post("/ai/blue").json()
    assert len(data["locks"]) == 3
    assert data["result"]["ok"] is True
    assert data["state"]["round"] == 2


def test_ai_red_then_round(client):
    start(client)
    data = client.post("/ai/red").json()
    assert data["decision"]["strategy_token"] == "110"
    assert all(r["ok"] for r in data["results"])

    frame = client.post("/round").json()
    assert frame["red_decision"] is None
    assert frame["monitor"]["ok"] is True


def test_ai_vs_ai_to_the_end(client):
    start(client, turrets=None)
    for _ in range(5):
        frame = client.post("/round").json()
        if frame["done"]:
            break
    assert frame["done"] is True
    assert client.post("/round").status_code == 400

    log = client.get("/log")
    assert log.status_code == 200
    assert "=== Hidden Stations game log ===" in log.text
    assert len(client.get("/turrets").json()["turrets"]) == 3


def test_token_mode_off_and_custom_agents(client):
    start(client, strategy_tokens=None, agents=[
        {"type": "red_simple", "team": "red", "init_params": {"seed": 3}},
        {"type": "blue_simple", "team": "blue"},
    ])
    assert client.get("/state").json()["strategy_tokens_remaining"] is None
    data = client.post("/kill", json={"turret_index": 0, "target": [0, 1], "mode": "cross"}).json()
    assert data["ok"] is True and data["killed"] is True
    frame = client.post("/round").json()
    assert frame["locks"] and frame["monitor"]["ok"] is True
