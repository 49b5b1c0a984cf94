from __future__ import annotations

from fastapi.testclient import TestClient


def test_mailbox_endpoint_returns_messages(client: TestClient) -> None:
    resp = client.post("/players/p1/turn", json={"pebbles": 0})
    assert resp.status_code == 200

    resp2 = client.get("/players/p1/mailbox?count=50")
    assert resp2.status_code == 200
    data = resp2.json()

    assert data["stream"] == "mailbox:p1"
    assert data["messages"][-1]["fields"]["type"] == "counter_turn"
    assert data["messages"][-1]["fields"]["pebbles"] == "0"


def test_mailbox_endpoint_validates_count(client: TestClient) -> None:
    assert client.get("/players/p1/mailbox?count=0").status_code == 422
