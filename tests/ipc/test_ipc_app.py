"""HTTP contract of the IPC listener app."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from swarmthing.ipc.app import create_app
from swarmthing.ipc.messages import ToolRequestMessage, ToolShareMessage, encode
from swarmthing.tools.safety import SafetyLevel


@pytest.fixture
def client(manager):
    return TestClient(create_app(manager.gateway))


def test_text_message_is_acknowledged_and_logged(client, manager):
    response = client.post("/message", json={"content": "Hello from test"})

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "received": "Hello from test"}
    (entry,) = manager.gateway.messages.snapshot()
    assert entry.content == "Hello from test"
    assert entry.sender == "testclient:50000"


def test_tool_share_is_queued_with_sender(client, manager):
    payload = encode(
        ToolShareMessage(
            name="square",
            code="def square(x):\n    return int(x) ** 2\n",
            description="Squares a number",
            safety_level=SafetyLevel.SAFE,
        )
    )

    response = client.post("/message", json={"content": payload})

    assert response.status_code == 200
    assert "queued for approval" in response.json()["received"]
    (pending,) = manager.list_pending()
    assert pending.name == "square"
    assert pending.description == "Squares a number"
    assert pending.source_agent == "testclient:50000"
    assert len(manager.gateway.messages) == 0


def test_tool_request_is_acknowledged_only(client, manager):
    payload = encode(ToolRequestMessage(name="square"))

    response = client.post("/message", json={"content": payload})

    assert response.status_code == 200
    assert "square" in response.json()["received"]
    assert manager.list_pending() == []


def test_invalid_body_is_rejected(client):
    assert client.post("/message", json={"text": "wrong field"}).status_code == 422
    assert client.post("/message", json={"content": 42}).status_code == 422


def test_health_reports_counts(client, manager):
    client.post("/message", json={"content": "one"})
    client.post(
        "/message",
        json={
            "content": encode(
                ToolShareMessage(name="t", code="def t():\n    return 1\n", safety_level=SafetyLevel.SAFE)
            )
        },
    )

    data = client.get("/health").json()

    assert data == {
        "status": "ok",
        "service": "swarmthing-ipc",
        "pending_tools": 1,
        "messages": 1,
    }
