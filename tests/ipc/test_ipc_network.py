"""Agents talking to each other over real sockets."""

from __future__ import annotations

import time

import pytest

from swarmthing.errors import ToolStoreError
from swarmthing.tools.safety import SafetyLevel
from swarmthing.tools.tool_manager import ToolManager

SQUARE = "def square(x):\n    return int(x) * int(x)\n"


@pytest.fixture
def peer(tmp_path):
    m = ToolManager(tmp_path / "peer_tools", secrets_file=None, network_timeout=5.0)
    yield m
    m.shutdown()


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.05)
    return False


def test_start_server_and_send_message(manager: ToolManager, peer: ToolManager, free_port: int):
    result = peer.execute_tool("start_server", [str(free_port)])
    assert result == f"IPC server starting on port {free_port}"
    assert peer.listeners[-1].wait_ready()

    manager.create_tool(
        "test_send",
        "def test_send(dummy):\n"
        f"    return send_message('http://127.0.0.1:{free_port}/message', 'Hello from test')\n",
    )
    reply = manager.execute_tool("test_send", ["dummy"])

    assert reply.startswith("Response: ")
    assert '"status":"ok"' in reply
    assert [m.content for m in peer.gateway.messages.snapshot()] == ["Hello from test"]


def test_share_tool_then_approve(manager: ToolManager, peer: ToolManager, free_port: int):
    listener = peer.start_listener(free_port)
    assert listener.wait_ready()
    manager.create_tool("square", SQUARE)

    reply = manager.gateway.share(f"http://127.0.0.1:{free_port}/message", "square")

    assert reply.startswith("Response: ")
    (pending,) = peer.list_pending()
    assert pending.name == "square"
    assert pending.safety_level is SafetyLevel.SAFE
    assert pending.source_agent.startswith("127.0.0.1:")

    peer.approve_tool("square")
    assert peer.execute_tool("square", ["5"]) == 25


def test_share_tool_from_a_script(manager: ToolManager, peer: ToolManager, free_port: int):
    assert peer.start_listener(free_port).wait_ready()
    manager.create_tool("square", SQUARE)
    manager.create_tool(
        "share_square",
        "def share_square():\n"
        f"    return share_tool('http://127.0.0.1:{free_port}/message', 'square')\n",
    )

    assert manager.execute_tool("share_square").startswith("Response: ")
    assert [t.name for t in peer.list_pending()] == ["square"]


def test_share_unknown_tool(manager: ToolManager):
    assert manager.gateway.share("http://127.0.0.1:9/message", "ghost") == (
        "Error: Tool 'ghost' not found"
    )


def test_send_to_closed_port_is_an_error_string(manager: ToolManager, free_port: int):
    reply = manager.gateway.send(f"http://127.0.0.1:{free_port}/message", "anyone?")
    assert reply.startswith("Error sending message")


def test_start_server_defaults_bad_port(manager: ToolManager, monkeypatch):
    started: list[int] = []
    monkeypatch.setattr(manager, "start_listener", started.append)

    assert manager.execute_tool("start_server", ["not-a-port"]) == (
        "IPC server starting on port 8080"
    )
    assert started == [8080]


def test_second_listener_on_same_port_fails_quietly(
    manager: ToolManager, free_port: int
):
    first = manager.start_listener(free_port)
    assert first.wait_ready()

    second = manager.start_listener(free_port)

    # the duplicate bind dies in its own thread; the first keeps serving
    assert _wait_for(lambda: not second.thread.is_alive())
    assert not second.server.ready.is_set()
    assert manager.gateway.send(f"http://127.0.0.1:{free_port}/message", "still up").startswith(
        "Response: "
    )


def test_share_unreadable_tool_is_an_error_string(manager: ToolManager, monkeypatch):
    manager.create_tool("square", SQUARE)

    def broken_read(name: str) -> str:
        raise ToolStoreError(f"Failed to read tool '{name}': permission denied")

    manager.create_tool(
        "share_square",
        "def share_square():\n"
        "    return share_tool('http://127.0.0.1:9/message', 'square')\n",
    )
    monkeypatch.setattr(manager.store, "inspect", broken_read)

    reply = manager.execute_tool("share_square")
    assert reply == (
        "Error sharing tool: Failed to read tool 'square': permission denied"
    )
