from __future__ import annotations

import threading

import pytest

from swarmthing.errors import QueueError
from swarmthing.tools.pending import PendingQueue, PendingTool
from swarmthing.tools.safety import SafetyLevel


def _tool(name: str, code: str = "def f():\n    return 1\n", source: str = "peer:1") -> PendingTool:
    return PendingTool(
        name=name, code=code, source_agent=source, safety_level=SafetyLevel.SAFE
    )


def test_enqueue_keeps_order_and_duplicates():
    queue = PendingQueue()
    queue.enqueue(_tool("square", source="a:1"))
    queue.enqueue(_tool("cube"))
    queue.enqueue(_tool("square", source="b:2"))

    assert [t.name for t in queue.list()] == ["square", "cube", "square"]
    # listing is non-destructive
    assert len(queue) == 3


def test_approve_removes_first_match_and_installs():
    installed: list[PendingTool] = []
    queue = PendingQueue(installer=installed.append)
    queue.enqueue(_tool("square", source="a:1"))
    queue.enqueue(_tool("square", source="b:2"))

    approved = queue.approve("square")

    assert approved.source_agent == "a:1"
    assert installed == [approved]
    assert [t.source_agent for t in queue.list()] == ["b:2"]


def test_reject_removes_first_match_without_installing():
    installed: list[PendingTool] = []
    queue = PendingQueue(installer=installed.append)
    queue.enqueue(_tool("square", source="a:1"))
    queue.enqueue(_tool("square", source="b:2"))

    rejected = queue.reject("square")

    assert rejected.source_agent == "a:1"
    assert installed == []
    assert [t.source_agent for t in queue.list()] == ["b:2"]


def test_unknown_name_raises_queue_error():
    queue = PendingQueue()
    queue.enqueue(_tool("square"))
    with pytest.raises(QueueError):
        queue.approve("cube")
    with pytest.raises(QueueError):
        queue.reject("cube")
    assert len(queue) == 1


def test_failed_install_restores_entry_position():
    def failing_installer(tool: PendingTool) -> None:
        raise RuntimeError("disk full")

    queue = PendingQueue(installer=failing_installer)
    queue.enqueue(_tool("first"))
    queue.enqueue(_tool("square"))
    queue.enqueue(_tool("last"))

    with pytest.raises(RuntimeError, match="disk full"):
        queue.approve("square")

    assert [t.name for t in queue.list()] == ["first", "square", "last"]


def test_received_at_defaults_to_now_utc():
    tool = _tool("square")
    assert tool.received_at.tzinfo is not None


def test_concurrent_enqueue_loses_nothing():
    queue = PendingQueue()

    def producer(prefix: str) -> None:
        for i in range(50):
            queue.enqueue(_tool(f"{prefix}_{i}"))

    threads = [threading.Thread(target=producer, args=(p,)) for p in "abcd"]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(queue) == 200
