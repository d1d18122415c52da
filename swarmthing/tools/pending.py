"""Approval queue for tools received from other agents."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from swarmthing.errors import QueueError
from swarmthing.tools.safety import SafetyLevel
from swarmthing.utils.logger import tool_logger


class PendingTool(BaseModel):
    name: str
    code: str
    source_agent: str
    received_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    description: str | None = None
    safety_level: SafetyLevel


Installer = Callable[[PendingTool], None]


class PendingQueue:
    """Ordered, thread-safe collection of proposals awaiting a decision.

    Entries are not unique by name; approve and reject act on the first
    match only. Installation runs outside the lock.
    """

    def __init__(self, installer: Installer | None = None) -> None:
        self._items: list[PendingTool] = []
        self._lock = threading.Lock()
        self.installer = installer

    def enqueue(self, tool: PendingTool) -> None:
        with self._lock:
            self._items.append(tool)
            size = len(self._items)
        tool_logger.info(
            "Tool queued for approval",
            tool=tool.name,
            source=tool.source_agent,
            safety=str(tool.safety_level),
            pending=size,
        )

    def list(self) -> list[PendingTool]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _pop_first(self, name: str) -> tuple[int, PendingTool]:
        with self._lock:
            for index, tool in enumerate(self._items):
                if tool.name == name:
                    del self._items[index]
                    return index, tool
        raise QueueError(name)

    def approve(self, name: str) -> PendingTool:
        """Remove the first entry named name and install it.

        If installation fails the entry goes back where it was and the
        installer's exception propagates.
        """
        index, tool = self._pop_first(name)
        if self.installer is not None:
            try:
                self.installer(tool)
            except Exception:
                with self._lock:
                    self._items.insert(min(index, len(self._items)), tool)
                raise
        tool_logger.info("Pending tool approved", tool=name, source=tool.source_agent)
        return tool

    def reject(self, name: str) -> PendingTool:
        _, tool = self._pop_first(name)
        tool_logger.info("Pending tool rejected", tool=name, source=tool.source_agent)
        return tool
