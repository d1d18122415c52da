"""Exception taxonomy shared by the runtime, store, queue and transport."""

from __future__ import annotations

from enum import Enum


class SwarmThingError(Exception):
    """Base class for all errors raised by swarmthing."""


class CompileError(SwarmThingError):
    """A tool script could not be compiled into definitions."""

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        lineno: int | None = None,
        offset: int | None = None,
        text: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.lineno = lineno
        self.offset = offset
        self.text = text

    def __str__(self) -> str:
        where = self.filename or "<tool>"
        if self.lineno is not None:
            where = f"{where}:{self.lineno}"
            if self.offset is not None:
                where = f"{where}:{self.offset}"
        out = f"{where}: {self.message}"
        if self.text:
            out = f"{out}\n    {self.text.rstrip()}"
        return out


class ExecErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    RUNTIME_FAULT = "runtime_fault"


class ExecError(SwarmThingError):
    """Dispatching a call by name failed.

    `kind` tells a missing symbol apart from a fault raised while running it.
    """

    def __init__(self, name: str, kind: ExecErrorKind, message: str) -> None:
        super().__init__(f"Error executing tool '{name}': {message}")
        self.name = name
        self.kind = kind
        self.message = message

    @property
    def not_found(self) -> bool:
        return self.kind is ExecErrorKind.NOT_FOUND


class ToolStoreError(SwarmThingError):
    """Filesystem failure while reading or writing tool sources."""


class ToolNotFoundError(ToolStoreError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Tool '{name}' not found")
        self.name = name


class NetworkError(SwarmThingError):
    """Outbound HTTP call failed, timed out or was cancelled."""


class QueueError(SwarmThingError):
    """No pending tool matched an approve/reject request."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No pending tool named '{name}'")
        self.name = name
