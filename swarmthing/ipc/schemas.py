"""HTTP request/response schemas of the IPC listener."""

from __future__ import annotations

from pydantic import BaseModel


class MessageRequest(BaseModel):
    content: str


class MessageResponse(BaseModel):
    status: str = "ok"
    received: str


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "swarmthing-ipc"
    pending_tools: int = 0
    messages: int = 0
