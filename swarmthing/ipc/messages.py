"""Inter-agent message envelope.

Messages travel as the ``content`` string of ``POST /message`` and are tagged
by ``type``. Any content that is not a valid tagged message is plain text.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from swarmthing.tools.safety import SafetyLevel

__all__ = [
    "IpcMessage",
    "TextMessage",
    "ToolRequestMessage",
    "ToolShareMessage",
    "decode",
    "encode",
]


class TextMessage(BaseModel):
    type: Literal["Text"] = "Text"
    content: str


class ToolShareMessage(BaseModel):
    type: Literal["ToolShare"] = "ToolShare"
    name: str
    code: str
    description: str | None = None
    safety_level: SafetyLevel


class ToolRequestMessage(BaseModel):
    type: Literal["ToolRequest"] = "ToolRequest"
    name: str


IpcMessage = Annotated[
    TextMessage | ToolShareMessage | ToolRequestMessage,
    Field(discriminator="type"),
]

_adapter: TypeAdapter[IpcMessage] = TypeAdapter(IpcMessage)


def encode(message: TextMessage | ToolShareMessage | ToolRequestMessage) -> str:
    return message.model_dump_json()


def decode(raw: str) -> TextMessage | ToolShareMessage | ToolRequestMessage:
    """Parse raw content, falling back to Text(content=raw)."""
    try:
        return _adapter.validate_json(raw)
    except ValidationError:
        return TextMessage(content=raw)
