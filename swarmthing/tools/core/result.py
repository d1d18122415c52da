from __future__ import annotations

from typing import Any

__all__ = ["error", "not_found", "ok"]


def ok(tool: str, output: Any) -> dict[str, Any]:
    """Standard success envelope: {"type": "tool_result", "name", "output"}."""
    return {"type": "tool_result", "name": tool, "output": output}


def error(
    tool: str,
    code: str,
    message: str,
    *,
    error_type: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Standard error envelope for tools (JSON friendly).

    Shape:
    {"type": "tool_error", "name": "<tool>", "code": "<code>", "error": "<message>", "error_type": "<Exc>", "details": {...}}
    """
    payload: dict[str, Any] = {
        "type": "tool_error",
        "name": tool,
        "code": code,
        "error": message,
    }
    if error_type:
        payload["error_type"] = error_type
    if details:
        payload["details"] = details
    return payload


def not_found(
    tool: str,
    message: str,
    *,
    error_type: str | None = None,
) -> dict[str, Any]:
    """Error envelope with code=not_found, used when no definition or
    capability answers to the requested name."""
    return error(tool, "not_found", message, error_type=error_type)
