from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

__all__ = [
    "ToolError",
    "ToolResult",
    "parse_tool_result",
]


class ToolError(BaseModel):
    """Standard error result of ToolManager.run_tool.

    Use isinstance(result, ToolError) to check for errors.
    """

    type: Literal["tool_error"] = "tool_error"
    name: str
    code: str
    error: str
    error_type: str | None = None
    details: dict[str, Any] | None = None


class ToolResult(BaseModel):
    type: Literal["tool_result"] = "tool_result"
    name: str
    output: Any = None


def parse_tool_result(result: dict[str, Any]) -> ToolResult | ToolError:
    """Parse a run_tool envelope into its typed model.

    Example:
        r = parse_tool_result(manager.run_tool("double", ["21"]))
        if isinstance(r, ToolError):
            return f"Error: {r.error}"
        return f"Output: {r.output}"
    """
    if result.get("type") == "tool_error":
        return ToolError.model_validate(result)
    return ToolResult.model_validate(result)
