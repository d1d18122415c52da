from .result import error, not_found, ok
from .types import ToolError, ToolResult, parse_tool_result

__all__ = [
    "error",
    "not_found",
    "ok",
    "ToolError",
    "ToolResult",
    "parse_tool_result",
]
