from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from swarmthing.errors import CompileError, QueueError, ToolStoreError

if TYPE_CHECKING:
    from swarmthing.tools.pending import PendingTool
    from swarmthing.tools.tool_manager import ToolManager


def format_pending(tools: list[PendingTool]) -> str:
    if not tools:
        return "No pending tools"
    lines = []
    for tool in tools:
        line = (
            f"- {tool.name} [{tool.safety_level}] from {tool.source_agent} "
            f"at {tool.received_at.isoformat(timespec='seconds')}"
        )
        if tool.description:
            line += f": {tool.description}"
        lines.append(line)
    return "\n".join(lines)


def build(manager: ToolManager) -> dict[str, Callable[..., Any]]:
    def list_pending_tools() -> str:
        return format_pending(manager.pending.list())

    def approve_tool(name: str) -> str:
        try:
            tool = manager.approve_tool(name)
        except QueueError as e:
            return f"Error: {e}"
        except (CompileError, ToolStoreError) as e:
            return f"Error installing tool '{name}': {e}"
        return f"Tool '{tool.name}' approved and installed"

    def reject_tool(name: str) -> str:
        try:
            tool = manager.reject_tool(name)
        except QueueError as e:
            return f"Error: {e}"
        return f"Tool '{tool.name}' rejected"

    return {
        "list_pending_tools": list_pending_tools,
        "approve_tool": approve_tool,
        "reject_tool": reject_tool,
    }
