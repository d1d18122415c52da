from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from swarmthing.errors import ToolNotFoundError, ToolStoreError

if TYPE_CHECKING:
    from swarmthing.tools.tool_manager import ToolManager


def build(manager: ToolManager) -> dict[str, Callable[..., Any]]:
    def list_tools() -> str:
        try:
            return ", ".join(sorted(manager.store.list()))
        except ToolStoreError as e:
            return f"Error listing tools: {e}"

    def inspect_tool(name: str) -> str:
        try:
            return manager.store.inspect(name)
        except ToolNotFoundError:
            return f"Error: Tool '{name}' not found"
        except ToolStoreError as e:
            return f"Error: {e}"

    return {"list_tools": list_tools, "inspect_tool": inspect_tool}
