from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from swarmthing.utils.logger import tool_logger

if TYPE_CHECKING:
    from swarmthing.tools.tool_manager import ToolManager


def read_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return f"Error reading file: {e}"


def write_file(path: str, content: str) -> str:
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as e:
        return f"Error writing file: {e}"
    tool_logger.info("File written", path=path, size=len(content))
    return "File written successfully"


def build(manager: ToolManager) -> dict[str, Callable[..., Any]]:
    return {"read_file": read_file, "write_file": write_file}
