"""Filesystem-backed tool registry: one ``<name>.py`` file per tool."""

from __future__ import annotations

import keyword
from pathlib import Path

from swarmthing.config.constants import TOOL_FILE_SUFFIX
from swarmthing.errors import ToolNotFoundError, ToolStoreError
from swarmthing.utils.logger import tool_logger


def is_valid_tool_name(name: object) -> bool:
    return isinstance(name, str) and name.isidentifier() and not keyword.iskeyword(name)


def validate_tool_name(name: str) -> str:
    """Return name unchanged when it can be used as a tool name.

    Tool names are Python identifiers, so they double as file stems and as
    call targets, and can never escape the tools directory.
    """
    if not is_valid_tool_name(name):
        raise ToolStoreError(f"Invalid tool name: {name!r}")
    return name


class ToolStore:
    """Maps tool names to script sources stored under a directory.

    The directory is the single source of truth: nothing is cached, and a
    write to an existing name replaces the previous source.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ToolStoreError(
                f"Cannot create tools directory {self.root}: {e}"
            ) from e

    def path_for(self, name: str) -> Path:
        return self.root / f"{validate_tool_name(name)}{TOOL_FILE_SUFFIX}"

    def create(self, name: str, code: str) -> Path:
        path = self.path_for(name)
        try:
            path.write_text(code, encoding="utf-8")
        except OSError as e:
            raise ToolStoreError(f"Failed to write tool '{name}': {e}") from e
        tool_logger.debug("Tool source saved", tool=name, path=str(path))
        return path

    def list(self) -> set[str]:
        try:
            return {
                p.stem
                for p in self.root.glob(f"*{TOOL_FILE_SUFFIX}")
                if p.is_file() and is_valid_tool_name(p.stem)
            }
        except OSError as e:
            raise ToolStoreError(f"Failed to list tools in {self.root}: {e}") from e

    def inspect(self, name: str) -> str:
        try:
            path = self.path_for(name)
        except ToolStoreError:
            raise ToolNotFoundError(name) from None
        if not path.is_file():
            raise ToolNotFoundError(name)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ToolStoreError(f"Failed to read tool '{name}': {e}") from e

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self.list()
