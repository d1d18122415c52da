"""Self-replication: copy this agent into another directory."""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from swarmthing.utils.logger import tool_logger

if TYPE_CHECKING:
    from swarmthing.tools.tool_manager import ToolManager


def current_executable() -> Path:
    """The frozen binary, or the entry script when running from source."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable)
    return Path(sys.argv[0]).resolve()


def clone_agent_to(
    target_dir: str | os.PathLike[str],
    *,
    tools_dir: Path,
    secrets_file: Path | None,
) -> str:
    target = Path(target_dir)
    tool_logger.info("Cloning agent", target=str(target))
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return f"Error creating directory: {e}"

    executable = current_executable()
    target_exe = target / executable.name
    try:
        shutil.copy2(executable, target_exe)
        if os.name == "posix":
            target_exe.chmod(0o755)
    except OSError as e:
        return f"Error copying executable: {e}"

    if tools_dir.is_dir():
        try:
            shutil.copytree(tools_dir, target / tools_dir.name, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            return f"Error copying tools: {e}"

    if secrets_file is not None and secrets_file.is_file():
        try:
            shutil.copy2(secrets_file, target / secrets_file.name)
        except OSError as e:
            return f"Error copying secrets file: {e}"

    return f"✅ Agent cloned successfully to: {target_dir}"


def build(manager: ToolManager) -> dict[str, Callable[..., Any]]:
    def clone_agent(target_dir: str) -> str:
        return clone_agent_to(
            target_dir,
            tools_dir=manager.store.root,
            secrets_file=manager.secrets_file,
        )

    return {"clone_agent": clone_agent}
