"""Native capabilities callable from tool scripts and by name."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from . import clone, files, introspection, messaging, pending, web

if TYPE_CHECKING:
    from swarmthing.tools.tool_manager import ToolManager

_MODULES = (files, web, introspection, messaging, clone, pending)


def build_capabilities(manager: ToolManager) -> dict[str, Callable[..., Any]]:
    capabilities: dict[str, Callable[..., Any]] = {}
    for module in _MODULES:
        capabilities.update(module.build(manager))
    return capabilities


__all__ = ["build_capabilities"]
