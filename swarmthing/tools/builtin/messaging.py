from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from swarmthing.utils.logger import tool_logger

if TYPE_CHECKING:
    from swarmthing.tools.tool_manager import ToolManager

DEFAULT_PORT = 8080


def parse_port(port: Any) -> int:
    """Port number from script input; anything unusable means 8080."""
    try:
        value = int(str(port).strip())
    except ValueError:
        return DEFAULT_PORT
    return value if 0 < value < 65536 else DEFAULT_PORT


def build(manager: ToolManager) -> dict[str, Callable[..., Any]]:
    def send_message(url: str, message: str) -> str:
        return manager.gateway.send(url, message, cancel_token=manager.cancel_token)

    def share_tool(target_url: str, name: str) -> str:
        return manager.gateway.share(target_url, name, cancel_token=manager.cancel_token)

    def start_server(port: str = str(DEFAULT_PORT)) -> str:
        port_num = parse_port(port)
        tool_logger.info("Starting IPC server", port=port_num)
        manager.start_listener(port_num)
        return f"IPC server starting on port {port_num}"

    return {
        "send_message": send_message,
        "share_tool": share_tool,
        "start_server": start_server,
    }
