"""Shared pytest fixtures for all tests."""

import socket
from pathlib import Path

import pytest

from swarmthing.config import settings
from swarmthing.tools.tool_manager import ToolManager

_ENV_KEYS = (
    "TOOLS_DIR",
    "SERVER_HOST",
    "SERVER_PORT",
    "NETWORK_TIMEOUT",
    "SCRAPE_WORD_LIMIT",
    "SECRETS_FILE",
    "OPENAI_API_KEY",
    "MODEL",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch, tmp_path):
    """Run every test from an empty directory with no config env leaking in."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    # main() binds the global settings to its config manager
    settings.bind(None)


@pytest.fixture
def tools_dir(tmp_path: Path) -> Path:
    return tmp_path / "tools"


@pytest.fixture
def manager(tools_dir: Path, tmp_path: Path):
    """ToolManager over an isolated tools directory."""
    m = ToolManager(
        tools_dir,
        secrets_file=tmp_path / ".env",
        server_host="127.0.0.1",
        network_timeout=5.0,
    )
    yield m
    m.shutdown()


@pytest.fixture
def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]
