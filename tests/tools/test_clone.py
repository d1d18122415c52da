from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from swarmthing.tools.builtin.clone import clone_agent_to


@pytest.fixture
def entry_script(tmp_path: Path, monkeypatch) -> Path:
    script = tmp_path / "src" / "main.py"
    script.parent.mkdir()
    script.write_text("print('agent')\n", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", [str(script)])
    monkeypatch.delattr(sys, "frozen", raising=False)
    return script


def test_clone_copies_executable_tools_and_secrets(tmp_path: Path, entry_script: Path):
    tools = tmp_path / "tools"
    (tools / "nested").mkdir(parents=True)
    (tools / "square.py").write_text("def square(x):\n    return x\n", encoding="utf-8")
    (tools / "nested" / "helper.py").write_text("", encoding="utf-8")
    secrets = tmp_path / ".env"
    secrets.write_text("OPENAI_API_KEY=sk-test\n", encoding="utf-8")
    target = tmp_path / "clone"

    result = clone_agent_to(str(target), tools_dir=tools, secrets_file=secrets)

    assert result == f"✅ Agent cloned successfully to: {target}"
    assert (target / "main.py").read_text(encoding="utf-8") == "print('agent')\n"
    assert (target / "tools" / "square.py").exists()
    assert (target / "tools" / "nested" / "helper.py").exists()
    assert (target / ".env").read_text(encoding="utf-8") == "OPENAI_API_KEY=sk-test\n"
    if os.name == "posix":
        assert os.access(target / "main.py", os.X_OK)


def test_clone_without_tools_or_secrets(tmp_path: Path, entry_script: Path):
    target = tmp_path / "clone"
    result = clone_agent_to(
        target, tools_dir=tmp_path / "missing_tools", secrets_file=tmp_path / ".env"
    )

    assert result.startswith("✅")
    assert (target / "main.py").exists()
    assert not (target / "tools").exists()
    assert not (target / ".env").exists()


def test_clone_reports_unusable_target(tmp_path: Path, entry_script: Path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")

    result = clone_agent_to(
        blocker / "clone", tools_dir=tmp_path / "tools", secrets_file=None
    )

    assert result.startswith("Error creating directory")


def test_clone_agent_capability_uses_manager_paths(manager, tmp_path: Path, entry_script: Path):
    manager.create_tool("square", "def square(x):\n    return int(x) ** 2\n")
    target = tmp_path / "copy"

    result = manager.run_tool("clone_agent", [str(target)])

    assert result["type"] == "tool_result"
    assert result["output"].startswith("✅")
    assert (target / "tools" / "square.py").exists()
