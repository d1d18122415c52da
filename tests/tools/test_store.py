from __future__ import annotations

from pathlib import Path

import pytest

from swarmthing.errors import ToolNotFoundError, ToolStoreError
from swarmthing.tools.store import ToolStore


def test_store_creates_missing_directory(tmp_path: Path):
    root = tmp_path / "nested" / "tools"
    ToolStore(root)
    assert root.is_dir()


def test_store_create_overwrites_single_file(tmp_path: Path):
    store = ToolStore(tmp_path / "tools")
    store.create("evolving", "v1")
    store.create("evolving", "v2")

    assert store.inspect("evolving") == "v2"
    assert [p.name for p in (tmp_path / "tools").iterdir()] == ["evolving.py"]


def test_store_list_scans_directory(tmp_path: Path):
    root = tmp_path / "tools"
    store = ToolStore(root)
    store.create("alpha", "")
    # files written behind the store's back are still listed
    (root / "beta.py").write_text("", encoding="utf-8")
    (root / "notes.txt").write_text("", encoding="utf-8")

    assert store.list() == {"alpha", "beta"}


def test_store_inspect_missing_tool(tmp_path: Path):
    store = ToolStore(tmp_path / "tools")
    with pytest.raises(ToolNotFoundError) as exc:
        store.inspect("ghost")
    assert str(exc.value) == "Tool 'ghost' not found"


@pytest.mark.parametrize("name", ["../escape", "has space", "class", "", "1abc"])
def test_store_rejects_invalid_names(tmp_path: Path, name: str):
    store = ToolStore(tmp_path / "tools")
    with pytest.raises(ToolStoreError):
        store.create(name, "def f():\n    return 1\n")


def test_store_unusable_directory_is_fatal(tmp_path: Path):
    blocker = tmp_path / "tools"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(ToolStoreError):
        ToolStore(blocker / "inner")


def test_store_list_skips_keyword_stems(tmp_path: Path):
    root = tmp_path / "tools"
    store = ToolStore(root)
    store.create("alpha", "")
    (root / "class.py").write_text("", encoding="utf-8")
    (root / "not-a-name.py").write_text("", encoding="utf-8")

    assert store.list() == {"alpha"}
