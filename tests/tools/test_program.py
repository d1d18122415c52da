from __future__ import annotations

import builtins

import pytest

from swarmthing.errors import CompileError
from swarmthing.tools.program import Program, compile_source, merge


def _compile(source: str, filename: str = "<tool>") -> Program:
    return compile_source(source, filename, builtins_ns=dict(vars(builtins)))


def test_compile_collects_function_definitions():
    program = _compile(
        '"""Greeting helpers."""\n'
        "import json\n"
        "PREFIX = 'hi '\n"
        "def greet(name):\n"
        "    return PREFIX + name\n"
        "def shout(name):\n"
        "    return greet(name).upper()\n"
    )
    assert program.names() == ["greet", "shout"]
    assert program.get("shout")("bob") == "HI BOB"
    # imports are globals, not tools
    assert "json" not in program


def test_compile_syntax_error_has_location():
    with pytest.raises(CompileError) as exc:
        _compile("def broken(:\n    pass\n", filename="tools/broken.py")
    err = exc.value
    assert err.filename == "tools/broken.py"
    assert err.lineno == 1
    assert err.offset is not None
    assert "tools/broken.py:1" in str(err)


@pytest.mark.parametrize(
    "source",
    [
        "print('side effect')\n",
        "x = compute()\n",
        "for i in range(3):\n    pass\n",
        "class Thing:\n    pass\n",
        "def f():\n    return 1\nf()\n",
    ],
)
def test_compile_rejects_non_definition_statements(source: str):
    with pytest.raises(CompileError):
        _compile(source)


def test_compile_never_runs_top_level_calls(tmp_path):
    marker = tmp_path / "ran.txt"
    with pytest.raises(CompileError):
        _compile(f"open({str(marker)!r}, 'w').write('x')\n")
    assert not marker.exists()


def test_compile_reports_failing_import():
    with pytest.raises(CompileError) as exc:
        _compile("import module_that_does_not_exist_xyz\n")
    assert "ModuleNotFoundError" in str(exc.value)


def test_compile_rejects_decorators():
    with pytest.raises(CompileError):
        _compile("import functools\n@functools.cache\ndef f():\n    return 1\n")


def test_merge_last_write_wins():
    arena = Program(dict(vars(builtins)))
    merge(arena, _compile("def version():\n    return 'version 1'\n"))
    merge(arena, _compile("def version():\n    return 'version 2'\n"))

    assert arena.names() == ["version"]
    assert arena.get("version")() == "version 2"


def test_merge_rebinds_to_shared_namespace():
    arena = Program(dict(vars(builtins)))
    merge(arena, _compile("def tool_a(x):\n    return x + '_A'\n"))
    merge(arena, _compile("def tool_b(x):\n    return tool_a(x) + '_B'\n"))

    assert arena.get("tool_b")("test") == "test_A_B"

    # redefining tool_a changes what tool_b sees at call time
    merge(arena, _compile("def tool_a(x):\n    return x + '_A2'\n"))
    assert arena.get("tool_b")("test") == "test_A2_B"


def test_merge_keeps_defaults():
    arena = Program(dict(vars(builtins)))
    merge(arena, _compile("def greet(name='world', *, punct='!'):\n    return name + punct\n"))
    assert arena.get("greet")() == "world!"


def test_merge_constant_replaces_function_of_same_name():
    arena = Program(dict(vars(builtins)))
    merge(arena, _compile("def helper():\n    return 'fn'\n"))
    merge(arena, _compile("def use():\n    return helper\n"))

    merge(arena, _compile("helper = 'const'\n"))

    assert "helper" not in arena
    assert arena.names() == ["use"]
    assert arena.get("use")() == "const"
