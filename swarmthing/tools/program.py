"""Compilation of tool scripts into definitions, and merging of definitions.

A tool script is a Python module restricted to definitions. Compiling it runs
the module body once in a fresh namespace to bind those definitions; merging
re-binds the resulting functions to a shared namespace so that every tool sees
every other tool (and the native capabilities) as globals.
"""

from __future__ import annotations

import ast
import types
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from swarmthing.errors import CompileError

__all__ = ["Program", "ScriptFunction", "compile_source", "merge"]

PROGRAM_MODULE_NAME = "swarmthing_tools"

# Names the interpreter puts in every module namespace; never merged.
_RESERVED_GLOBALS = frozenset({"__builtins__", "__name__", "__doc__"})


@dataclass(frozen=True)
class ScriptFunction:
    name: str
    func: types.FunctionType
    filename: str

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)

    @property
    def doc(self) -> str | None:
        return self.func.__doc__


class Program:
    """Arena of named functions sharing a single globals namespace."""

    def __init__(self, builtins_ns: dict[str, Any] | None = None) -> None:
        self.namespace: dict[str, Any] = {
            "__builtins__": builtins_ns if builtins_ns is not None else {},
            "__name__": PROGRAM_MODULE_NAME,
        }
        self.functions: dict[str, ScriptFunction] = {}

    def get(self, name: str) -> ScriptFunction | None:
        return self.functions.get(name)

    def names(self) -> list[str]:
        return sorted(self.functions)

    def __contains__(self, name: object) -> bool:
        return name in self.functions

    def __iter__(self) -> Iterator[ScriptFunction]:
        return iter(self.functions.values())

    def __len__(self) -> int:
        return len(self.functions)


def _statement_error(
    message: str, node: ast.AST, source: str, filename: str
) -> CompileError:
    lineno = getattr(node, "lineno", None)
    col = getattr(node, "col_offset", None)
    text = None
    if lineno is not None:
        lines = source.splitlines()
        if 0 < lineno <= len(lines):
            text = lines[lineno - 1]
    return CompileError(
        message,
        filename=filename,
        lineno=lineno,
        offset=col + 1 if col is not None else None,
        text=text,
    )


def _is_literal(node: ast.expr) -> bool:
    try:
        ast.literal_eval(node)
    except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
        return False
    return True


def _check_definitions_only(tree: ast.Module, source: str, filename: str) -> list[str]:
    """Reject top-level statements that are not definitions.

    Returns the names of the top-level function definitions in order.
    """
    defined: list[str] = []
    for index, node in enumerate(tree.body):
        if isinstance(node, ast.FunctionDef):
            if node.decorator_list:
                raise _statement_error(
                    f"decorators are not allowed on tool function '{node.name}'",
                    node.decorator_list[0],
                    source,
                    filename,
                )
            defined.append(node.name)
        elif isinstance(node, (ast.Import, ast.ImportFrom)):
            continue
        elif isinstance(node, ast.Assign):
            if not all(isinstance(t, ast.Name) for t in node.targets):
                raise _statement_error(
                    "only simple names may be assigned at top level",
                    node,
                    source,
                    filename,
                )
            if not _is_literal(node.value):
                raise _statement_error(
                    "top-level assignments must have literal values",
                    node.value,
                    source,
                    filename,
                )
        elif isinstance(node, ast.AnnAssign):
            if not isinstance(node.target, ast.Name) or (
                node.value is not None and not _is_literal(node.value)
            ):
                raise _statement_error(
                    "top-level assignments must have literal values",
                    node,
                    source,
                    filename,
                )
        elif (
            index == 0
            and isinstance(node, ast.Expr)
            and isinstance(node.value, ast.Constant)
            and isinstance(node.value.value, str)
        ):
            # module docstring
            continue
        else:
            raise _statement_error(
                f"top-level {type(node).__name__} statement is not allowed; "
                "tools may only define functions, imports and constants",
                node,
                source,
                filename,
            )
    return defined


def compile_source(
    source: str,
    filename: str = "<tool>",
    *,
    builtins_ns: dict[str, Any] | None = None,
) -> Program:
    """Compile a tool script into a standalone Program.

    Raises:
        CompileError: on a syntax error, a forbidden top-level statement, or
            an exception raised while binding the definitions.
    """
    try:
        tree = ast.parse(source, filename=filename, mode="exec")
    except SyntaxError as e:
        raise CompileError(
            e.msg,
            filename=e.filename or filename,
            lineno=e.lineno,
            offset=e.offset,
            text=e.text,
        ) from e

    defined = _check_definitions_only(tree, source, filename)

    program = Program(builtins_ns)
    code = compile(tree, filename, "exec")
    try:
        exec(code, program.namespace)
    except Exception as e:
        raise CompileError(
            f"{type(e).__name__}: {e}", filename=filename
        ) from e

    for name in defined:
        func = program.namespace[name]
        program.functions[name] = ScriptFunction(name, func, filename)
    return program


def _rebind(func: types.FunctionType, namespace: dict[str, Any]) -> types.FunctionType:
    bound = types.FunctionType(
        func.__code__,
        namespace,
        func.__name__,
        func.__defaults__,
        func.__closure__,
    )
    bound.__kwdefaults__ = func.__kwdefaults__
    bound.__doc__ = func.__doc__
    bound.__qualname__ = func.__qualname__
    bound.__annotations__ = dict(func.__annotations__)
    bound.__dict__.update(func.__dict__)
    return bound


def merge(into: Program, addition: Program) -> Program:
    """Merge addition's definitions into `into` in place and return it.

    Last write wins: a name defined by both keeps addition's definition.
    Functions are re-bound to `into.namespace`, so a call from one tool to
    another is resolved at call time against the merged namespace. A
    constant or import that reuses a function's name replaces that function.
    """
    for key, value in addition.namespace.items():
        if key in _RESERVED_GLOBALS or key in addition.functions:
            continue
        into.namespace[key] = value
        into.functions.pop(key, None)

    for name, fn in addition.functions.items():
        bound = _rebind(fn.func, into.namespace)
        into.namespace[name] = bound
        into.functions[name] = ScriptFunction(name, bound, fn.filename)
    return into
