from __future__ import annotations

import builtins
import threading
from collections.abc import Callable, Mapping
from typing import Any

from swarmthing.errors import ExecError, ExecErrorKind
from swarmthing.tools.program import Program, compile_source, merge
from swarmthing.tools.store import ToolStore
from swarmthing.utils.logger import tool_logger

# Interpreter built-ins that talk to the terminal or end the process.
_NOT_CALLABLE_BY_NAME = frozenset(
    {"exit", "quit", "input", "breakpoint", "help", "copyright", "credits", "license"}
)


class ScriptRuntime:
    """Live execution environment for tool scripts.

    Holds the cumulative merged Program and the capability namespace every
    script sees as built-ins. The Program is swapped and extended under a
    re-entrant lock because approvals may arrive from listener threads or
    from inside a running script; calls run outside the lock.
    """

    def __init__(
        self,
        store: ToolStore,
        capabilities: Mapping[str, Callable[..., Any]] | None = None,
    ) -> None:
        self.store = store
        self._lock = threading.RLock()
        self._builtins: dict[str, Any] = dict(vars(builtins))
        self._capabilities: dict[str, Callable[..., Any]] = {}
        self._program = Program(self._builtins)
        if capabilities:
            self.register_capabilities(capabilities)

    # Capabilities

    def register_capability(self, name: str, func: Callable[..., Any]) -> None:
        self._capabilities[name] = func
        # every Program shares this dict as __builtins__
        self._builtins[name] = func

    def register_capabilities(self, capabilities: Mapping[str, Callable[..., Any]]) -> None:
        for name, func in capabilities.items():
            self.register_capability(name, func)

    def capability_names(self) -> list[str]:
        return sorted(self._capabilities)

    # Compilation

    def compile(self, source: str, filename: str = "<tool>") -> Program:
        return compile_source(source, filename, builtins_ns=self._builtins)

    def merge(self, addition: Program) -> None:
        with self._lock:
            merge(self._program, addition)

    def compile_and_merge(self, source: str, filename: str = "<tool>") -> Program:
        program = self.compile(source, filename)
        self.merge(program)
        tool_logger.debug(
            "Tool definitions merged", filename=filename, functions=program.names()
        )
        return program

    def load_all(self) -> list[str]:
        """Rebuild the Program from every stored tool, in sorted name order.

        Fail-fast: the first CompileError aborts the load and the current
        Program stays in place.
        """
        names = sorted(self.store.list())
        fresh = Program(self._builtins)
        for name in names:
            source = self.store.inspect(name)
            merge(fresh, self.compile(source, filename=str(self.store.path_for(name))))
        with self._lock:
            self._program = fresh
        tool_logger.info("Tools loaded", count=len(names), tools=names)
        return names

    # Introspection

    def function_names(self) -> list[str]:
        with self._lock:
            return self._program.names()

    def has_function(self, name: str) -> bool:
        with self._lock:
            return name in self._program

    # Dispatch

    def call(self, name: str, arg: str | None = None) -> Any:
        """Call a tool function, or failing that a capability or built-in.

        Raises:
            ExecError: kind NOT_FOUND when nothing answers to name, kind
                RUNTIME_FAULT when the callee raised.
        """
        with self._lock:
            fn = self._program.get(name)

        if fn is not None:
            args = () if arg is None else (arg,)
            try:
                return fn(*args)
            except (Exception, SystemExit) as e:
                raise ExecError(
                    name, ExecErrorKind.RUNTIME_FAULT, f"{type(e).__name__}: {e}"
                ) from e

        return self._call_fallback(name, arg)

    def _call_fallback(self, name: str, arg: str | None) -> Any:
        if not self._reachable_by_name(name):
            raise ExecError(
                name, ExecErrorKind.NOT_FOUND, f"name '{name}' is not defined"
            )

        expression = f"{name}()" if arg is None else f"{name}(arg0)"
        try:
            return eval(
                compile(expression, "<call>", "eval"),
                {"__builtins__": self._builtins},
                {"arg0": arg},
            )
        except (Exception, SystemExit) as e:
            raise ExecError(
                name, ExecErrorKind.RUNTIME_FAULT, f"{type(e).__name__}: {e}"
            ) from e

    def _reachable_by_name(self, name: str) -> bool:
        if name in self._capabilities:
            return True
        return (
            name.isidentifier()
            and name in self._builtins
            and name not in _NOT_CALLABLE_BY_NAME
        )
