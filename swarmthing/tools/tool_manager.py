from __future__ import annotations

from pathlib import Path
from typing import Any

from swarmthing.config import settings
from swarmthing.core.worker import AsyncWorker, CancelToken, get_worker
from swarmthing.errors import ExecError
from swarmthing.ipc.app import create_app
from swarmthing.ipc.gateway import TransportGateway
from swarmthing.ipc.server import Listener, start_listener
from swarmthing.tools.builtin import build_capabilities
from swarmthing.tools.core.result import error, not_found, ok
from swarmthing.tools.pending import PendingQueue, PendingTool
from swarmthing.tools.runtime import ScriptRuntime
from swarmthing.tools.store import ToolStore, validate_tool_name
from swarmthing.utils.logger import tool_logger


class ToolManager:
    """Facade over the tool store, script runtime, approval queue and transport.

    Creating or approving a tool persists its source and merges its
    definitions into the running program; `run_tool` wraps dispatch in the
    standard result envelope.
    """

    def __init__(
        self,
        tools_dir: Path | str | None = None,
        *,
        secrets_file: Path | str | None = None,
        server_host: str | None = None,
        network_timeout: float | None = None,
        scrape_word_limit: int | None = None,
        user_agent: str | None = None,
        worker: AsyncWorker | None = None,
    ) -> None:
        self.store = ToolStore(tools_dir if tools_dir is not None else settings.tools_dir)
        if secrets_file is None:
            secrets_file = settings.secrets_file
        self.secrets_file = Path(secrets_file) if secrets_file else None
        self.server_host = server_host or settings.server_host
        self.network_timeout = network_timeout or settings.network_timeout
        self.scrape_word_limit = scrape_word_limit or settings.scrape_word_limit
        self.user_agent = user_agent or settings.web_user_agent
        self.worker = worker or get_worker()
        # Set by the caller to abort in-flight network capabilities.
        self.cancel_token: CancelToken | None = None

        self.pending = PendingQueue(installer=self._install)
        self.gateway = TransportGateway(
            self.store,
            self.pending,
            timeout=self.network_timeout,
            user_agent=self.user_agent,
            worker=self.worker,
        )
        self.runtime = ScriptRuntime(self.store)
        self.runtime.register_capabilities(build_capabilities(self))
        self.listeners: list[Listener] = []

    # Lifecycle of tools

    def load_tools(self) -> list[str]:
        return self.runtime.load_all()

    def create_tool(self, name: str, code: str) -> str:
        """Compile, persist and merge a tool.

        Compiling first means a broken script never reaches the tools
        directory.

        Raises:
            CompileError, ToolStoreError
        """
        validate_tool_name(name)
        path = self.store.path_for(name)
        program = self.runtime.compile(code, filename=str(path))
        self.store.create(name, code)
        self.runtime.merge(program)
        tool_logger.info("Tool created", tool=name, functions=program.names())
        return f"Tool '{name}' created successfully at {path}"

    def list_tools(self) -> list[str]:
        return sorted(self.store.list())

    def inspect_tool(self, name: str) -> str:
        return self.store.inspect(name)

    # Approval queue

    def _install(self, tool: PendingTool) -> None:
        self.create_tool(tool.name, tool.code)

    def list_pending(self) -> list[PendingTool]:
        return self.pending.list()

    def approve_tool(self, name: str) -> PendingTool:
        return self.pending.approve(name)

    def reject_tool(self, name: str) -> PendingTool:
        return self.pending.reject(name)

    # Dispatch

    def execute_tool(self, name: str, args: list[str] | None = None) -> Any:
        """Call a tool with zero or one string argument.

        Raises:
            ValueError: more than one argument was given.
            ExecError: resolution or execution failed.
        """
        args = list(args or [])
        if len(args) > 1:
            raise ValueError(
                f"Tool '{name}' called with {len(args)} arguments; "
                "tools take at most one string argument"
            )
        tool_logger.info("Tool call", tool=name, args=args)
        return self.runtime.call(name, args[0] if args else None)

    def run_tool(self, name: str, args: list[str] | None = None) -> dict[str, Any]:
        """execute_tool wrapped in the tool_result / tool_error envelope."""
        try:
            output = self.execute_tool(name, args)
        except ExecError as e:
            if e.not_found:
                return not_found(name, str(e), error_type=type(e).__name__)
            tool_logger.error(
                "Tool execution failed", tool=name, error=e.message
            )
            return error(
                name, "execution_failed", str(e), error_type=type(e).__name__
            )
        except ValueError as e:
            return error(
                name, "invalid_arguments", str(e), error_type=type(e).__name__
            )
        return ok(name, output)

    # Transport

    def start_listener(self, port: int) -> Listener:
        listener = start_listener(create_app(self.gateway), self.server_host, port)
        self.listeners.append(listener)
        return listener

    def shutdown(self) -> None:
        for listener in self.listeners:
            listener.stop()
        self.listeners.clear()
