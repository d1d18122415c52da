"""Background uvicorn listeners for the IPC app.

Each call to start_listener() binds a new server on its own daemon thread;
nothing stops a second listener on a port this process already serves; that
bind fails inside the new thread and is only logged.
"""

from __future__ import annotations

import threading

import uvicorn
from fastapi import FastAPI

from swarmthing.config.logging_config import get_logging_config
from swarmthing.utils.logger import ipc_logger

_active_ports: set[int] = set()
_ports_lock = threading.Lock()


class ListenerServer(uvicorn.Server):
    """uvicorn.Server that signals once its socket is listening."""

    def __init__(self, config: uvicorn.Config) -> None:
        super().__init__(config)
        self.ready = threading.Event()

    async def startup(self, sockets=None):
        await super().startup(sockets=sockets)
        if self.started:
            self.ready.set()
            ipc_logger.info(
                "IPC listener ready",
                url=f"http://{self.config.host}:{self.config.port}",
            )


class Listener:
    def __init__(self, server: ListenerServer, thread: threading.Thread) -> None:
        self.server = server
        self.thread = thread

    @property
    def port(self) -> int:
        return self.server.config.port

    def wait_ready(self, timeout: float = 5.0) -> bool:
        """Block until listening; False when the thread died or timed out."""
        return self.server.ready.wait(timeout)

    def stop(self, timeout: float = 5.0) -> None:
        self.server.should_exit = True
        self.thread.join(timeout)


def start_listener(app: FastAPI, host: str, port: int) -> Listener:
    with _ports_lock:
        already = port in _active_ports
        _active_ports.add(port)
    if already:
        ipc_logger.warning(
            "A listener from this process already uses this port; "
            "the new bind is expected to fail",
            port=port,
        )

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_config=get_logging_config(),
        lifespan="off",
    )
    server = ListenerServer(config)

    def _serve() -> None:
        try:
            server.run()
        except (OSError, SystemExit) as e:
            # uvicorn exits with SystemExit when the bind fails
            ipc_logger.error("IPC listener failed", port=port, error=repr(e))
        finally:
            if not already:
                with _ports_lock:
                    _active_ports.discard(port)
            ipc_logger.debug("IPC listener thread finished", port=port)

    thread = threading.Thread(target=_serve, name=f"ipc-listener-{port}", daemon=True)
    thread.start()
    ipc_logger.info("IPC listener starting", host=host, port=port)
    return Listener(server, thread)
