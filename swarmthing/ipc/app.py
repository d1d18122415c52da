from __future__ import annotations

import time

from fastapi import FastAPI, Request

from swarmthing import __version__
from swarmthing.ipc.gateway import TransportGateway
from swarmthing.ipc.routes.health import router as health_router
from swarmthing.ipc.routes.message import router as message_router
from swarmthing.utils.logger import ipc_logger, request_log


def create_app(gateway: TransportGateway) -> FastAPI:
    app = FastAPI(
        title="Swarm Thing IPC",
        description="Inbound messages and tool shares from other agents",
        version=__version__,
    )
    app.state.gateway = gateway

    app.include_router(message_router)
    app.include_router(health_router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        request_log(
            ipc_logger,
            request.method,
            request.url.path,
            response.status_code,
            round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    return app
