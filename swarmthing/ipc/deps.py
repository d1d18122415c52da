from __future__ import annotations

from fastapi import Request

from swarmthing.ipc.gateway import TransportGateway


def get_gateway(request: Request) -> TransportGateway:
    return request.app.state.gateway
