from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from swarmthing.config.constants import UNKNOWN_SENDER
from swarmthing.ipc.deps import get_gateway
from swarmthing.ipc.gateway import TransportGateway
from swarmthing.ipc.schemas import MessageRequest, MessageResponse

router = APIRouter()


def sender_identity(request: Request) -> str:
    """Peer address as seen by the transport; unauthenticated."""
    client = request.client
    if client is None or not client.host:
        return UNKNOWN_SENDER
    return f"{client.host}:{client.port}"


@router.post("/message", response_model=MessageResponse)
async def receive_message(
    body: MessageRequest,
    request: Request,
    gateway: TransportGateway = Depends(get_gateway),  # noqa: B008
):
    ack = gateway.receive(body.content, sender=sender_identity(request))
    return MessageResponse(received=ack)
