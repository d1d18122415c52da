from __future__ import annotations

from fastapi import APIRouter, Depends

from swarmthing.ipc.deps import get_gateway
from swarmthing.ipc.gateway import TransportGateway
from swarmthing.ipc.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(gateway: TransportGateway = Depends(get_gateway)):  # noqa: B008
    """Liveness plus the sizes of the approval queue and the message log."""
    return HealthResponse(
        pending_tools=len(gateway.queue),
        messages=len(gateway.messages),
    )
