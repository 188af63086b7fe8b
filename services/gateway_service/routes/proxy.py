"""
Proxy Routes
Forward ``GET /api/{resource}`` to the backend that owns the resource
"""

import asyncio

import structlog
from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import Response

from services.gateway_service.utils.upstream_client import UpstreamClient, UpstreamResponse
from services.gateway_service.upstreams import UpstreamTarget

logger = structlog.get_logger(__name__)

router = APIRouter()

# Not sent to anyone: the client is gone. Recorded for the request log.
CLIENT_CLOSED_REQUEST = 499
DISCONNECT_POLL_INTERVAL = 0.05


@router.get("/api/{resource}")
async def forward_resource(resource: str, request: Request):
    """Relay the backend's status code and body unchanged"""
    target = request.app.state.upstreams.resolve(resource)
    if target is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown resource: {resource}"
        )

    upstream = await forward_unless_disconnected(request, request.app.state.upstream_client, target)
    if upstream is None:
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.content_type,
    )


async def forward_unless_disconnected(
    request: Request,
    client: UpstreamClient,
    target: UpstreamTarget,
) -> UpstreamResponse | None:
    """
    Run the forward while watching the inbound connection.

    Returns None when the caller hung up first; the outbound call is
    cancelled in that case. Upstream errors propagate.
    """
    forward = asyncio.ensure_future(client.forward(target))
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait({forward, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (forward, watcher):
            if not task.done():
                task.cancel()

    if forward in done:
        return forward.result()

    await asyncio.gather(forward, return_exceptions=True)
    logger.info(
        "Client disconnected, upstream request abandoned",
        resource=target.resource.value,
        url=target.url,
    )
    return None


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(DISCONNECT_POLL_INTERVAL)
