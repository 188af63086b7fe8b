"""
Health Check Routes
Gateway liveness and upstream reachability
"""

from fastapi import APIRouter, Request

from shared.schemas import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health_check(request: Request):
    """Basic health check; never contacts the backends"""
    return HealthStatus.for_service(request.app.state.settings.service_name)


@router.get("/health/upstreams")
async def upstream_health_check(request: Request):
    """Reachability of every backend's /health"""
    settings = request.app.state.settings
    upstreams = await request.app.state.upstream_client.probe_all(settings.health_probe_timeout)
    status = "healthy" if all(s == "healthy" for s in upstreams.values()) else "degraded"
    return {
        "status": status,
        "upstreams": upstreams,
    }
