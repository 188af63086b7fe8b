"""
API Gateway Service - FastAPI Application
Single entry point that forwards resource requests to the backend services
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from services.gateway_service.config import GatewaySettings, get_settings
from services.gateway_service.routes import health, proxy
from services.gateway_service.utils.upstream_client import UpstreamClient, UpstreamError
from shared.utils.logger import RequestLogger, setup_logging
from shared.utils.service import error_response, register_exception_handlers

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler"""
    logger.info(
        "Gateway Service starting up",
        upstreams={name: target.url for name, target in app.state.upstreams.items()},
    )

    # Backends may not be up yet; nothing here contacts them
    await app.state.upstream_client.start()

    yield

    logger.info("Gateway Service shutting down")
    await app.state.upstream_client.stop()


def create_app(
    settings: Optional[GatewaySettings] = None,
    upstream_client: Optional[UpstreamClient] = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        settings: Gateway configuration; read from the environment when omitted
        upstream_client: Client used to reach the backends; built from
            ``settings`` when omitted
    """
    settings = settings or get_settings()
    upstream_client = upstream_client or UpstreamClient.from_settings(settings)

    app = FastAPI(
        title="Gateway Service",
        description="API gateway for the user, product and order services",
        version=settings.service_version,
        lifespan=lifespan,
        # /api/users/ is not rewritten to /api/users
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.upstreams = upstream_client.upstreams
    app.state.upstream_client = upstream_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    RequestLogger("gateway-service").install(app)
    register_exception_handlers(app)

    @app.exception_handler(UpstreamError)
    async def upstream_exception_handler(request: Request, exc: UpstreamError):
        """Transport failures become gateway-origin errors"""
        logger.warning(
            "Upstream unavailable",
            resource=exc.resource,
            url=exc.target.url,
            status_code=exc.status_code,
            error=exc.message,
        )
        return error_response(exc.status_code, exc.message)

    app.include_router(health.router, tags=["Health"])
    app.include_router(proxy.router, tags=["Proxy"])

    return app


def run():
    """Console entry point"""
    settings = get_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    run()
