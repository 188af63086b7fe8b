"""
Service scaffolding shared by the backend services and the gateway

Settings base class, the JSON error envelope, and the /health route.
"""

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from shared.schemas import HealthStatus

logger = structlog.get_logger(__name__)


class ServiceSettings(BaseSettings):
    """Settings every service carries"""

    service_name: str = "Service"
    service_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_format: str = "json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v


def error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "message": message,
            "status_code": status_code
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error envelope and the catch-all 500 handler"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Custom HTTP exception handler"""
        response = error_response(exc.status_code, exc.detail)
        if getattr(exc, "headers", None):
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(
            "Unhandled exception",
            error=str(exc),
            method=request.method,
            path=request.url.path,
            exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "An unexpected error occurred"
            }
        )


def health_router(service_name: str) -> APIRouter:
    """``GET /health`` answering ``{"status": "<Name> Service is healthy"}``"""
    router = APIRouter(tags=["Health"])
    payload = HealthStatus.for_service(service_name)

    @router.get("/health", response_model=HealthStatus)
    async def health_check():
        """Service health check"""
        return payload

    return router
