"""
Health check schemas

Every service answers ``GET /health`` with the same shape.
"""

from pydantic import BaseModel


class HealthStatus(BaseModel):
    """Liveness payload: ``{"status": "<Name> Service is healthy"}``"""
    status: str

    @classmethod
    def for_service(cls, name: str) -> "HealthStatus":
        return cls(status=f"{name} Service is healthy")
