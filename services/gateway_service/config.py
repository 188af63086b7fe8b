"""
Configuration Management
Environment-based configuration for upstream addressing and timeouts
"""

from functools import lru_cache

from pydantic import field_validator, model_validator

from services.gateway_service.upstreams import Resource, UpstreamTable, UpstreamTarget
from shared.utils.service import ServiceSettings


class GatewaySettings(ServiceSettings):
    """Gateway configuration"""

    service_name: str = "Gateway"
    port: int = 3003

    # Upstream addresses (compose service names)
    user_service_url: str = "http://user-service:3000"
    product_service_url: str = "http://product-service:3001"
    order_service_url: str = "http://order-service:3002"

    # Timeouts, in seconds. upstream_timeout bounds a whole forward, retry included.
    upstream_timeout: float = 5.0
    upstream_connect_timeout: float = 2.0
    upstream_retries: int = 1
    health_probe_timeout: float = 2.0

    # Connection pool
    upstream_max_connections: int = 100
    upstream_max_keepalive: int = 20

    # CORS
    cors_allowed_origins: str = "*"

    @field_validator("upstream_timeout", "upstream_connect_timeout", "health_probe_timeout")
    @classmethod
    def validate_positive_timeout(cls, v):
        if v <= 0:
            raise ValueError("Timeouts must be greater than zero")
        return v

    @field_validator("upstream_retries")
    @classmethod
    def validate_retries(cls, v):
        if v not in (0, 1):
            raise ValueError("At most one retry is allowed")
        return v

    @field_validator("upstream_max_connections", "upstream_max_keepalive")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("Connection pool sizes must be at least 1")
        return v

    @model_validator(mode="after")
    def clamp_connect_timeout(self):
        # connect phase never outlives the whole forward
        if self.upstream_connect_timeout > self.upstream_timeout:
            self.upstream_connect_timeout = self.upstream_timeout
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def upstream_table(self) -> UpstreamTable:
        """Build the immutable resource -> upstream mapping"""
        return UpstreamTable([
            UpstreamTarget(Resource.USERS, self.user_service_url),
            UpstreamTarget(Resource.PRODUCTS, self.product_service_url),
            UpstreamTarget(Resource.ORDERS, self.order_service_url),
        ])


@lru_cache
def get_settings() -> GatewaySettings:
    """Get gateway configuration instance"""
    return GatewaySettings()
