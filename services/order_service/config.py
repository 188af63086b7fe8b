"""
Order service configuration
"""

from functools import lru_cache

from pydantic import field_validator

from shared.utils.service import ServiceSettings


class OrderServiceSettings(ServiceSettings):
    service_name: str = "Order"
    port: int = 3002

    # Orders kept in memory before POST /orders is refused
    max_orders: int = 10000

    @field_validator("max_orders")
    @classmethod
    def validate_max_orders(cls, v):
        if v < 1:
            raise ValueError("max_orders must be at least 1")
        return v


@lru_cache
def get_settings() -> OrderServiceSettings:
    return OrderServiceSettings()
