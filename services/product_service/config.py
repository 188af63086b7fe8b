"""
Product service configuration
"""

from functools import lru_cache

from shared.utils.service import ServiceSettings


class ProductServiceSettings(ServiceSettings):
    service_name: str = "Product"
    port: int = 3001


@lru_cache
def get_settings() -> ProductServiceSettings:
    return ProductServiceSettings()
