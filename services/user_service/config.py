"""
User service configuration
"""

from functools import lru_cache

from shared.utils.service import ServiceSettings


class UserServiceSettings(ServiceSettings):
    service_name: str = "User"
    port: int = 3000


@lru_cache
def get_settings() -> UserServiceSettings:
    return UserServiceSettings()
