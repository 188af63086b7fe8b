"""
Shared data schemas for the storefront services

This package contains common data schemas used across all microservices.
"""

from .health import HealthStatus
from .user import UserSchema
from .product import ProductSchema
from .order import OrderSchema, OrderCreateSchema

__all__ = [
    "HealthStatus",
    "UserSchema",
    "ProductSchema",
    "OrderSchema",
    "OrderCreateSchema",
]

__version__ = "1.0.0"
