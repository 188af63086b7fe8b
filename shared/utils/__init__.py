"""
Shared utilities for the storefront services

This package contains common utilities used across all microservices.
"""

from .logger import setup_logging, configure_structlog, get_logger, RequestLogger
from .service import ServiceSettings, error_response, register_exception_handlers, health_router

__all__ = [
    "setup_logging",
    "configure_structlog",
    "get_logger",
    "RequestLogger",
    "ServiceSettings",
    "error_response",
    "register_exception_handlers",
    "health_router",
]

__version__ = "1.0.0"
