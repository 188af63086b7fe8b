"""
Logging utilities for the storefront services

Provides centralized logging configuration and utilities.
"""

import os
import time
import logging
import logging.config
from copy import deepcopy
from typing import Optional, Dict, Any
from pathlib import Path

import structlog
import yaml
from fastapi import FastAPI
from starlette.types import ASGIApp, Message, Receive, Scope, Send

# Default logging configuration
DEFAULT_LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'detailed': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'plain': {
            'format': '%(message)s'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'plain',
            'stream': 'ext://sys.stdout'
        }
    },
    'root': {
        'level': 'INFO',
        'handlers': ['console']
    },
    'loggers': {
        'storefront': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        }
    }
}

SHARED_CONFIG_PATH = Path(__file__).parent.parent / "configs" / "logging.yml"


def load_logging_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a dictConfig mapping

    Looks at ``config_path`` first, then the shared ``configs/logging.yml``,
    and falls back to DEFAULT_LOGGING_CONFIG.
    """
    for path in (config_path, SHARED_CONFIG_PATH):
        if not path or not os.path.exists(path):
            continue
        try:
            with open(path, 'r') as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logging.getLogger(__name__).warning(f"Failed to load logging config from {path}: {e}")
            continue
        if isinstance(config, dict):
            return config

    return deepcopy(DEFAULT_LOGGING_CONFIG)


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None
) -> Dict[str, Any]:
    """
    Setup logging configuration

    Args:
        config_path: Path to a YAML logging configuration file
            (defaults to LOGGING_CONFIG_PATH)
        log_level: Override log level
        log_format: Override renderer ('json' or 'console')

    Returns:
        The dictConfig mapping that was applied
    """
    config = load_logging_config(config_path or os.getenv('LOGGING_CONFIG_PATH'))

    # Apply environment-specific overrides
    environment = os.getenv('ENVIRONMENT', 'development')
    env_config = (config.pop('environments', None) or {}).get(environment) or {}
    for section in ('handlers', 'loggers'):
        if section in env_config:
            config.setdefault(section, {}).update(env_config[section])

    # Override log level if specified
    if log_level:
        log_level = log_level.upper()
        for logger_config in config.get('loggers', {}).values():
            logger_config['level'] = log_level
        for handler_config in config.get('handlers', {}).values():
            handler_config['level'] = log_level
        if 'root' in config:
            config['root']['level'] = log_level

    logging.config.dictConfig(config)
    configure_structlog(log_format or 'json')
    return config


def configure_structlog(log_format: str = 'json') -> None:
    """Configure structlog on top of stdlib logging"""
    renderer = (
        structlog.dev.ConsoleRenderer(colors=False)
        if log_format == 'console'
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get logger instance

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


class RequestLogger:
    """Logger for HTTP requests"""

    def __init__(self, service: str, name: str = "storefront.requests"):
        self.service = service
        self.logger = structlog.get_logger(name)

    def log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        response_time: float,
        client_ip: Optional[str] = None
    ):
        """Log HTTP request"""
        self.logger.info(
            "Request completed",
            service=self.service,
            method=method,
            path=path,
            status_code=status_code,
            response_time=round(response_time, 4),
            client_ip=client_ip,
        )

    def install(self, app: FastAPI) -> None:
        """Register a middleware on ``app`` that logs every request"""
        app.add_middleware(RequestLoggingMiddleware, request_logger=self)


class RequestLoggingMiddleware:
    """
    Plain ASGI middleware around RequestLogger.

    Leaves ``receive`` untouched so handlers can still poll for client
    disconnects.
    """

    def __init__(self, app: ASGIApp, request_logger: RequestLogger):
        self.app = app
        self.request_logger = request_logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            client = scope.get("client")
            self.request_logger.log_request(
                scope["method"],
                scope["path"],
                status_code,
                time.perf_counter() - start,
                client_ip=client[0] if client else None,
            )

