"""
Order Service - FastAPI Application
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI

from services.order_service.config import OrderServiceSettings, get_settings
from services.order_service.routes import orders
from services.order_service.store import OrderStore
from shared.utils.logger import RequestLogger, get_logger, setup_logging
from shared.utils.service import health_router, register_exception_handlers

logger = get_logger(__name__)


def create_app(settings: Optional[OrderServiceSettings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Order Service",
        description="Order intake for the storefront",
        version=settings.service_version,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.orders = OrderStore(capacity=settings.max_orders)

    RequestLogger("order-service").install(app)
    register_exception_handlers(app)

    app.include_router(health_router(settings.service_name))
    app.include_router(orders.router, prefix="/orders", tags=["Orders"])

    return app


def run():
    """Console entry point"""
    settings = get_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)
    logger.info("Order Service starting up", port=settings.port, max_orders=settings.max_orders)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    run()
