"""
Product Service - FastAPI Application
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI

from services.product_service.config import ProductServiceSettings, get_settings
from services.product_service.routes import products
from shared.utils.logger import RequestLogger, get_logger, setup_logging
from shared.utils.service import health_router, register_exception_handlers

logger = get_logger(__name__)


def create_app(settings: Optional[ProductServiceSettings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Product Service",
        description="Product catalogue for the storefront",
        version=settings.service_version,
        redirect_slashes=False,
    )
    app.state.settings = settings

    RequestLogger("product-service").install(app)
    register_exception_handlers(app)

    app.include_router(health_router(settings.service_name))
    app.include_router(products.router, prefix="/products", tags=["Products"])

    return app


def run():
    """Console entry point"""
    settings = get_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)
    logger.info("Product Service starting up", port=settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    run()
