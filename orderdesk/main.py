"""
FastAPI application for Orderdesk.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.routes import health, orders
from .core.config import Config, get_config
from .core.logging import setup_logging
from .orders.repository import OrderRepository

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None, repository: Optional[OrderRepository] = None) -> FastAPI:
    """
    Build the admin API.

    Raises:
        ConfigError: if the content store settings or admin token are missing;
            the API does not start without them
    """
    config = config or get_config()
    setup_logging(
        log_file=config.log_path,
        level=config.get('general', 'log_level', default='INFO')
    )

    settings = config.store_settings
    admin_token = config.admin_token

    app = FastAPI(
        title="Orderdesk API",
        description="Admin API for managing e-commerce orders in the content store",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.settings = settings
    app.state.admin_token = admin_token
    app.state.repository = repository or OrderRepository.from_settings(settings)

    # Only configured browser origins get CORS headers
    cors_origins = config.cors_origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_methods=["GET", "PATCH", "DELETE"],
            allow_headers=["Authorization", "Content-Type"],
        )

    app.include_router(health.router, prefix="/api")
    app.include_router(orders.router, prefix="/api")

    @app.get("/")
    def root():
        """Root endpoint."""
        return {
            "name": "Orderdesk API",
            "version": __version__,
            "docs": "/docs"
        }

    logger.info(f"Admin API ready for {settings.project_id}/{settings.dataset}")
    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "orderdesk.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True
    )
