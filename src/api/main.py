"""FastAPI application main module.

This module builds the FastAPI application for the ShopSearch service:
routers, request logging, error handlers and health endpoints. The catalog
is loaded once at startup and handed to a ``ShopSearchEngine`` stored on
``app.state``.
"""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src import __version__
from src.api.logging_config import RequestLoggingMiddleware, setup_logging
from src.api.metrics import MetricsService
from src.api.routes import ai, products
from src.config import Settings, get_settings
from src.recommender.catalog import InMemoryProductCatalog, ProductCatalog
from src.recommender.exceptions import ShopSearchException
from src.recommender.service import ShopSearchEngine

# Configure module logger
logger = logging.getLogger(__name__)


def _load_default_catalog(settings: Settings) -> ProductCatalog:
    """Load the catalog configured in settings, or an empty one."""
    if not Path(settings.catalog_path).exists():
        logger.warning(
            f"Catalog file {settings.catalog_path} not found, starting with an empty catalog"
        )
        return InMemoryProductCatalog([])

    return InMemoryProductCatalog.from_csv(settings.catalog_path)


def create_app(
    catalog: Optional[ProductCatalog] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the ShopSearch application.

    Args:
        catalog: Catalog to serve. Defaults to the CSV at
            ``settings.catalog_path``.
        settings: Settings to use. Defaults to ``get_settings()``.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    if catalog is None:
        catalog = _load_default_catalog(settings)

    application = FastAPI(
        title=settings.app_name,
        description="Natural-language product search and similar-product recommendations",
        version=__version__,
    )

    application.state.engine = ShopSearchEngine(
        catalog,
        search_limits=(settings.search_default_limit, settings.search_max_limit),
        similar_limits=(settings.similar_default_limit, settings.similar_max_limit),
        popular_limits=(settings.popular_default_limit, settings.popular_max_limit),
    )
    application.state.metrics = MetricsService()
    application.state.started_at = time.time()

    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(ai.router)
    application.include_router(products.router)

    @application.exception_handler(ShopSearchException)
    async def shopsearch_exception_handler(
        request: Request, exc: ShopSearchException
    ) -> JSONResponse:
        logger.error(
            "Request raised ShopSearchException",
            extra={
                "path": request.url.path,
                "status_code": exc.status_code,
                "error_type": type(exc).__name__,
                "details": exc.details,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": type(exc).__name__,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @application.get("/ping")
    def ping() -> Dict[str, str]:
        """Liveness check.

        Example:
            >>> response = client.get("/ping")
            >>> assert response.json() == {"status": "ok"}
        """
        return {"status": "ok"}

    @application.get("/health")
    def health(request: Request) -> Dict[str, Any]:
        """Service status with uptime and catalog size."""
        engine: ShopSearchEngine = request.app.state.engine
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.time() - request.app.state.started_at, 3),
            "service": settings.app_name,
            "version": __version__,
            "num_products": engine.catalog.count(),
        }

    @application.get("/metrics")
    def metrics(request: Request) -> Dict[str, Any]:
        """Per-operation call counts and latency."""
        return request.app.state.metrics.get_metrics()

    return application


app = create_app()


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    setup_logging(get_settings().log_level)

    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
