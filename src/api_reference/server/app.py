"""
FastAPI application for the API reference catalog.

Run:
    uvicorn --factory api_reference.server.app:create_app --reload --port 8000

or:
    api-reference serve
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api_reference.catalog.loader import default_catalog, load_catalog
from api_reference.config import Settings
from api_reference.server.routes import VERSION, api_router, router
from api_reference.service import CatalogService, CategoryNotFoundError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app around a catalog loaded once at startup."""
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    catalog = load_catalog(settings.catalog_path) if settings.catalog_path else default_catalog()
    service = CatalogService(catalog)

    app = FastAPI(
        title=catalog.info.title,
        description=catalog.info.subtitle,
        version=VERSION,
    )
    app.state.settings = settings
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000

        if request.url.path.startswith("/api"):
            logger.info(
                "%s %s -> %d (%.1fms)",
                request.method, request.url.path, response.status_code, elapsed,
            )
        return response

    @app.exception_handler(CategoryNotFoundError)
    async def category_not_found(request: Request, exc: CategoryNotFoundError):
        logger.info("Unknown category id: %s", exc.category_id)
        return JSONResponse(status_code=404, content={"error": "Category not found"})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if settings.debug else None,
            },
        )

    app.include_router(api_router)
    app.include_router(router)

    logger.info(
        "Serving %s: %d categories, %d endpoints",
        catalog.info.title, len(catalog.categories), service.endpoint_count(),
    )
    return app
