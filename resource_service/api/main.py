"""
FastAPI app assembly: middleware, error handlers and router wiring.

``create_app`` takes its settings and storage handle explicitly; the
process-wide ``app`` used by uvicorn lives in ``resource_service.app``.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resource_service import __version__
from resource_service.api.errors import setup_error_handling
from resource_service.api.prices import router as prices_router
from resource_service.api.resources import router as resources_router
from resource_service.db.database import Database
from resource_service.utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level)
    logging.getLogger("resource_service").setLevel(level)
    logger.info("app_startup: log_level=%s", level_name.upper())


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if database is None:
        database = Database(settings.database_url, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Schema is created in place; there are no migrations
        database.create_all()
        logger.info("Server is running on port %s (env=%s)", settings.port, settings.environment)
        try:
            yield
        finally:
            logger.info("Shutting down gracefully...")
            database.dispose()

    app = FastAPI(
        title="Resource Service",
        description="CRUD API for resource records and a token price converter.",
        version=__version__,
        lifespan=lifespan,
    )
    app.router.redirect_slashes = False
    app.state.settings = settings
    app.state.database = database

    origins = list(settings.cors_allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_error_handling(app)

    api_router = APIRouter(prefix=API_PREFIX)
    api_router.include_router(resources_router)
    api_router.include_router(prices_router)
    app.include_router(api_router)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "message": "Server is running"}

    return app
