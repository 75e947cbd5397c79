"""
FamilyMeal FastAPI application.

Wires settings, logging, middleware, error handlers and the planning routes.
Run directly with ``python main.py`` or through ``uvicorn main:app``.
"""

import logging
from contextlib import asynccontextmanager

import anyio
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

import domain.models as db_models
from api.middleware import (
    RequestLoggingMiddleware,
    general_exception_handler,
    http_exception_handler,
    service_error_handler,
    validation_exception_handler,
)
from api.routes import catalog, health, plans
from app.config import settings
from app.exceptions import FamilyMealError

logging.basicConfig(level=settings.log_level.upper(), format=settings.log_format)
logger = logging.getLogger("familymeal.main")


async def _init_database_with_retry() -> None:
    """Create tables and seed moments/tags, waiting for the database to come up."""
    attempts = settings.db_init_attempts
    for attempt in range(1, attempts + 1):
        try:
            await anyio.to_thread.run_sync(db_models.init_database)
            logger.info("Database ready after %d attempt(s)", attempt)
            return
        except Exception as exc:
            if attempt == attempts:
                logger.error("Database initialization failed after %d attempts", attempts)
                raise
            logger.warning("Database init attempt %d/%d failed: %s", attempt, attempts, exc)
            await anyio.sleep(settings.db_init_delay_sec)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s %s (%s)", settings.app_name, settings.app_version, settings.environment.value)
    await _init_database_with_retry()
    try:
        yield
    finally:
        logger.info("Shutting down %s", settings.app_name)
        db_models.engine.dispose()


def create_app() -> FastAPI:
    docs_enabled = not settings.is_production()
    application = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=f"{settings.api_prefix}/openapi.json" if docs_enabled else None,
        docs_url=f"{settings.api_prefix}/docs" if docs_enabled else None,
        redoc_url=None,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(FamilyMealError, service_error_handler)
    application.add_exception_handler(Exception, general_exception_handler)

    for module in (health, catalog, plans):
        application.include_router(module.router, prefix=settings.api_prefix)

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
