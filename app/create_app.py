"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api import (
    activities_router,
    calculations_router,
    entries_router,
    factors_router,
    offsets_router,
    users_router,
)
from app.core.config import get_config
from app.core.exceptions import ApiError
from app.database.base import get_db_url
from app.database.session_manager.db_session import Database
from app.database.session_manager.exceptions import DatabaseTransactionError
from app.services.estimators.exceptions import EstimationError
from app.utils.constants import ErrorCode

logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def register_routers(app: FastAPI):
    """Register all API routers."""
    app.include_router(calculations_router)
    app.include_router(entries_router)
    app.include_router(activities_router)
    app.include_router(users_router)
    app.include_router(offsets_router)
    app.include_router(factors_router)


def register_exception_handlers(app: FastAPI):
    """Render every error as ``{"error": ..., "code": ...}``."""

    @app.exception_handler(EstimationError)
    async def estimation_exception_handler(request: Request, exc: EstimationError):
        logging.error(f"Estimation failed: {exc.code} {exc.message}")
        headers = None
        if getattr(exc, "retry_after", None) is not None:
            headers = {"Retry-After": str(int(exc.retry_after))}
        return JSONResponse(
            status_code=exc.status_code, content=exc.to_dict(), headers=headers
        )

    @app.exception_handler(ApiError)
    async def api_exception_handler(request: Request, exc: ApiError):
        logging.error(f"ApiError occurred: {exc.code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(SQLAlchemyError)
    @app.exception_handler(DatabaseTransactionError)
    async def database_exception_handler(request: Request, exc: Exception):
        logging.error(f"Database error occurred: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Database operation failed",
                "code": ErrorCode.DATABASE_ERROR,
                "details": str(exc),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "Validation error",
                "code": ErrorCode.VALIDATION_ERROR,
                "detail": jsonable_errors(exc),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logging.error(f"Exception occurred: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR},
        )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may hold the raised ValueError, which is not JSON serializable
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


def register_meta_routes(app: FastAPI):
    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": app.title,
            "version": app.version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "success": True,
            "message": "Server is up and running",
            "database": Database.is_initialized(),
        }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Handles database initialization and cleanup.
    """
    logging.info("Application startup")
    Database.init(get_db_url(app.state.config))
    logging.info("Initialized database")

    try:
        yield
    finally:
        await Database.close()
        logging.info("Application shutdown")


def get_app(config_file: str) -> FastAPI:
    """
    Application factory function.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Configured FastAPI application instance
    """
    config = get_config(config_file)
    api_config = config.data.get("api", {})

    app = FastAPI(
        title=api_config.get("title", "Carbon Footprint Tracker API"),
        description=api_config.get(
            "description", "Log activities and estimate their CO2e footprint"
        ),
        version=api_config.get("version", "1.0.0"),
        debug=api_config.get("debug", False),
        lifespan=lifespan,
        generate_unique_id_function=lambda route: (
            f"{route.tags[0]}-{route.name}" if route.tags else route.name
        ),
    )

    app.state.config = config

    register_routers(app)
    register_meta_routes(app)
    register_exception_handlers(app)

    origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",  # Vite dev server
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
