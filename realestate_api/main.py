"""
FastAPI application entry point.
Builds the application from settings; run with `python -m realestate_api.main`.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
from typing import Optional
import logging

from realestate_api.config import Settings, get_settings
from realestate_api.database import (
    check_database_connection,
    create_engine_from_settings,
    create_session_factory,
    create_tables,
)
from realestate_api.routers import users_router, real_estates_router, favorites_router, visits_router
from realestate_api.middleware import RequestLoggingMiddleware
from realestate_api.services.access_policy import AccessPolicy
from realestate_api.services.bootstrap import ensure_admin_user
from realestate_api.services.error_handler import ErrorHandlerService
from realestate_api.utils.exceptions import APIException, ServiceUnavailableError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates tables and the default administrator on startup, disposes the engine on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    # Keep serving so /health can report the outage
    try:
        await create_tables(app.state.engine)
    except Exception as e:
        logger.error(f"Failed to create tables on startup: {e}")

    # A failed bootstrap must not keep the API from serving
    try:
        async with app.state.session_factory() as session:
            await ensure_admin_user(session, settings)
    except Exception as e:
        logger.error(f"Admin bootstrap failed: {e}")

    yield

    logger.info("Shutting down application")
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; read from the environment when omitted
    """
    if settings is None:
        settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    Backend for a real estate listings site.

    ## Features

    * **Users**: Sign up, login and role-based access (admin / user)
    * **Listings**: Paginated browsing, search by price, area, location and bedrooms
    * **Favorites**: Lists of favorite listings
    * **Visits**: Scheduled visits to listings

    ## Authentication

    Use `/users/login` to obtain a token, then send it in the `Authorization` header.
    Listing management and administrator creation require an administrator token.
    """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "Users", "description": "Accounts and authentication"},
            {"name": "Real Estate", "description": "Property listings and search"},
            {"name": "Favorites", "description": "Favorite listings"},
            {"name": "Visits", "description": "Scheduled visits"},
            {"name": "Health", "description": "Service status"}
        ],
        lifespan=lifespan,
    )

    engine = create_engine_from_settings(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.access_policy = AccessPolicy.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(
        RequestLoggingMiddleware,
        max_request_size=settings.max_request_size,
        enable_request_logging=not settings.is_testing
    )

    app.include_router(users_router)
    app.include_router(real_estates_router)
    app.include_router(favorites_router)
    app.include_router(visits_router)

    register_exception_handlers(app)
    register_health_routes(app)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Route every exception through ErrorHandlerService."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        return ErrorHandlerService.handle_api_exception(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(PydanticValidationError)
    async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        return ErrorHandlerService.handle_database_error(exc, request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return ErrorHandlerService.handle_http_exception(exc, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        return ErrorHandlerService.handle_unexpected_error(exc, request)


def register_health_routes(app: FastAPI) -> None:

    @app.get("/", tags=["Health"])
    async def root(request: Request):
        """Basic information about the running service."""
        settings: Settings = request.app.state.settings
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.environment,
            "status": "healthy",
            "documentation": {
                "swagger_ui": "/docs",
                "redoc": "/redoc",
                "openapi_json": "/openapi.json"
            }
        }

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """
        Health check with database connectivity test.
        Answers 503 when the database cannot be reached.
        """
        settings: Settings = request.app.state.settings
        db_healthy = await check_database_connection(request.app.state.session_factory)

        if not db_healthy:
            raise ServiceUnavailableError("Database connection failed")

        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "database": "connected"
        }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "realestate_api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
