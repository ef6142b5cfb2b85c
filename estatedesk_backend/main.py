"""EstateDesk Property Management Backend - Main Application Entry Point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from .config import Settings, settings as default_settings
from .core.exceptions import EstateDeskException
from .core.logging import (
    LoggingMiddleware,
    RequestIdMiddleware,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from .database import Database

# Import routers
from .modules.admin import router as admin_router
from .modules.auth import profile_router
from .modules.auth import router as auth_router
from .modules.auth.services import ensure_admin_account
from .modules.bulk_import import router as bulk_import_router
from .modules.dashboard import router as dashboard_router
from .modules.data_sharing import router as data_sharing_router
from .modules.financial import router as financial_router
from .modules.maintenance import router as maintenance_router
from .modules.property_management import router as properties_router
from .modules.rent_tracking import router as rent_tracking_router
from .modules.tenant_management import router as tenants_router

logger = get_logger(__name__)

API_PREFIX = "/api"


def _error_body(message: str, code: str | None = None, details=None) -> dict:
    body = {"success": False, "message": message, "error": message, "data": None}
    if code:
        body["code"] = code
    if details:
        body["details"] = details
    return body


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    config: Settings = app.state.settings
    database: Database = app.state.database

    # Startup
    setup_logging(config)
    logger.info("Starting EstateDesk application...")
    logger.info(f"Environment: {config.app_env}")
    logger.info(f"Database backend: {database.backend}")

    if config.database_auto_create:
        await database.create_all()
    async with database.session_factory() as db:
        await ensure_admin_account(db, config)

    yield

    # Shutdown
    logger.info("Shutting down EstateDesk application...")
    await database.dispose()
    shutdown_logging()


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(EstateDeskException)
    async def estatedesk_exception_handler(request: Request, exc: EstateDeskException):
        """Render domain errors with the status each class carries."""
        if exc.status_code >= 500:
            logger.error(f"Request failed: {exc.message}", extra={"details": exc.details})
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed payloads are client errors like any other validation failure."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid value for {field}" if field else "Invalid request"
        return JSONResponse(
            status_code=400,
            content=_error_body(
                message,
                "VALIDATION_ERROR",
                [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors],
            ),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(f"Integrity error: {exc.orig}")
        return JSONResponse(
            status_code=400,
            content=_error_body("Operation violates a data constraint", "CONFLICT"),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unhandled exceptions."""
        logger.exception(f"Unhandled exception: {exc}")
        config: Settings = request.app.state.settings
        message = str(exc) if config.app_debug else "Internal server error"
        return JSONResponse(status_code=500, content=_error_body(message))


def create_app(config: Settings | None = None) -> FastAPI:
    """Build the application around one settings object and database handle."""
    config = config or default_settings

    app = FastAPI(
        title="EstateDesk API",
        description="Multi-account property management backend",
        version=config.app_version,
        docs_url="/api/docs" if config.app_debug else None,
        redoc_url="/api/redoc" if config.app_debug else None,
        openapi_url="/api/openapi.json" if config.app_debug else None,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.database = Database(config)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging runs inside the request id middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/api/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": config.app_version,
            "env": config.app_env,
        }

    # Accounts
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(profile_router, prefix=API_PREFIX)
    app.include_router(admin_router, prefix=API_PREFIX)

    # Portfolio
    app.include_router(properties_router, prefix=API_PREFIX)
    app.include_router(tenants_router, prefix=API_PREFIX)
    app.include_router(maintenance_router, prefix=API_PREFIX)

    # Money
    app.include_router(financial_router, prefix=API_PREFIX)
    app.include_router(rent_tracking_router, prefix=API_PREFIX)
    app.include_router(dashboard_router, prefix=API_PREFIX)

    # Data in and out
    app.include_router(bulk_import_router, prefix=API_PREFIX)
    app.include_router(data_sharing_router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "estatedesk_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=default_settings.app_debug,
    )
