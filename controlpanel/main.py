"""FastAPI application factory and entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from controlpanel.config import settings
from controlpanel.database import close_db, get_db_context
from controlpanel.exceptions import create_exception_handlers
from controlpanel.mail.transport_adapters import transport_adapters
from controlpanel.middleware import AuthMiddleware
from controlpanel.services.system_settings_service import get_system_settings_service
from controlpanel.templates_config import templates

log_level = logging.DEBUG if settings.is_development else getattr(logging, settings.app_log_level)
logging.basicConfig(
    level=log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    force=True,
)
logger = logging.getLogger(__name__)
logger.info(f"Logging configured at level: {logging.getLevelName(log_level)}")

# Base paths
BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"


async def check_email_transport() -> None:
    """Warn at startup when the stored transport type is not registered.

    Requests still work in that case: the email settings page falls back to
    the default adapter and shows the problem on the form.
    """
    try:
        async with get_db_context() as db:
            mail_settings = await get_system_settings_service().get_email_settings(db)
    except SQLAlchemyError as e:
        logger.warning(f"Could not read email settings at startup: {e}")
        return

    if not transport_adapters.has(mail_settings.transport_type):
        logger.warning(
            f"Stored email transport type '{mail_settings.transport_type}' is not registered; "
            f"available types: {[adapter.type_key for adapter in transport_adapters.all_types()]}"
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
        await check_email_transport()
        yield
        logger.info(f"Shutting down {settings.app_name}")
        await close_db()

    app = FastAPI(
        title=settings.app_name,
        description="Control panel system settings",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.app_debug else None,
        lifespan=lifespan,
    )

    # Add authentication middleware
    app.add_middleware(AuthMiddleware)

    # Sessions carry flash messages; added last so it wraps the auth middleware
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.app_secret_key,
        session_cookie=settings.session_cookie_name,
        same_site="lax",
        https_only=settings.is_production,
    )

    # Mount static files
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # Register exception handlers
    exception_handlers = create_exception_handlers(templates)
    for exc_class, handler in exception_handlers.items():
        app.add_exception_handler(exc_class, handler)

    # Register routers
    register_routers(app)

    return app


def register_routers(app: FastAPI):
    """Register all web routers."""
    from controlpanel.web import auth as auth_web
    from controlpanel.web import settings as settings_web

    # Web routes (HTML pages)
    app.include_router(auth_web.router, include_in_schema=False)
    app.include_router(settings_web.router, include_in_schema=False)

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {"status": "healthy", "app": settings.app_name, "env": settings.app_env}

    # Root redirect
    @app.get("/", include_in_schema=False)
    async def root(request: Request):
        """Send visitors to the settings index (which asks for a login if needed)."""
        return RedirectResponse(url="/settings", status_code=302)


# Create the app instance
app = create_app()


def main():
    """Entry point for running the application."""
    import uvicorn

    uvicorn.run(
        "controlpanel.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.app_log_level.lower(),
    )


if __name__ == "__main__":
    main()
