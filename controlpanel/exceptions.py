"""Custom exception classes and global exception handlers."""

import logging
import traceback

from fastapi import Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException
from starlette.templating import Jinja2Templates

logger = logging.getLogger(__name__)


class ControlPanelException(Exception):
    """Base exception for all control panel errors."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(ControlPanelException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", 404)


class ForbiddenException(ControlPanelException):
    """Access forbidden exception."""

    def __init__(self, message: str = "Administrative privileges are required to perform this action"):
        super().__init__(message, 403)


class UnauthorizedException(ControlPanelException):
    """Authentication required exception."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, 401)


class ValidationException(ControlPanelException):
    """Validation error exception with field-level errors."""

    def __init__(self, errors: list[dict] | str):
        if isinstance(errors, str):
            errors = [{"field": "general", "message": errors}]
        super().__init__("Validation failed", 422)
        self.errors = errors


class MissingComponentException(ControlPanelException):
    """A component type key has no registered implementation."""

    def __init__(self, kind: str, key: str | None):
        self.kind = kind
        self.key = key
        super().__init__(f"No {kind} is registered for “{key}”", 400)


class MailTransportError(ControlPanelException):
    """A transport adapter failed to hand a message off."""

    def __init__(self, message: str = "The message could not be delivered"):
        super().__init__(message, 502)


class UserContextError(ControlPanelException):
    """User context not set error."""

    def __init__(self, message: str = "User context is required"):
        super().__init__(message, 401)


def wants_json(request: Request) -> bool:
    """Check if request expects JSON (API) or HTML (web)."""
    return (
        request.url.path.startswith("/api/")
        or "application/json" in request.headers.get("accept", "")
        or request.headers.get("content-type", "").startswith("application/json")
    )


def create_exception_handlers(templates: Jinja2Templates):
    """Create exception handlers that use the provided templates."""

    def render_error(request: Request, status_code: int, message: str, **extra):
        try:
            return templates.TemplateResponse(
                request,
                f"errors/{status_code}.html",
                {"message": message, "status_code": status_code, **extra},
                status_code=status_code,
            )
        except Exception:
            # Fallback to generic error template
            return templates.TemplateResponse(
                request,
                "errors/generic.html",
                {"message": message, "status_code": status_code},
                status_code=status_code,
            )

    async def control_panel_exception_handler(request: Request, exc: ControlPanelException):
        """Handle control panel exceptions."""
        logger.warning(f"ControlPanelException on {request.method} {request.url.path}: {exc.message} (status={exc.status_code})")

        if wants_json(request):
            content = {
                "status": "error",
                "message": exc.message,
            }
            if hasattr(exc, "errors"):
                content["errors"] = exc.errors
            return JSONResponse(status_code=exc.status_code, content=content)

        if exc.status_code == 401:
            return RedirectResponse(url=f"/login?next={request.url.path}", status_code=302)

        return render_error(request, exc.status_code, exc.message)

    async def validation_exception_handler(request: Request, exc: ValidationException):
        """Handle validation exceptions with field-level errors."""
        logger.warning(f"ValidationException on {request.method} {request.url.path}: {exc.errors}")

        if wants_json(request):
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "status": "error",
                    "message": exc.message,
                    "errors": exc.errors,
                },
            )

        return render_error(request, exc.status_code, exc.message, errors=exc.errors)

    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle framework HTTP errors (405 on non-POST submissions, etc.)."""
        if wants_json(request):
            return JSONResponse(
                status_code=exc.status_code,
                content={"status": "error", "message": str(exc.detail)},
                headers=getattr(exc, "headers", None),
            )
        return render_error(request, exc.status_code, str(exc.detail))

    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        # Log the full exception with traceback
        logger.error(f"Unhandled exception on {request.method} {request.url.path}")
        logger.error(f"Exception: {type(exc).__name__}: {exc}")
        tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        logger.error("".join(tb_lines))

        if wants_json(request):
            return JSONResponse(
                status_code=500,
                content={
                    "status": "error",
                    "message": "An unexpected error occurred",
                },
            )

        try:
            return templates.TemplateResponse(
                request,
                "errors/500.html",
                {"message": "An unexpected error occurred", "status_code": 500},
                status_code=500,
            )
        except Exception:
            return HTMLResponse(
                content="<h1>500 Internal Server Error</h1><p>An unexpected error occurred.</p>",
                status_code=500,
            )

    return {
        ControlPanelException: control_panel_exception_handler,
        ValidationException: validation_exception_handler,
        HTTPException: http_exception_handler,
        Exception: generic_exception_handler,
    }
