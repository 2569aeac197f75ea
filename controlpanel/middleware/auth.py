"""Authentication middleware for JWT token validation."""

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from controlpanel.config import settings
from controlpanel.utils.request_context import (
    clear_all_context,
    set_current_language,
    set_current_user_id,
)
from controlpanel.utils.security import decode_access_token


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that extracts and validates JWT tokens from requests.

    Supports both cookie-based auth (for web) and Authorization header (for API).
    Whether a request is allowed through is decided by route dependencies;
    this middleware only establishes who is asking.
    """

    # Paths that never carry user context
    EXEMPT_PATHS = {
        "/login",
        "/health",
    }

    # Path prefixes that don't require authentication
    EXEMPT_PREFIXES = {
        "/static/",
        "/favicon",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and extract authentication context."""
        # Clear context from previous request
        clear_all_context()

        path = request.url.path
        if self._is_exempt_path(path):
            return await call_next(request)

        language = request.cookies.get("language")
        if language in settings.supported_languages_list:
            set_current_language(language)

        token = self._extract_token(request)

        if token:
            payload = decode_access_token(token)
            if payload:
                try:
                    set_current_user_id(uuid.UUID(payload["sub"]))
                except (KeyError, ValueError, TypeError):
                    # Malformed subject - context will remain unset
                    pass

        response = await call_next(request)

        # Clear context after request
        clear_all_context()

        return response

    def _is_exempt_path(self, path: str) -> bool:
        """Check if the path is exempt from authentication."""
        if path in self.EXEMPT_PATHS:
            return True

        for prefix in self.EXEMPT_PREFIXES:
            if path.startswith(prefix):
                return True

        return False

    def _extract_token(self, request: Request) -> str | None:
        """Extract JWT token from request.

        Priority:
        1. Authorization header (Bearer token)
        2. access_token cookie
        """
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header.removeprefix("Bearer ").strip()

        return request.cookies.get("access_token")
