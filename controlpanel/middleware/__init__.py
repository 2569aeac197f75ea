"""Middleware exports."""

from controlpanel.middleware.auth import AuthMiddleware

__all__ = ["AuthMiddleware"]
