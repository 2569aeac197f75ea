"""Request context management using contextvars.

The auth middleware fills these from the access token for the duration of a
request; route handlers receive the resolved user through dependencies.
"""

import contextvars
import uuid

from controlpanel.exceptions import UserContextError

# Context variables for request-scoped data
_current_user_id: contextvars.ContextVar[uuid.UUID | None] = contextvars.ContextVar(
    "current_user_id", default=None
)
_current_language: contextvars.ContextVar[str] = contextvars.ContextVar(
    "current_language", default="en"
)


# === User Context ===

def get_current_user_id() -> uuid.UUID:
    """Get the current user ID.

    Raises:
        UserContextError: If user context is not set
    """
    uid = _current_user_id.get()
    if uid is None:
        raise UserContextError("User context is not set")
    return uid


def set_current_user_id(uid: uuid.UUID | None) -> None:
    _current_user_id.set(uid)


# === Language Context ===

def get_current_language() -> str:
    """Get the current language code (defaults to 'en')."""
    return _current_language.get()


def set_current_language(lang: str) -> None:
    _current_language.set(lang)


def clear_all_context() -> None:
    """Clear all context variables.

    Call this at the end of each request to prevent context leakage.
    """
    _current_user_id.set(None)
    _current_language.set("en")
