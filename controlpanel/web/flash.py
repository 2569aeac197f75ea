"""Flash messages: one-shot notices and errors kept in the session."""

from fastapi import Request

FLASH_SESSION_KEY = "_flash"


def _set(request: Request, level: str, message: str) -> None:
    # One message per level per request cycle; a later one replaces it
    flashes = dict(request.session.get(FLASH_SESSION_KEY, {}))
    flashes[level] = message
    request.session[FLASH_SESSION_KEY] = flashes


def set_notice(request: Request, message: str) -> None:
    _set(request, "notice", message)


def set_error(request: Request, message: str) -> None:
    _set(request, "error", message)


def pop_flashes(request: Request) -> dict[str, str]:
    """Return and clear the pending messages ({"notice": ..., "error": ...})."""
    if "session" not in request.scope:
        return {}
    return request.session.pop(FLASH_SESSION_KEY, None) or {}
