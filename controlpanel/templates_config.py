"""Shared Jinja2 templates configuration."""

from pathlib import Path

from fastapi import Request
from starlette.templating import Jinja2Templates

from controlpanel.config import settings
from controlpanel.services.i18n_service import get_i18n_service
from controlpanel.utils.request_context import get_current_language
from controlpanel.web.fields import render_field
from controlpanel.web.flash import pop_flashes

# Setup template globals
i18n = get_i18n_service()


def t(key: str, lang: str | None = None, **kwargs) -> str:
    """Translation function for templates."""
    return i18n.t(key, lang or get_current_language(), **kwargs)


def request_globals(request: Request) -> dict:
    """Per-request values every page needs."""
    return {
        "flashes": pop_flashes(request),
        "current_language": get_current_language(),
    }


# Initialize templates
templates = Jinja2Templates(
    directory=str(Path(__file__).resolve().parent / "templates"),
    context_processors=[request_globals],
)

# Add globals to templates
templates.env.globals["settings"] = settings
templates.env.globals["t"] = t
templates.env.globals["app_name"] = settings.app_name
templates.env.globals["render_field"] = render_field
