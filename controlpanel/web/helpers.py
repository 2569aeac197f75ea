"""Shared helpers for web routes."""

import re
from typing import Any

from fastapi.responses import RedirectResponse
from starlette.datastructures import FormData

_NESTED_KEY = re.compile(r"\[([^\]]*)\]")


def is_local_url(url: str | None) -> bool:
    """Only same-site paths ("/settings", not "//evil.com" or "https://...")."""
    return bool(url) and url.startswith("/") and not url.startswith("//") and "\\" not in url


def redirect_to_posted_url(form: FormData, default: str) -> RedirectResponse:
    """Redirect to the form's hidden ``redirect`` field, or to ``default``."""
    url = form.get("redirect")
    if not isinstance(url, str) or not is_local_url(url):
        url = default
    return RedirectResponse(url=url, status_code=302)


def form_str(form: FormData, name: str) -> str | None:
    """A single text value from the form (None when absent)."""
    value = form.get(name)
    return value if isinstance(value, str) else None


def form_bool(form: FormData, name: str) -> bool:
    """Checkbox semantics: present and not an explicit "off" value."""
    value = form_str(form, name)
    return value is not None and value.strip().lower() not in ("", "0", "false", "off", "no")


def nested_form_values(form: FormData, prefix: str) -> dict[str, Any]:
    """Collect ``prefix[a][b]=v`` fields into ``{"a": {"b": v}}``.

    Repeated keys keep the last value.
    """
    values: dict[str, Any] = {}
    for key, value in form.multi_items():
        if not key.startswith(prefix + "["):
            continue
        path = _NESTED_KEY.findall(key[len(prefix):])
        if not path:
            continue
        target = values
        for part in path[:-1]:
            existing = target.get(part)
            if not isinstance(existing, dict):
                existing = target[part] = {}
            target = existing
        target[path[-1]] = value
    return values
