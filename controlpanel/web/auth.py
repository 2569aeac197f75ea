"""Authentication web routes for HTML pages."""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from controlpanel.config import settings
from controlpanel.database import get_db
from controlpanel.exceptions import UnauthorizedException
from controlpanel.schemas.auth import LoginRequest
from controlpanel.services.auth_service import get_auth_service
from controlpanel.services.i18n_service import t
from controlpanel.templates_config import templates
from controlpanel.utils.request_context import get_current_language
from controlpanel.utils.security import decode_access_token
from controlpanel.web.helpers import is_local_url

router = APIRouter()

DEFAULT_NEXT = "/settings"


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request, next: str | None = None):
    """Render the login page."""
    # Check if already authenticated with a valid token
    token = request.cookies.get("access_token")
    if token:
        if decode_access_token(token):
            return RedirectResponse(url=DEFAULT_NEXT, status_code=302)
        # Invalid token - clear the cookie
        response = RedirectResponse(url="/login", status_code=302)
        response.delete_cookie("access_token")
        return response

    return templates.TemplateResponse(
        request,
        "auth/login.html",
        {
            "error": None,
            "next": next if next and is_local_url(next) else DEFAULT_NEXT,
        },
    )


@router.post("/login", response_class=HTMLResponse)
async def login_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    next: str = Form(DEFAULT_NEXT),
    db: AsyncSession = Depends(get_db),
):
    """Handle login form submission."""
    try:
        login_request = LoginRequest(email=email, password=password)
        token, user = await get_auth_service().login(db, login_request)
    except (ValidationError, UnauthorizedException):
        # Re-render login page with error
        return templates.TemplateResponse(
            request,
            "auth/login.html",
            {
                "error": t("auth.invalid_credentials", get_current_language()),
                "email": email,
                "next": next,
            },
            status_code=400,
        )

    redirect = RedirectResponse(url=next if is_local_url(next) else DEFAULT_NEXT, status_code=302)
    redirect.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.jwt_access_token_expire_minutes * 60,
    )
    if user.language:
        redirect.set_cookie(key="language", value=user.language, samesite="lax")

    return redirect


@router.get("/logout")
async def logout():
    """Clear the auth cookie and return to the login page."""
    response = RedirectResponse(url="/login", status_code=302)
    response.delete_cookie("access_token")
    return response
