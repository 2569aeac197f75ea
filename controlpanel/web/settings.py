"""System settings web routes.

Every route here requires an admin; the check is a router-level dependency
so it runs before any handler body.
"""

import logging
import re
import uuid

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from markupsafe import Markup
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import FormData

from controlpanel.database import get_db
from controlpanel.dependencies import get_current_site, require_admin
from controlpanel.exceptions import NotFoundException, ValidationException
from controlpanel.fields import field_types
from controlpanel.forms.mail_settings import MailSettings
from controlpanel.mail.mailer import Mailer
from controlpanel.mail.transport_adapters import TransportAdapter, transport_adapters
from controlpanel.models.global_set import GlobalSet
from controlpanel.models.info import Info
from controlpanel.models.site import Site
from controlpanel.models.user import User
from controlpanel.services.global_set_service import get_global_set_service
from controlpanel.services.i18n_service import t
from controlpanel.services.info_service import get_info_service
from controlpanel.services.system_settings_service import (
    EMAIL_SETTINGS_KEY,
    get_system_settings_service,
)
from controlpanel.services.volume_service import get_volume_service
from controlpanel.templates_config import templates
from controlpanel.tools import available_tools
from controlpanel.utils.request_context import get_current_language
from controlpanel.utils.timezones import timezone_options
from controlpanel.web.flash import set_error, set_notice
from controlpanel.web.helpers import (
    form_bool,
    form_str,
    nested_form_values,
    redirect_to_posted_url,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"], dependencies=[Depends(require_admin)])

SECRET_LABEL = re.compile(r"\b(key|password|secret)\b", re.IGNORECASE)
MASK_CHAR = "•"


# --- Index ---


@router.get("", response_class=HTMLResponse)
async def settings_index(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Settings index with the administrative tools."""
    volume_count = len(await get_volume_service().get_all_volumes(db))

    return templates.TemplateResponse(
        request,
        "settings/index.html",
        {
            "current_user": current_user,
            "tools": available_tools(volume_count),
        },
    )


# --- General settings ---


async def _render_general_settings(
    request: Request,
    db: AsyncSession,
    current_user: User,
    info: Info | None = None,
) -> HTMLResponse:
    """Render the general settings form; ``info`` carries a failed submission."""
    if info is None:
        info = await get_info_service().get_info(db)

    return templates.TemplateResponse(
        request,
        "settings/general.html",
        {
            "current_user": current_user,
            "info": info,
            "timezone_options": timezone_options(),
        },
    )


@router.get("/general", response_class=HTMLResponse)
async def general_settings(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """General settings page."""
    return await _render_general_settings(request, db, current_user)


@router.post("/general", response_class=HTMLResponse)
async def save_general_settings(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Save general settings."""
    lang = get_current_language()
    form = await request.form()
    info_service = get_info_service()

    info = await info_service.get_info(db)
    info.on = form_bool(form, "on")
    info.timezone = form_str(form, "timezone") or ""

    if not await info_service.save_info(db, info):
        set_error(request, t("settings.flash.general_save_failed", lang))
        # Send the info back to the template
        return await _render_general_settings(request, db, current_user, info=info)

    set_notice(request, t("settings.flash.general_saved", lang))
    return redirect_to_posted_url(form, "/settings/general")


# --- Email settings ---


def _transport_type_missing(type_key: str | None) -> str:
    return t("settings.email.transport_type_missing", get_current_language(), type=type_key or "")


def _create_adapter(mail_settings: MailSettings) -> TransportAdapter:
    """The adapter named by the settings.

    An unresolvable type falls back to the default adapter, which carries a
    visible error on "type" instead of failing the request. A blank type
    gets the default adapter without that error; the settings model already
    reports the blank value.
    """
    if transport_adapters.has(mail_settings.transport_type):
        return transport_adapters.create(mail_settings.transport_type, mail_settings.transport_settings)

    adapter = transport_adapters.create_default()
    if mail_settings.transport_type:
        logger.warning(f"Transport type '{mail_settings.transport_type}' could not be found, using the default")
        adapter.add_error("type", _transport_type_missing(mail_settings.transport_type))
    return adapter


def _is_fallback_adapter(mail_settings: MailSettings, adapter: TransportAdapter) -> bool:
    """Whether the adapter stands in for a blank or unresolvable transport type."""
    if not mail_settings.transport_type:
        return adapter.type_key == transport_adapters.default_type
    return adapter.has_errors("type")


def _create_mail_settings_from_post(form: FormData) -> MailSettings:
    """Build a MailSettings model from the posted form."""
    transport_type = form_str(form, "transport_type")
    transport_settings = nested_form_values(form, "transport_types").get(transport_type or "")

    return MailSettings(
        from_email=form_str(form, "from_email"),
        from_name=form_str(form, "from_name"),
        template=form_str(form, "template"),
        transport_type=transport_type,
        transport_settings=transport_settings if isinstance(transport_settings, dict) else {},
    )


def _validate_mail_settings(mail_settings: MailSettings) -> tuple[TransportAdapter, bool]:
    """Validate the settings and their adapter independently.

    Returns:
        Tuple of (adapter, both valid)
    """
    settings_valid = mail_settings.validate()

    if not transport_adapters.has(mail_settings.transport_type):
        if mail_settings.transport_type:
            mail_settings.add_error("transport_type", _transport_type_missing(mail_settings.transport_type))
        return _create_adapter(mail_settings), False

    adapter = _create_adapter(mail_settings)
    adapter_valid = adapter.validate()

    if settings_valid and adapter_valid:
        # Store the adapter's coerced values rather than the raw form strings
        mail_settings.transport_settings = adapter.to_dict()

    return adapter, settings_valid and adapter_valid


def settings_summary(mail_settings: MailSettings, adapter: TransportAdapter, lang: str = "en") -> Markup:
    """HTML list of the settings a test email was sent with.

    Adapter settings whose label (or name) mentions a key, password or secret
    are replaced by bullets of the same length.
    """
    lines = []

    for name in ("from_email", "from_name", "template"):
        value = getattr(mail_settings, name)
        if value:
            lines.append(Markup("<strong>{}:</strong> {}").format(mail_settings.get_attribute_label(name), value))

    lines.append(
        Markup("<strong>{}:</strong> {}").format(t("settings.email.transport_type", lang), adapter.display_name())
    )

    for name in adapter.settings_attributes():
        value = getattr(adapter, name)
        if not value:
            continue

        label = adapter.get_attribute_label(name)
        display = "Yes" if value is True else str(value)

        # Hide passwords/keys
        if SECRET_LABEL.search(label) or SECRET_LABEL.search(name.replace("_", " ")):
            display = MASK_CHAR * len(display)

        lines.append(Markup("<strong>{}:</strong> {}").format(label, display))

    return Markup("<br/>").join(lines)


async def _render_email_settings(
    request: Request,
    db: AsyncSession,
    current_user: User,
    mail_settings: MailSettings | None = None,
    adapter: TransportAdapter | None = None,
) -> HTMLResponse:
    """Render the email settings form; arguments carry a previous submission."""
    if mail_settings is None:
        mail_settings = await get_system_settings_service().get_email_settings(db)

    if adapter is None:
        adapter = _create_adapter(mail_settings)
    elif adapter.type_key != mail_settings.transport_type and not _is_fallback_adapter(mail_settings, adapter):
        raise ValidationException(
            [
                {
                    "field": "transport_type",
                    "message": t(
                        "settings.email.adapter_mismatch",
                        get_current_language(),
                        type=mail_settings.transport_type or "",
                    ),
                }
            ]
        )

    # Make sure the selected adapter's type is in the list
    adapter_types = transport_adapters.all_types()
    if type(adapter) not in adapter_types:
        adapter_types.append(type(adapter))

    all_adapters = []
    transport_type_options = []

    for adapter_type in adapter_types:
        if adapter_type is type(adapter) or adapter_type.is_selectable():
            all_adapters.append(adapter if adapter_type is type(adapter) else adapter_type())
            transport_type_options.append(
                {"value": adapter_type.type_key, "label": adapter_type.display_name()}
            )

    return templates.TemplateResponse(
        request,
        "settings/email.html",
        {
            "current_user": current_user,
            "mail_settings": mail_settings,
            "adapter": adapter,
            "transport_type_options": transport_type_options,
            "all_adapters": all_adapters,
        },
    )


@router.get("/email", response_class=HTMLResponse)
async def email_settings(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Email settings page."""
    return await _render_email_settings(request, db, current_user)


@router.post("/email", response_class=HTMLResponse)
async def save_email_settings(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Save email settings. Nothing is stored unless settings and adapter both validate."""
    lang = get_current_language()
    form = await request.form()

    mail_settings = _create_mail_settings_from_post(form)
    adapter, valid = _validate_mail_settings(mail_settings)

    if not valid:
        set_error(request, t("settings.flash.email_save_failed", lang))
        # Send the settings back to the template
        return await _render_email_settings(request, db, current_user, mail_settings, adapter)

    await get_system_settings_service().save_settings(db, EMAIL_SETTINGS_KEY, mail_settings.to_dict())
    set_notice(request, t("settings.flash.email_saved", lang))
    return redirect_to_posted_url(form, "/settings/email")


@router.post("/email/test", response_class=HTMLResponse)
async def test_email_settings(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Send a test email to the current user with the posted (unsaved) settings."""
    lang = get_current_language()
    form = await request.form()

    mail_settings = _create_mail_settings_from_post(form)
    adapter, valid = _validate_mail_settings(mail_settings)

    if valid:
        mailer = Mailer.from_settings(mail_settings)
        message = mailer.compose_from_key(
            "test_email",
            {"settings": settings_summary(mail_settings, adapter, lang)},
            lang,
        ).set_to(current_user)

        if await mailer.send(message):
            set_notice(request, t("settings.flash.test_email_sent", lang))
        else:
            set_error(request, t("settings.flash.test_email_failed", lang))
    else:
        set_error(request, t("settings.flash.email_invalid", lang))

    # Send the settings back to the template
    return await _render_email_settings(request, db, current_user, mail_settings, adapter)


# --- Global sets ---


@router.get("/globals", response_class=HTMLResponse)
async def globals_index(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """List of global sets."""
    global_sets = await get_global_set_service().get_all_sets(db)

    return templates.TemplateResponse(
        request,
        "settings/globals/index.html",
        {
            "current_user": current_user,
            "global_sets": global_sets,
        },
    )


def _render_global_set(
    request: Request,
    current_user: User,
    current_site: Site | None,
    global_set_id: uuid.UUID | None,
    global_set: GlobalSet,
) -> HTMLResponse:
    lang = get_current_language()

    if global_set.id:
        title = global_set.name
    else:
        title = t("settings.globals.create_title", lang)

    # Breadcrumbs
    crumbs = [
        {"label": t("nav.settings", lang), "url": "/settings"},
        {"label": t("nav.globals", lang), "url": "/settings/globals"},
    ]

    # Tabs
    tabs = {
        "settings": {"label": t("settings.globals.tab_settings", lang), "url": "#set-settings"},
        "fieldlayout": {"label": t("settings.globals.tab_field_layout", lang), "url": "#set-fieldlayout"},
    }

    return templates.TemplateResponse(
        request,
        "settings/globals/edit.html",
        {
            "current_user": current_user,
            "current_site": current_site,
            "global_set_id": global_set_id,
            "global_set": global_set,
            "title": title,
            "crumbs": crumbs,
            "tabs": tabs,
            "field_types": field_types,
        },
    )


@router.get("/globals/new", response_class=HTMLResponse)
async def new_global_set(
    request: Request,
    current_user: User = Depends(require_admin),
    current_site: Site | None = Depends(get_current_site),
):
    """Blank global set form."""
    global_set = GlobalSet(site_id=current_site.id if current_site else None)
    return _render_global_set(request, current_user, current_site, None, global_set)


@router.get("/globals/{global_set_id}", response_class=HTMLResponse)
async def edit_global_set(
    request: Request,
    global_set_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
    current_site: Site | None = Depends(get_current_site),
):
    """Global set edit form."""
    global_set = await get_global_set_service().get_set_by_id(db, global_set_id)
    if not global_set:
        raise NotFoundException("Global set")

    return _render_global_set(request, current_user, current_site, global_set_id, global_set)


@router.post("/globals", response_class=HTMLResponse)
async def save_global_set(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
    current_site: Site | None = Depends(get_current_site),
):
    """Create or update a global set and its field values."""
    lang = get_current_language()
    form = await request.form()
    service = get_global_set_service()

    global_set_id = None
    posted_id = form_str(form, "global_set_id")
    if posted_id:
        try:
            global_set_id = uuid.UUID(posted_id)
        except ValueError:
            raise NotFoundException("Global set") from None
        global_set = await service.get_set_by_id(db, global_set_id)
        if not global_set:
            raise NotFoundException("Global set")
    else:
        global_set = GlobalSet(site_id=current_site.id if current_site else None)

    global_set.name = (form_str(form, "name") or "").strip()
    global_set.handle = (form_str(form, "handle") or "").strip()

    field_values = nested_form_values(form, "fields")
    for layout_field in global_set.get_layout_fields():
        handle = layout_field.field.handle
        if handle in field_values:
            field_type = field_types.create(layout_field.field)
            global_set.set_field_value(handle, field_type.normalize_value(field_values[handle], global_set))

    if not await service.save_set(db, global_set):
        set_error(request, t("settings.flash.global_set_save_failed", lang))
        return _render_global_set(request, current_user, current_site, global_set_id, global_set)

    set_notice(request, t("settings.flash.global_set_saved", lang))
    return redirect_to_posted_url(form, f"/settings/globals/{global_set.id}")
