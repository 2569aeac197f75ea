"""Field rendering: turns a field (plus an optional element) into form markup.

``field_context`` resolves everything the wrapper template needs with
explicit defaults; ``render_field`` is exposed to templates and renders
``_includes/forms/field.html`` with that context.
"""

import uuid
from typing import Any

from jinja2 import pass_context
from jinja2.runtime import Context
from markupsafe import Markup

from controlpanel.fields import field_types
from controlpanel.models.field import Field, TranslationMethod
from controlpanel.services.i18n_service import t

FIELD_WRAPPER_TEMPLATE = "_includes/forms/field.html"

TRANSLATION_DESCRIPTION_KEYS = {
    TranslationMethod.SITE.value: "fields.translation.site",
    TranslationMethod.SITE_GROUP.value: "fields.translation.site_group",
    TranslationMethod.LANGUAGE.value: "fields.translation.language",
}


def field_context(
    field: Field,
    element: Any = None,
    *,
    static: bool = False,
    required: bool = False,
    site_id: uuid.UUID | None = None,
    current_site_id: uuid.UUID | None = None,
    language: str = "en",
) -> dict[str, Any] | None:
    """Build the wrapper context for one field.

    Args:
        field: The field to render
        element: The element whose value is shown; None renders the field's empty value
        static: Render read-only markup instead of an input
        required: Whether the field is required in its layout (ignored when static)
        site_id: Site to show translation info for; falls back to the element's
            site, then current_site_id
        current_site_id: The application's current site
        language: Language for labels and descriptions

    Returns:
        The template context, or None when there is nothing to render
    """
    field_type = field_types.create(field)

    if element is not None:
        value = field_type.normalize_value(element.get_field_value(field.handle), element)
    else:
        value = field_type.normalize_value(None)

    errors = element.get_errors(field.handle) if (not static and element is not None) else []

    instructions = t(field.instructions, language) if (not static and field.instructions) else None

    translatable = field.is_translatable(element)
    translation_description = None
    if translatable:
        key = TRANSLATION_DESCRIPTION_KEYS.get(field.translation_method)
        translation_description = t(key, language) if key else None

    localized = element.localized if element is not None else True
    resolved_site_id = None
    if translatable and localized:
        resolved_site_id = (
            site_id
            or (getattr(element, "site_id", None) if element is not None else None)
            or current_site_id
        )

    if static:
        body = field_type.static_html(value, element)
    else:
        body = field_type.input_html(value, element)

    if not instructions and not body:
        return None

    return {
        "label": t(field.name, language),
        "translatable": translatable,
        "translation_description": translation_description,
        "site_id": resolved_site_id,
        "required": False if static else required,
        "instructions": instructions,
        "id": field.handle,
        "errors": errors,
        "input": body,
        "field_attributes": {"data-type": type(field_type).__name__},
    }


@pass_context
def render_field(
    ctx: Context,
    field: Field,
    element: Any = None,
    static: bool = False,
    required: bool = False,
    site_id: uuid.UUID | None = None,
) -> Markup:
    """Template global: ``{{ render_field(field, element, static=true) }}``."""
    current_site = ctx.get("current_site")
    view = field_context(
        field,
        element,
        static=static,
        required=required,
        site_id=site_id,
        current_site_id=current_site.id if current_site is not None else None,
        language=ctx.get("current_language") or "en",
    )
    if view is None:
        return Markup("")

    template = ctx.environment.get_template(FIELD_WRAPPER_TEMPLATE)
    return Markup(template.render(**view))
