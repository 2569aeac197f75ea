import uuid
from types import SimpleNamespace

import pytest

from controlpanel.exceptions import MissingComponentException
from controlpanel.models import Field, GlobalSet
from controlpanel.templates_config import templates
from controlpanel.web.fields import field_context


def _field(**overrides):
    values = {
        "name": "Tagline",
        "handle": "tagline",
        "instructions": None,
        "type": "plain_text",
        "translation_method": "none",
        "settings": {},
    }
    values.update(overrides)
    return Field(**values)


def _global_set(**overrides):
    values = {"name": "Footer", "handle": "footer", "content": {}, "site_id": None}
    values.update(overrides)
    return GlobalSet(**values)


class UnlocalizedElement:
    localized = False
    site_id = uuid.uuid4()

    def get_field_value(self, handle):
        return "value"

    def get_errors(self, attribute=None):
        return []


def test_input_context_defaults():
    context = field_context(_field())

    assert context["label"] == "Tagline"
    assert context["id"] == "tagline"
    assert context["required"] is False
    assert context["translatable"] is False
    assert context["translation_description"] is None
    assert context["site_id"] is None
    assert context["instructions"] is None
    assert context["errors"] == []
    assert context["field_attributes"] == {"data-type": "PlainText"}
    assert 'name="fields[tagline]"' in context["input"]


def test_value_and_errors_come_from_element():
    element = _global_set(content={"tagline": "Hello <world>"})
    element.add_error("tagline", "Tagline is too long.")

    context = field_context(_field(), element, required=True)

    assert 'value="Hello &lt;world&gt;"' in context["input"]
    assert context["errors"] == ["Tagline is too long."]
    assert context["required"] is True


def test_static_never_required_and_hides_errors_and_instructions():
    element = _global_set(content={"tagline": "Hello"})
    element.add_error("tagline", "Broken.")

    context = field_context(_field(instructions="Shown on every page."), element, static=True, required=True)

    assert context["required"] is False
    assert context["errors"] == []
    assert context["instructions"] is None
    assert 'class="static-value"' in context["input"]


def test_static_with_no_value_renders_nothing():
    assert field_context(_field(instructions="Help text"), static=True) is None
    assert field_context(_field(), _global_set(), static=True) is None


def test_instructions_shown_for_inputs():
    context = field_context(_field(instructions="Shown on every page."))

    assert context["instructions"] == "Shown on every page."


@pytest.mark.parametrize(
    "method, description",
    [
        ("site", "This field is translated for each site."),
        ("siteGroup", "This field is translated for each site group."),
        ("language", "This field is translated for each language."),
    ],
)
def test_translation_description(method, description):
    context = field_context(_field(translation_method=method))

    assert context["translatable"] is True
    assert context["translation_description"] == description


def test_site_id_falls_back_to_element_then_current_site():
    element_site = uuid.uuid4()
    current_site = uuid.uuid4()
    explicit_site = uuid.uuid4()
    field = _field(translation_method="site")

    assert field_context(field, _global_set(site_id=element_site), current_site_id=current_site)["site_id"] == element_site
    assert field_context(field, _global_set(), current_site_id=current_site)["site_id"] == current_site
    assert field_context(field, site_id=explicit_site, current_site_id=current_site)["site_id"] == explicit_site


def test_site_id_omitted_for_untranslated_or_unlocalized():
    current_site = uuid.uuid4()

    assert field_context(_field(), _global_set(), current_site_id=current_site)["site_id"] is None
    context = field_context(_field(translation_method="site"), UnlocalizedElement(), current_site_id=current_site)
    assert context["site_id"] is None


def test_other_field_types():
    lightswitch = field_context(_field(type="lightswitch", handle="enabled"), _global_set(content={"enabled": True}))
    assert lightswitch["field_attributes"] == {"data-type": "Lightswitch"}
    assert "checked" in lightswitch["input"]

    dropdown = _field(
        type="dropdown",
        handle="size",
        settings={"options": [{"value": "s", "label": "Small"}, {"value": "l", "label": "Large", "default": True}]},
    )
    context = field_context(dropdown)
    assert '<option value="l" selected>Large</option>' in context["input"]

    static = field_context(dropdown, _global_set(content={"size": "s"}), static=True)
    assert "Small" in static["input"]


def test_unknown_field_type():
    with pytest.raises(MissingComponentException):
        field_context(_field(type="matrix"))


def test_render_field_wrapper_markup():
    site = SimpleNamespace(id=uuid.uuid4())
    template = templates.env.from_string("{{ render_field(field, element, required=true) }}")

    html = template.render(
        field=_field(instructions="Shown on every page.", translation_method="site"),
        element=_global_set(content={"tagline": "Hi"}),
        current_site=site,
        current_language="en",
    )

    assert 'id="tagline-field"' in html
    assert 'data-type="PlainText"' in html
    assert 'class="required"' in html
    assert "Shown on every page." in html
    assert f'data-site-id="{site.id}"' in html
    assert "This field is translated for each site." in html


def test_render_field_outputs_nothing_when_empty():
    template = templates.env.from_string("[{{ render_field(field, static=true) }}]")

    assert template.render(field=_field(), current_language="en") == "[]"
