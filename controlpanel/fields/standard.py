"""Built-in field types."""

from decimal import Decimal, InvalidOperation
from typing import Any

from markupsafe import Markup

from controlpanel.fields.base import FieldType, field_types


@field_types.register
class PlainText(FieldType):
    """Single or multi-line text."""

    key = "plain_text"
    name = "Plain Text"

    def normalize_value(self, value: Any, element: Any = None) -> Any:
        if value is None:
            return ""
        return str(value)

    def input_html(self, value: Any, element: Any = None) -> Markup:
        attributes = self._attributes(
            id=self.input_id,
            name=self.input_name,
            placeholder=self.settings.get("placeholder") or None,
            maxlength=self.settings.get("char_limit") or None,
        )
        if self.settings.get("multiline"):
            rows = self.settings.get("initial_rows", 4)
            return Markup('<textarea class="text fullwidth" rows="{}" {}>{}</textarea>').format(
                rows, attributes, value or ""
            )
        return Markup('<input type="text" class="text fullwidth" {} value="{}">').format(
            attributes, value or ""
        )


@field_types.register
class Number(FieldType):
    """A numeric value with optional bounds."""

    key = "number"
    name = "Number"

    def normalize_value(self, value: Any, element: Any = None) -> Any:
        if value is None or value == "":
            return self.settings.get("default")
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return None
        decimals = self.settings.get("decimals", 0)
        return int(number) if not decimals else float(round(number, decimals))

    def input_html(self, value: Any, element: Any = None) -> Markup:
        decimals = self.settings.get("decimals", 0)
        attributes = self._attributes(
            id=self.input_id,
            name=self.input_name,
            min=self.settings.get("min"),
            max=self.settings.get("max"),
            step="any" if decimals else "1",
        )
        return Markup('<input type="number" class="text" {} value="{}">').format(
            attributes, "" if value is None else value
        )


@field_types.register
class Lightswitch(FieldType):
    """An on/off toggle."""

    key = "lightswitch"
    name = "Lightswitch"

    def normalize_value(self, value: Any, element: Any = None) -> Any:
        if value is None:
            return bool(self.settings.get("default", False))
        if isinstance(value, str):
            return value.lower() in ("1", "true", "on", "yes")
        return bool(value)

    def input_html(self, value: Any, element: Any = None) -> Markup:
        checkbox = self._attributes(
            type="checkbox",
            id=self.input_id,
            name=self.input_name,
            value="1",
            checked=bool(value),
        )
        return Markup('<input type="hidden" name="{}" value=""><input class="lightswitch" {}>').format(
            self.input_name, checkbox
        )

    def static_html(self, value: Any, element: Any = None) -> Markup:
        state = "on" if value else "off"
        return Markup('<div class="lightswitch {} disabled">{}</div>').format(state, "Yes" if value else "No")


@field_types.register
class Dropdown(FieldType):
    """One choice from a fixed list of options."""

    key = "dropdown"
    name = "Dropdown"

    @property
    def options(self) -> list[dict[str, Any]]:
        return list(self.settings.get("options", []))

    def normalize_value(self, value: Any, element: Any = None) -> Any:
        values = [str(option.get("value")) for option in self.options]
        if value is not None and str(value) in values:
            return str(value)
        for option in self.options:
            if option.get("default"):
                return str(option.get("value"))
        return values[0] if values else None

    def input_html(self, value: Any, element: Any = None) -> Markup:
        options = Markup("").join(
            Markup("<option {}>{}</option>").format(
                self._attributes(
                    value=str(option.get("value")),
                    selected=str(option.get("value")) == str(value),
                ),
                option.get("label", option.get("value")),
            )
            for option in self.options
        )
        return Markup('<div class="select"><select {}>{}</select></div>').format(
            self._attributes(id=self.input_id, name=self.input_name), options
        )

    def static_html(self, value: Any, element: Any = None) -> Markup:
        for option in self.options:
            if str(option.get("value")) == str(value):
                return Markup('<div class="static-value">{}</div>').format(option.get("label", value))
        return Markup("")
