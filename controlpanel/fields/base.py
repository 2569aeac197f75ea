"""Field type base class and registry.

A field type knows how to normalize a stored value and how to render it,
either as an editable input or as read-only markup.
"""

from typing import Any, ClassVar, TypeVar

from markupsafe import Markup, escape

from controlpanel.exceptions import MissingComponentException
from controlpanel.models.field import Field

FieldTypeT = TypeVar("FieldTypeT", bound=type["FieldType"])


class FieldType:
    """Behaviour shared by every field type."""

    key: ClassVar[str]
    name: ClassVar[str]

    def __init__(self, field: Field):
        self.field = field
        self.settings: dict[str, Any] = dict(field.settings or {})

    @classmethod
    def display_name(cls) -> str:
        return cls.name

    @property
    def input_id(self) -> str:
        return self.field.handle

    @property
    def input_name(self) -> str:
        return f"fields[{self.field.handle}]"

    def normalize_value(self, value: Any, element: Any = None) -> Any:
        return value

    def input_html(self, value: Any, element: Any = None) -> Markup:
        raise NotImplementedError

    def static_html(self, value: Any, element: Any = None) -> Markup:
        """Read-only rendering; empty markup when there is no value."""
        if value is None or value == "":
            return Markup("")
        return Markup('<div class="static-value">{}</div>').format(value)

    @staticmethod
    def _attributes(**attributes: Any) -> Markup:
        """Render HTML attributes, skipping None/False and emitting bare True."""
        parts = []
        for name, value in attributes.items():
            if value is None or value is False:
                continue
            name = name.rstrip("_").replace("_", "-")
            if value is True:
                parts.append(str(escape(name)))
            else:
                parts.append(f'{escape(name)}="{escape(value)}"')
        return Markup(" ".join(parts))


class FieldTypeRegistry:
    """Maps field type keys to field type classes."""

    def __init__(self):
        self._types: dict[str, type[FieldType]] = {}

    def register(self, field_type: FieldTypeT) -> FieldTypeT:
        self._types[field_type.key] = field_type
        return field_type

    def get(self, key: str) -> type[FieldType]:
        try:
            return self._types[key]
        except KeyError:
            raise MissingComponentException("field type", key) from None

    def all_types(self) -> list[type[FieldType]]:
        return list(self._types.values())

    def create(self, field: Field) -> FieldType:
        """Instantiate the field type behind a field.

        Raises:
            MissingComponentException: If the field's type is not registered
        """
        return self.get(field.type)(field)


field_types = FieldTypeRegistry()
