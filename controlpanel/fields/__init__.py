"""Content field types.

Importing this package registers the built-in field types.
"""

from controlpanel.fields.base import FieldType, FieldTypeRegistry, field_types
from controlpanel.fields.standard import Dropdown, Lightswitch, Number, PlainText

__all__ = [
    "FieldType",
    "FieldTypeRegistry",
    "field_types",
    "PlainText",
    "Number",
    "Lightswitch",
    "Dropdown",
]
