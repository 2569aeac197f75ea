"""Form models: attribute bags with labels and per-attribute validation errors.

Form models hold raw submitted values (so a failed submission can be echoed
back to the page untouched) and validate them through a pydantic schema.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError

GENERAL_ERROR = "general"

# pydantic error types that mean "nothing usable was submitted"
_BLANK_ERROR_TYPES = {"missing", "string_too_short"}


def generate_attribute_label(name: str) -> str:
    """Turn an attribute name into a human label ("api_key" -> "Api Key")."""
    return " ".join(part.capitalize() for part in name.split("_") if part)


class ErrorsMixin:
    """Per-attribute error bookkeeping shared by form models and ORM models."""

    labels: ClassVar[dict[str, str]] = {}

    @property
    def errors(self) -> dict[str, list[str]]:
        """All errors, keyed by attribute name."""
        try:
            return self._errors
        except AttributeError:
            self._errors: dict[str, list[str]] = {}
            return self._errors

    def add_error(self, attribute: str, message: str) -> None:
        self.errors.setdefault(attribute, []).append(message)

    def get_errors(self, attribute: str | None = None) -> list[str]:
        """Errors for one attribute, or every error when no attribute is given."""
        if attribute is None:
            return [message for messages in self.errors.values() for message in messages]
        return list(self.errors.get(attribute, []))

    def first_error(self, attribute: str) -> str | None:
        messages = self.errors.get(attribute)
        return messages[0] if messages else None

    def has_errors(self, attribute: str | None = None) -> bool:
        if attribute is None:
            return any(self.errors.values())
        return bool(self.errors.get(attribute))

    def clear_errors(self, attribute: str | None = None) -> None:
        if attribute is None:
            self.errors.clear()
        else:
            self.errors.pop(attribute, None)

    def get_attribute_label(self, attribute: str) -> str:
        return self.labels.get(attribute) or generate_attribute_label(attribute)


class FormModel(ErrorsMixin):
    """A named set of attributes validated by a pydantic schema.

    Subclasses set ``schema``; its fields define the attribute names and their
    defaults. Cross-attribute rules go in ``check()``, which runs after the
    schema has accepted the values.
    """

    schema: ClassVar[type[BaseModel]]

    def __init__(self, **values: Any):
        for name in self.attribute_names():
            if name in values:
                setattr(self, name, values[name])
            else:
                setattr(self, name, self._default_for(name))

    @classmethod
    def attribute_names(cls) -> list[str]:
        return list(cls.schema.model_fields)

    @classmethod
    def _default_for(cls, name: str) -> Any:
        field = cls.schema.model_fields[name]
        if field.is_required():
            return None
        return field.get_default(call_default_factory=True)

    def set_attributes(self, values: dict[str, Any] | None, *, safe_only: bool = True) -> None:
        """Assign known attributes from a mapping; unknown keys are ignored."""
        names = set(self.attribute_names())
        for key, value in (values or {}).items():
            if key in names or not safe_only:
                setattr(self, key, value)

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.attribute_names()}

    def validate(self) -> bool:
        """Validate the current values, replacing any previous errors.

        On success the coerced values are written back onto the model.
        """
        self.clear_errors()
        # Blank inputs count as "not submitted" so schema defaults apply
        submitted = {name: value for name, value in self.to_dict().items() if value is not None and value != ""}

        try:
            validated = self.schema.model_validate(submitted)
        except ValidationError as exc:
            for error in exc.errors():
                attribute = str(error["loc"][0]) if error["loc"] else GENERAL_ERROR
                self.add_error(attribute, self._format_error(attribute, error))
            return False

        for name in self.attribute_names():
            setattr(self, name, getattr(validated, name))

        self.check()
        return not self.has_errors()

    def check(self) -> None:
        """Hook for rules that span several attributes."""

    def _format_error(self, attribute: str, error: dict[str, Any]) -> str:
        label = self.get_attribute_label(attribute)
        error_type = error.get("type", "")

        if error_type in _BLANK_ERROR_TYPES or error.get("input") == "":
            return f"{label} cannot be blank."
        if error_type in ("int_parsing", "int_type", "int_from_float"):
            return f"{label} must be an integer."
        if error_type in ("greater_than_equal", "less_than_equal"):
            return f"{label} is out of range."
        if error_type == "literal_error":
            return f"{label} is invalid."
        if error_type == "value_error" and "email" in error.get("msg", ""):
            return f"{label} is not a valid email address."

        return f"{label}: {error.get('msg', 'invalid value')}"
