"""Email settings form model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from controlpanel.forms.base import FormModel


class MailSettingsSchema(BaseModel):
    """Validation rules for the system email settings."""

    model_config = ConfigDict(str_strip_whitespace=True)

    from_email: EmailStr
    from_name: str = Field(..., min_length=1, max_length=255)
    template: str | None = Field(None, max_length=500)
    transport_type: str = Field(..., min_length=1, max_length=100)
    transport_settings: dict[str, Any] = Field(default_factory=dict)


class MailSettings(FormModel):
    """System email settings, persisted as the "email" settings category."""

    schema = MailSettingsSchema
    labels = {
        "from_email": "System Email Address",
        "from_name": "Sender Name",
        "template": "HTML Email Template",
        "transport_type": "Transport Type",
        "transport_settings": "Transport Settings",
    }

    from_email: str | None
    from_name: str | None
    template: str | None
    transport_type: str | None
    transport_settings: dict[str, Any]
