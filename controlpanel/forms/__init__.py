"""Form models backing the control panel settings pages."""

from controlpanel.forms.base import ErrorsMixin, FormModel, generate_attribute_label
from controlpanel.forms.mail_settings import MailSettings, MailSettingsSchema

__all__ = [
    "ErrorsMixin",
    "FormModel",
    "generate_attribute_label",
    "MailSettings",
    "MailSettingsSchema",
]
