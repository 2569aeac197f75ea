"""Mailer: composes system messages and hands them to a transport adapter."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from markupsafe import Markup

from controlpanel.config import settings as app_settings
from controlpanel.forms.mail_settings import MailSettings
from controlpanel.mail.message import MailMessage
from controlpanel.mail.transport_adapters import TransportAdapter, transport_adapters
from controlpanel.services.i18n_service import t

logger = logging.getLogger(__name__)

TEMPLATES_PATH = Path(__file__).resolve().parent.parent / "templates"
DEFAULT_LAYOUT = "emails/_layout.html"


@dataclass(frozen=True)
class SystemMessage:
    """A message the system knows how to compose by key."""

    key: str
    subject: str
    template: str


SYSTEM_MESSAGES = {
    "test_email": SystemMessage(
        key="test_email",
        subject="emails.test_email.subject",
        template="emails/test_email.html",
    ),
}


class Mailer:
    """Sends system messages using the configured sender and transport."""

    def __init__(self, settings: MailSettings, adapter: TransportAdapter):
        self.settings = settings
        self.adapter = adapter
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_PATH)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.jinja_env.globals["t"] = t

    @classmethod
    def from_settings(cls, settings: MailSettings) -> "Mailer":
        """Build a mailer whose transport is the one named by the settings."""
        adapter = transport_adapters.create(settings.transport_type, settings.transport_settings)
        return cls(settings, adapter)

    def _render_template(self, template_name: str, context: dict[str, Any]) -> str:
        template = self.jinja_env.get_template(template_name)
        return template.render(**context)

    def _layout_name(self) -> str:
        if self.settings.template:
            try:
                self.jinja_env.get_template(self.settings.template)
                return self.settings.template
            except TemplateNotFound:
                logger.warning(f"Email template '{self.settings.template}' not found, using the default layout")
        return DEFAULT_LAYOUT

    def compose_from_key(self, key: str, variables: dict[str, Any] | None = None, lang: str = "en") -> MailMessage:
        """Compose one of the SYSTEM_MESSAGES.

        Raises:
            KeyError: If no system message exists for the key
        """
        system_message = SYSTEM_MESSAGES[key]
        context = {"app_name": app_settings.app_name, "lang": lang, **(variables or {})}

        subject = t(system_message.subject, lang, app_name=app_settings.app_name)
        body = self._render_template(system_message.template, context)
        html_body = self._render_template(
            self._layout_name(),
            {**context, "subject": subject, "body": Markup(body)},
        )

        return MailMessage(
            subject=subject,
            html_body=html_body,
            from_email=self.settings.from_email,
            from_name=self.settings.from_name,
        )

    async def send(self, message: MailMessage) -> bool:
        """Send a message. Returns False (and logs) if the transport fails."""
        transport = self.adapter.type_key
        try:
            await self.adapter.send(message)
        except Exception as e:
            logger.error(f"Failed to send email via {transport} to {message.recipients}: {e}")
            return False

        logger.info(f"Email sent via {transport} to {message.recipients}: {message.subject}")
        return True
