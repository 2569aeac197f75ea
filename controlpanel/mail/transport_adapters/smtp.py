"""SMTP transport adapter."""

import logging
from typing import Literal

import aiosmtplib
from pydantic import BaseModel, ConfigDict, Field

from controlpanel.exceptions import MailTransportError
from controlpanel.mail.message import MailMessage
from controlpanel.mail.transport_adapters.base import TransportAdapter, transport_adapters

logger = logging.getLogger(__name__)


class SmtpSettings(BaseModel):
    """Validation rules for SMTP settings."""

    model_config = ConfigDict(str_strip_whitespace=True)

    host: str = Field(..., min_length=1, max_length=255)
    port: int = Field(587, ge=1, le=65535)
    use_authentication: bool = False
    username: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=255)
    encryption_method: Literal["", "ssl", "tls"] = ""
    timeout: int = Field(10, ge=1, le=300)


@transport_adapters.register
class Smtp(TransportAdapter):
    """Delivers mail to an SMTP server."""

    type_key = "smtp"
    name = "SMTP"
    schema = SmtpSettings
    labels = {
        "host": "Hostname",
        "port": "Port",
        "use_authentication": "Use authentication",
        "username": "Username",
        "password": "Password",
        "encryption_method": "Encryption Method",
        "timeout": "Timeout",
    }

    def check(self) -> None:
        if self.use_authentication:
            for attribute in ("username", "password"):
                if not getattr(self, attribute):
                    self.add_error(attribute, f"{self.get_attribute_label(attribute)} cannot be blank.")

    def _connection_kwargs(self) -> dict:
        # ssl = implicit TLS on connect, tls = STARTTLS upgrade
        kwargs = {
            "hostname": self.host,
            "port": self.port,
            "timeout": self.timeout,
            "use_tls": self.encryption_method == "ssl",
            "start_tls": self.encryption_method == "tls",
        }
        if self.use_authentication:
            kwargs["username"] = self.username
            kwargs["password"] = self.password
        return kwargs

    async def send(self, message: MailMessage) -> None:
        try:
            await aiosmtplib.send(
                message.to_mime(),
                recipients=message.recipients,
                **self._connection_kwargs(),
            )
        except aiosmtplib.SMTPException as e:
            raise MailTransportError(f"SMTP delivery via {self.host}:{self.port} failed: {e}") from e
