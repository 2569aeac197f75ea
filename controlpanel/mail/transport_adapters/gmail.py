"""Gmail transport adapter."""

import aiosmtplib
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from controlpanel.exceptions import MailTransportError
from controlpanel.mail.message import MailMessage
from controlpanel.mail.transport_adapters.base import TransportAdapter, transport_adapters

GMAIL_HOST = "smtp.gmail.com"
GMAIL_PORT = 465


class GmailSettings(BaseModel):
    """Validation rules for Gmail settings."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: EmailStr
    password: str = Field(..., min_length=1, max_length=255)
    timeout: int = Field(10, ge=1, le=300)


@transport_adapters.register
class Gmail(TransportAdapter):
    """Delivers mail through Gmail's SMTP relay using an app password."""

    type_key = "gmail"
    name = "Gmail"
    schema = GmailSettings
    labels = {
        "username": "Username",
        "password": "Password",
        "timeout": "Timeout",
    }

    async def send(self, message: MailMessage) -> None:
        try:
            await aiosmtplib.send(
                message.to_mime(),
                recipients=message.recipients,
                hostname=GMAIL_HOST,
                port=GMAIL_PORT,
                username=self.username,
                password=self.password,
                use_tls=True,
                timeout=self.timeout,
            )
        except aiosmtplib.SMTPException as e:
            raise MailTransportError(f"Gmail delivery failed: {e}") from e
