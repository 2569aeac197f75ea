"""Resend transport adapter."""

import asyncio
from typing import Any

import resend as resend_sdk
from pydantic import BaseModel, ConfigDict, Field

from controlpanel.exceptions import MailTransportError
from controlpanel.mail.message import MailMessage
from controlpanel.mail.transport_adapters.base import TransportAdapter, transport_adapters


class ResendSettings(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    api_key: str = Field(..., min_length=1, max_length=255)


@transport_adapters.register
class Resend(TransportAdapter):
    """Delivers mail through the Resend HTTP API."""

    type_key = "resend"
    name = "Resend"
    schema = ResendSettings
    labels = {"api_key": "API Key"}

    async def send(self, message: MailMessage) -> None:
        resend_sdk.api_key = self.api_key

        params: dict[str, Any] = {
            "from": message.from_address,
            "to": message.recipients,
            "subject": message.subject,
            "html": message.html_body,
        }
        if message.reply_to:
            params["reply_to"] = message.reply_to

        try:
            await asyncio.to_thread(resend_sdk.Emails.send, params)
        except Exception as e:
            raise MailTransportError(f"Resend delivery failed: {e}") from e
