"""Sendmail transport adapter."""

import asyncio
import shlex

from pydantic import BaseModel, ConfigDict, Field

from controlpanel.exceptions import MailTransportError
from controlpanel.mail.message import MailMessage
from controlpanel.mail.transport_adapters.base import TransportAdapter, transport_adapters

DEFAULT_COMMAND = "/usr/sbin/sendmail -t -i"


class SendmailSettings(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    command: str = Field(DEFAULT_COMMAND, min_length=1, max_length=500)


@transport_adapters.register
class Sendmail(TransportAdapter):
    """Pipes messages to the local sendmail binary."""

    type_key = "sendmail"
    name = "Sendmail"
    schema = SendmailSettings
    labels = {"command": "Sendmail Command"}

    async def send(self, message: MailMessage) -> None:
        args = shlex.split(self.command)
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise MailTransportError(f"Could not run “{self.command}”: {e}") from e

        _, stderr = await process.communicate(message.to_mime().as_bytes())
        if process.returncode != 0:
            raise MailTransportError(
                f"“{self.command}” exited with {process.returncode}: {stderr.decode(errors='replace').strip()}"
            )
