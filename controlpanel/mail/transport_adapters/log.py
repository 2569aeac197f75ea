"""Log transport adapter for development environments."""

import logging

from pydantic import BaseModel

from controlpanel.mail.message import MailMessage
from controlpanel.mail.transport_adapters.base import TransportAdapter, transport_adapters

logger = logging.getLogger(__name__)


class LogSettings(BaseModel):
    pass


@transport_adapters.register
class LogTransport(TransportAdapter):
    """Writes messages to the application log instead of delivering them.

    Only usable through configuration, never offered in the settings form.
    """

    type_key = "log"
    name = "Log"
    selectable = False
    schema = LogSettings

    async def send(self, message: MailMessage) -> None:
        logger.info(f"Mail to {message.recipients} from {message.from_address}: {message.subject}")
        logger.debug(message.html_body)
