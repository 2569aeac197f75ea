"""Mail transport adapters.

Importing this package registers the built-in adapters.
"""

from controlpanel.mail.transport_adapters.base import (
    DEFAULT_TRANSPORT_TYPE,
    TransportAdapter,
    TransportAdapterRegistry,
    transport_adapters,
)
from controlpanel.mail.transport_adapters.sendmail import Sendmail
from controlpanel.mail.transport_adapters.smtp import Smtp
from controlpanel.mail.transport_adapters.gmail import Gmail
from controlpanel.mail.transport_adapters.resend_api import Resend
from controlpanel.mail.transport_adapters.log import LogTransport

__all__ = [
    "DEFAULT_TRANSPORT_TYPE",
    "TransportAdapter",
    "TransportAdapterRegistry",
    "transport_adapters",
    "Sendmail",
    "Smtp",
    "Gmail",
    "Resend",
    "LogTransport",
]
