"""Transport adapter base class and registry.

A transport adapter is a pluggable strategy for delivering mail. Each
variant owns its settings (validated like any form model) and is looked up
by its type key, e.g. "smtp".
"""

import logging
from typing import Any, ClassVar, TypeVar

from controlpanel.exceptions import MissingComponentException
from controlpanel.forms.base import FormModel
from controlpanel.mail.message import MailMessage

logger = logging.getLogger(__name__)

DEFAULT_TRANSPORT_TYPE = "sendmail"

AdapterT = TypeVar("AdapterT", bound=type["TransportAdapter"])


class TransportAdapter(FormModel):
    """Base class for mail transport adapters."""

    type_key: ClassVar[str]
    name: ClassVar[str]
    selectable: ClassVar[bool] = True

    @classmethod
    def display_name(cls) -> str:
        return cls.name

    @classmethod
    def is_selectable(cls) -> bool:
        """Whether the type may be chosen in the email settings form."""
        return cls.selectable

    def settings_attributes(self) -> list[str]:
        """Names of the attributes that make up this adapter's settings."""
        return self.attribute_names()

    async def send(self, message: MailMessage) -> None:
        """Deliver the message; raise MailTransportError on failure."""
        raise NotImplementedError


class TransportAdapterRegistry:
    """Maps transport type keys to adapter classes."""

    def __init__(self, default_type: str = DEFAULT_TRANSPORT_TYPE):
        self.default_type = default_type
        self._types: dict[str, type[TransportAdapter]] = {}

    def register(self, adapter_class: AdapterT) -> AdapterT:
        """Register an adapter class under its type key (usable as a decorator)."""
        self._types[adapter_class.type_key] = adapter_class
        return adapter_class

    def has(self, type_key: str | None) -> bool:
        return type_key in self._types

    def get(self, type_key: str | None) -> type[TransportAdapter]:
        try:
            return self._types[type_key]
        except KeyError:
            raise MissingComponentException("transport adapter", type_key) from None

    def all_types(self) -> list[type[TransportAdapter]]:
        """Every registered adapter class, in registration order."""
        return list(self._types.values())

    def create(self, type_key: str | None, settings: dict[str, Any] | None = None) -> TransportAdapter:
        """Instantiate an adapter, applying known settings and ignoring the rest.

        Raises:
            MissingComponentException: If no adapter is registered for the key
        """
        adapter = self.get(type_key)()
        adapter.set_attributes(settings)
        return adapter

    def create_default(self) -> TransportAdapter:
        return self.create(self.default_type)


# Registry of built-in and plugin adapters
transport_adapters = TransportAdapterRegistry()
