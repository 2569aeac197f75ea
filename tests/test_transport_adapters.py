import logging

import pytest

from controlpanel.exceptions import MailTransportError, MissingComponentException
from controlpanel.mail.message import MailMessage
from controlpanel.mail.transport_adapters import (
    DEFAULT_TRANSPORT_TYPE,
    LogTransport,
    Sendmail,
    Smtp,
    TransportAdapter,
    TransportAdapterRegistry,
    transport_adapters,
)


def _message():
    return MailMessage(
        subject="Hello",
        html_body="<p>Hi</p>",
        from_email="site@example.com",
        from_name="My Site",
    ).set_to("someone@example.com")


def test_builtin_types_are_registered():
    keys = [adapter.type_key for adapter in transport_adapters.all_types()]

    assert keys[:4] == ["sendmail", "smtp", "gmail", "resend"]
    assert "log" in keys
    assert DEFAULT_TRANSPORT_TYPE == "sendmail"


def test_create_applies_known_settings():
    adapter = transport_adapters.create("smtp", {"host": "mail.example.com", "port": 25, "unknown": "x"})

    assert isinstance(adapter, Smtp)
    assert adapter.host == "mail.example.com"
    assert adapter.port == 25
    assert not hasattr(adapter, "unknown")


def test_unknown_type_raises_missing_component():
    with pytest.raises(MissingComponentException) as exc_info:
        transport_adapters.create("carrier_pigeon")

    assert exc_info.value.status_code == 400
    assert "carrier_pigeon" in exc_info.value.message


def test_create_default():
    assert isinstance(transport_adapters.create_default(), Sendmail)


def test_log_transport_is_not_selectable():
    assert not LogTransport.is_selectable()
    assert Smtp.is_selectable()


def test_registry_accepts_plugin_adapters():
    registry = TransportAdapterRegistry(default_type="log")

    @registry.register
    class Plugin(LogTransport):
        type_key = "plugin"
        name = "Plugin"

    assert registry.has("plugin")
    assert not registry.has(None)
    assert registry.get("plugin") is Plugin
    assert registry.all_types() == [Plugin]


def test_settings_attributes_follow_schema():
    assert Smtp().settings_attributes() == [
        "host",
        "port",
        "use_authentication",
        "username",
        "password",
        "encryption_method",
        "timeout",
    ]


async def test_log_transport_logs_message(caplog):
    with caplog.at_level(logging.INFO, logger="controlpanel.mail.transport_adapters.log"):
        await LogTransport().send(_message())

    assert "someone@example.com" in caplog.text
    assert "Hello" in caplog.text


async def test_sendmail_reports_missing_binary():
    adapter = Sendmail()
    adapter.command = "/nonexistent/sendmail -t"

    with pytest.raises(MailTransportError):
        await adapter.send(_message())


async def test_base_adapter_send_is_abstract():
    class Bare(TransportAdapter):
        type_key = "bare"
        name = "Bare"
        schema = LogTransport.schema

    with pytest.raises(NotImplementedError):
        await Bare().send(_message())


def test_message_addresses():
    message = _message()

    assert message.recipients == ["someone@example.com"]
    assert message.from_address == "My Site <site@example.com>"

    mime = message.to_mime()
    assert mime["To"] == "someone@example.com"
    assert mime["Subject"] == "Hello"
