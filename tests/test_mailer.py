import pytest
from markupsafe import Markup

from controlpanel.exceptions import MailTransportError, MissingComponentException
from controlpanel.forms import MailSettings
from controlpanel.mail.mailer import Mailer
from controlpanel.mail.transport_adapters import LogTransport, Smtp


def _settings(**overrides):
    values = {
        "from_email": "site@example.com",
        "from_name": "My Site",
        "transport_type": "log",
        "transport_settings": {},
    }
    values.update(overrides)
    return MailSettings(**values)


class FailingTransport(LogTransport):
    async def send(self, message):
        raise MailTransportError("connection refused")


def test_from_settings_uses_named_transport():
    mailer = Mailer.from_settings(_settings(transport_type="smtp", transport_settings={"host": "mail.example.com"}))

    assert isinstance(mailer.adapter, Smtp)
    assert mailer.adapter.host == "mail.example.com"


def test_from_settings_unknown_transport():
    with pytest.raises(MissingComponentException):
        Mailer.from_settings(_settings(transport_type="nope"))


def test_compose_test_email():
    mailer = Mailer(_settings(), LogTransport())
    summary = Markup("<strong>Sender Name:</strong> My Site")

    message = mailer.compose_from_key("test_email", {"settings": summary}).set_to("admin@example.com")

    assert message.subject == "This is a test email from Control Panel"
    assert message.from_address == "My Site <site@example.com>"
    assert message.recipients == ["admin@example.com"]
    assert "Congratulations! Your email settings work." in message.html_body
    assert "<strong>Sender Name:</strong> My Site" in message.html_body


def test_compose_escapes_plain_variables():
    mailer = Mailer(_settings(), LogTransport())

    message = mailer.compose_from_key("test_email", {"settings": "<script>"})

    assert "<script>" not in message.html_body
    assert "&lt;script&gt;" in message.html_body


def test_missing_custom_template_falls_back_to_default_layout():
    mailer = Mailer(_settings(template="emails/missing.html"), LogTransport())

    message = mailer.compose_from_key("test_email", {"settings": ""})

    assert "Congratulations!" in message.html_body


def test_unknown_message_key():
    mailer = Mailer(_settings(), LogTransport())

    with pytest.raises(KeyError):
        mailer.compose_from_key("no_such_message")


async def test_send_returns_true_on_success():
    mailer = Mailer(_settings(), LogTransport())
    message = mailer.compose_from_key("test_email", {"settings": ""}).set_to("admin@example.com")

    assert await mailer.send(message) is True


async def test_send_returns_false_when_transport_fails():
    mailer = Mailer(_settings(), FailingTransport())
    message = mailer.compose_from_key("test_email", {"settings": ""}).set_to("admin@example.com")

    assert await mailer.send(message) is False
