import pytest
from sqlalchemy import select

from controlpanel.database import async_session_factory
from controlpanel.exceptions import MailTransportError, ValidationException
from controlpanel.forms import MailSettings
from controlpanel.mail.transport_adapters import Resend, Sendmail, Smtp
from controlpanel.models import SystemSettings
from controlpanel.services.system_settings_service import EMAIL_SETTINGS_KEY, get_system_settings_service
from controlpanel.web.settings import _render_email_settings, settings_summary

SMTP_FORM = {
    "from_email": "site@example.com",
    "from_name": "My Site",
    "template": "",
    "transport_type": "smtp",
    "transport_types[smtp][host]": "mail.example.com",
    "transport_types[smtp][port]": "2525",
    "transport_types[smtp][use_authentication]": "",
    "transport_types[smtp][username]": "",
    "transport_types[smtp][password]": "",
    "transport_types[smtp][encryption_method]": "tls",
    "transport_types[smtp][timeout]": "10",
    "transport_types[sendmail][command]": "/usr/sbin/sendmail -bs",
}


async def _stored_email_settings():
    async with async_session_factory() as session:
        row = (
            await session.execute(select(SystemSettings).where(SystemSettings.key == EMAIL_SETTINGS_KEY))
        ).scalar_one_or_none()
        return row.value if row else None


async def _store_email_settings(values):
    async with async_session_factory() as session:
        await get_system_settings_service().save_settings(session, EMAIL_SETTINGS_KEY, values)
        await session.commit()


@pytest.fixture
def sent_messages(monkeypatch):
    sent = []

    async def fake_send(self, message):
        sent.append(message)

    monkeypatch.setattr(Smtp, "send", fake_send)
    return sent


async def test_email_settings_page_uses_config_defaults(admin_client):
    response = await admin_client.get("/settings/email")

    assert response.status_code == 200
    assert 'value="system@example.com"' in response.text
    assert '<option value="sendmail" selected>Sendmail</option>' in response.text
    assert '<option value="smtp">SMTP</option>' in response.text
    assert '<option value="log"' not in response.text
    assert 'name="transport_types[smtp][host]"' in response.text


async def test_save_email_settings(admin_client):
    response = await admin_client.post("/settings/email", data=SMTP_FORM)

    assert response.status_code == 302
    assert response.headers["location"] == "/settings/email"

    stored = await _stored_email_settings()
    assert stored["from_email"] == "site@example.com"
    assert stored["transport_type"] == "smtp"
    assert stored["transport_settings"]["host"] == "mail.example.com"
    assert stored["transport_settings"]["port"] == 2525
    assert stored["transport_settings"]["use_authentication"] is False
    assert "command" not in stored["transport_settings"]

    page = await admin_client.get("/settings/email")
    assert "Email settings saved." in page.text
    assert '<option value="smtp" selected>SMTP</option>' in page.text
    assert 'value="mail.example.com"' in page.text


async def test_invalid_adapter_settings_are_not_saved(admin_client):
    form = {**SMTP_FORM, "transport_types[smtp][host]": ""}

    response = await admin_client.post("/settings/email", data=form)

    assert response.status_code == 200
    assert "Couldn’t save email settings." in response.text
    assert "Hostname cannot be blank." in response.text
    assert 'value="2525"' in response.text
    assert await _stored_email_settings() is None


async def test_invalid_settings_are_not_saved(admin_client):
    form = {**SMTP_FORM, "from_email": "nope"}

    response = await admin_client.post("/settings/email", data=form)

    assert response.status_code == 200
    assert "System Email Address is not a valid email address." in response.text
    assert await _stored_email_settings() is None


async def test_unknown_posted_transport_type(admin_client):
    form = {**SMTP_FORM, "transport_type": "carrier_pigeon"}

    response = await admin_client.post("/settings/email", data=form)

    assert response.status_code == 200
    assert "The transport type “carrier_pigeon” could not be found." in response.text
    assert '<option value="sendmail" selected>Sendmail</option>' in response.text
    assert await _stored_email_settings() is None


async def test_stored_unknown_transport_type_falls_back(admin_client):
    await _store_email_settings(
        {"from_email": "site@example.com", "from_name": "My Site", "transport_type": "mandrill", "transport_settings": {}}
    )

    response = await admin_client.get("/settings/email")

    assert response.status_code == 200
    assert "The transport type “mandrill” could not be found." in response.text
    assert '<option value="sendmail" selected>Sendmail</option>' in response.text


async def test_non_selectable_current_type_is_listed(admin_client):
    await _store_email_settings(
        {"from_email": "site@example.com", "from_name": "My Site", "transport_type": "log", "transport_settings": {}}
    )

    response = await admin_client.get("/settings/email")

    assert response.status_code == 200
    assert '<option value="log" selected>Log</option>' in response.text


async def test_send_test_email(admin_client, sent_messages):
    form = {
        **SMTP_FORM,
        "transport_types[smtp][use_authentication]": "1",
        "transport_types[smtp][username]": "mailer",
        "transport_types[smtp][password]": "hunter22",
    }

    response = await admin_client.post("/settings/email/test", data=form)

    assert response.status_code == 200
    assert "Email sent successfully! Check your inbox." in response.text
    assert 'value="mail.example.com"' in response.text

    [message] = sent_messages
    assert message.recipients == ["admin@example.com"]
    assert message.from_address == "My Site <site@example.com>"
    assert "<strong>Transport Type:</strong> SMTP" in message.html_body
    assert "<strong>Hostname:</strong> mail.example.com" in message.html_body
    assert "<strong>Password:</strong> ••••••••" in message.html_body
    assert "hunter22" not in message.html_body

    # Testing never saves
    assert await _stored_email_settings() is None


async def test_test_email_failure(admin_client, monkeypatch):
    async def failing_send(self, message):
        raise MailTransportError("connection refused")

    monkeypatch.setattr(Smtp, "send", failing_send)

    response = await admin_client.post("/settings/email/test", data=SMTP_FORM)

    assert response.status_code == 200
    assert "There was an error testing your email settings." in response.text


async def test_invalid_test_settings_are_not_sent(admin_client, sent_messages):
    form = {**SMTP_FORM, "transport_types[smtp][host]": ""}

    response = await admin_client.post("/settings/email/test", data=form)

    assert response.status_code == 200
    assert "Your email settings are invalid." in response.text
    assert "Hostname cannot be blank." in response.text
    assert sent_messages == []


def test_summary_masks_secrets():
    mail_settings = MailSettings(from_email="site@example.com", from_name="My Site", transport_type="resend")
    adapter = Resend()
    adapter.api_key = "re_123456"

    summary = str(settings_summary(mail_settings, adapter))

    assert summary.split("<br/>") == [
        "<strong>System Email Address:</strong> site@example.com",
        "<strong>Sender Name:</strong> My Site",
        "<strong>Transport Type:</strong> Resend",
        "<strong>API Key:</strong> •••••••••",
    ]


def test_summary_escapes_values_and_skips_empty_ones():
    mail_settings = MailSettings(from_email="site@example.com", from_name="<b>Me</b>", template="", transport_type="smtp")
    adapter = Smtp()
    adapter.set_attributes({"host": "mail.example.com", "port": 25, "use_authentication": False, "username": ""})

    summary = str(settings_summary(mail_settings, adapter))

    assert "&lt;b&gt;Me&lt;/b&gt;" in summary
    assert "HTML Email Template" not in summary
    assert "Use authentication" not in summary
    assert "Username" not in summary
    assert "<strong>Port:</strong> 25" in summary


async def test_blank_transport_type_reports_one_error(admin_client):
    form = {**SMTP_FORM, "transport_type": ""}

    response = await admin_client.post("/settings/email", data=form)

    assert response.status_code == 200
    assert "Transport Type cannot be blank." in response.text
    assert "could not be found" not in response.text
    assert '<option value="sendmail" selected>Sendmail</option>' in response.text
    assert await _stored_email_settings() is None


async def test_mismatched_adapter_is_rejected():
    mail_settings = MailSettings(from_email="site@example.com", transport_type="smtp")

    with pytest.raises(ValidationException) as exc_info:
        await _render_email_settings(None, None, None, mail_settings, Sendmail())

    assert exc_info.value.errors[0]["field"] == "transport_type"
