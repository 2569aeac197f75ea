"""Outgoing mail message."""

from dataclasses import dataclass, field
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Any


@dataclass
class MailMessage:
    """A composed message, ready to be handed to a transport adapter."""

    subject: str
    html_body: str
    from_email: str
    from_name: str | None = None
    to: list[tuple[str | None, str]] = field(default_factory=list)
    reply_to: str | None = None

    def set_to(self, recipient: Any) -> "MailMessage":
        """Address the message to a user (anything with ``email``) or a bare address."""
        if isinstance(recipient, str):
            self.to = [(None, recipient)]
        else:
            name = getattr(recipient, "full_name", None) or None
            self.to = [(name, recipient.email)]
        return self

    @property
    def from_address(self) -> str:
        return formataddr((self.from_name, self.from_email)) if self.from_name else self.from_email

    @property
    def recipients(self) -> list[str]:
        return [email for _, email in self.to]

    def to_mime(self) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.from_address
        msg["To"] = ", ".join(formataddr((name, email)) if name else email for name, email in self.to)
        msg["Subject"] = self.subject

        if self.reply_to:
            msg["Reply-To"] = self.reply_to

        msg.attach(MIMEText(self.html_body, "html", "utf-8"))
        return msg
