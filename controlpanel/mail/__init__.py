"""Outgoing mail: messages, transport adapters and the mailer."""
