"""Outbound email over SMTP.

The mailer is the only component that talks to the mail provider. It raises
MailDispatchError on any failure; callers decide whether that becomes an HTTP
error (ad-hoc sends) or a log line (scheduled digests).
"""

from __future__ import annotations

import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

from loguru import logger

from app.config.settings import Settings


class MailDispatchError(RuntimeError):
    """Raised when an email could not be handed to the mail provider."""


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    html: str | None = None
    text: str | None = None


class Mailer(Protocol):
    def send(self, email: OutgoingEmail) -> None: ...


def build_message(email: OutgoingEmail, sender: str) -> MIMEMultipart:
    """Build a multipart/alternative message with whichever bodies are present."""
    msg = MIMEMultipart("alternative")
    msg["Subject"] = email.subject
    msg["From"] = sender
    msg["To"] = email.to
    # Plain text first so clients prefer the HTML part
    if email.text:
        msg.attach(MIMEText(email.text, "plain", "utf-8"))
    if email.html:
        msg.attach(MIMEText(email.html, "html", "utf-8"))
    return msg


class SmtpMailer:
    """Send mail through the SMTP server from Settings."""

    def __init__(self, settings: Settings, timeout: float = 30.0):
        self.settings = settings
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.settings.smtp_host and self.settings.sender)

    def send(self, email: OutgoingEmail) -> None:
        """Send one email.

        Raises:
            MailDispatchError: SMTP not configured, no recipient, or provider error
        """
        if not self.configured:
            raise MailDispatchError("SMTP is not configured (set SMTP_HOST and SMTP_USER or EMAIL_FROM)")
        if not email.to:
            raise MailDispatchError("No recipient address")

        msg = build_message(email, self.settings.sender)
        logger.info(f"[EMAIL] Connecting to SMTP server {self.settings.smtp_host}:{self.settings.smtp_port}")
        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=self.timeout) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.smtp_user and self.settings.smtp_password:
                    server.login(self.settings.smtp_user, self.settings.smtp_password)
                server.send_message(msg)
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"[EMAIL] SMTP authentication failed: {e}")
            raise MailDispatchError(f"SMTP authentication failed: {e}") from e
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"[EMAIL] SMTP error: {e}")
            raise MailDispatchError(f"SMTP error: {e}") from e

        logger.info(f"[EMAIL] Sent '{email.subject}' to {email.to}")
