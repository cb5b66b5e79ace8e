"""Outbound email delivery."""

import logging
import smtplib
from email.message import EmailMessage
from typing import Protocol

from src.config import Settings
from src.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    """Anything that can deliver an HTML email, raising DeliveryError on failure."""

    def send(self, to: str, subject: str, html: str) -> None: ...


class SmtpMailer:
    """Sends mail through a single synchronous SMTP attempt."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.settings.mail_from
        message["To"] = to
        message["Subject"] = subject
        message.set_content(html, subtype="html")
        return message

    def send(self, to: str, subject: str, html: str) -> None:
        message = self.build_message(to, subject, html)
        try:
            with smtplib.SMTP(
                self.settings.mail_host,
                self.settings.mail_port,
                timeout=self.settings.mail_timeout_seconds,
            ) as smtp:
                if self.settings.mail_use_tls:
                    smtp.starttls()
                if self.settings.mail_username and self.settings.mail_password:
                    smtp.login(self.settings.mail_username, self.settings.mail_password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send '{subject}' to {to}: {e}")
            raise DeliveryError(f"Failed to send email: {e}") from e
        logger.info(f"Sent '{subject}' to {to}")


def verification_email(code: int) -> tuple[str, str]:
    """Subject and body for the signup verification email."""
    return (
        "Please verify your email address",
        f"<p>Your verification code is: <strong>{code}</strong></p>",
    )


def password_reset_email(code: int) -> tuple[str, str]:
    """Subject and body for the password reset email."""
    return (
        "Reset your password",
        f"<p>Your password reset code is: <strong>{code}</strong></p>",
    )
