"""
Outgoing email over SMTP.
"""

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from app.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class EmailResult:
    success: bool
    message: str


class EmailService:
    """Sends HTML emails through the configured SMTP server (STARTTLS)."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    async def send_email(self, to: str, html: str, subject: str) -> EmailResult:
        """
        Send an HTML email.

        Failures are reported in the result rather than raised so callers can
        pick the response status.
        """
        if not self.settings.EMAIL_USERNAME:
            logger.warning("Email not configured (EMAIL_USERNAME is empty)")
            return EmailResult(False, "Email is not configured")

        msg = MIMEMultipart()
        msg["From"] = self.settings.EMAIL_USERNAME
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(html, "html"))

        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to}: {e}")
            return EmailResult(False, str(e))

        logger.info(f"Email sent to {to}")
        return EmailResult(True, f"Email sent to {to}")

    def _deliver(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.settings.EMAIL_HOST, self.settings.EMAIL_PORT) as server:
            server.starttls()
            server.login(self.settings.EMAIL_USERNAME, self.settings.EMAIL_PASSWORD or "")
            server.send_message(msg)


def reset_password_email(reset_url: str) -> str:
    return (
        "<p>You requested a password reset.</p>"
        f'<p>Click <a href="{reset_url}">here</a> to reset your password. '
        "This link expires in one hour.</p>"
        "<p>If you did not request this, you can ignore this email.</p>"
    )
