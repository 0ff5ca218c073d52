import asyncio
import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from typing import Optional

from src.app.services.notifier import INotifier

logger = logging.getLogger(__name__)


def redact_email(email: str) -> str:
    """Redact an email address for logging"""
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class SmtpNotifier(INotifier):
    """
    Plain-text mail over SMTP.

    When no SMTP host or sender is configured (dev mode) the message is not
    sent; a redacted line is logged instead. The body is never logged since it
    carries the OTP.
    """

    def __init__(
        self,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        smtp_use_tls: bool = True,
        from_email: Optional[str] = None,
        timeout: int = 30,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.smtp_use_tls = smtp_use_tls
        self.from_email = from_email or smtp_user
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host and self.from_email)

    async def send(self, to_address: str, subject: str, body: str) -> None:
        if not self.is_configured:
            logger.info(
                f"SMTP not configured, skipping mail to {redact_email(to_address)}: {subject}"
            )
            return

        await asyncio.to_thread(self._send_sync, to_address, subject, body)
        logger.info(f"Mail sent to {redact_email(to_address)}: {subject}")

    def _send_sync(self, to_address: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to_address

        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
            if self.smtp_use_tls:
                server.starttls(context=ssl.create_default_context())
            if self.smtp_user and self.smtp_password:
                server.login(self.smtp_user, self.smtp_password)
            server.sendmail(self.from_email, [to_address], msg.as_string())
