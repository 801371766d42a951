"""SMTP delivery for transactional auth emails."""

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from campus_auth.app.services.notification import INotificationService
from campus_auth.domain.errors import EmailDeliveryFailed

logger = logging.getLogger(__name__)


def _build_sender(from_email: str, from_name: str) -> str:
    if not from_name:
        return from_email
    return f'"{from_name}" <{from_email}>'


class SmtpNotificationService(INotificationService):
    """Sends HTML mail over SMTP with STARTTLS, in a worker thread"""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        from_email: str = "noreply@yourapp.com",
        from_name: str = "",
        timeout: int = 15,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "SmtpNotificationService":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USER,
            password=config.SMTP_PASS,
            from_email=config.SMTP_FROM,
            from_name=config.SMTP_FROM_NAME,
        )

    def _build_message(self, to: str, subject: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = _build_sender(self.from_email, self.from_name)
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable mail client.")
        message.add_alternative(html_body, subtype="html")
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        with smtplib.SMTP(host=self.host, port=self.port, timeout=self.timeout) as smtp:
            smtp.ehlo()
            if self.port != 25:
                smtp.starttls()
                smtp.ehlo()
            if self.username:
                smtp.login(self.username, self.password)
            smtp.send_message(message)

    async def send(self, to: str, subject: str, html_body: str) -> None:
        if not self.host:
            raise EmailDeliveryFailed("SMTP host is not configured")

        message = self._build_message(to, subject, html_body)
        try:
            await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryFailed(str(exc)) from exc

        logger.info(f"Message sent: {subject}")
