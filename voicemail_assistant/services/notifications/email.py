"""Email notification service."""
import asyncio
import logging
import smtplib
import ssl
from email.mime.text import MIMEText

from voicemail_assistant.core.config import settings
from voicemail_assistant.services.notifications.models import EmailMessage

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the mail relay rejects or cannot accept a message."""


class EmailNotifier:
    """Sends voicemail notifications through the configured SMTP relay."""

    def __init__(
        self,
        host: str = None,
        port: int = None,
        username: str = None,
        password: str = None,
        use_tls: bool = None,
    ):
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port
        self.username = username or settings.email_username
        self.password = password or settings.email_password
        self.use_tls = settings.smtp_use_tls if use_tls is None else use_tls

    async def send(self, message: EmailMessage) -> None:
        """
        Send an email, running the blocking SMTP session in a worker thread.

        Raises:
            EmailDeliveryError: If the relay fails
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._send_sync, message)

    async def deliver(self, message: EmailMessage) -> bool:
        """
        Send an email, logging failures instead of raising.

        Used for fire-and-forget notifications scheduled after the
        caller-facing response.

        Returns:
            True if the relay accepted the message
        """
        try:
            await self.send(message)
        except Exception as e:
            logger.error(
                f"[EMAIL] Failed to send '{message.subject}': {type(e).__name__}: {e}",
                exc_info=True,
            )
            return False
        return True

    def _build_mime(self, message: EmailMessage) -> MIMEText:
        mime = MIMEText(message.body_html, "html", "utf-8")
        mime["Subject"] = message.subject
        mime["From"] = message.from_email or self.username
        mime["To"] = message.to_email
        return mime

    def _send_sync(self, message: EmailMessage) -> None:
        mime = self._build_mime(message)
        try:
            with smtplib.SMTP(self.host, self.port) as server:
                if self.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as e:
            raise EmailDeliveryError(f"SMTP error sending to {message.to_email}: {e}") from e
        logger.info(f"[EMAIL] Sent '{message.subject}' to {message.to_email}")
