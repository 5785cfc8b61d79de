"""Logging configuration."""
import base64
import logging
import sys
from typing import Iterable

from voicemail_assistant.core.config import settings

REDACTED = "[REDACTED]"


class CredentialRedactingFilter(logging.Filter):
    """Masks provider credentials that end up in log messages or tracebacks."""

    def __init__(self, secrets: Iterable[str]):
        super().__init__()
        # Longest first so a secret containing another is masked whole
        self.secrets = sorted({s for s in secrets if s}, key=len, reverse=True)

    def redact(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, REDACTED)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if self.secrets:
            record.msg = self.redact(record.getMessage())
            record.args = None
            if record.exc_info and not record.exc_text:
                record.exc_text = logging.Formatter().formatException(record.exc_info)
            if record.exc_text:
                record.exc_text = self.redact(record.exc_text)
        return True


def setup_logging() -> None:
    """Configure application logging."""
    handler = logging.StreamHandler(sys.stdout)
    twilio_basic = base64.b64encode(
        f"{settings.twilio_account_sid}:{settings.twilio_auth_token}".encode()
    ).decode()
    handler.addFilter(
        CredentialRedactingFilter(
            [settings.twilio_auth_token, twilio_basic, settings.openai_api_key, settings.email_password]
        )
    )
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler],
    )

    # Set third-party loggers to WARNING
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("twilio").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)
