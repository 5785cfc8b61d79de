"""Notification models."""
from typing import Optional
from pydantic import BaseModel


class EmailMessage(BaseModel):
    """Outbound notification email."""

    to_email: str
    subject: str
    body_html: str
    from_email: Optional[str] = None
