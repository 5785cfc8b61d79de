"""Voicemail analysis models."""
from typing import Optional
from pydantic import BaseModel


class VoicemailSummary(BaseModel):
    """Labelled fields extracted from the model's analysis text."""

    summary: Optional[str] = None
    caller_name: Optional[str] = None
    company: Optional[str] = None
    callback_number: Optional[str] = None
    reason: Optional[str] = None
    raw_text: str = ""
