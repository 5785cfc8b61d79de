"""Voicemail pipeline models."""
from pydantic import BaseModel

from voicemail_assistant.services.analysis.models import VoicemailSummary


class ProcessedVoicemail(BaseModel):
    """Outcome of the server-side pipeline for one recording."""

    recording_url: str
    transcription: str
    analysis: str
    spoken_summary: str
    summary: VoicemailSummary
