"""Recording models."""
from pydantic import BaseModel


class FetchedRecording(BaseModel):
    """Downloaded recording audio."""

    content: bytes
    content_type: str = "audio/wav"
    filename: str = "recording.wav"
