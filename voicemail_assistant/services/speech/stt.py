"""Speech-to-text service."""
import logging

from openai import AsyncOpenAI

from voicemail_assistant.core.config import settings
from voicemail_assistant.services.recording.models import FetchedRecording

logger = logging.getLogger(__name__)


class SpeechToTextService:
    """Service for converting recorded voicemail audio to text."""

    def __init__(self, client: AsyncOpenAI = None):
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """OpenAI client, created on first use."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=settings.openai_api_key)
        return self._client

    async def transcribe_recording(self, recording: FetchedRecording) -> str:
        """
        Transcribe a downloaded recording using OpenAI Whisper.

        Args:
            recording: Audio bytes with their filename and content type

        Returns:
            Transcribed text (may be empty)
        """
        transcript = await self.client.audio.transcriptions.create(
            model=settings.transcription_model,
            file=(recording.filename, recording.content, recording.content_type),
        )
        text = transcript.text or ""
        logger.info(f"[STT] Transcription complete (length: {len(text)})")
        return text
