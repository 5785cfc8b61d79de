"""Voicemail processing pipeline."""
import logging
from typing import Optional

from voicemail_assistant.services.analysis.analyzer import (
    VoicemailAnalyzer,
    extract_spoken_summary,
    parse_summary,
)
from voicemail_assistant.services.recording.fetcher import RecordingFetcher
from voicemail_assistant.services.speech.stt import SpeechToTextService
from voicemail_assistant.services.voicemail.models import ProcessedVoicemail

logger = logging.getLogger(__name__)


class VoicemailProcessingError(Exception):
    """A step of the pipeline failed; carries whatever transcript was obtained."""

    def __init__(self, message: str, transcription: Optional[str] = None):
        super().__init__(message)
        self.transcription = transcription


class VoicemailProcessor:
    """Fetches, transcribes and analyzes a recorded voicemail."""

    def __init__(
        self,
        fetcher: RecordingFetcher,
        speech_to_text: SpeechToTextService,
        analyzer: VoicemailAnalyzer,
    ):
        self.fetcher = fetcher
        self.speech_to_text = speech_to_text
        self.analyzer = analyzer

    async def process_recording(self, recording_url: str, call_sid: Optional[str] = None) -> ProcessedVoicemail:
        """
        Run the server-side pipeline for one recording.

        Steps run strictly in order and none is retried except the download.

        Args:
            recording_url: Twilio recording URL
            call_sid: Twilio call identifier, for logging

        Returns:
            Transcription, analysis and the spoken summary

        Raises:
            VoicemailProcessingError: If any step fails
        """
        transcription = None
        try:
            logger.info(f"[PIPELINE] Fetching recording - CallSid: {call_sid}, URL: {recording_url}")
            recording = await self.fetcher.fetch_recording(recording_url)

            logger.info(
                f"[PIPELINE] Transcribing {len(recording.content)} bytes "
                f"({recording.content_type}) - CallSid: {call_sid}"
            )
            transcription = await self.speech_to_text.transcribe_recording(recording)
            logger.info(f"[PIPELINE] Transcription: '{transcription}' - CallSid: {call_sid}")

            analysis = await self.analyzer.summarize(transcription)
        except Exception as e:
            raise VoicemailProcessingError(
                f"{type(e).__name__}: {e}", transcription=transcription
            ) from e

        return ProcessedVoicemail(
            recording_url=recording_url,
            transcription=transcription,
            analysis=analysis,
            spoken_summary=extract_spoken_summary(analysis),
            summary=parse_summary(analysis),
        )
