"""FastAPI dependencies."""
from fastapi import Depends

from voicemail_assistant.services.analysis.analyzer import VoicemailAnalyzer
from voicemail_assistant.services.notifications.email import EmailNotifier
from voicemail_assistant.services.recording.fetcher import RecordingFetcher
from voicemail_assistant.services.speech.stt import SpeechToTextService
from voicemail_assistant.services.voicemail.processor import VoicemailProcessor


def get_recording_fetcher() -> RecordingFetcher:
    """Get recording fetcher instance."""
    return RecordingFetcher()


def get_speech_to_text() -> SpeechToTextService:
    """Get speech-to-text service instance."""
    return SpeechToTextService()


def get_voicemail_analyzer() -> VoicemailAnalyzer:
    """Get voicemail analyzer instance."""
    return VoicemailAnalyzer()


def get_email_notifier() -> EmailNotifier:
    """Get email notifier instance."""
    return EmailNotifier()


def get_voicemail_processor(
    fetcher: RecordingFetcher = Depends(get_recording_fetcher),
    speech_to_text: SpeechToTextService = Depends(get_speech_to_text),
    analyzer: VoicemailAnalyzer = Depends(get_voicemail_analyzer),
) -> VoicemailProcessor:
    """Get voicemail processor."""
    return VoicemailProcessor(fetcher, speech_to_text, analyzer)
