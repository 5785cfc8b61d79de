"""Unit tests for the voicemail processing pipeline."""
import pytest
from unittest.mock import AsyncMock, patch

from voicemail_assistant.core.config import settings
from voicemail_assistant.services.speech.stt import SpeechToTextService
from voicemail_assistant.services.recording.models import FetchedRecording
from voicemail_assistant.services.voicemail.processor import (
    VoicemailProcessingError,
    VoicemailProcessor,
)

RECORDING_URL = "https://api.twilio.com/2010-04-01/Accounts/ACtest/Recordings/RE123"


class TestVoicemailProcessor:
    """Test pipeline ordering and failure reporting."""

    @pytest.mark.asyncio
    async def test_process_recording(self, mock_fetcher, mock_speech_to_text, mock_analyzer):
        """Test the steps run in order and their outputs are combined."""
        processor = VoicemailProcessor(mock_fetcher, mock_speech_to_text, mock_analyzer)

        result = await processor.process_recording(RECORDING_URL, call_sid="CA1")

        recording = mock_fetcher.fetch_recording.return_value
        mock_speech_to_text.transcribe_recording.assert_awaited_once_with(recording)
        mock_analyzer.summarize.assert_awaited_once_with(result.transcription)
        assert result.recording_url == RECORDING_URL
        assert result.spoken_summary == "Jane Doe from Acme Plumbing wants to discuss a kitchen sink quote."
        assert result.summary.caller_name == "Jane Doe"
        assert result.summary.callback_number == "555-0100"

    @pytest.mark.asyncio
    async def test_fetch_failure_has_no_transcription(self, mock_fetcher, mock_speech_to_text, mock_analyzer):
        """Test a download failure is wrapped with no transcript."""
        mock_fetcher.fetch_recording = AsyncMock(side_effect=ConnectionError("unreachable"))
        processor = VoicemailProcessor(mock_fetcher, mock_speech_to_text, mock_analyzer)

        with pytest.raises(VoicemailProcessingError) as exc_info:
            await processor.process_recording(RECORDING_URL)

        assert exc_info.value.transcription is None
        assert "unreachable" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        mock_speech_to_text.transcribe_recording.assert_not_called()
        mock_analyzer.summarize.assert_not_called()

    @pytest.mark.asyncio
    async def test_analysis_failure_keeps_transcription(self, mock_fetcher, mock_speech_to_text, mock_analyzer):
        """Test a model failure still reports the transcript obtained so far."""
        mock_analyzer.summarize = AsyncMock(side_effect=RuntimeError("model down"))
        processor = VoicemailProcessor(mock_fetcher, mock_speech_to_text, mock_analyzer)

        with pytest.raises(VoicemailProcessingError) as exc_info:
            await processor.process_recording(RECORDING_URL)

        assert exc_info.value.transcription == mock_speech_to_text.transcribe_recording.return_value


class TestSpeechToTextService:
    """Test Whisper transcription."""

    @pytest.mark.asyncio
    async def test_transcribe_recording(self, mock_openai):
        """Test the audio is uploaded with its filename and content type."""
        service = SpeechToTextService(client=mock_openai)
        recording = FetchedRecording(content=b"RIFF", content_type="audio/wav", filename="RE123.wav")

        text = await service.transcribe_recording(recording)

        assert text.startswith("Hi, this is Jane Doe")
        kwargs = mock_openai.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "whisper-1"
        assert kwargs["file"] == ("RE123.wav", b"RIFF", "audio/wav")

    @pytest.mark.asyncio
    async def test_empty_transcription(self, mock_openai):
        """Test a missing text comes back as an empty string."""
        mock_openai.audio.transcriptions.create.return_value.text = None
        service = SpeechToTextService(client=mock_openai)

        assert await service.transcribe_recording(FetchedRecording(content=b"")) == ""

    def test_client_created_on_first_use(self):
        """Test no OpenAI client is built until a transcription needs one."""
        with patch("voicemail_assistant.services.speech.stt.AsyncOpenAI") as mock_openai_cls:
            service = SpeechToTextService()
            mock_openai_cls.assert_not_called()

            assert service.client is mock_openai_cls.return_value
            mock_openai_cls.assert_called_once_with(api_key=settings.openai_api_key)
