"""Shared test fixtures and configuration."""
import pytest
import os
from unittest.mock import AsyncMock, Mock
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("TWILIO_ACCOUNT_SID", "ACtest")
os.environ.setdefault("TWILIO_AUTH_TOKEN", "test-token")
os.environ.setdefault("EMAIL_USERNAME", "owner@example.com")
os.environ.setdefault("EMAIL_PASSWORD", "app-password")

from voicemail_assistant.main import app
from voicemail_assistant.core.config import settings
from voicemail_assistant.core.dependencies import (
    get_email_notifier,
    get_recording_fetcher,
    get_speech_to_text,
    get_voicemail_analyzer,
)
from voicemail_assistant.services.recording.models import FetchedRecording


SAMPLE_TRANSCRIPTION = (
    "Hi, this is Jane Doe from Acme Plumbing. Please call me back at 555-0100 "
    "about the quote for your kitchen sink."
)

SAMPLE_ANALYSIS = """Summary: Jane Doe from Acme Plumbing wants to discuss a kitchen sink quote.
Caller Name: Jane Doe
Company: Acme Plumbing
Callback Number: 555-0100
Reason for Call: Follow up on a plumbing quote"""

RECORDING_URL = "https://api.twilio.com/2010-04-01/Accounts/ACtest/Recordings/RE123"


class FakeNotifier:
    """Records messages instead of talking to an SMTP relay."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages = []

    async def deliver(self, message):
        self.messages.append(message)
        return not self.fail


@pytest.fixture
def fake_notifier():
    """Email notifier that captures messages."""
    return FakeNotifier()


@pytest.fixture
def mock_fetcher():
    """Recording fetcher returning a small WAV payload."""
    fetcher = Mock()
    fetcher.fetch_recording = AsyncMock(
        return_value=FetchedRecording(content=b"RIFF0000WAVE", filename="RE123.wav")
    )
    return fetcher


@pytest.fixture
def mock_speech_to_text():
    """Speech-to-text service returning a fixed transcription."""
    service = Mock()
    service.transcribe_recording = AsyncMock(return_value=SAMPLE_TRANSCRIPTION)
    return service


@pytest.fixture
def mock_analyzer():
    """Voicemail analyzer returning a fixed analysis and a non-spam verdict."""
    analyzer = Mock()
    analyzer.summarize = AsyncMock(return_value=SAMPLE_ANALYSIS)
    analyzer.classify_spam = AsyncMock(return_value=False)
    return analyzer


@pytest.fixture
def mock_openai():
    """Mock OpenAI API client."""
    mock_client = Mock()
    mock_completion = Mock()
    mock_completion.choices = [Mock(message=Mock(content=SAMPLE_ANALYSIS))]
    mock_client.chat.completions.create = AsyncMock(return_value=mock_completion)
    mock_client.audio.transcriptions.create = AsyncMock(return_value=Mock(text=SAMPLE_TRANSCRIPTION))
    return mock_client


@pytest.fixture
def test_client(fake_notifier, mock_fetcher, mock_speech_to_text, mock_analyzer):
    """Create FastAPI test client with collaborator overrides."""
    app.dependency_overrides[get_email_notifier] = lambda: fake_notifier
    app.dependency_overrides[get_recording_fetcher] = lambda: mock_fetcher
    app.dependency_overrides[get_speech_to_text] = lambda: mock_speech_to_text
    app.dependency_overrides[get_voicemail_analyzer] = lambda: mock_analyzer

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()


@pytest.fixture
def provider_mode(monkeypatch):
    """Switch the app to Twilio-side transcription."""
    monkeypatch.setattr(settings, "transcription_mode", "provider")


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test"
    )
