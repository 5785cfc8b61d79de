"""Recording download with bounded retry."""
import asyncio
import base64
import logging
from typing import Awaitable, Callable, Dict, Optional
from urllib.parse import urlparse

import httpx

from voicemail_assistant.core.config import settings
from voicemail_assistant.services.recording.models import FetchedRecording

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
}


class RecordingFetchError(Exception):
    """Raised when a recording cannot be downloaded."""

    def __init__(self, message: str, status_code: Optional[int] = None, attempts: int = 0):
        super().__init__(message)
        self.status_code = status_code
        self.attempts = attempts


def basic_auth_header(account_sid: str, auth_token: str) -> Dict[str, str]:
    """Build the Basic auth header Twilio expects for media downloads."""
    credentials = base64.b64encode(f"{account_sid}:{auth_token}".encode()).decode()
    return {"Authorization": f"Basic {credentials}"}


def recording_filename(url: str, content_type: str) -> str:
    """Derive an upload filename from the recording URL."""
    name = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1] or "recording.wav"
    if "." not in name:
        name += _EXTENSIONS.get(content_type.split(";")[0].strip(), ".wav")
    return name


class RecordingFetcher:
    """Downloads recordings, tolerating the brief 404 window after a call ends."""

    def __init__(
        self,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.max_attempts = max_attempts or settings.recording_fetch_attempts
        self.retry_delay = settings.recording_fetch_retry_delay if retry_delay is None else retry_delay
        self._transport = transport
        self._sleep = sleep

    async def fetch_with_retry(self, url: str, headers: Dict[str, str]) -> httpx.Response:
        """
        GET a URL, retrying on 404 and transport errors.

        Args:
            url: Resource to download
            headers: Request headers, normally the Basic auth header

        Returns:
            The first successful response

        Raises:
            RecordingFetchError: On a non-retryable status or when every
                attempt returned 404
            httpx.TransportError: When the final attempt fails to connect
        """
        async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as client:
            for attempt in range(1, self.max_attempts + 1):
                is_final = attempt == self.max_attempts
                try:
                    response = await client.get(url, headers=headers)
                except httpx.TransportError as e:
                    if is_final:
                        logger.error(
                            f"[FETCH] Transport error on final attempt {attempt}/{self.max_attempts}: "
                            f"{type(e).__name__}: {e}"
                        )
                        raise
                    logger.warning(
                        f"[FETCH] Transport error on attempt {attempt}: {type(e).__name__}: {e}. "
                        f"Retrying in {self.retry_delay}s"
                    )
                    await self._sleep(self.retry_delay)
                    continue

                if response.is_success:
                    logger.info(f"[FETCH] Recording fetched on attempt {attempt}")
                    return response

                if response.status_code == 404 and not is_final:
                    logger.warning(
                        f"[FETCH] Recording not found (404) on attempt {attempt}. "
                        f"Retrying in {self.retry_delay}s"
                    )
                    await self._sleep(self.retry_delay)
                    continue

                raise RecordingFetchError(
                    f"Failed to fetch recording: {response.reason_phrase} "
                    f"(status {response.status_code}) after {attempt} attempt(s)",
                    status_code=response.status_code,
                    attempts=attempt,
                )

        raise RecordingFetchError(
            f"Failed to fetch recording after {self.max_attempts} attempt(s)",
            attempts=self.max_attempts,
        )

    async def fetch_recording(self, recording_url: str) -> FetchedRecording:
        """Download a Twilio recording using the account credentials."""
        headers = basic_auth_header(settings.twilio_account_sid, settings.twilio_auth_token)
        response = await self.fetch_with_retry(recording_url, headers)
        content_type = response.headers.get("content-type") or "audio/wav"
        return FetchedRecording(
            content=response.content,
            content_type=content_type,
            filename=recording_filename(recording_url, content_type),
        )
