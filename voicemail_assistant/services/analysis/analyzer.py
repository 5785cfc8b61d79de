"""LLM voicemail analysis service."""
import logging
from typing import Optional

from openai import AsyncOpenAI

from voicemail_assistant.core.config import settings
from voicemail_assistant.services.analysis.models import VoicemailSummary
from voicemail_assistant.services.analysis.prompt import (
    SPAM_SYSTEM_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    get_spam_prompt,
    get_summary_prompt,
)

logger = logging.getLogger(__name__)

DEFAULT_SPOKEN_SUMMARY = "I have received your message."

SUMMARY_LABELS = {
    "summary": "Summary: ",
    "caller_name": "Caller Name: ",
    "company": "Company: ",
    "callback_number": "Callback Number: ",
    "reason": "Reason for Call: ",
}


def _labelled_line(text: str, label: str) -> Optional[str]:
    """Return the text after the first occurrence of label, up to the newline."""
    parts = text.split(label, 1)
    if len(parts) < 2:
        return None
    value = parts[1].split("\n", 1)[0]
    return value or None


def extract_spoken_summary(analysis: str) -> str:
    """Pick the 'Summary:' line out of the analysis for speech, or a generic acknowledgement."""
    return _labelled_line(analysis or "", SUMMARY_LABELS["summary"]) or DEFAULT_SPOKEN_SUMMARY


def parse_summary(analysis: str) -> VoicemailSummary:
    """Split the analysis text into its labelled fields."""
    text = analysis or ""
    fields = {name: _labelled_line(text, label) for name, label in SUMMARY_LABELS.items()}
    return VoicemailSummary(raw_text=text, **fields)


def is_spam_verdict(answer: str) -> bool:
    """A classification answer mentioning spam in any case counts as spam."""
    return "spam" in (answer or "").lower()


class VoicemailAnalyzer:
    """Service for summarizing and screening voicemails with a chat model."""

    def __init__(self, client: AsyncOpenAI = None):
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """OpenAI client, created on first use."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=settings.openai_api_key)
        return self._client

    async def _complete(self, system_prompt: str, user_prompt: str) -> str:
        completion = await self.client.chat.completions.create(
            model=settings.chat_model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=settings.chat_max_tokens,
            temperature=settings.chat_temperature,
        )
        return completion.choices[0].message.content or ""

    async def summarize(self, transcription: str) -> str:
        """
        Summarize a voicemail and extract caller details.

        Args:
            transcription: Voicemail text

        Returns:
            The model's labelled analysis text
        """
        analysis = await self._complete(SUMMARY_SYSTEM_PROMPT, get_summary_prompt(transcription))
        logger.info(f"[ANALYSIS] Summary generated:\n{analysis}")
        return analysis

    async def classify_spam(self, transcription: str) -> bool:
        """Ask the model whether a voicemail is spam."""
        answer = await self._complete(SPAM_SYSTEM_PROMPT, get_spam_prompt(transcription))
        spam = is_spam_verdict(answer)
        logger.info(f"[ANALYSIS] Spam classification answer: '{answer.strip()}' (spam={spam})")
        return spam
