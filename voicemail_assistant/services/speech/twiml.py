"""TwiML response generation."""
from typing import Optional

from twilio.twiml.voice_response import VoiceResponse

from voicemail_assistant.core.config import settings

NO_RECORDING_MESSAGE = (
    "I apologize, but I didn't receive a clear recording. Please try again later. Goodbye."
)
PROCESSING_ERROR_MESSAGE = (
    "I apologize, an error occurred while processing your message. Please try again later."
)
FOLLOWUP_PROMPT = "Can I help with anything else regarding your message?"
FOLLOWUP_NOT_HEARD_MESSAGE = "I didn't catch that. If you have more questions, please call back."
RECORDING_SAVED_MESSAGE = "Thank you. Your message has been recorded. Goodbye."


class TwimlBuilder:
    """Builds the call-control documents returned to Twilio."""

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or "").rstrip("/")

    def url_for(self, path: str) -> str:
        """Webhook URL for a path, absolute when a base URL is known."""
        return f"{self.base_url}{path}" if self.base_url else path

    def _say(self, verb, text: str) -> None:
        verb.say(text, voice=settings.response_voice, language=settings.voice_language)

    def greeting_with_record(self, transcribe_on_provider: bool = False) -> str:
        """
        Greet the caller and record their message.

        Args:
            transcribe_on_provider: Ask Twilio to transcribe and post the text
                to the transcription callback instead of posting the recording
                to the processing endpoint

        Returns:
            TwiML XML string
        """
        response = VoiceResponse()
        response.say(
            settings.greeting_message,
            voice=settings.greeting_voice,
            language=settings.voice_language,
        )
        if transcribe_on_provider:
            # Twilio re-requests the current document when <Record> has no action
            response.record(
                max_length=settings.recording_max_length,
                timeout=settings.recording_silence_timeout,
                transcribe=True,
                transcribe_callback=self.url_for("/transcription"),
                action=self.url_for("/recording-saved"),
                method="POST",
            )
        else:
            response.record(
                max_length=settings.recording_max_length,
                timeout=settings.recording_silence_timeout,
                transcribe=False,
                action=self.url_for("/recording-complete"),
                method="POST",
            )
        return str(response)

    def recording_saved(self) -> str:
        """Thank the caller once a provider-transcribed message is recorded."""
        return self.say_and_hangup(RECORDING_SAVED_MESSAGE)

    def summary_with_followup(self, spoken_summary: str, offer_followup: bool = True) -> str:
        """Read the summary back, optionally opening a speech window for a follow-up."""
        response = VoiceResponse()
        self._say(response, f"Thank you for your message. Here is a summary: {spoken_summary}.")
        if offer_followup:
            gather = response.gather(
                input="speech",
                timeout=settings.followup_timeout,
                action=self.url_for("/handle-followup"),
                method="POST",
            )
            self._say(gather, FOLLOWUP_PROMPT)
        self._say(response, "Goodbye.")
        response.hangup()
        return str(response)

    def say_and_hangup(self, text: str) -> str:
        """Speak a message and end the call."""
        response = VoiceResponse()
        self._say(response, text)
        response.hangup()
        return str(response)

    def followup_acknowledgement(self, speech_text: str) -> str:
        """Confirm a follow-up will be relayed and end the call."""
        return self.say_and_hangup(
            f'You said: "{speech_text}". I will pass this additional information '
            f"along to {settings.owner_name}. Thank you."
        )

    def empty(self) -> str:
        """Acknowledge a callback without further instructions."""
        return str(VoiceResponse())
