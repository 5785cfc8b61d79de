"""Notification email templates."""
from html import escape
from typing import Optional

from voicemail_assistant.core.config import settings
from voicemail_assistant.services.analysis.models import VoicemailSummary
from voicemail_assistant.services.notifications.models import EmailMessage

NOT_PROVIDED = "Not provided"


def _preview(text: str, length: int = 50) -> str:
    return f"{text[:length]}..."


def _message(subject: str, body_html: str) -> EmailMessage:
    return EmailMessage(
        to_email=settings.notification_recipient,
        from_email=settings.email_username,
        subject=subject,
        body_html=body_html,
    )


def _recording_link(recording_url: Optional[str]) -> str:
    if not recording_url:
        return "<p>No recording link available.</p>"
    url = escape(recording_url)
    return f'<p>Listen to the original recording: <a href="{url}">{url}</a></p>'


def _caller_details(summary: Optional[VoicemailSummary]) -> str:
    if summary is None:
        return ""
    rows = [
        ("Caller", summary.caller_name),
        ("Company", summary.company),
        ("Callback Number", summary.callback_number),
        ("Reason", summary.reason),
    ]
    items = "".join(
        f"<li><b>{label}:</b> {escape(value)}</li>"
        for label, value in rows
        if value and value.strip() != NOT_PROVIDED
    )
    return f"<h3>Caller Details:</h3>\n<ul>{items}</ul>" if items else ""


def build_voicemail_email(
    transcription: str,
    analysis: str,
    recording_url: Optional[str] = None,
    summary: Optional[VoicemailSummary] = None,
) -> EmailMessage:
    """Notification for a processed voicemail."""
    assistant = settings.assistant_name
    subject = f"New Voicemail from {assistant}: {_preview(transcription)}"
    if summary and summary.caller_name and summary.caller_name.strip() != NOT_PROVIDED:
        subject = f"New Voicemail from {assistant} ({summary.caller_name}): {_preview(transcription)}"
    body = f"""
<p>You have a new voicemail from {escape(assistant)}!</p>
{_caller_details(summary)}
<h3>Original Transcription:</h3>
<p>{escape(transcription)}</p>
<h3>AI Analysis:</h3>
<pre>{escape(analysis)}</pre>
{_recording_link(recording_url)}
"""
    return _message(subject, body)


def build_error_email(
    error: BaseException, transcription: Optional[str], recording_url: Optional[str]
) -> EmailMessage:
    """Notification that a voicemail could not be processed."""
    body = f"""
<p>An error occurred while processing a voicemail.</p>
<p>Original Transcription (if available): {escape(transcription or "No transcription available.")}</p>
<p>Error details: <pre>{escape(f"{type(error).__name__}: {error}")}</pre></p>
{_recording_link(recording_url)}
"""
    return _message(f"{settings.assistant_name} Voicemail Error: Could not process message", body)


def build_followup_email(speech_text: str, caller: Optional[str] = None) -> EmailMessage:
    """Notification carrying a caller's follow-up remark."""
    caller_line = f"<p>Caller: {escape(caller)}</p>" if caller else ""
    body = f"""
<p>Caller left a follow-up message with {escape(settings.assistant_name)}:</p>
{caller_line}
<h3>Follow-up:</h3>
<p>{escape(speech_text)}</p>
<p>This was in response to the voicemail you just received.</p>
"""
    return _message(
        f'{settings.assistant_name} Voicemail Follow-up: "{_preview(speech_text)}"', body
    )


def build_transcribed_voicemail_email(
    transcription: str, caller: Optional[str] = None, recording_url: Optional[str] = None
) -> EmailMessage:
    """Notification for a voicemail transcribed by Twilio and screened as legitimate."""
    caller_line = f"<p>From: {escape(caller)}</p>" if caller else ""
    body = f"""
<p>You have a new voicemail from {escape(settings.assistant_name)}!</p>
{caller_line}
<h3>Transcription:</h3>
<p>{escape(transcription)}</p>
{_recording_link(recording_url)}
"""
    return _message(
        f"New Voicemail from {settings.assistant_name}: {_preview(transcription)}", body
    )
