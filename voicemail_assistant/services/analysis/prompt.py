"""Voicemail analysis prompt templates."""

SUMMARY_SYSTEM_PROMPT = (
    "You are a helpful assistant that summarizes voicemails and extracts key information."
)

SPAM_SYSTEM_PROMPT = (
    "You are a call screening assistant. You decide whether a voicemail is unsolicited "
    "spam (robocalls, telemarketing, scams) or a legitimate message."
)


def get_summary_prompt(transcription: str) -> str:
    """Generate the structured-extraction prompt for a voicemail."""
    return f"""Summarize the following voicemail transcription. Extract the caller's name, their company (if mentioned), their callback number (if provided), and the main reason for their call. If a callback number is not explicitly stated, mention that it's "Not provided". If no name or company is given, state "Not provided".

Voicemail: "{transcription}"

Format the output as follows:
Summary: [Concise summary of the voicemail]
Caller Name: [Name or "Not provided"]
Company: [Company or "Not provided"]
Callback Number: [Number or "Not provided"]
Reason for Call: [Main purpose of the call]
"""


def get_spam_prompt(transcription: str) -> str:
    """Generate the spam classification prompt for a voicemail."""
    return f"""Classify the following voicemail transcription.

Voicemail: "{transcription}"

Answer with exactly one word: SPAM if the message is unsolicited marketing, a robocall or a scam, otherwise LEGITIMATE."""
