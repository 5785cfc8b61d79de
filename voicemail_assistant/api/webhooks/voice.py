"""Twilio voice webhook endpoints."""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Form, Request
from fastapi.responses import Response

from voicemail_assistant.core.config import settings
from voicemail_assistant.core.dependencies import (
    get_email_notifier,
    get_voicemail_analyzer,
    get_voicemail_processor,
)
from voicemail_assistant.services.analysis.analyzer import VoicemailAnalyzer
from voicemail_assistant.services.notifications.email import EmailNotifier
from voicemail_assistant.services.notifications.templates import (
    build_error_email,
    build_followup_email,
    build_transcribed_voicemail_email,
    build_voicemail_email,
)
from voicemail_assistant.services.speech.twiml import (
    FOLLOWUP_NOT_HEARD_MESSAGE,
    NO_RECORDING_MESSAGE,
    PROCESSING_ERROR_MESSAGE,
    TwimlBuilder,
)
from voicemail_assistant.services.voicemail.processor import VoicemailProcessor

router = APIRouter()
logger = logging.getLogger(__name__)


def get_twiml_builder() -> TwimlBuilder:
    """
    Get a TwiML builder.

    Uses PUBLIC_BASE_URL for absolute webhook URLs when set, otherwise
    relative paths that Twilio resolves against the current request.
    """
    return TwimlBuilder(base_url=settings.public_base_url)


def _client(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _xml(twiml: str, status_code: int = 200) -> Response:
    return Response(content=twiml, media_type="application/xml", status_code=status_code)


@router.post("/voice")
async def handle_incoming_call(
    request: Request,
    CallSid: str = Form(None),
    From: str = Form(None),
    twiml_builder: TwimlBuilder = Depends(get_twiml_builder),
):
    """
    Handle incoming call from Twilio.

    Greets the caller and records their message.
    """
    logger.info(
        f"[VOICE] Incoming call - CallSid: {CallSid}, From: {From}, "
        f"Mode: {settings.transcription_mode}, Client: {_client(request)}"
    )
    twiml = twiml_builder.greeting_with_record(
        transcribe_on_provider=settings.transcription_mode == "provider"
    )
    return _xml(twiml)


@router.post("/recording-saved")
async def handle_recording_saved(
    request: Request,
    CallSid: str = Form(None),
    RecordingUrl: str = Form(None),
    twiml_builder: TwimlBuilder = Depends(get_twiml_builder),
):
    """
    Handle the end of a recording whose transcription Twilio performs.

    The transcript arrives separately at /transcription; this only ends the call.
    """
    logger.info(
        f"[VOICE] Recording saved for provider transcription - CallSid: {CallSid}, "
        f"RecordingUrl: {RecordingUrl}, Client: {_client(request)}"
    )
    return _xml(twiml_builder.recording_saved())


@router.post("/recording-complete")
@router.post("/process-recording")
async def handle_recording_complete(
    request: Request,
    background_tasks: BackgroundTasks,
    CallSid: str = Form(None),
    RecordingUrl: str = Form(None),
    processor: VoicemailProcessor = Depends(get_voicemail_processor),
    notifier: EmailNotifier = Depends(get_email_notifier),
    twiml_builder: TwimlBuilder = Depends(get_twiml_builder),
):
    """
    Handle a finished recording from Twilio's <Record> action.

    Fetches, transcribes and summarizes the recording, emails the result
    and reads the summary back to the caller.
    """
    logger.info(f"[RECORDING] Recording complete - CallSid: {CallSid}, Client: {_client(request)}")

    if not RecordingUrl or not RecordingUrl.strip():
        logger.error(f"[RECORDING] No valid RecordingUrl provided - CallSid: {CallSid}")
        return _xml(twiml_builder.say_and_hangup(NO_RECORDING_MESSAGE))

    logger.info(f"[RECORDING] Received recording URL: {RecordingUrl} - CallSid: {CallSid}")

    try:
        voicemail = await processor.process_recording(RecordingUrl, call_sid=CallSid)

        background_tasks.add_task(
            notifier.deliver,
            build_voicemail_email(
                voicemail.transcription, voicemail.analysis, RecordingUrl, summary=voicemail.summary
            ),
        )
        twiml = twiml_builder.summary_with_followup(
            voicemail.spoken_summary, offer_followup=settings.followup_enabled
        )
        logger.info(f"[RECORDING] Voicemail processed - CallSid: {CallSid}")
        return _xml(twiml)

    except Exception as e:
        logger.error(
            f"[RECORDING] Processing error - CallSid: {CallSid}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        background_tasks.add_task(
            notifier.deliver,
            build_error_email(e.__cause__ or e, getattr(e, "transcription", None), RecordingUrl),
        )
        return _xml(
            twiml_builder.say_and_hangup(PROCESSING_ERROR_MESSAGE),
            status_code=settings.recording_failure_status,
        )


@router.post("/handle-followup")
async def handle_followup(
    request: Request,
    background_tasks: BackgroundTasks,
    CallSid: str = Form(None),
    From: str = Form(None),
    SpeechResult: str = Form(None),
    notifier: EmailNotifier = Depends(get_email_notifier),
    twiml_builder: TwimlBuilder = Depends(get_twiml_builder),
):
    """
    Handle speech gathered after the summary.

    Always ends the call.
    """
    logger.info(
        f"[FOLLOWUP] Follow-up received - CallSid: {CallSid}, "
        f"SpeechResult length: {len(SpeechResult) if SpeechResult else 0}, "
        f"Client: {_client(request)}"
    )

    if SpeechResult and SpeechResult.strip():
        logger.info(f"[FOLLOWUP] Caller's follow-up: '{SpeechResult}' - CallSid: {CallSid}")
        background_tasks.add_task(notifier.deliver, build_followup_email(SpeechResult, caller=From))
        return _xml(twiml_builder.followup_acknowledgement(SpeechResult))

    logger.warning(f"[FOLLOWUP] No speech result provided - CallSid: {CallSid}")
    return _xml(twiml_builder.say_and_hangup(FOLLOWUP_NOT_HEARD_MESSAGE))


@router.post("/transcription")
async def handle_transcription(
    request: Request,
    background_tasks: BackgroundTasks,
    CallSid: str = Form(None),
    From: str = Form(None),
    RecordingUrl: str = Form(None),
    TranscriptionText: str = Form(None),
    TranscriptionStatus: str = Form(None),
    analyzer: VoicemailAnalyzer = Depends(get_voicemail_analyzer),
    notifier: EmailNotifier = Depends(get_email_notifier),
    twiml_builder: TwimlBuilder = Depends(get_twiml_builder),
):
    """
    Handle Twilio's transcription callback.

    This is a side channel, not part of the live call, so it answers with
    a bare status.
    """
    logger.info(
        f"[TRANSCRIPTION] Transcription callback - CallSid: {CallSid}, "
        f"Status: {TranscriptionStatus}, Client: {_client(request)}"
    )

    if settings.transcription_mode != "provider":
        logger.warning(
            f"[TRANSCRIPTION] Callback received while transcription is server-side; ignoring "
            f"- CallSid: {CallSid}"
        )
        return _xml(twiml_builder.empty())

    if not TranscriptionText or not TranscriptionText.strip():
        logger.warning(f"[TRANSCRIPTION] Empty transcription - CallSid: {CallSid}")
        return Response(status_code=200)

    try:
        if await analyzer.classify_spam(TranscriptionText):
            logger.info(f"[TRANSCRIPTION] Spam detected, email suppressed - CallSid: {CallSid}")
        else:
            background_tasks.add_task(
                notifier.deliver,
                build_transcribed_voicemail_email(TranscriptionText, caller=From, recording_url=RecordingUrl),
            )
            logger.info(f"[TRANSCRIPTION] Voicemail email scheduled - CallSid: {CallSid}")
        return Response(status_code=200)

    except Exception as e:
        logger.error(
            f"[TRANSCRIPTION] Processing error - CallSid: {CallSid}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True,
        )
        return Response(status_code=500)
