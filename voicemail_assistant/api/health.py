"""Health check endpoint."""
import logging
from fastapi import APIRouter, Request

from voicemail_assistant.core.config import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(request: Request):
    """Report liveness and which call flow the webhooks will serve."""
    logger.debug(
        f"[HEALTH] Health check requested - Client: {request.client.host if request.client else 'unknown'}"
    )
    return {
        "status": "healthy",
        "transcription_mode": settings.transcription_mode,
        "followup_enabled": settings.followup_enabled,
    }
