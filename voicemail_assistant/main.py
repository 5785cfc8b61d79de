"""Main FastAPI application."""
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import os

import uvicorn

from voicemail_assistant.core.config import settings
from voicemail_assistant.core.logging import setup_logging
from voicemail_assistant.api import health
from voicemail_assistant.api.webhooks import voice


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    yield


app = FastAPI(
    title="AI Voicemail Assistant",
    description="Twilio voicemail assistant with transcription, summaries and email relay",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers (must be before static file mounting to take precedence)
app.include_router(health.router, tags=["health"])
app.include_router(voice.router, tags=["webhooks"])

if os.path.isdir(settings.static_dir):
    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")


@app.get("/")
async def root():
    """Welcome message."""
    return {
        "message": "Welcome to the AI Voicemail Assistant API!",
        "version": "0.1.0",
    }


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run("voicemail_assistant.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
