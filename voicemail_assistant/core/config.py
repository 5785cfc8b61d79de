"""Application configuration."""
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI
    openai_api_key: str
    transcription_model: str = "whisper-1"
    chat_model: str = "gpt-3.5-turbo"
    chat_max_tokens: int = 400
    chat_temperature: float = 0.7

    # Twilio
    twilio_account_sid: str
    twilio_auth_token: str

    # Email relay
    email_username: str
    email_password: str
    email_recipient: Optional[str] = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_use_tls: bool = True

    # Call flow
    transcription_mode: Literal["server", "provider"] = "server"
    assistant_name: str = "AVA"
    owner_name: str = "Alex"
    greeting_message: str = (
        "Hello, you've reached AVA, Alex's voicemail assistant. "
        "Please leave your name, number, and the reason for your call after the tone."
    )
    greeting_voice: str = "alice"
    response_voice: str = "Polly.Kevin"
    voice_language: str = "en-US"
    recording_max_length: int = 60
    recording_silence_timeout: int = 5
    followup_enabled: bool = True
    followup_timeout: int = 5
    recording_failure_status: int = 500

    # Recording fetch
    recording_fetch_attempts: int = 3
    recording_fetch_retry_delay: float = 2.0

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    public_base_url: Optional[str] = None
    static_dir: str = "public"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def notification_recipient(self) -> str:
        """Address voicemail notifications are delivered to."""
        return self.email_recipient or self.email_username


settings = Settings()
