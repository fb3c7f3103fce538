import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.calendar.constants import MAX_WEEK_INDEX


def get_data_file() -> str:
    """Get the calendar state file path, absolute to avoid cwd-dependent resolution.

    ⚠️ WARNING: the state file lives on local disk.
    - On ephemeral hosts (Render, Railway, Heroku) it is LOST on rebuilds
    - Point DATA_FILE at a mounted persistent disk in production
    """
    data_file = os.getenv("DATA_FILE", "")
    if data_file:
        logger.info(f"Using DATA_FILE from environment: {data_file}")
        return data_file

    data_path = Path(__file__).parent.parent.parent / "data" / "calendar.json"
    abs_path = data_path.resolve()
    is_production = bool(os.getenv("RENDER") or os.getenv("RAILWAY_ENVIRONMENT") or os.getenv("DYNO"))
    if is_production:
        logger.warning(
            f"⚠️ Using default calendar file on an ephemeral host: {abs_path}\n"
            "⚠️ Set DATA_FILE to a persistent disk path or the schedule will be lost on redeploy."
        )
    return str(abs_path)


class Settings(BaseSettings):
    data_file: str = Field(
        default_factory=get_data_file,
        validation_alias="DATA_FILE",
    )
    smtp_host: str = Field(default="", validation_alias="SMTP_HOST")
    smtp_port: int = Field(default=587, validation_alias="SMTP_PORT")
    smtp_user: str = Field(default="", validation_alias="SMTP_USER")
    smtp_password: str = Field(default="", validation_alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(default=True, validation_alias="SMTP_USE_TLS")
    email_from: str = Field(
        default="",
        validation_alias="EMAIL_FROM",
        description="Sender address; falls back to SMTP_USER when empty",
    )
    notify_recipient: str = Field(
        default="",
        validation_alias="NOTIFY_RECIPIENT",
        description="Operator address for the weekly proposal and final-plan emails",
    )
    scheduler_enabled: bool = Field(default=True, validation_alias="SCHEDULER_ENABLED")
    scheduler_timezone: str = Field(default="Europe/London", validation_alias="SCHEDULER_TIMEZONE")
    number_of_weeks: int = Field(
        default=12,
        ge=1,
        le=MAX_WEEK_INDEX + 1,
        validation_alias="NUMBER_OF_WEEKS",
        description="How many weeks from the epoch the board exposes",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str = Field(default="", validation_alias="LOG_FILE")
    log_json: bool = Field(default=False, validation_alias="LOG_JSON", description="Emit console logs as JSON lines")
    log_rotation: str = Field(default="10 MB", validation_alias="LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="LOG_RETENTION")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("smtp_host")
    @classmethod
    def validate_smtp_host(cls, value: str) -> str:
        """Warn when SMTP is not configured.

        The board works without mail; only the scheduled digests and the
        ad-hoc send endpoint need it.
        """
        if not value:
            logger.warning(
                "⚠️ SMTP_HOST is not set. Weekly digest emails and /api/send-email will fail. "
                "Set SMTP_HOST, SMTP_USER and SMTP_PASSWORD in .env or environment variables."
            )
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def sender(self) -> str:
        return self.email_from or self.smtp_user

    @property
    def recipient(self) -> str:
        return self.notify_recipient or self.sender


settings = Settings()
