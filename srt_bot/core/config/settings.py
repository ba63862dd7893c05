"""Application settings with Pydantic validation."""

from pathlib import Path
from typing import Any, Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...constants import RESERVATION_URL, Payment, Retries, Timeouts
from ...services.notification.base import EmailConfig


class SRTSettings(BaseSettings):
    """Application settings with validation and environment variable support."""

    # Environment
    env: str = Field(
        default="production", description="Environment (production, development, testing)"
    )

    @model_validator(mode="before")
    @classmethod
    def default_env_for_pytest(cls, data: Any) -> Any:
        """Auto-detect testing environment when running under pytest."""
        import sys

        if not isinstance(data, dict):
            return data

        if ("env" not in data or not data.get("env")) and "pytest" in sys.modules:
            data["env"] = "testing"

        return data

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(default=False, description="Write the log file as JSON lines")
    log_dir: Path = Field(default=Path("logs"), description="Directory for log files")

    # SMTP transport for outcome notifications
    smtp_host: Optional[str] = Field(default=None, description="SMTP server hostname")
    smtp_port: Optional[int] = Field(default=None, ge=1, le=65535, description="SMTP port")
    sender_email: Optional[str] = Field(default=None, description="Sender mailbox")
    sender_password: Optional[SecretStr] = Field(
        default=None, description="Sender mailbox password or app password"
    )

    # Reservation run
    reservation_url: str = Field(
        default=RESERVATION_URL, description="Train schedule search page"
    )
    max_attempts: int = Field(
        default=Retries.MAX_ATTEMPTS, ge=1, description="Reservation attempts per run"
    )
    headless: bool = Field(default=False, description="Run Chromium without a window")
    payment_hold_seconds: int = Field(
        default=Payment.HOLD_SECONDS,
        ge=0,
        description="Keep the browser open this long after a reservation so payment can be made",
    )
    gate_timeout_seconds: float = Field(
        default=Timeouts.GATE_WAIT_SECONDS, gt=0, description="Queue gate deadline"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    @field_validator("sender_email")
    @classmethod
    def validate_sender_email(cls, v: Optional[str]) -> Optional[str]:
        """Validate email format."""
        if v and "@" not in v:
            raise ValueError("Invalid SENDER_EMAIL format")
        return v

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value."""
        allowed = ["production", "development", "testing", "staging"]
        if v.lower() not in allowed:
            raise ValueError(f'ENV must be one of: {", ".join(allowed)}')
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f'LOG_LEVEL must be one of: {", ".join(allowed)}')
        return v_upper

    def email_config(self) -> EmailConfig:
        """
        Build the email transport configuration.

        Returns:
            EmailConfig, enabled only when host, port, sender and password are all set
        """
        password = self.sender_password.get_secret_value() if self.sender_password else None
        enabled = all([self.smtp_host, self.smtp_port, self.sender_email, password])
        return EmailConfig(
            enabled=enabled,
            sender=self.sender_email,
            password=password,
            smtp_server=self.smtp_host or "",
            smtp_port=self.smtp_port or 587,
        )

    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env == "development"
