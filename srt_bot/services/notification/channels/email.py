"""Email notification channel."""

import logging
from email.mime.text import MIMEText

import aiosmtplib
from loguru import logger
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ....constants import Retries
from ..base import EmailConfig, NotificationChannel

_retry_logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (ConnectionError, TimeoutError, OSError, aiosmtplib.SMTPException)


class EmailChannel(NotificationChannel):
    """Plain-text email over SMTP."""

    def __init__(self, config: EmailConfig):
        """
        Initialize Email channel.

        Args:
            config: Email configuration
        """
        self._config = config

    @property
    def name(self) -> str:
        """Get channel name."""
        return "email"

    @property
    def enabled(self) -> bool:
        """Check if channel is enabled."""
        return self._config.enabled

    def build_message(self, recipient: str, subject: str, body: str) -> MIMEText:
        """Build a UTF-8 plain-text MIME message."""
        message = MIMEText(body, "plain", "utf-8")
        message["From"] = self._config.sender or ""
        message["To"] = recipient
        message["Subject"] = subject
        return message

    @retry(
        stop=stop_after_attempt(Retries.EMAIL_SEND + 1),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        retry=retry_if_exception_type(TRANSPORT_ERRORS),
        before_sleep=before_sleep_log(_retry_logger, logging.WARNING),
        reraise=True,
    )
    async def send(self, recipient: str, subject: str, body: str) -> None:
        """
        Send email notification.

        Args:
            recipient: Destination address
            subject: Email subject
            body: Plain-text body

        Raises:
            aiosmtplib.SMTPException: On SMTP failure after retries
            OSError: On connection failure after retries
        """
        message = self.build_message(recipient, subject, body)

        # Port 465 speaks TLS from the first byte; elsewhere STARTTLS only if offered
        use_tls = self._config.smtp_port == 465
        async with aiosmtplib.SMTP(
            hostname=self._config.smtp_server,
            port=self._config.smtp_port,
            use_tls=use_tls,
            start_tls=False if use_tls else None,
        ) as smtp:
            await smtp.login(self._config.sender or "", self._config.password or "")
            await smtp.send_message(message)

        logger.info("Email notification sent successfully")
