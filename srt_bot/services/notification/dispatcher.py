"""Outcome notification dispatcher."""

from typing import Optional

from loguru import logger

from ...core.exceptions import NotificationError
from ...core.result import Failure, Result, Success
from ...models import PassengerRequest, Reserved, RunOutcome
from ...utils.masking import mask_email
from .base import EmailConfig, NotificationChannel
from .channels.email import EmailChannel
from .message_templates import ReservationTemplates


class NotificationDispatcher:
    """
    Formats and sends the single outcome message of a run.

    Delivery failures are returned, never raised: by the time this runs
    the reservation run has already ended.
    """

    def __init__(
        self,
        email_config: EmailConfig,
        channel: Optional[NotificationChannel] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            email_config: SMTP transport configuration
            channel: Channel override (defaults to EmailChannel)
        """
        self.email_config = email_config
        self.channel = channel or EmailChannel(email_config)

    async def notify(
        self, outcome: RunOutcome, request: PassengerRequest
    ) -> Result[None, NotificationError]:
        """
        Send the outcome email for ``request``.

        Returns:
            Success(None) when sent or when notifications are disabled,
            Failure(reason, NotificationError) when delivery failed
        """
        preference = request.notification
        if not preference.enabled or not preference.email:
            logger.info("Email notification disabled for this request")
            return Success(None)

        if not self.channel.enabled:
            logger.info("SMTP transport not configured - skipping email notification")
            return Success(None)

        if isinstance(outcome, Reserved):
            subject, body = ReservationTemplates.success(request, outcome)
        else:
            subject, body = ReservationTemplates.failure(request, outcome)

        try:
            await self.channel.send(preference.email, subject, body)
        except Exception as e:
            reason = f"Email notification failed: {e}"
            logger.error(reason)
            return Failure(reason, NotificationError(reason, channel=self.channel.name))

        logger.info(f"Outcome notification sent to {mask_email(preference.email)}")
        return Success(None)
