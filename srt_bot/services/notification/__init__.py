"""Outcome notification package."""

from .base import EmailConfig, NotificationChannel
from .channels import EmailChannel
from .dispatcher import NotificationDispatcher
from .message_templates import ReservationTemplates

__all__ = [
    "EmailConfig",
    "NotificationChannel",
    "EmailChannel",
    "NotificationDispatcher",
    "ReservationTemplates",
]
