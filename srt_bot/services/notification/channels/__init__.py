"""Notification channel implementations."""

from .email import EmailChannel

__all__ = ["EmailChannel"]
