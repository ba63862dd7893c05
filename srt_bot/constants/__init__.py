"""Unified constants for SRT-Bot.

All classes and constants can be imported directly from this package:
    from srt_bot.constants import Selectors, Delays, Timeouts
"""

from .selectors import (
    RESERVATION_URL,
    LoginSelectors,
    ResultColumns,
    Selectors,
    UrlMarkers,
)
from .timing import Delays, Intervals, Payment, Retries, Timeouts

__all__ = [
    "RESERVATION_URL",
    "LoginSelectors",
    "ResultColumns",
    "Selectors",
    "UrlMarkers",
    "Delays",
    "Intervals",
    "Payment",
    "Retries",
    "Timeouts",
]
