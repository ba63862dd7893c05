"""Timing-related constants (timeouts, intervals, delays)."""

from typing import Final


class Timeouts:
    """Timeout values - MILLISECONDS for Playwright, SECONDS noted separately."""

    # Playwright timeouts (milliseconds)
    PAGE_LOAD: Final[int] = 30_000
    ACTION: Final[int] = 10_000

    # Rate-limiting gate (seconds)
    GATE_WAIT_SECONDS: Final[float] = 60.0


class Intervals:
    """Interval values in SECONDS."""

    GATE_PULSE: Final[float] = 5.0


class Delays:
    """Fixed settle delays in SECONDS."""

    AFTER_BROWSER_START: Final[float] = 1.0
    AFTER_RELOAD: Final[float] = 3.0
    BETWEEN_ATTEMPTS: Final[float] = 3.0
    SEARCH_RESULTS_LOAD: Final[float] = 3.0
    AFTER_GATE: Final[float] = 1.0
    BEFORE_RESERVE: Final[float] = 3.0
    BEFORE_CHECKOUT_ROUTE: Final[float] = 1.0
    AFTER_LOGIN_SUBMIT: Final[float] = 2.0


class Retries:
    """Retry budgets."""

    MAX_ATTEMPTS: Final[int] = 10
    EMAIL_SEND: Final[int] = 2


class Payment:
    """Payment window imposed by the reservation site."""

    DEADLINE_MINUTES: Final[int] = 10
    HOLD_SECONDS: Final[int] = 600
