"""Attempt and run outcome types.

``AttemptResult`` is produced and discarded once per attempt.
``RunOutcome`` is produced exactly once per run and handed to the
notification dispatcher.
"""

from dataclasses import dataclass
from typing import Union

from ..core.exceptions import SRTBotError


@dataclass(frozen=True)
class AttemptSucceeded:
    """Every pipeline step completed."""


@dataclass(frozen=True)
class AttemptRecoverable:
    """The attempt failed; a fresh attempt may succeed."""

    error: SRTBotError


@dataclass(frozen=True)
class AttemptFatal:
    """The attempt failed in a way no retry can fix; the run must stop."""

    error: SRTBotError


AttemptResult = Union[AttemptSucceeded, AttemptRecoverable, AttemptFatal]


@dataclass(frozen=True)
class Reserved:
    """A seat was claimed on ``attempt``."""

    attempt: int


@dataclass(frozen=True)
class Exhausted:
    """Every allowed attempt failed; ``last_error`` is the final failure."""

    last_error: SRTBotError
    attempts: int


@dataclass(frozen=True)
class Aborted:
    """A fatal error (cancellation, lost session) stopped the run on ``attempt``."""

    error: SRTBotError
    attempt: int


RunOutcome = Union[Reserved, Exhausted, Aborted]
