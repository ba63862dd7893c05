"""Domain models for reservation requests and outcomes."""

from .outcome import (
    Aborted,
    AttemptFatal,
    AttemptRecoverable,
    AttemptResult,
    AttemptSucceeded,
    Exhausted,
    Reserved,
    RunOutcome,
)
from .passenger import (
    GuestIdentity,
    LoginKind,
    MemberIdentity,
    NotificationPreference,
    PassengerRequest,
    TripQuery,
)

__all__ = [
    "Aborted",
    "AttemptFatal",
    "AttemptRecoverable",
    "AttemptResult",
    "AttemptSucceeded",
    "Exhausted",
    "Reserved",
    "RunOutcome",
    "GuestIdentity",
    "LoginKind",
    "MemberIdentity",
    "NotificationPreference",
    "PassengerRequest",
    "TripQuery",
]
