"""Custom exception classes for SRT Bot."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class SRTBotError(Exception):
    """Base exception for SRT Bot."""

    def __init__(
        self, message: str, recoverable: bool = True, details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize SRT Bot error.

        Args:
            message: Error message
            recoverable: Whether a fresh reservation attempt may succeed
            details: Additional error details
        """
        self.message = message
        self.recoverable = recoverable
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "details": self.details,
            "timestamp": self.timestamp,
        }


# Page automation errors
class AutomationError(SRTBotError):
    """A page automation call failed or returned an unexpected shape."""

    def __init__(
        self,
        message: str = "Page automation failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable=True, details=details)


class ElementNotFoundError(AutomationError):
    """Selector matched nothing - the page may not have rendered yet."""

    def __init__(self, selector: str, element_name: Optional[str] = None):
        self.selector = selector
        label = element_name or selector
        super().__init__(f"{label} not found", details={"selector": selector})


class SessionLostError(SRTBotError):
    """The browser session itself is unusable (page closed, browser gone)."""

    def __init__(self, message: str = "Browser session lost"):
        super().__init__(message, recoverable=False)


class RunCancelledError(SRTBotError):
    """The run was aborted by the user or a shutdown signal."""

    def __init__(self, message: str = "Reservation run cancelled"):
        super().__init__(message, recoverable=False)


# Reservation flow errors
class GateTimeoutError(SRTBotError):
    """Queueing gate did not clear before the deadline."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Queue gate did not clear within {timeout:g}s",
            recoverable=True,
            details={"timeout": timeout},
        )


class NoMatchError(SRTBotError):
    """No train in the results matched the requested departure/arrival times."""

    def __init__(self, departure_time: str, arrival_time: str):
        super().__init__(
            f"No matching train for {departure_time} -> {arrival_time}",
            recoverable=True,
            details={"departure_time": departure_time, "arrival_time": arrival_time},
        )


class SoldOutError(SRTBotError):
    """The matching train is sold out."""

    def __init__(self, departure_time: str, arrival_time: str):
        super().__init__(
            f"Train {departure_time} -> {arrival_time} is sold out",
            recoverable=True,
            details={"departure_time": departure_time, "arrival_time": arrival_time},
        )


class IdentityError(SRTBotError):
    """Checkout identity step failed."""

    def __init__(
        self,
        message: str = "Identity confirmation failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable=True, details=details)


class LoginRejectedError(IdentityError):
    """Login form was submitted but the site kept us on the login page."""

    def __init__(self, current_url: str):
        super().__init__(
            f"Login rejected (current URL: {current_url})", details={"url": current_url}
        )


class GuestFormNotReachedError(IdentityError):
    """Guest checkout did not land on the passenger information form."""

    def __init__(self, current_url: str):
        super().__init__(
            f"Reservation form not reached (current URL: {current_url})",
            details={"url": current_url},
        )


# Input, configuration and delivery errors
class ValidationError(SRTBotError):
    """User input failed a field rule."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(reason, recoverable=True, details={"field": field})


class ConfigurationError(SRTBotError):
    """Configuration error occurred."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, recoverable=False, details=details)


class NotificationError(SRTBotError):
    """Outcome notification could not be delivered."""

    def __init__(self, message: str = "Notification delivery failed", channel: str = "email"):
        super().__init__(message, recoverable=True, details={"channel": channel})
