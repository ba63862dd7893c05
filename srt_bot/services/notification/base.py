"""Base notification types: channel ABC and transport configuration."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmailConfig:
    """SMTP transport configuration. The recipient comes from each request."""

    enabled: bool = False
    sender: Optional[str] = None
    password: Optional[str] = None
    smtp_server: str = ""
    smtp_port: int = 587

    def __repr__(self) -> str:
        """Return repr with masked password."""
        masked_password = "'***'" if self.password else "None"
        return (
            f"EmailConfig(enabled={self.enabled}, sender={self.sender!r}, "
            f"password={masked_password}, smtp_server={self.smtp_server!r}, "
            f"smtp_port={self.smtp_port})"
        )


class NotificationChannel(ABC):
    """Abstract base class for notification channels."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get channel name."""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Check if channel is enabled."""

    @abstractmethod
    async def send(self, recipient: str, subject: str, body: str) -> None:
        """
        Deliver one message.

        Raises:
            Exception: Transport failures propagate to the caller
        """
