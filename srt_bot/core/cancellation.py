"""Cooperative cancellation for a reservation run.

Signal handlers call :meth:`CancellationToken.cancel`; the orchestrator
checks the token between steps and uses :meth:`CancellationToken.sleep`
for every fixed delay so a pending wait ends as soon as the run is
cancelled.
"""

import asyncio
from typing import Optional

from .exceptions import RunCancelledError


class CancellationToken:
    """Wraps an :class:`asyncio.Event` that marks the run as cancelled."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        """True once :meth:`cancel` has been called."""
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "Reservation run cancelled") -> None:
        """Mark the run as cancelled. Repeated calls keep the first reason."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """
        Raises:
            RunCancelledError: If the token has been cancelled
        """
        if self._event.is_set():
            raise RunCancelledError(self._reason or "Reservation run cancelled")

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()

    async def sleep(self, seconds: float) -> None:
        """
        Sleep for ``seconds`` unless cancelled first.

        Raises:
            RunCancelledError: If the token is or becomes cancelled
        """
        self.raise_if_cancelled()
        if seconds <= 0:
            return
        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return
        self.raise_if_cancelled()
