"""Queueing gate (NetFunnel) handling."""

import asyncio
import time
from typing import Optional, Set

from loguru import logger

from ...constants import Selectors
from ...core.cancellation import CancellationToken
from ...core.exceptions import GateTimeoutError
from ..browser import PageAutomationAdapter


class QueueGate:
    """
    Waits for the traffic-control overlay to clear.

    The site may put the user in a queue after a search. While the
    overlay is visible nothing else on the page is usable, so the
    pipeline blocks here until it disappears, the deadline passes, or
    the run is cancelled.
    """

    def __init__(
        self,
        timeout_seconds: float,
        pulse_interval: float,
        token: Optional[CancellationToken] = None,
    ):
        """
        Initialize queue gate.

        Args:
            timeout_seconds: Maximum time to wait for the overlay to clear
            pulse_interval: Seconds between "still waiting" log lines
            token: Run cancellation token
        """
        self.timeout_seconds = timeout_seconds
        self.pulse_interval = pulse_interval
        self.token = token or CancellationToken()

    async def _pulse(self, started: float) -> None:
        while True:
            await asyncio.sleep(self.pulse_interval)
            logger.info(f"⏳ Still in queue ({time.monotonic() - started:.0f}s)")

    async def pass_through(self, adapter: PageAutomationAdapter) -> float:
        """
        Block until the queue overlay is gone.

        Returns:
            Seconds spent waiting (0.0 when no overlay was present)

        Raises:
            GateTimeoutError: Overlay still visible after the deadline
            RunCancelledError: Run cancelled while queued
        """
        self.token.raise_if_cancelled()
        if await adapter.count(Selectors.GATE) == 0:
            logger.debug("No queue overlay present")
            return 0.0

        logger.info("⏳ Waiting in queue...")
        started = time.monotonic()
        wait_task = asyncio.create_task(
            adapter.wait_for_hidden(Selectors.GATE, self.timeout_seconds * 1000)
        )
        cancel_task = asyncio.create_task(self.token.wait())
        pulse_task = asyncio.create_task(self._pulse(started))
        tasks: Set[asyncio.Task] = {wait_task, cancel_task, pulse_task}

        try:
            # Grace second lets the adapter report its own timeout first
            done, _ = await asyncio.wait(
                {wait_task, cancel_task},
                timeout=self.timeout_seconds + 1,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        self.token.raise_if_cancelled()
        if wait_task not in done or not wait_task.result():
            raise GateTimeoutError(self.timeout_seconds)

        waited = time.monotonic() - started
        logger.info(f"✓ Queue cleared after {waited:.1f}s")
        return waited
