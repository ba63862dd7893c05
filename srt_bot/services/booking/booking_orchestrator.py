"""Reservation attempt orchestrator.

Runs the booking pipeline against a :class:`PageAutomationAdapter` up to
``max_attempts`` times, reloading the page between attempts, and reduces
the run to exactly one :data:`RunOutcome`.
"""

import uuid
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from ...core.cancellation import CancellationToken
from ...core.exceptions import AutomationError, RunCancelledError, SRTBotError
from ...core.logger import run_id_ctx
from ...models import (
    Aborted,
    AttemptFatal,
    AttemptRecoverable,
    AttemptResult,
    AttemptSucceeded,
    Exhausted,
    GuestIdentity,
    PassengerRequest,
    Reserved,
    RunOutcome,
)
from ..browser import PageAutomationAdapter
from .form_filler import FormFiller
from .gate import QueueGate
from .identity import IdentityConfirmer
from .timings import PipelineTimings
from .train_selector import TrainSelector

# Called with (attempt, error) after every failed attempt
AttemptFailedCallback = Callable[[int, SRTBotError], None]


def _accept_dialog(message: str) -> bool:
    logger.info(f"Accepting dialog: {message}")
    return True


class ReservationOrchestrator:
    """Retrying state machine around the reservation step pipeline."""

    def __init__(
        self,
        timings: Optional[PipelineTimings] = None,
        cancel_token: Optional[CancellationToken] = None,
        on_attempt_failed: Optional[AttemptFailedCallback] = None,
    ):
        """
        Initialize reservation orchestrator.

        Args:
            timings: Pipeline delays (defaults to production timings)
            cancel_token: Token that preempts delays and the queue wait
            on_attempt_failed: Observer for failed attempts
        """
        self.timings = timings or PipelineTimings()
        self.token = cancel_token or CancellationToken()
        self.on_attempt_failed = on_attempt_failed

        self.form_filler = FormFiller(self.timings, self.token)
        self.gate = QueueGate(self.timings.gate_timeout, self.timings.gate_pulse, self.token)
        self.train_selector = TrainSelector()
        self.identity = IdentityConfirmer(self.timings, self.token)

    async def run(
        self,
        request: PassengerRequest,
        adapter: PageAutomationAdapter,
        max_attempts: int,
    ) -> RunOutcome:
        """
        Try to reserve the requested train.

        Args:
            request: Validated passenger request
            adapter: Page automation session, owned by the caller
            max_attempts: Attempt budget (>= 1)

        Returns:
            Reserved on the first successful attempt, Aborted on a fatal
            error, otherwise Exhausted with the last attempt's error
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        ctx_token = run_id_ctx.set(uuid.uuid4().hex[:8])
        try:
            logger.info(f"🚄 Reservation run started: {request.summary()}")
            adapter.on_dialog(_accept_dialog)
            return await self._run_attempts(request, adapter, max_attempts)
        finally:
            run_id_ctx.reset(ctx_token)

    async def _run_attempts(
        self,
        request: PassengerRequest,
        adapter: PageAutomationAdapter,
        max_attempts: int,
    ) -> RunOutcome:
        last_error: Optional[SRTBotError] = None

        for attempt in range(1, max_attempts + 1):
            logger.info(f"↻ Attempt {attempt}/{max_attempts}")
            result = await self.attempt(request, adapter, attempt)

            if isinstance(result, AttemptSucceeded):
                logger.success(f"🎉 Reservation succeeded on attempt {attempt}")
                return Reserved(attempt)

            if isinstance(result, AttemptFatal):
                logger.error(f"Run aborted on attempt {attempt}: {result.error.message}")
                return Aborted(result.error, attempt)

            last_error = result.error
            logger.warning(f"✗ Attempt {attempt} failed: {last_error.message}")
            if self.on_attempt_failed:
                self.on_attempt_failed(attempt, last_error)

            if attempt < max_attempts:
                try:
                    await self.token.sleep(self.timings.between_attempts)
                except RunCancelledError as e:
                    logger.warning("Run cancelled between attempts")
                    return Aborted(e, attempt)

        assert last_error is not None
        logger.error(f"All {max_attempts} attempts failed. Last error: {last_error.message}")
        return Exhausted(last_error, max_attempts)

    async def attempt(
        self, request: PassengerRequest, adapter: PageAutomationAdapter, attempt: int
    ) -> AttemptResult:
        """Run one attempt and classify how it ended."""
        try:
            if attempt > 1:
                await self._reset(adapter)
            await self._run_pipeline(request, adapter)
        except SRTBotError as e:
            return AttemptRecoverable(e) if e.recoverable else AttemptFatal(e)
        except Exception as e:
            logger.opt(exception=e).warning("Unexpected automation failure")
            return AttemptRecoverable(AutomationError(f"Unexpected automation failure: {e}"))
        return AttemptSucceeded()

    async def _reset(self, adapter: PageAutomationAdapter) -> None:
        logger.info("⟳ Reloading page")
        await adapter.reload()
        await self.token.sleep(self.timings.after_reload)

    async def _step(
        self, number: int, title: str, action: Callable[..., Awaitable[Any]], *args: Any
    ) -> Any:
        self.token.raise_if_cancelled()
        logger.info(f"▶ Step {number}: {title}")
        result = await action(*args)
        logger.debug(f"Step {number} complete")
        return result

    async def _run_pipeline(
        self, request: PassengerRequest, adapter: PageAutomationAdapter
    ) -> None:
        trip = request.trip
        identity = request.identity

        await self._step(1, "stations", self.form_filler.set_stations, adapter, trip)
        await self._step(2, "travel date", self.form_filler.set_travel_date, adapter, trip)
        await self._step(3, "search", self.form_filler.search, adapter)

        await self._step(4, "queue gate", self.gate.pass_through, adapter)
        await self.token.sleep(self.timings.after_gate)

        await self._step(5, "find train", self.train_selector.find_match, adapter, trip)
        await self.token.sleep(self.timings.before_reserve)
        await self._step(6, "reserve", self.train_selector.reserve, adapter, trip)

        await self._step(7, "checkout route", self.identity.route_checkout, adapter, identity)
        await self._step(8, "confirm identity", self.identity.confirm, adapter, identity)

        if isinstance(identity, GuestIdentity):
            await self._step(
                9, "passenger form", self.form_filler.fill_guest_passenger_form, adapter, identity
            )
