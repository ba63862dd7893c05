"""Fixed delays and deadlines used by the booking pipeline."""

from dataclasses import dataclass

from ...constants import Delays, Intervals, Timeouts


@dataclass(frozen=True)
class PipelineTimings:
    """
    Every wait the pipeline performs, in seconds.

    Fixed delays stand in for readiness signals the site does not expose;
    the queue gate is the only wait driven by the page itself.
    """

    after_reload: float = Delays.AFTER_RELOAD
    between_attempts: float = Delays.BETWEEN_ATTEMPTS
    search_results_load: float = Delays.SEARCH_RESULTS_LOAD
    after_gate: float = Delays.AFTER_GATE
    before_reserve: float = Delays.BEFORE_RESERVE
    before_checkout_route: float = Delays.BEFORE_CHECKOUT_ROUTE
    after_login_submit: float = Delays.AFTER_LOGIN_SUBMIT
    gate_timeout: float = Timeouts.GATE_WAIT_SECONDS
    gate_pulse: float = Intervals.GATE_PULSE

    @classmethod
    def instant(cls, gate_timeout: float = 1.0) -> "PipelineTimings":
        """No fixed delays at all; used for dry runs and tests."""
        return cls(
            after_reload=0,
            between_attempts=0,
            search_results_load=0,
            after_gate=0,
            before_reserve=0,
            before_checkout_route=0,
            after_login_submit=0,
            gate_timeout=gate_timeout,
            gate_pulse=gate_timeout,
        )
