#!/usr/bin/env python3
"""
SRT-Bot - Automated SRT train seat reservation.

Main entry point for the application.
"""

import argparse
import asyncio
import signal
import sys
from typing import Any, Dict, Optional, Sequence

from dotenv import load_dotenv
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from srt_bot.cli import InputCollector, load_request_file
from srt_bot.core.cancellation import CancellationToken
from srt_bot.core.config import SRTSettings
from srt_bot.core.exceptions import ConfigurationError, RunCancelledError, SRTBotError
from srt_bot.core.logger import setup_structured_logging
from srt_bot.models import PassengerRequest, Reserved, RunOutcome
from srt_bot.services.booking import PipelineTimings, ReservationOrchestrator
from srt_bot.services.browser import BrowserManager
from srt_bot.services.notification import NotificationDispatcher

EXIT_RESERVED = 0
EXIT_NOT_RESERVED = 1
EXIT_BAD_INPUT = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SRT-Bot - Automated SRT seat reservation")
    parser.add_argument(
        "--request",
        metavar="FILE",
        help="YAML passenger request (prompts interactively when omitted)",
    )
    parser.add_argument("--max-attempts", type=int, help="Reservation attempts before giving up")
    parser.add_argument(
        "--headless", action="store_true", default=None, help="Run the browser without a window"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument(
        "--hold-seconds",
        type=int,
        help="Keep the browser open this long after a reservation for payment",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> SRTSettings:
    """Settings from environment/.env, overridden by command-line flags."""
    overrides: Dict[str, Any] = {
        "max_attempts": args.max_attempts,
        "headless": args.headless,
        "log_level": args.log_level,
        "payment_hold_seconds": args.hold_seconds,
    }
    return SRTSettings(**{k: v for k, v in overrides.items() if v is not None})


def setup_signal_handlers(loop: asyncio.AbstractEventLoop, token: CancellationToken) -> None:
    """
    Cancel the run on SIGINT/SIGTERM.

    The first signal cancels the token so the browser is closed on the way
    out; a second one exits immediately.
    """

    def handle_signal(signum: int, frame: Any) -> None:
        if not token.cancelled:
            logger.warning(f"Received signal {signum}, cancelling reservation run...")
            loop.call_soon_threadsafe(token.cancel, f"Cancelled by signal {signum}")
        else:
            logger.warning("Second signal received, forcing exit")
            sys.exit(EXIT_NOT_RESERVED)

    signal.signal(signal.SIGTERM, handle_signal)
    signal.signal(signal.SIGINT, handle_signal)


async def hold_for_payment(seconds: int, token: CancellationToken) -> None:
    """Keep the reserved session open so the user can pay in the browser."""
    if seconds <= 0:
        return
    logger.info(f"💳 Complete payment in the browser. Keeping it open for {seconds}s")
    try:
        await token.sleep(seconds)
    except RunCancelledError:
        logger.info("Payment hold ended early")


async def notify_outcome(
    dispatcher: NotificationDispatcher, outcome: RunOutcome, request: PassengerRequest
) -> None:
    result = await dispatcher.notify(outcome, request)
    if result.is_failure():
        logger.warning(f"Outcome notification not delivered: {result.error}")


async def run_reservation(
    settings: SRTSettings, request: PassengerRequest, token: CancellationToken
) -> RunOutcome:
    """Run one reservation end to end and send the outcome notification."""
    orchestrator = ReservationOrchestrator(
        timings=PipelineTimings(gate_timeout=settings.gate_timeout_seconds),
        cancel_token=token,
    )

    dispatcher = NotificationDispatcher(settings.email_config())

    async with BrowserManager(settings) as adapter:
        outcome = await orchestrator.run(request, adapter, settings.max_attempts)
        if isinstance(outcome, Reserved):
            # The payment window starts now; the user must hear about it first
            await notify_outcome(dispatcher, outcome, request)
            await hold_for_payment(settings.payment_hold_seconds, token)

    if not isinstance(outcome, Reserved):
        await notify_outcome(dispatcher, outcome, request)
    return outcome


async def run(settings: SRTSettings, request: PassengerRequest) -> int:
    token = CancellationToken()
    setup_signal_handlers(asyncio.get_running_loop(), token)

    try:
        outcome = await run_reservation(settings, request, token)
    except SRTBotError as e:
        # Browser could not be started or the session died outside an attempt
        logger.error(f"Reservation run failed: {e.message}")
        return EXIT_NOT_RESERVED

    if isinstance(outcome, Reserved):
        logger.success(f"🎉 Reserved on attempt {outcome.attempt}")
        return EXIT_RESERVED
    logger.error("Reservation was not completed")
    return EXIT_NOT_RESERVED


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    load_dotenv()

    try:
        settings = build_settings(args)
    except PydanticValidationError as e:
        # Logging is not configured yet
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    setup_structured_logging(
        settings.log_level,
        json_format=settings.log_json,
        log_dir=settings.log_dir,
        diagnose=settings.is_development(),
    )

    try:
        if args.request:
            request = load_request_file(args.request)
        else:
            request = InputCollector().collect()
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_BAD_INPUT
    except (KeyboardInterrupt, EOFError):
        logger.warning("Input cancelled")
        return EXIT_BAD_INPUT

    logger.info(f"Request: {request.summary()}")
    return asyncio.run(run(settings, request))


if __name__ == "__main__":
    sys.exit(main())
