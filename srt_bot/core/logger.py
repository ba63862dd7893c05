"""Advanced logging with Loguru."""

import contextvars
import logging
import sys
from pathlib import Path
from types import FrameType
from typing import Any, Dict, Optional, Union

from loguru import logger

# Context variable identifying the current reservation run
run_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "run_id", default=None
)

__all__ = ["run_id_ctx", "setup_structured_logging", "InterceptHandler"]


def _run_id_patcher(record: Dict[str, Any]) -> None:
    """Inject the run_id from context into the log's extra fields."""
    run_id = run_id_ctx.get()
    if run_id:
        record["extra"]["run_id"] = run_id


class InterceptHandler(logging.Handler):
    """Redirect standard logging records (Playwright, asyncio) to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Union[str, int] = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame: Optional[FrameType] = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_structured_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_dir: Union[str, Path] = "logs",
    diagnose: bool = False,
) -> None:
    """
    Setup Loguru logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: Serialize the run log file as JSON lines
        log_dir: Directory for log files
        diagnose: Include variable values in tracebacks (development only)
    """
    logger.remove()
    # run_id defaults to "-" so {extra[run_id]} resolves outside a run
    logger.configure(extra={"run_id": "-"}, patcher=_run_id_patcher)

    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Console handler - human readable
    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    logger.add(sys.stdout, format=console_format, level=level, colorize=True)

    if json_format:
        logger.add(
            logs_dir / "srt_bot.jsonl",
            format="{message}",
            level=level,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            serialize=True,
        )
    else:
        text_format = (
            "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[run_id]} | "
            "{name}:{function}:{line} - {message}"
        )
        logger.add(
            logs_dir / "srt_bot.log",
            format=text_format,
            level=level,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
        )

    logger.add(
        logs_dir / "errors_{time:YYYY-MM-DD}.log",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}",
        level="ERROR",
        rotation="10 MB",
        retention="90 days",
        backtrace=True,
        diagnose=diagnose,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.root.setLevel(getattr(logging, level))
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger.info(f"Logging initialized (level={level}, json={json_format})")
