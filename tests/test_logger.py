"""Tests for Loguru logging setup."""

import logging

import pytest
from loguru import logger

from srt_bot.core.logger import run_id_ctx, setup_structured_logging


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()
    logging.basicConfig(handlers=[], force=True)


def test_text_log_includes_run_id(tmp_path):
    setup_structured_logging("INFO", log_dir=tmp_path)

    token = run_id_ctx.set("abc12345")
    try:
        logger.info("inside run")
    finally:
        run_id_ctx.reset(token)
    logger.info("outside run")

    lines = (tmp_path / "srt_bot.log").read_text(encoding="utf-8").splitlines()
    inside = next(line for line in lines if "inside run" in line)
    outside = next(line for line in lines if "outside run" in line)
    assert "| abc12345 |" in inside
    assert "| - |" in outside


def test_json_log(tmp_path):
    setup_structured_logging("INFO", json_format=True, log_dir=tmp_path)

    logger.info("structured")

    content = (tmp_path / "srt_bot.jsonl").read_text(encoding="utf-8")
    assert '"structured' in content
    assert not (tmp_path / "srt_bot.log").exists()


def test_stdlib_logging_intercepted(tmp_path):
    setup_structured_logging("INFO", log_dir=tmp_path)

    logging.getLogger("playwright").warning("from stdlib")

    assert "from stdlib" in (tmp_path / "srt_bot.log").read_text(encoding="utf-8")


def test_level_filters(tmp_path):
    setup_structured_logging("WARNING", log_dir=tmp_path)

    logger.info("too quiet")
    logger.warning("loud enough")

    content = (tmp_path / "srt_bot.log").read_text(encoding="utf-8")
    assert "too quiet" not in content
    assert "loud enough" in content
