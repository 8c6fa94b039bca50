"""
Logger tests - singleton behavior and output format
"""

import pytest

from utils.logger import Logger, get_logger, get_category_logger, configure_logger
from models.enums import LogLevel, LogCategory


@pytest.fixture(autouse=True)
def restore_logger():
    logger = get_logger()
    level, colors = logger.min_level, logger.use_colors
    yield
    configure_logger(level, colors)


def test_configure_logger_keeps_singleton():
    original = get_logger()
    bound = get_category_logger(LogCategory.DRAIN)

    configure_logger(LogLevel.DEBUG, use_colors=False)

    assert get_logger() is original
    assert original.min_level == LogLevel.DEBUG
    assert bound._base is original


def test_output_format(capsys):
    logger = Logger(min_level=LogLevel.DEBUG, use_colors=False)
    log = logger.for_category(LogCategory.DRAIN)

    log.info("Drain started", players=3, delay="120s")

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0].endswith("DRAIN     ✓ Drain started")
    assert lines[1].strip() == "├─ players: 3"
    assert lines[2].strip() == "└─ delay: 120s"


def test_min_level_filters(capsys):
    logger = Logger(min_level=LogLevel.WARN, use_colors=False)
    log = logger.for_category(LogCategory.PROBE)

    log.debug("hidden")
    log.info("hidden too")
    log.warn("Steam HTTP request failed with status code: 503")
    log.error("visible")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "PROBE     ⚠ Steam HTTP request failed" in out
    assert "✗ visible" in out


def test_category_override(capsys):
    logger = Logger(use_colors=False)
    log = logger.for_category(LogCategory.SYSTEM)

    log.info("Checking for updates...", category=LogCategory.PROBE)
    log.with_category(LogCategory.HOST).warn("hibernation")

    lines = capsys.readouterr().out.splitlines()
    assert "PROBE" in lines[0]
    assert "HOST" in lines[1]
