"""
Structured logger output
"""

import pytest

from models.enums import LogCategory, LogLevel
from utils.logger import Logger, configure_logger, get_logger


@pytest.fixture
def plain_logger():
    return Logger(min_level=LogLevel.DEBUG, use_colors=False)


def test_message_and_tree_details(plain_logger, capsys):
    plain_logger.info(LogCategory.CONFIG, "Loaded setting 'TopHeight'", value=120.0, key="TopHeight")

    lines = capsys.readouterr().out.splitlines()
    assert "CONFIG" in lines[0]
    assert "✓ Loaded setting 'TopHeight'" in lines[0]
    assert lines[1].strip() == "├─ value: 120.0"
    assert lines[2].strip() == "└─ key: TopHeight"


def test_level_filtering(capsys):
    logger = Logger(min_level=LogLevel.WARN, use_colors=False)

    logger.info(LogCategory.PLAYGROUND, "hidden")
    logger.warn(LogCategory.PLAYGROUND, "Preview image not found")
    logger.error(LogCategory.PLAYGROUND, "Playground cannot load the main image")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "⚠ Preview image not found" in out
    assert "✗ Playground cannot load the main image" in out


def test_bound_logger_uses_its_category(plain_logger, capsys):
    plain_logger.for_category(LogCategory.ANIMATION).debug("Frame 1/3")
    plain_logger.for_category(LogCategory.TASK).info("Task registered", details=["first"], id=7)

    lines = capsys.readouterr().out.splitlines()
    assert "ANIMATION" in lines[0] and "· Frame 1/3" in lines[0]
    assert "TASK" in lines[1]
    assert lines[2].strip() == "├─ first"
    assert lines[3].strip() == "└─ id: 7"


def test_colors_disabled_has_no_escape_codes(plain_logger, capsys):
    plain_logger.error(LogCategory.SYSTEM, "failed", reason="x")

    assert "\033[" not in capsys.readouterr().out


def test_configure_updates_singleton(capsys):
    original = (get_logger().min_level, get_logger().use_colors)
    try:
        configure_logger(LogLevel.ERROR, use_colors=False)
        log = get_logger().for_category(LogCategory.EVENT)
        log.info("quiet")
        log.error("loud")

        out = capsys.readouterr().out
        assert "quiet" not in out
        assert "loud" in out
        assert log._base is get_logger()
    finally:
        configure_logger(*original)
