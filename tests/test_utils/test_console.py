"""Tests for the colorful log formatter."""

import logging
import re
import sys

from stool.utils.console import COLORS, RESET, ColorfulFormatter


def _record(name: str, msg: str, level: int = logging.INFO, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, msg, None, exc_info)


def test_plain_format_has_no_ansi():
    """Without colors the line is plain text."""
    line = ColorfulFormatter(use_colors=False).format(
        _record("stool.services.resolver", "Resolved dev@10.0.0.9:22")
    )
    assert "\033[" not in line
    assert line == "INFO    | services.resolver | Resolved dev@10.0.0.9:22"


def test_time_prefix():
    """show_time prefixes the line with a timestamp."""
    line = ColorfulFormatter(use_colors=False, show_time=True).format(
        _record("stool.cli", "Command finished", logging.DEBUG)
    )
    assert re.match(r"\d\d:\d\d:\d\d\.\d{3} \| DEBUG   \| cli \| Command finished$", line)


def test_destination_highlighted():
    """user@host:port is highlighted when colors are on."""
    line = ColorfulFormatter(use_colors=True).format(
        _record("stool.services.executor", "Starting session to dev@10.0.0.9:22")
    )
    assert f"{COLORS['bright_magenta']}dev@10.0.0.9:22{RESET}" in line
    assert f"{COLORS['bright_magenta']}services.executor{RESET}" in line


def test_exception_appended():
    """exc_info is rendered after the message."""
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record("stool.cli", "failed", logging.DEBUG, sys.exc_info())
    line = ColorfulFormatter(use_colors=False).format(record)
    assert line.startswith("DEBUG   | cli | failed\n")
    assert "RuntimeError: boom" in line
