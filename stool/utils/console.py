"""Colorful stderr logging formatter for stool.

Log lines share the terminal with interactive ssh sessions, so they are
short: level, component and message. Timestamps are added only when
asked for (debug runs).
"""

import logging
import re
from datetime import datetime

RESET = "\033[0m"

# ANSI color codes
COLORS = {
    "bold": "\033[1m",
    "dim": "\033[2m",
    "white": "\033[37m",
    "green": "\033[32m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Longest prefix wins
COMPONENT_COLORS = [
    ("stool.services.executor", COLORS["bright_magenta"]),
    ("stool.services", COLORS["bright_cyan"]),
    ("stool.commands", COLORS["bright_blue"]),
    ("stool.config", COLORS["green"]),
]

# user@host:port, including bracketless IPv6 hosts
DESTINATION_PATTERN = re.compile(r"([\w.\-]+@[\w.\-:]+:\d+)")


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with component highlighting."""

    def __init__(self, use_colors: bool = True, show_time: bool = False) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
            show_time: Prefix each line with HH:MM:SS.mmm.
        """
        super().__init__()
        self.use_colors = use_colors
        self.show_time = show_time

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{RESET}"

    @staticmethod
    def _component_color(name: str) -> str:
        for prefix, color in COMPONENT_COLORS:
            if name.startswith(prefix):
                return color
        return COLORS["white"]

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as one colored line."""
        sep = self._colorize("|", COLORS["dim"])
        level = self._colorize(
            f"{record.levelname:<7}",
            LEVEL_COLORS.get(record.levelname, COLORS["white"]),
        )
        name = record.name.removeprefix("stool.")
        component = self._colorize(name, self._component_color(record.name))

        parts = [level, component, self._highlight(record.getMessage())]
        if self.show_time:
            dt = datetime.fromtimestamp(record.created)
            stamp = f"{dt:%H:%M:%S}.{int(record.msecs):03d}"
            parts.insert(0, self._colorize(stamp, COLORS["dim"]))
        line = f" {sep} ".join(parts)

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight(self, message: str) -> str:
        """Highlight session destinations."""
        if not self.use_colors or "@" not in message:
            return message
        return DESTINATION_PATTERN.sub(
            f"{COLORS['bright_magenta']}\\1{RESET}",
            message,
        )
