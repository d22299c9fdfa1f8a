"""
Console rendering for the ``console`` encoding.
"""

from __future__ import annotations

from structlog.typing import EventDict, WrappedLogger

# =============================================================================
# Console Renderer (Aligned Columns)
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "logger": "\033[35m",
    "key": "\033[34m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleRenderer:
    """Tab separated, human-readable lines: ``ts  LEVEL  logger  caller  msg  k=v ...``.

    Stack traces and formatted exceptions are appended on their own lines.
    """

    _LEVEL_COLORS = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[1;31m",
    }

    EXCLUDED_KEYS = {"ts", "level", "logger", "caller", "msg", "stacktrace", "exception"}
    LEVEL_WIDTH = 8
    SEPARATOR = "\t"

    def __init__(self, *, use_color: bool = False):
        self.use_color = use_color

    def _maybe_color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return colorize(text, color)

    def _level(self, level: str) -> str:
        text = f"{level:<{self.LEVEL_WIDTH}}"
        color = self._LEVEL_COLORS.get(level)
        if not self.use_color or not color:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        columns = []
        if "ts" in event_dict:
            columns.append(self._maybe_color(str(event_dict["ts"]), "timestamp"))
        columns.append(self._level(str(event_dict.get("level", method_name)).upper()))
        if "logger" in event_dict:
            columns.append(self._maybe_color(str(event_dict["logger"]), "logger"))
        if "caller" in event_dict:
            columns.append(str(event_dict["caller"]))
        columns.append(str(event_dict.get("msg", "")))

        extras = [
            f"{self._maybe_color(str(k), 'key')}={self._maybe_color(str(v), 'dim')}"
            for k, v in event_dict.items()
            if k not in self.EXCLUDED_KEYS
        ]
        if extras:
            columns.append(" ".join(extras))

        line = self.SEPARATOR.join(columns)
        for key in ("stacktrace", "exception"):
            if event_dict.get(key):
                line += "\n" + str(event_dict[key])
        return line
