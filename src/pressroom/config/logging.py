# topmark:header:start
#
#   project      : Pressroom
#   file         : logging.py
#   file_relpath : src/pressroom/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pressroom logging: a TRACE level below DEBUG and level-colored records.

Every module obtains its logger through `get_logger(__name__)`, which returns
a `PressroomLogger` (a `logging.Logger` with a `trace()` method). The CLI calls
`setup_logging()` once; library users keep full control over the root logger.

Log records are written to ``sys.stderr`` so they never mix with documents
written to stdout.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "PRESSROOM_LOG_LEVEL"

LOG_LEVELS: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = (
    "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"
)


class PressroomLogger(logging.Logger):
    """Logger with support for a TRACE level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` with severity TRACE.

        Args:
            msg (object): The message to be logged.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Extra attributes for the record.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg=msg, args=args, extra=extra, stacklevel=2)


if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

logging.setLoggerClass(PressroomLogger)


# Checked top-down; the first threshold a record reaches picks its style.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors whole records by level with `yachalk`.

    Args:
        fmt: Record format string.
        color: When False, records are returned uncolored.
    """

    def __init__(self, fmt: str | None = None, *, color: bool = True) -> None:
        super().__init__(fmt)
        self.color: bool = color

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record`` and color it according to its level."""
        message: str = super().format(record)
        if not self.color:
            return message
        for threshold, style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(message)
        return chalk.dim(message)


def parse_log_level(text: str) -> int | None:
    """Return the logging level named by ``text`` (a name or a number), or None."""
    value: str = text.strip().upper()
    if value.isdigit():
        return int(value)
    return LOG_LEVELS.get(value)


def resolve_env_log_level() -> int | None:
    """Return the level set through ``PRESSROOM_LOG_LEVEL``, or None if unset or unknown."""
    raw: str | None = os.environ.get(LOG_LEVEL_ENV_VAR)
    return parse_log_level(raw) if raw else None


def setup_logging(
    level: int | None = None,
    *,
    stream: IO[str] | None = None,
    color: bool | None = None,
) -> None:
    """Configure the root logger with one colored stream handler.

    Args:
        level: Logging level; None consults ``PRESSROOM_LOG_LEVEL`` and falls
            back to CRITICAL.
        stream: Destination of log records (default: ``sys.stderr``).
        color: Color records; None colors only when ``stream`` is a terminal.
    """
    if level is None:
        level = resolve_env_log_level()
    if level is None:
        level = logging.CRITICAL
    target: IO[str] = stream if stream is not None else sys.stderr
    if color is None:
        color = target.isatty()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(target)
    handler.setFormatter(
        ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT, color=color)
    )
    root_logger.addHandler(handler)


def get_logger(name: str) -> PressroomLogger:
    """Return the `PressroomLogger` called ``name``."""
    return cast("PressroomLogger", logging.getLogger(name))
