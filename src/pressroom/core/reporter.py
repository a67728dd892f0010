# topmark:header:start
#
#   project      : Pressroom
#   file         : reporter.py
#   file_relpath : src/pressroom/core/reporter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error-reporting destination for conditions raised during a run.

A `Reporter` owns the two run-scoped thresholds:

- ``report_level``: conditions at or above it are written, one line each, as
  ``<LABEL> [line <N>] <message>``;
- ``halt_level``: conditions at or above it abort the run.

The reporter only formats and gates; deciding what to do with a halting
condition belongs to the transform scheduler.
"""

from __future__ import annotations

import sys
from typing import IO, TYPE_CHECKING, Any, Final

from pressroom.config.logging import get_logger
from pressroom.core.diagnostics import Severity, severity_color, validate_severity

if TYPE_CHECKING:
    from pressroom.config.logging import PressroomLogger
    from pressroom.config.model import Settings
    from pressroom.core.errors import Condition

logger: PressroomLogger = get_logger(__name__)

DEFAULT_REPORT_LEVEL: Final[int] = int(Severity.WARNING)
DEFAULT_HALT_LEVEL: Final[int] = int(Severity.SEVERE)


class Reporter:
    """Gate and format conditions against report-level and halt-level.

    Args:
        report_level: Minimum severity that is written to ``stream``.
        halt_level: Minimum severity that aborts a run.
        stream: Text stream receiving reported lines. ``None`` means
            ``sys.stderr`` at the time of reporting.
        color: Colorize the severity label with `yachalk`.
    """

    def __init__(
        self,
        report_level: int = DEFAULT_REPORT_LEVEL,
        halt_level: int = DEFAULT_HALT_LEVEL,
        *,
        stream: IO[str] | None = None,
        color: bool = False,
    ) -> None:
        self.report_level: int = validate_severity(report_level)
        self.halt_level: int = validate_severity(halt_level)
        self.stream: IO[str] | None = stream
        self.color: bool = color
        self.reported: list[Condition] = []

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> Reporter:
        """Build a reporter whose thresholds come from resolved settings."""
        return cls(settings.report_level, settings.halt_level, **kwargs)

    def format(self, condition: Condition) -> str:
        """Return the one-line rendering of ``condition``."""
        label: str = condition.label
        if self.color:
            label = severity_color(condition.severity)(label)
        if condition.line is not None:
            return f"{label} [line {condition.line}] {condition.message}"
        return f"{label} {condition.message}"

    def is_reportable(self, condition: Condition) -> bool:
        """Return True if ``condition`` meets the report-level."""
        return condition.severity >= self.report_level

    def should_halt(self, condition: Condition) -> bool:
        """Return True if ``condition`` meets the halt-level."""
        return condition.severity >= self.halt_level

    def report(self, condition: Condition) -> bool:
        """Write ``condition`` to the stream if it meets the report-level.

        Returns:
            bool: True if a line was written.
        """
        if not self.is_reportable(condition):
            logger.debug("Suppressed below report-level %d: %r", self.report_level, condition)
            return False
        stream: IO[str] = self.stream if self.stream is not None else sys.stderr
        stream.write(self.format(condition) + "\n")
        self.reported.append(condition)
        return True
