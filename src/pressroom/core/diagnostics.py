# topmark:header:start
#
#   project      : Pressroom
#   file         : diagnostics.py
#   file_relpath : src/pressroom/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Severity scale and diagnostic records for Pressroom.

This module defines the numeric severity scale shared by the transform
scheduler, the writer traversal and the settings resolver, together with
small record types used to collect diagnostics that never enter a document
tree (configuration problems, structural warnings).

Sections:
    * Severity: named points on the 0..10 severity scale with terminal colors.
    * Diagnostic: immutable structured diagnostic payload (severity + message + line).
    * DiagnosticStats: aggregated per-level counts.
    * DiagnosticLog: mutable collection with helpers for adding diagnostics.
    * FrozenDiagnosticLog: immutable snapshot container for frozen settings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from pressroom.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from pressroom.config.logging import PressroomLogger


logger: PressroomLogger = get_logger(__name__)

MIN_SEVERITY: Final[int] = 0
MAX_SEVERITY: Final[int] = 10


class Severity(IntEnum):
    """Named points on the 0..10 severity scale (higher is more severe).

    Any integer in ``MIN_SEVERITY..MAX_SEVERITY`` is a valid severity; the
    members only name the conventional levels.
    """

    DEBUG = 0
    INFO = 2
    WARNING = 4
    ERROR = 6
    SEVERE = 8
    FATAL = 10

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats should not use colors.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this level.
        """
        return cast(
            "Callable[[str], str]",
            {
                Severity.DEBUG: chalk.gray,
                Severity.INFO: chalk.blue,
                Severity.WARNING: chalk.yellow,
                Severity.ERROR: chalk.red,
                Severity.SEVERE: chalk.red_bright,
                Severity.FATAL: chalk.bg_red,
            }[self],
        )


def validate_severity(value: int) -> int:
    """Return ``value`` if it lies on the severity scale.

    Raises:
        ValueError: If ``value`` is outside ``0..10``.
    """
    level = int(value)
    if not MIN_SEVERITY <= level <= MAX_SEVERITY:
        raise ValueError(f"Severity must be in {MIN_SEVERITY}..{MAX_SEVERITY}, got {value!r}")
    return level


def severity_label(value: int) -> str:
    """Return the display label for a severity (``WARNING``, ``LEVEL-5``, ...)."""
    try:
        return Severity(value).name
    except ValueError:
        return f"LEVEL-{int(value)}"


def severity_color(value: int) -> Callable[[str], str]:
    """Return the color of the nearest named level at or below ``value``."""
    named: list[Severity] = [s for s in Severity if s <= value]
    return (named[-1] if named else Severity.DEBUG).color


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic that lives outside the document tree.

    Attributes:
        severity (int): Position on the severity scale.
        message (str): Human-readable message.
        line (int | None): Source line, when known.
    """

    severity: int
    message: str
    line: int | None = None

    @property
    def label(self) -> str:
        """Return the display label of this diagnostic's severity."""
        return severity_label(self.severity)


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity band."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics.

    Used while building settings: structural warnings and recovered
    configuration errors are appended here and frozen together with the
    resolved settings.
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    @classmethod
    def from_iterable(cls, diagnostics: Iterable[Diagnostic]) -> DiagnosticLog:
        """Create a DiagnosticLog from an iterable of diagnostics."""
        return cls(items=list(diagnostics))

    def freeze(self) -> FrozenDiagnosticLog:
        """Return an immutable snapshot of this log's diagnostics."""
        return FrozenDiagnosticLog(items=tuple(self.items))

    def add(self, severity: int, message: str, line: int | None = None) -> Diagnostic:
        """Append a diagnostic and return it."""
        diagnostic = Diagnostic(validate_severity(severity), message, line)
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.label, diagnostic.message)
        return diagnostic

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Append already-built diagnostics in order."""
        self.items.extend(diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FrozenDiagnosticLog:
    """Immutable counterpart to `DiagnosticLog`, stored on frozen `Settings`."""

    items: tuple[Diagnostic, ...] = ()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def stats(self) -> DiagnosticStats:
        """Return aggregated per-band counts for the contained diagnostics."""
        return compute_diagnostic_stats(self.items)


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-band counts for a sequence of diagnostics.

    Bands: below WARNING counts as info, WARNING up to ERROR as warning,
    ERROR and above as error.
    """
    n_info = n_warn = n_err = 0
    for d in diagnostics:
        if d.severity >= Severity.ERROR:
            n_err += 1
        elif d.severity >= Severity.WARNING:
            n_warn += 1
        else:
            n_info += 1
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)
