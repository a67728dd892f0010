# topmark:header:start
#
#   project      : Pressroom
#   file         : errors.py
#   file_relpath : src/pressroom/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception taxonomy shared by the settings, transform and writer layers.

Hierarchy:
    * ``PressroomError``: base for every error raised by the library.
    * ``ConfigError``: an unparsable or invalid configuration value.
    * ``Condition``: a structured, severity-carrying failure.
        - ``TransformCondition``: raised by a transform while rewriting the tree.
        - ``VisitorCondition``: raised (or wrapped) during writer traversal.
    * ``TransformHalt``: fatal; a condition reached the run's halt-level.
    * ``StructuralWarning``: warning category for malformed configuration lines
      and diagnostics-section mismatches. Never raised by the core; only logged.

CLI-facing exceptions (with exit codes) live in `pressroom.cli.errors`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pressroom.core.diagnostics import severity_label, validate_severity

if TYPE_CHECKING:
    from pressroom.document.nodes import Node
    from pressroom.transforms.base import Transform


class PressroomError(Exception):
    """Base class for all Pressroom errors."""


class ConfigError(PressroomError):
    """Unparsable or invalid configuration value.

    Attributes:
        option (str | None): The (normalized) option name, when known.
        value (object): The offending raw value.
        source (Path | None): The configuration file the value came from.
        line (int | None): 1-based line number in ``source``.
    """

    def __init__(
        self,
        message: str,
        *,
        option: str | None = None,
        value: object = None,
        source: Path | str | None = None,
        line: int | None = None,
    ) -> None:
        self.option = option
        self.value = value
        self.source = Path(source) if source is not None else None
        self.line = line
        location: str = ""
        if self.source is not None:
            location = f"{self.source}:{line}: " if line is not None else f"{self.source}: "
        super().__init__(f"{location}{message}")
        self.message = message


class Condition(PressroomError):
    """A structured failure carrying a severity on the 0..10 scale.

    Attributes:
        severity (int): Severity; compared against report-level and halt-level.
        message (str): Human-readable message.
        line (int | None): Source line number, when known.
        node (Node | None): The originating document node, when known.
    """

    def __init__(
        self,
        severity: int,
        message: str,
        *,
        line: int | None = None,
        node: Node | None = None,
    ) -> None:
        self.severity = validate_severity(severity)
        self.message = message
        self.line = line
        self.node = node
        super().__init__(message)

    @property
    def label(self) -> str:
        """Return the display label of this condition's severity."""
        return severity_label(self.severity)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label}, {self.message!r}, line={self.line})"


class TransformCondition(Condition):
    """Condition raised by a transform during tree rewriting."""


class VisitorCondition(Condition):
    """Condition raised during writer traversal."""


class TransformHalt(PressroomError):
    """Fatal error: a transform condition reached the run's halt-level.

    Attributes:
        condition (TransformCondition): The triggering condition.
        transform (Transform): The transform that raised it.
    """

    def __init__(self, condition: TransformCondition, transform: Transform) -> None:
        self.condition = condition
        self.transform = transform
        where = f" (line {condition.line})" if condition.line is not None else ""
        super().__init__(
            f"Run halted by {transform.name}: {condition.label}{where} {condition.message}"
        )


class StructuralWarning(UserWarning):
    """Malformed configuration line or diagnostics-section mismatch."""
