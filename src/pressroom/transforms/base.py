# topmark:header:start
#
#   project      : Pressroom
#   file         : base.py
#   file_relpath : src/pressroom/transforms/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base classes for tree-rewriting transforms.

A transform rewrites the subtree rooted at its ``target``. The scheduler runs
transforms in ``(priority, order)`` order:

- ``priority`` (0..999): lower runs earlier; defaults to the class's
  ``default_priority``;
- ``order``: creation sequence number drawn from a `CreationCounter`; unique
  per counter, so same-priority transforms run in the order they were created.

Plain callables are wrapped in `CallableTransform` with priority 950 and order
0, so they run late and, among themselves, in list order.

Subclass `Transform` and implement ``apply(ctx)``. Failures are reported by
raising `TransformCondition` (``ctx.condition(...)`` builds one).
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Final, Union

from pressroom.config.logging import get_logger
from pressroom.core.errors import TransformCondition

if TYPE_CHECKING:
    from pressroom.config.logging import PressroomLogger
    from pressroom.config.model import Settings
    from pressroom.config.registry import OptionSpec
    from pressroom.document.nodes import Document, Node

logger: PressroomLogger = get_logger(__name__)

MIN_PRIORITY: Final[int] = 0
MAX_PRIORITY: Final[int] = 999
CALLABLE_PRIORITY: Final[int] = 950
CALLABLE_ORDER: Final[int] = 0


class CreationCounter:
    """Monotonically increasing creation sequence (never reset).

    Only uniqueness matters; values start at 1 so that order 0 stays reserved
    for wrapped callables.
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next(self) -> int:
        """Return the next sequence number."""
        return next(self._counter)


# Process-wide counter used when no counter is passed explicitly.
DEFAULT_COUNTER: CreationCounter = CreationCounter()


def validate_priority(priority: int) -> int:
    """Return ``priority`` if it lies in ``0..999``.

    Raises:
        ValueError: If out of range.
    """
    if not MIN_PRIORITY <= priority <= MAX_PRIORITY:
        raise ValueError(f"Transform priority must be in {MIN_PRIORITY}..{MAX_PRIORITY}")
    return priority


class Transform:
    """Unit of tree rewriting.

    Attributes:
        default_priority (int): Class-level priority used when none is given.
        settings_spec (tuple[OptionSpec, ...]): Options this transform reads.
        document (Document): The document being rewritten.
        target (Node): Root of the subtree this transform rewrites.
        priority (int): Effective priority (0..999).
        order (int): Creation sequence number (tie-breaker).
    """

    default_priority: ClassVar[int] = 500
    settings_spec: ClassVar[tuple[OptionSpec, ...]] = ()

    def __init__(
        self,
        document: Document,
        target: Node | None = None,
        *,
        priority: int | None = None,
        order: int | None = None,
        counter: CreationCounter | None = None,
    ) -> None:
        self.document: Document = document
        self.target: Node = target if target is not None else document.root
        self.priority: int = validate_priority(
            self.default_priority if priority is None else priority
        )
        self.order: int = order if order is not None else (counter or DEFAULT_COUNTER).next()

    @property
    def name(self) -> str:
        """Return a stable identifier for logs and error messages."""
        return type(self).__name__

    @property
    def sort_key(self) -> tuple[int, int]:
        """Return ``(priority, order)``."""
        return (self.priority, self.order)

    def apply(self, ctx: TransformContext) -> None:
        """Rewrite ``self.target`` in place.

        Raises:
            TransformCondition: To report a failure with a severity.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.name} priority={self.priority} order={self.order}>"


class CallableTransform(Transform):
    """Wrap a plain ``func(document)`` callable as a late-running transform."""

    default_priority: ClassVar[int] = CALLABLE_PRIORITY

    def __init__(self, document: Document, func: Callable[[Document], Any]) -> None:
        super().__init__(document, order=CALLABLE_ORDER)
        self.func: Callable[[Document], Any] = func

    @property
    def name(self) -> str:
        return getattr(self.func, "__qualname__", None) or repr(self.func)

    def apply(self, ctx: TransformContext) -> None:
        self.func(ctx.document)


# A transform spec: an instance, a Transform subclass, or a plain callable.
TransformSpec = Union[Transform, "type[Transform]", Callable[["Document"], Any]]


@dataclass
class TransformContext:
    """What a running transform sees of its run.

    Attributes:
        document (Document): The document being rewritten.
        settings (Settings): The run's settings.
        transform (Transform): The transform currently applied.
        scheduled (list[TransformSpec]): Specs added during this application;
            drained by the scheduler after the transform returns or fails.
    """

    document: Document
    settings: Settings
    transform: Transform
    scheduled: list[TransformSpec] = field(default_factory=lambda: [])

    @property
    def target(self) -> Node:
        """Return the current transform's target node."""
        return self.transform.target

    def schedule(self, spec: TransformSpec) -> None:
        """Add a transform to the current run (merged into the pending queue)."""
        self.scheduled.append(spec)

    def condition(
        self,
        severity: int,
        message: str,
        *,
        line: int | None = None,
        node: Node | None = None,
    ) -> TransformCondition:
        """Build a `TransformCondition` for ``raise``."""
        return TransformCondition(severity, message, line=line, node=node)
