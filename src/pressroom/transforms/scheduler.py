# topmark:header:start
#
#   project      : Pressroom
#   file         : scheduler.py
#   file_relpath : src/pressroom/transforms/scheduler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Transform scheduler: instantiate, order and run transforms on a document.

Algorithm (one run):
    1. A document without children is left untouched: nothing is instantiated
       or applied and no diagnostics section is created.
    2. Specs are instantiated: instances are reused, `Transform` subclasses are
       constructed against the root with an order from the run's counter, plain
       callables are wrapped in `CallableTransform`.
    3. Transforms are stably sorted by ``(priority, order)``.
    4. Each transform is applied in turn. A `TransformCondition` it raises is
       recorded as a ``system_message`` node in the diagnostics section
       (created on first use, found again by title), back-referenced to the
       originating node when one is given, reported when its severity meets the
       report-level and, when it meets the halt-level, turned into a
       `TransformHalt` that aborts the run. Otherwise the run resumes with the
       next transform.
    5. Finally (also when aborted) a diagnostics section holding only its title
       is removed.

Late additions:
    A transform may call ``ctx.schedule(spec)``. Added specs are instantiated
    right after the scheduling transform finishes, merged into the *remaining*
    queue and the queue is re-sorted. They therefore run in the same pass, in
    ``(priority, order)`` position among the transforms not yet applied; a late
    transform whose priority is below already-applied ones runs next.

Non-condition exceptions raised by a transform are programming errors: they
propagate unchanged (after the final cleanup of step 5).
"""

from __future__ import annotations

import inspect
import warnings
from typing import TYPE_CHECKING

from pressroom.config.keys import Keys
from pressroom.config.logging import get_logger
from pressroom.config.model import default_settings
from pressroom.core.errors import StructuralWarning, TransformCondition, TransformHalt
from pressroom.core.reporter import Reporter
from pressroom.document.nodes import DIAGNOSTICS_CLASS, NodeKind
from pressroom.transforms.base import (
    DEFAULT_COUNTER,
    CallableTransform,
    CreationCounter,
    Transform,
    TransformContext,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pressroom.config.logging import PressroomLogger
    from pressroom.config.model import Settings
    from pressroom.document.nodes import Document, Node
    from pressroom.transforms.base import TransformSpec

logger: PressroomLogger = get_logger(__name__)


class TransformScheduler:
    """Run a list of transform specs against one document.

    A scheduler instance is single-use: it holds the per-run state (pending
    queue, diagnostics section, worst recovered condition).

    Args:
        document: The document to rewrite in place.
        settings: Settings of the run (default: ``document.settings`` or the
            catalogue defaults).
        counter: Creation counter for instantiated transforms.
        reporter: Error-reporting destination; built from ``settings`` if omitted.
    """

    def __init__(
        self,
        document: Document,
        settings: Settings | None = None,
        *,
        counter: CreationCounter | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self.document: Document = document
        if settings is None:
            settings = document.settings if document.settings is not None else default_settings()
        self.settings: Settings = settings
        self.counter: CreationCounter = counter or DEFAULT_COUNTER
        self.reporter: Reporter = reporter or Reporter.from_settings(self.settings)
        self.title: str = str(self.settings.get(Keys.DIAGNOSTICS_TITLE, ""))
        self.applied: list[Transform] = []
        self.worst: TransformCondition | None = None
        self._pending: list[Transform] = []
        self._section: Node | None = None

    # ------------------------------------------------------------ instantiation

    def instantiate(self, spec: TransformSpec) -> Transform:
        """Turn a spec into a transform instance bound to this document."""
        if isinstance(spec, Transform):
            if spec.document is not self.document:
                raise ValueError(f"{spec!r} was created for another document")
            return spec
        if inspect.isclass(spec) and issubclass(spec, Transform):
            return spec(self.document, counter=self.counter)
        if callable(spec):
            return CallableTransform(self.document, spec)
        raise TypeError(f"Not a transform spec: {spec!r}")

    def add(self, specs: Iterable[TransformSpec]) -> None:
        """Instantiate ``specs`` and merge them into the pending queue (re-sorted)."""
        self._pending.extend(self.instantiate(s) for s in specs)
        self._pending.sort(key=lambda t: t.sort_key)

    # --------------------------------------------------------------------- run

    def run(self, specs: Iterable[TransformSpec]) -> tuple[Document, TransformCondition | None]:
        """Apply ``specs`` to the document.

        Returns:
            tuple[Document, TransformCondition | None]: The mutated document and
                the most severe recovered condition (None if there was none).

        Raises:
            TransformHalt: When a condition reaches the halt-level.
        """
        if self.document.child_count() == 0:
            logger.debug("Empty document %s: skipping transforms", self.document.source)
            return self.document, None

        self._section = self._find_section()
        self.add(specs)
        try:
            while self._pending:
                transform: Transform = self._pending.pop(0)
                self._apply(transform)
        finally:
            self._pending = []
            self._prune_section()
        return self.document, self.worst

    def _apply(self, transform: Transform) -> None:
        ctx = TransformContext(self.document, self.settings, transform)
        logger.debug("Applying %r", transform)
        try:
            transform.apply(ctx)
        except TransformCondition as condition:
            self.applied.append(transform)
            self.add(ctx.scheduled)
            self._handle(condition, transform)
            return
        self.applied.append(transform)
        if ctx.scheduled:
            logger.debug("%s scheduled %d transform(s)", transform.name, len(ctx.scheduled))
            self.add(ctx.scheduled)

    # ------------------------------------------------------------- conditions

    def _handle(self, condition: TransformCondition, transform: Transform) -> None:
        message: Node = self.system_message(condition)
        self._ensure_section()
        assert self._section is not None
        self.document.append(self._section, message)
        if condition.node is not None and condition.node in self.document:
            self.document.add_backref(message, condition.node)

        self.reporter.report(condition)
        if self.reporter.should_halt(condition):
            logger.error("%s halted the run: %s", transform.name, condition.message)
            raise TransformHalt(condition, transform) from condition

        self.document.conditions.append(condition)
        if self.worst is None or condition.severity > self.worst.severity:
            self.worst = condition
        logger.info("Recovered from %r raised by %s", condition, transform.name)

    def system_message(self, condition: TransformCondition) -> Node:
        """Build a detached ``system_message`` node describing ``condition``."""
        doc: Document = self.document
        attrs: dict[str, object] = {"level": condition.severity, "type": condition.label}
        if condition.line is not None:
            attrs["line"] = condition.line
        message: Node = doc.create(NodeKind.SYSTEM_MESSAGE, **attrs)
        paragraph: Node = doc.append(message, doc.create(NodeKind.PARAGRAPH))
        doc.append(paragraph, doc.text(condition.message))
        return message

    # ------------------------------------------------------ diagnostics section

    def _is_section(self, node: Node) -> bool:
        if node.kind != NodeKind.SECTION.value or not node.children:
            return False
        first: Node = self.document.child(node, 0)
        return first.kind == NodeKind.TITLE.value and self.document.astext(first) == self.title

    def _find_section(self) -> Node | None:
        matches: list[Node] = [n for n in self.document.children() if self._is_section(n)]
        if len(matches) > 1:
            warnings.warn(
                f"{len(matches)} sections titled {self.title!r}; using the last one",
                StructuralWarning,
                stacklevel=3,
            )
        return matches[-1] if matches else None

    def _ensure_section(self) -> None:
        cached: Node | None = self._section
        if cached is not None and cached in self.document and self._is_section(cached):
            return
        self._section = self._find_section()
        if self._section is not None:
            return
        doc: Document = self.document
        section: Node = doc.create(NodeKind.SECTION, classes=[DIAGNOSTICS_CLASS])
        title: Node = doc.append(section, doc.create(NodeKind.TITLE))
        doc.append(title, doc.text(self.title))
        doc.append(doc.root, section)
        self._section = section
        logger.debug("Created diagnostics section %r", section)

    def _prune_section(self) -> None:
        section: Node | None = self._section
        if section is None or section not in self.document:
            return
        if self.document.child_count(section) < 2:
            self.document.remove(section)
            self._section = None
            logger.debug("Removed empty diagnostics section")


def run_transforms(
    document: Document,
    specs: Iterable[TransformSpec],
    settings: Settings | None = None,
    *,
    counter: CreationCounter | None = None,
    reporter: Reporter | None = None,
) -> tuple[Document, TransformCondition | None]:
    """Run ``specs`` against ``document`` (see `TransformScheduler.run`)."""
    scheduler = TransformScheduler(document, settings, counter=counter, reporter=reporter)
    return scheduler.run(specs)
