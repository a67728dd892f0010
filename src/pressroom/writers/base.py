# topmark:header:start
#
#   project      : Pressroom
#   file         : base.py
#   file_relpath : src/pressroom/writers/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Writer boundary: named output parts filled by a visitor traversal.

A `Writer` owns an ordered set of named *parts*. Each part is a
`collections.deque` of text fragments: `Writer.emit` appends to the active part
and `Writer.prepend` inserts at its front, both in O(1). The active part is a
single slot switched with the `Writer.with_part` context manager, which restores
the previous part on exit even when the body raises.

Traversal:
    `Writer.attach` walks the tree depth-first in pre-order. For each node it
    calls ``visit_<kind>(node)`` (or `Writer.unknown_visit`), then the
    children, then ``depart_<kind>(node)`` (or `Writer.unknown_departure`).
    Visitors steer the walk by raising:

    - `SkipChildren`: do not walk the node's children;
    - `SkipDeparture`: do not call the node's departure method;
    - `SkipSiblings`: once the node is done, skip its remaining siblings. The
      signal is scoped to the current sibling frame only.

Failures:
    Any other exception, `VisitorCondition` included, is handled according to
    the ``visitor_errors`` setting. With ``continue`` the failure is logged and
    recorded in `Writer.conditions`, the failing node's remaining work
    (children, departure) is skipped, and the walk resumes with the next
    sibling. With ``propagate`` the exception is re-raised unchanged.
"""

from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from pressroom.config.keys import VISITOR_ERRORS_CONTINUE, VISITOR_ERRORS_PROPAGATE, Keys
from pressroom.config.logging import get_logger
from pressroom.core.diagnostics import Severity
from pressroom.core.errors import VisitorCondition
from pressroom.document.nodes import DIAGNOSTICS_CLASS

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import IO

    from pressroom.config.logging import PressroomLogger
    from pressroom.config.model import Settings
    from pressroom.config.registry import OptionSpec
    from pressroom.document.nodes import Document, Node

    Destination = Path | str | PathLike[str] | IO[str] | None

logger: PressroomLogger = get_logger(__name__)


class TraversalSignal(Exception):
    """Base class for exceptions that steer a writer traversal."""


class SkipChildren(TraversalSignal):
    """Do not walk the current node's children."""


class SkipDeparture(TraversalSignal):
    """Do not call the current node's departure method."""


class SkipSiblings(TraversalSignal):
    """Skip the remaining siblings of the current node (current frame only)."""


def is_diagnostics_section(node: Node) -> bool:
    """Return True if ``node`` is the section collecting transform diagnostics."""
    return DIAGNOSTICS_CLASS in node.attributes.get("classes", ())


def message_line(document: Document, node: Node) -> str:
    """Render a ``system_message`` node as ``LABEL [line N] message``."""
    label: str = str(node.attributes.get("type") or f"LEVEL-{node.attributes.get('level')}")
    text: str = " ".join(document.astext(node).split())
    line = node.attributes.get("line")
    if line is not None:
        return f"{label} [line {line}] {text}"
    return f"{label} {text}"


class Writer:
    """Base class for writers.

    Attributes:
        name (str): Registry name.
        parts (tuple[str, ...]): Ordered part names; `output` joins them in this order.
        default_part (str): Part active when traversal starts.
        settings_spec (tuple[OptionSpec, ...]): Options the writer reads.
        settings (Settings | None): Explicit settings; the attached document's
            settings are used when None.
        document (Document | None): The attached document.
        conditions (list[VisitorCondition]): Visitor failures recovered from
            during the last traversal.
    """

    name: ClassVar[str] = "base"
    parts: ClassVar[tuple[str, ...]] = ("body",)
    default_part: ClassVar[str] = "body"
    settings_spec: ClassVar[tuple[OptionSpec, ...]] = ()

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings: Settings | None = settings
        self.document: Document | None = None
        self.conditions: list[VisitorCondition] = []
        self._parts: dict[str, deque[str]] = {}
        self._current: str = self.default_part
        self._reset()

    def _reset(self) -> None:
        self._parts = {name: deque() for name in self.parts}
        self._current = self.default_part
        self.conditions = []

    # ------------------------------------------------------------------ parts

    @property
    def current_part(self) -> str:
        """Return the name of the active part."""
        return self._current

    def part(self, name: str) -> list[str]:
        """Return the fragments of part ``name`` in forward order.

        Raises:
            KeyError: If the writer has no such part.
        """
        if name not in self._parts:
            raise KeyError(f"{self.name} writer has no part {name!r}")
        return list(self._parts[name])

    def part_text(self, name: str) -> str:
        """Return the joined text of part ``name``."""
        return "".join(self.part(name))

    @property
    def output(self) -> str:
        """Return all parts joined in declaration order."""
        return "".join(self.part_text(name) for name in self.parts)

    def emit(self, *fragments: str) -> None:
        """Append ``fragments`` to the active part."""
        self._parts[self._current].extend(fragments)

    def prepend(self, *fragments: str) -> None:
        """Insert ``fragments`` (kept in the given order) at the front of the active part."""
        self._parts[self._current].extendleft(reversed(fragments))

    @contextmanager
    def with_part(self, name: str) -> Iterator[None]:
        """Make ``name`` the active part for the duration of the block."""
        if name not in self._parts:
            raise KeyError(f"{self.name} writer has no part {name!r}")
        previous: str = self._current
        self._current = name
        try:
            yield
        finally:
            self._current = previous

    @contextmanager
    def document_scope(self, document: Document) -> Iterator[Document]:
        """Attach ``document`` for the block; a failing block restores the previous one."""
        previous: Document | None = self.document
        self.document = document
        try:
            yield document
        except BaseException:
            self.document = previous
            raise

    # ------------------------------------------------------------- traversal

    def attach(self, document: Document) -> None:
        """Translate ``document`` into the writer's parts.

        Attaching the document that is already attached is a no-op.
        """
        if self.document is document:
            logger.trace("%s writer already holds %s", self.name, document.source)
            return
        self._reset()
        with self.document_scope(document):
            self.translate()
            self.finalize()
        logger.debug(
            "%s writer translated %s (%d visitor failure(s))",
            self.name,
            document.source,
            len(self.conditions),
        )

    def translate(self) -> None:
        """Walk the attached document from its root."""
        assert self.document is not None
        self.walkabout(self.document.root)

    def finalize(self) -> None:
        """Hook run after traversal; parts are already in forward order."""

    def walkabout(self, node: Node) -> bool:
        """Visit ``node`` and its subtree.

        Returns:
            bool: True if the remaining siblings of ``node`` must be skipped.
        """
        assert self.document is not None
        walk_children = True
        call_departure = True
        skip_siblings = False
        try:
            self.dispatch_visit(node)
        except SkipChildren:
            walk_children = False
        except SkipDeparture:
            call_departure = False
        except SkipSiblings:
            skip_siblings = True
        except Exception as exc:
            if self.propagate_errors:
                raise
            self._recover(node, exc)
            return False

        if walk_children:
            for child in self.document.children(node):
                if self.walkabout(child):
                    break

        if call_departure:
            try:
                self.dispatch_departure(node)
            except SkipSiblings:
                skip_siblings = True
            except (SkipChildren, SkipDeparture):
                pass
            except Exception as exc:
                if self.propagate_errors:
                    raise
                self._recover(node, exc)
        return skip_siblings

    def dispatch_visit(self, node: Node) -> None:
        """Call ``visit_<kind>`` for ``node``, or `unknown_visit`."""
        method = getattr(self, f"visit_{_method_suffix(node.kind)}", None)
        if method is None:
            self.unknown_visit(node)
            return
        method(node)

    def dispatch_departure(self, node: Node) -> None:
        """Call ``depart_<kind>`` for ``node``, or `unknown_departure`."""
        method = getattr(self, f"depart_{_method_suffix(node.kind)}", None)
        if method is None:
            self.unknown_departure(node)
            return
        method(node)

    def unknown_visit(self, node: Node) -> None:
        """Fallback for node kinds without a ``visit_`` method."""
        logger.trace("%s writer: no visitor for %r", self.name, node)

    def unknown_departure(self, node: Node) -> None:
        """Fallback for node kinds without a ``depart_`` method."""

    # ---------------------------------------------------------------- failures

    @property
    def active_settings(self) -> Settings | None:
        """Return explicit settings, else the attached document's."""
        if self.settings is not None:
            return self.settings
        return self.document.settings if self.document is not None else None

    @property
    def propagate_errors(self) -> bool:
        """Return True if visitor failures must be re-raised."""
        settings: Settings | None = self.active_settings
        policy = settings.get(Keys.VISITOR_ERRORS) if settings is not None else None
        return (policy or VISITOR_ERRORS_CONTINUE) == VISITOR_ERRORS_PROPAGATE

    @property
    def encoding(self) -> str:
        """Return the encoding used for file destinations."""
        settings: Settings | None = self.active_settings
        value = settings.get(Keys.OUTPUT_ENCODING) if settings is not None else None
        return str(value or "utf-8")

    def _recover(self, node: Node, exc: Exception) -> None:
        if isinstance(exc, VisitorCondition):
            condition: VisitorCondition = exc
        else:
            condition = VisitorCondition(
                Severity.ERROR,
                f"{type(exc).__name__} while writing {node.kind}: {exc}",
                line=node.attributes.get("line"),
                node=node,
            )
        self.conditions.append(condition)
        logger.warning("%s writer skipped %r: %s", self.name, node, condition.message)


def _method_suffix(kind: str) -> str:
    return kind.replace("-", "_")


def _deliver(text: str, destination: Destination, encoding: str) -> None:
    if destination is None:
        return
    if isinstance(destination, (str, PathLike)):
        path = Path(destination)
        with path.open("w", encoding=encoding, newline="") as fh:
            fh.write(text)
        logger.info("Wrote %d characters to %s", len(text), path)
        return
    destination.write(text)


def write_document(
    writer: Writer,
    document: Document,
    destination: Destination = None,
) -> str:
    """Translate ``document`` with ``writer`` and deliver the full output.

    Args:
        writer: The writer to use.
        document: The document to translate.
        destination: A file path, an open text stream, or None for no delivery.

    Returns:
        str: The output text.
    """
    writer.attach(document)
    text: str = writer.output
    _deliver(text, destination, writer.encoding)
    return text


def write_part(
    writer: Writer,
    part_name: str,
    destination: Destination = None,
) -> str:
    """Deliver a single part of the attached document.

    Raises:
        ValueError: If no document is attached.
        KeyError: If the writer has no such part.
    """
    if writer.document is None:
        raise ValueError(f"{writer.name} writer has no attached document")
    text: str = writer.part_text(part_name)
    _deliver(text, destination, writer.encoding)
    return text
