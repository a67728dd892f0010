# topmark:header:start
#
#   project      : Pressroom
#   file         : nodes.py
#   file_relpath : src/pressroom/document/nodes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Document tree stored as an arena of nodes addressed by stable integer ids.

Every `Node` lives in exactly one `Document`. Parent/child edges are ids, so a
node has at most one owning parent and the tree can be walked without holding
object references across mutations.

Back-references are a separate, non-owning relation (``source → target``),
used to cross-link system messages with the nodes they are about. They never
participate in ownership or traversal order.

Removal policy:
    Removing a node detaches its whole subtree from the tree and deletes every
    back-reference whose source or target lies inside that subtree. The
    ``backrefs`` attribute of surviving nodes is updated accordingly, so no
    back-reference ever dangles.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pressroom.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pressroom.config.logging import PressroomLogger
    from pressroom.config.model import Settings
    from pressroom.core.errors import Condition

logger: PressroomLogger = get_logger(__name__)

ROOT_ID: int = 0

# Class carried by the section collecting transform diagnostics.
DIAGNOSTICS_CLASS: str = "system-messages"


class NodeKind(str, Enum):
    """Node kinds the built-in readers, transforms and writers know about.

    Node kinds are plain strings; any other string is accepted as a kind too.
    """

    DOCUMENT = "document"
    SECTION = "section"
    TITLE = "title"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    COMMENT = "comment"
    SYSTEM_MESSAGE = "system_message"

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class Node:
    """One node of a document tree.

    Attributes:
        id (int): Stable id inside the owning document.
        kind (str): Node kind (see `NodeKind`).
        attributes (dict[str, Any]): Attribute mapping (insertion order irrelevant).
        children (list[int]): Ordered child ids.
        parent (int | None): Owning parent id; None for the root and detached nodes.
        text (str | None): Literal text for ``text`` leaves.
    """

    id: int
    kind: str
    attributes: dict[str, Any] = field(default_factory=lambda: {})
    children: list[int] = field(default_factory=lambda: [])
    parent: int | None = None
    text: str | None = None

    @property
    def is_text(self) -> bool:
        """Return True for text leaves."""
        return self.kind == NodeKind.TEXT.value

    def __repr__(self) -> str:
        if self.is_text:
            return f"<{self.kind}#{self.id} {self.text!r}>"
        return f"<{self.kind}#{self.id} children={len(self.children)}>"


class Document:
    """Arena owning the nodes of one document tree.

    Attributes:
        source (str): Human-readable name of the source (path or ``<string>``).
        settings (Settings | None): Settings of the run processing this document.
        conditions (list[Condition]): Conditions recovered while transforming.
    """

    def __init__(self, source: str = "<string>", settings: Settings | None = None) -> None:
        self.source: str = source
        self.settings: Settings | None = settings
        self.conditions: list[Condition] = []
        self._nodes: dict[int, Node] = {}
        self._next_id = itertools.count()
        self._backrefs: dict[int, list[int]] = {}
        self._id_counter = itertools.count(1)
        self.root: Node = self.create(NodeKind.DOCUMENT, source=source)

    # ---------------------------------------------------------------- creation

    def create(self, kind: str, text: str | None = None, **attributes: Any) -> Node:
        """Create a detached node owned by this document."""
        node = Node(id=next(self._next_id), kind=str(kind), attributes=dict(attributes), text=text)
        self._nodes[node.id] = node
        return node

    def text(self, text: str, **attributes: Any) -> Node:
        """Create a detached text leaf."""
        return self.create(NodeKind.TEXT, text=text, **attributes)

    def node(self, node_id: int) -> Node:
        """Return the node with ``node_id``.

        Raises:
            KeyError: If the id is unknown (never created or removed).
        """
        return self._nodes[node_id]

    def __contains__(self, node: object) -> bool:
        return isinstance(node, Node) and self._nodes.get(node.id) is node

    def __len__(self) -> int:
        return len(self._nodes)

    # --------------------------------------------------------------- structure

    def append(self, parent: Node, child: Node) -> Node:
        """Append ``child`` as the last child of ``parent`` and return it."""
        return self.insert(parent, len(parent.children), child)

    def insert(self, parent: Node, index: int, child: Node) -> Node:
        """Insert ``child`` into ``parent`` at ``index`` and return it.

        Raises:
            ValueError: If ``child`` already has a parent, is the root, belongs
                to another document, or is an ancestor of ``parent``.
        """
        if child not in self or parent not in self:
            raise ValueError("Both nodes must belong to this document")
        if child.parent is not None or child is self.root:
            raise ValueError(f"{child!r} already has an owning parent")
        if child is parent or any(a is child for a in self.ancestors(parent)):
            raise ValueError(f"Inserting {child!r} under {parent!r} would create a cycle")
        parent.children.insert(index, child.id)
        child.parent = parent.id
        return child

    def parent(self, node: Node) -> Node | None:
        """Return the owning parent of ``node`` (None for root/detached nodes)."""
        return self._nodes[node.parent] if node.parent is not None else None

    def ancestors(self, node: Node) -> Iterator[Node]:
        """Yield the parent chain of ``node``, nearest first."""
        current: Node | None = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)

    def child_count(self, node: Node | None = None) -> int:
        """Return the number of children of ``node`` (default: the root)."""
        return len((node or self.root).children)

    def child(self, node: Node, index: int) -> Node:
        """Return the ``index``-th child of ``node``."""
        return self._nodes[node.children[index]]

    def children(self, node: Node | None = None) -> list[Node]:
        """Return the children of ``node`` (default: the root)."""
        return [self._nodes[i] for i in (node or self.root).children]

    def walk(self, node: Node | None = None) -> Iterator[Node]:
        """Yield ``node`` (default: the root) and its descendants in pre-order."""
        stack: list[Node] = [node or self.root]
        while stack:
            current: Node = stack.pop()
            yield current
            stack.extend(self._nodes[i] for i in reversed(current.children))

    def astext(self, node: Node | None = None) -> str:
        """Return the concatenated text of all text leaves under ``node``."""
        return "".join(n.text or "" for n in self.walk(node) if n.is_text)

    def detach(self, node: Node) -> Node:
        """Unlink ``node`` from its parent, keeping it (and its subtree) in the document."""
        parent: Node | None = self.parent(node)
        if parent is not None:
            parent.children.remove(node.id)
            node.parent = None
        return node

    def remove(self, node: Node) -> None:
        """Remove ``node`` and its subtree from the document.

        Back-references from or to any removed node are deleted.

        Raises:
            ValueError: If ``node`` is the root.
        """
        if node is self.root:
            raise ValueError("The document root cannot be removed")
        self.detach(node)
        removed: set[int] = {n.id for n in self.walk(node)}
        self._drop_backrefs(removed)
        for node_id in removed:
            del self._nodes[node_id]
        logger.trace("Removed %d node(s) rooted at %r", len(removed), node)

    # ---------------------------------------------------- ids and back-references

    def ensure_id(self, node: Node) -> str:
        """Return the ``id`` attribute of ``node``, assigning a unique one if needed."""
        existing: Any = node.attributes.get("id")
        if existing:
            return str(existing)
        taken: set[str] = {
            str(n.attributes["id"]) for n in self._nodes.values() if "id" in n.attributes
        }
        ident: str = f"id{next(self._id_counter)}"
        while ident in taken:
            ident = f"id{next(self._id_counter)}"
        node.attributes["id"] = ident
        return ident

    def add_backref(self, source: Node, target: Node) -> None:
        """Register a non-owning back-reference from ``source`` to ``target``.

        The target receives an ``id`` if it lacks one; the source's
        ``backrefs`` attribute lists the ids of its targets.
        """
        if source not in self or target not in self:
            raise ValueError("Both nodes must belong to this document")
        ident: str = self.ensure_id(target)
        targets: list[int] = self._backrefs.setdefault(source.id, [])
        if target.id not in targets:
            targets.append(target.id)
            source.attributes.setdefault("backrefs", []).append(ident)

    def backrefs(self, source: Node) -> list[Node]:
        """Return the nodes ``source`` refers back to."""
        return [self._nodes[i] for i in self._backrefs.get(source.id, [])]

    def referrers(self, target: Node) -> list[Node]:
        """Return the nodes holding a back-reference to ``target``."""
        return [self._nodes[s] for s, targets in self._backrefs.items() if target.id in targets]

    def _drop_backrefs(self, removed: set[int]) -> None:
        for source_id in list(self._backrefs):
            if source_id in removed:
                del self._backrefs[source_id]
                continue
            kept: list[int] = [t for t in self._backrefs[source_id] if t not in removed]
            if len(kept) == len(self._backrefs[source_id]):
                continue
            source: Node = self._nodes[source_id]
            source.attributes["backrefs"] = [
                str(self._nodes[t].attributes["id"]) for t in kept
            ]
            if kept:
                self._backrefs[source_id] = kept
            else:
                del self._backrefs[source_id]
                source.attributes.pop("backrefs", None)
