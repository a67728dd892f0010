# topmark:header:start
#
#   project      : Pressroom
#   file         : markdown.py
#   file_relpath : src/pressroom/writers/markdown.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Markdown writer with separate ``title``, ``body`` and ``diagnostics`` parts.

The document title (see `pressroom.transforms.builtins.DocTitle`) goes to the
``title`` part as a level-1 heading, sections become headings one level below
their parent, comments become HTML comments and the diagnostics section is
rendered as a bullet list into the ``diagnostics`` part. `write_part` can emit
each part on its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pressroom.document.nodes import NodeKind
from pressroom.writers.base import (
    SkipChildren,
    Writer,
    is_diagnostics_section,
    message_line,
)

if TYPE_CHECKING:
    from pressroom.document.nodes import Document, Node


class MarkdownWriter(Writer):
    """Render the document as Markdown."""

    name: ClassVar[str] = "markdown"
    parts: ClassVar[tuple[str, ...]] = ("title", "body", "diagnostics")
    default_part: ClassVar[str] = "body"

    @property
    def _doc(self) -> Document:
        assert self.document is not None
        return self.document

    def visit_document(self, node: Node) -> None:
        title = node.attributes.get("title")
        if title:
            with self.with_part("title"):
                self.emit("# ", str(title), "\n\n")

    def visit_section(self, node: Node) -> None:
        if not is_diagnostics_section(node):
            return
        doc: Document = self._doc
        children: list[Node] = doc.children(node)
        title: str = doc.astext(children[0]).strip() if children else ""
        with self.with_part("diagnostics"):
            self.emit("## ", title, "\n\n")
            for message in children[1:]:
                self.emit("- ", message_line(doc, message), "\n")
        raise SkipChildren

    def visit_title(self, node: Node) -> None:
        doc: Document = self._doc
        parent: Node | None = doc.parent(node)
        if parent is doc.root and doc.root.attributes.get("title"):
            # Already rendered into the title part.
            raise SkipChildren
        content: str = node.attributes.get("content") or doc.astext(node).strip()
        self.emit("#" * self._heading_level(node), " ", content, "\n\n")
        raise SkipChildren

    def visit_paragraph(self, node: Node) -> None:
        lines: list[str] = [line.strip() for line in self._doc.astext(node).splitlines()]
        self.emit("\n".join(line for line in lines if line), "\n\n")
        raise SkipChildren

    def visit_comment(self, node: Node) -> None:
        content: str = node.attributes.get("content") or self._doc.astext(node).strip()
        self.emit("<!-- ", content, " -->\n\n")
        raise SkipChildren

    def visit_system_message(self, node: Node) -> None:
        self.emit("> ", message_line(self._doc, node), "\n\n")
        raise SkipChildren

    def visit_text(self, node: Node) -> None:
        text: str = (node.text or "").strip()
        if text:
            self.emit(text, "\n\n")

    def _heading_level(self, node: Node) -> int:
        doc: Document = self._doc
        sections: int = sum(1 for a in doc.ancestors(node) if a.kind == NodeKind.SECTION.value)
        level: int = sections + (1 if doc.root.attributes.get("title") else 0)
        return max(1, min(level, 6))
