# topmark:header:start
#
#   project      : Pressroom
#   file         : text.py
#   file_relpath : src/pressroom/writers/text.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Plain-text writer.

Serializes text leaves verbatim, so a document read by `LineReader` is written
back unchanged. System messages are rendered as ``LABEL [line N] message``
lines; the diagnostics section becomes a trailing block under its title.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pressroom.writers.base import (
    SkipChildren,
    Writer,
    is_diagnostics_section,
    message_line,
)

if TYPE_CHECKING:
    from pressroom.document.nodes import Document, Node


class TextWriter(Writer):
    """Write the document's text leaves to a single ``body`` part."""

    name: ClassVar[str] = "text"
    parts: ClassVar[tuple[str, ...]] = ("body",)
    default_part: ClassVar[str] = "body"

    def visit_text(self, node: Node) -> None:
        self.emit(node.text or "")

    def visit_section(self, node: Node) -> None:
        if not is_diagnostics_section(node):
            return
        doc: Document = self._doc
        children: list[Node] = doc.children(node)
        title: str = doc.astext(children[0]).strip() if children else ""
        if self._parts[self.current_part] and not self._ends_with_newline():
            self.emit("\n")
        self.emit("\n", title, "\n", "-" * len(title), "\n")
        for message in children[1:]:
            self.emit(message_line(doc, message), "\n")
        raise SkipChildren

    def visit_system_message(self, node: Node) -> None:
        self.emit(message_line(self._doc, node), "\n")
        raise SkipChildren

    @property
    def _doc(self) -> Document:
        assert self.document is not None
        return self.document

    def _ends_with_newline(self) -> bool:
        fragments = self._parts[self.current_part]
        return fragments[-1].endswith("\n") if fragments else True
