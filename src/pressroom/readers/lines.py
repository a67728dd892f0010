# topmark:header:start
#
#   project      : Pressroom
#   file         : lines.py
#   file_relpath : src/pressroom/readers/lines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-oriented reader for a minimal plain-text markup.

Markup:
    - a line starting with ``= `` opens a top-level section titled by the rest
      of the line;
    - a line starting with ``.. `` is a comment;
    - other non-blank lines form paragraphs, separated by blank lines.

Every input line ends up verbatim in exactly one text leaf (blank lines are
kept as ``text`` children of the enclosing container), so concatenating all
text leaves reproduces the source. Markers and line terminators stay in the
leaves; ``title`` and ``comment`` nodes carry the stripped content in their
``content`` attribute.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pressroom.config.logging import get_logger
from pressroom.document.nodes import NodeKind
from pressroom.readers.base import Reader
from pressroom.transforms.builtins import DocTitle, FilterMessages, StripComments

if TYPE_CHECKING:
    from pressroom.config.logging import PressroomLogger
    from pressroom.document.nodes import Document, Node
    from pressroom.document.source import Source
    from pressroom.transforms.base import TransformSpec

logger: PressroomLogger = get_logger(__name__)

SECTION_MARKER: str = "= "
COMMENT_MARKER: str = ".. "


class LineReader(Reader):
    """Parse ``= title`` sections, ``.. comments`` and paragraphs."""

    name: ClassVar[str] = "lines"
    transforms: ClassVar[tuple[TransformSpec, ...]] = (DocTitle, StripComments, FilterMessages)

    def parse(self, source: Source, document: Document) -> None:
        container: Node = document.root
        paragraph: Node | None = None
        for lineno, line in enumerate(source.lines, start=1):
            stripped: str = line.rstrip("\r\n")
            if not stripped.strip():
                paragraph = None
                document.append(container, document.text(line, line=lineno))
            elif stripped.startswith(SECTION_MARKER):
                paragraph = None
                container = document.append(
                    document.root, document.create(NodeKind.SECTION, line=lineno)
                )
                title: Node = document.append(
                    container,
                    document.create(
                        NodeKind.TITLE, line=lineno, content=stripped[len(SECTION_MARKER) :]
                    ),
                )
                document.append(title, document.text(line, line=lineno))
            elif stripped.startswith(COMMENT_MARKER):
                paragraph = None
                comment: Node = document.append(
                    container,
                    document.create(
                        NodeKind.COMMENT, line=lineno, content=stripped[len(COMMENT_MARKER) :]
                    ),
                )
                document.append(comment, document.text(line, line=lineno))
            else:
                if paragraph is None:
                    paragraph = document.append(
                        container, document.create(NodeKind.PARAGRAPH, line=lineno)
                    )
                document.append(paragraph, document.text(line, line=lineno))
        logger.trace("Parsed %d line(s) from %s", len(source.lines), source.name)
