# topmark:header:start
#
#   project      : Pressroom
#   file         : builtins.py
#   file_relpath : src/pressroom/transforms/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in transforms used by the bundled readers.

- `DocTitle` (320): promote the title of a lone top-level section to the
  document's ``title`` attribute and lift the section's body to the root.
- `StripComments` (740): remove ``comment`` nodes when ``strip_comments`` is on.
- `FilterMessages` (870): remove ``system_message`` nodes below the
  report-level that readers left in the body (outside the diagnostics section).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pressroom.config.keys import Keys
from pressroom.config.logging import get_logger
from pressroom.config.registry import OptionSpec
from pressroom.config.types import BoolType
from pressroom.core.diagnostics import Severity
from pressroom.document.nodes import DIAGNOSTICS_CLASS, NodeKind
from pressroom.transforms.base import Transform

if TYPE_CHECKING:
    from pressroom.config.logging import PressroomLogger
    from pressroom.document.nodes import Document, Node
    from pressroom.transforms.base import TransformContext

logger: PressroomLogger = get_logger(__name__)


class DocTitle(Transform):
    """Promote a lone top-level section title to the document title.

    Applies when the section is the only top-level child apart from blank text
    leaves. The section's children (title included) replace the section in
    place and the root receives a ``title`` attribute.
    """

    default_priority: ClassVar[int] = 320
    settings_spec: ClassVar[tuple[OptionSpec, ...]] = (
        OptionSpec(
            Keys.DOCTITLE,
            BoolType(),
            True,
            "Promote a lone top-level section title to the document title.",
        ),
    )

    def apply(self, ctx: TransformContext) -> None:
        if not ctx.settings.get(Keys.DOCTITLE, True):
            return
        doc: Document = ctx.document
        significant: list[Node] = [
            n for n in doc.children(self.target) if not (n.is_text and not (n.text or "").strip())
        ]
        if len(significant) != 1 or significant[0].kind != NodeKind.SECTION.value:
            return
        section: Node = significant[0]
        if not section.children or doc.child(section, 0).kind != NodeKind.TITLE.value:
            raise ctx.condition(
                Severity.WARNING,
                "Section without a title cannot become the document title",
                line=section.attributes.get("line"),
                node=section,
            )
        title: Node = doc.child(section, 0)
        index: int = self.target.children.index(section.id)
        for offset, child in enumerate(doc.children(section)):
            doc.detach(child)
            doc.insert(self.target, index + offset, child)
        doc.remove(section)
        content: str = title.attributes.get("content") or doc.astext(title).strip()
        self.target.attributes["title"] = content
        logger.debug("Promoted %r to document title", content)


class StripComments(Transform):
    """Remove comment nodes when ``strip_comments`` is enabled."""

    default_priority: ClassVar[int] = 740
    settings_spec: ClassVar[tuple[OptionSpec, ...]] = (
        OptionSpec(
            Keys.STRIP_COMMENTS,
            BoolType(),
            False,
            "Remove comment elements from the document tree.",
        ),
    )

    def apply(self, ctx: TransformContext) -> None:
        if not ctx.settings.get(Keys.STRIP_COMMENTS, False):
            return
        doc: Document = ctx.document
        comments: list[Node] = [
            n for n in doc.walk(self.target) if n.kind == NodeKind.COMMENT.value
        ]
        for node in comments:
            if node in doc:
                doc.remove(node)
        logger.debug("Stripped %d comment(s)", len(comments))


class FilterMessages(Transform):
    """Drop body-level system messages below the report-level."""

    default_priority: ClassVar[int] = 870

    def apply(self, ctx: TransformContext) -> None:
        doc: Document = ctx.document
        threshold: int = ctx.settings.report_level
        dropped: list[Node] = []
        for node in doc.walk(self.target):
            if node.kind != NodeKind.SYSTEM_MESSAGE.value:
                continue
            if int(node.attributes.get("level", Severity.DEBUG)) >= threshold:
                continue
            if self._in_diagnostics(doc, node):
                continue
            dropped.append(node)
        for node in dropped:
            if node in doc:
                doc.remove(node)

    @staticmethod
    def _in_diagnostics(doc: Document, node: Node) -> bool:
        return any(
            DIAGNOSTICS_CLASS in a.attributes.get("classes", ()) for a in doc.ancestors(node)
        )
