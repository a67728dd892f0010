# topmark:header:start
#
#   project      : Pressroom
#   file         : test_builtins.py
#   file_relpath : tests/transforms/test_builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the built-in transforms shipped with the line reader."""

from __future__ import annotations

from typing import Any

from pressroom.config.keys import DEFAULT_DIAGNOSTICS_TITLE
from pressroom.core.diagnostics import Severity
from pressroom.document import DIAGNOSTICS_CLASS, Document, NodeKind, Source
from pressroom.readers import LineReader, new_document
from pressroom.transforms import (
    CreationCounter,
    DocTitle,
    FilterMessages,
    StripComments,
    run_transforms,
)
from tests.conftest import make_document, make_reporter, make_settings, mark_pipeline


def _parsed(text: str, **overrides: Any) -> Document:
    """Return ``text`` parsed by the line reader, before any transform runs."""
    source = Source.from_text(text)
    doc = new_document(source, make_settings(**overrides))
    LineReader().parse(source, doc)
    return doc


def _kinds(doc: Document) -> list[str]:
    return [n.kind for n in doc.children()]


@mark_pipeline
def test_doctitle_promotes_lone_section() -> None:
    text = "\n= User Guide\n\nWelcome.\n"
    doc = _parsed(text)

    run_transforms(doc, [DocTitle], counter=CreationCounter())

    assert doc.root.attributes["title"] == "User Guide"
    assert _kinds(doc) == ["text", "title", "text", "paragraph"]
    assert doc.astext() == text


@mark_pipeline
def test_doctitle_disabled_by_setting() -> None:
    doc = _parsed("= User Guide\nWelcome.\n", doctitle=False)
    run_transforms(doc, [DocTitle])
    assert "title" not in doc.root.attributes
    assert _kinds(doc) == ["section"]


@mark_pipeline
def test_doctitle_ignores_multiple_sections() -> None:
    doc = _parsed("= One\n= Two\n")
    run_transforms(doc, [DocTitle])
    assert "title" not in doc.root.attributes
    assert _kinds(doc) == ["section", "section"]


@mark_pipeline
def test_doctitle_ignores_leading_paragraph() -> None:
    doc = _parsed("Intro.\n= One\n")
    run_transforms(doc, [DocTitle])
    assert "title" not in doc.root.attributes


@mark_pipeline
def test_doctitle_warns_on_untitled_section() -> None:
    settings = make_settings()
    reporter, stream = make_reporter(settings)
    doc = Document(settings=settings)
    section = doc.append(doc.root, doc.create(NodeKind.SECTION, line=3))
    para = doc.append(section, doc.create(NodeKind.PARAGRAPH))
    doc.append(para, doc.text("body\n"))

    _, worst = run_transforms(doc, [DocTitle], reporter=reporter)

    assert worst is not None
    assert worst.severity == Severity.WARNING
    assert stream.getvalue().startswith("WARNING [line 3] ")
    assert "title" not in doc.root.attributes
    assert section in doc


@mark_pipeline
def test_strip_comments_when_enabled() -> None:
    text = ".. hidden\nVisible.\n"
    doc = _parsed(text, strip_comments=True)
    run_transforms(doc, [StripComments])
    assert _kinds(doc) == ["paragraph"]
    assert doc.astext() == "Visible.\n"


@mark_pipeline
def test_comments_kept_by_default() -> None:
    doc = _parsed(".. kept\n")
    run_transforms(doc, [StripComments])
    (comment,) = doc.children()
    assert comment.kind == "comment"
    assert comment.attributes["content"] == "kept"


@mark_pipeline
def test_filter_messages_respects_report_level_and_diagnostics() -> None:
    """Body messages below the report-level go; diagnostics-section messages stay."""
    doc = make_document(settings=make_settings(report_level=4))
    quiet = doc.append(doc.root, doc.create(NodeKind.SYSTEM_MESSAGE, level=2))
    loud = doc.append(doc.root, doc.create(NodeKind.SYSTEM_MESSAGE, level=6))
    section = doc.append(doc.root, doc.create(NodeKind.SECTION, classes=[DIAGNOSTICS_CLASS]))
    title = doc.append(section, doc.create(NodeKind.TITLE))
    doc.append(title, doc.text(DEFAULT_DIAGNOSTICS_TITLE))
    recorded = doc.append(section, doc.create(NodeKind.SYSTEM_MESSAGE, level=0))

    run_transforms(doc, [FilterMessages])

    assert quiet not in doc
    assert loud in doc
    assert recorded in doc
    assert section in doc
