# topmark:header:start
#
#   project      : Pressroom
#   file         : test_line_reader.py
#   file_relpath : tests/readers/test_line_reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the reader boundary and the bundled `LineReader`."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pytest

from pressroom.config.keys import Keys
from pressroom.core.diagnostics import Severity
from pressroom.core.errors import TransformHalt
from pressroom.document import Document, NodeKind, Source
from pressroom.readers import LineReader, Reader, new_document, read_document
from tests.conftest import make_reporter, make_settings, mark_pipeline, recording_transform

if TYPE_CHECKING:
    from pathlib import Path

    from pressroom.transforms import TransformContext, TransformSpec

SAMPLE = """\
.. draft notes
Intro line one
intro line two

= Usage
Run it.

.. inside
"""


def test_parse_builds_expected_structure() -> None:
    source = Source.from_text(SAMPLE)
    doc = new_document(source)
    LineReader().parse(source, doc)

    assert [n.kind for n in doc.children()] == ["comment", "paragraph", "text", "section"]
    comment, para, _, section = doc.children()
    assert comment.attributes == {"line": 1, "content": "draft notes"}
    assert doc.astext(para) == "Intro line one\nintro line two\n"
    assert para.attributes["line"] == 2

    title = doc.child(section, 0)
    assert title.kind == NodeKind.TITLE.value
    assert title.attributes["content"] == "Usage"
    assert [n.kind for n in doc.children(section)] == [
        "title",
        "paragraph",
        "text",
        "comment",
    ]


def test_every_line_is_kept_verbatim() -> None:
    text = "= T\r\n\r\nbody\r\n  \nlast"
    source = Source.from_text(text)
    doc = new_document(source)
    LineReader().parse(source, doc)
    leaves = [n for n in doc.walk() if n.is_text]
    assert [n.text for n in leaves] == ["= T\r\n", "\r\n", "body\r\n", "  \n", "last"]
    assert [n.attributes["line"] for n in leaves] == [1, 2, 3, 4, 5]


@mark_pipeline
def test_read_document_runs_reader_transforms() -> None:
    doc = read_document("= Title\n\nText.\n", LineReader(), make_settings())
    assert doc.root.attributes["title"] == "Title"
    assert doc.astext() == "= Title\n\nText.\n"


@mark_pipeline
def test_read_document_defaults_settings() -> None:
    doc = read_document(["only\n"], LineReader())
    assert doc.settings is not None
    assert doc.settings[Keys.REPORT_LEVEL] == 4
    assert doc.source == "<lines>"


@mark_pipeline
def test_read_document_from_path(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_text("hello\n", encoding="utf-8")
    doc = read_document(path, LineReader())
    assert doc.source == str(path)
    assert doc.root.attributes["source"] == str(path)


@mark_pipeline
def test_empty_source_yields_empty_document() -> None:
    doc = read_document("", LineReader())
    assert doc.child_count() == 0
    assert len(doc) == 1


@mark_pipeline
def test_reader_transforms_can_halt() -> None:
    log: list[str] = []

    def fail(ctx: TransformContext) -> None:
        raise ctx.condition(Severity.FATAL, "unreadable", line=1)

    class StrictReader(LineReader):
        transforms: ClassVar[tuple[TransformSpec, ...]] = (
            recording_transform(log, "strict", 100, fail),
        )

    settings = make_settings()
    reporter, _ = make_reporter(settings)
    with pytest.raises(TransformHalt):
        read_document("text\n", StrictReader(), settings, reporter=reporter)
    assert log == ["strict"]


def test_base_reader_requires_parse() -> None:
    with pytest.raises(NotImplementedError):
        Reader().parse(Source.from_text("x"), Document())


def test_option_specs_include_transform_options() -> None:
    names = [spec.name for spec in LineReader.option_specs()]
    assert names == [Keys.DOCTITLE, Keys.STRIP_COMMENTS]
    assert Reader.option_specs() == ()


def test_get_transforms_returns_a_copy() -> None:
    reader = LineReader()
    specs = reader.get_transforms()
    specs.clear()
    assert len(reader.get_transforms()) == 3
