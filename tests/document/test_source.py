# topmark:header:start
#
#   project      : Pressroom
#   file         : test_source.py
#   file_relpath : tests/document/test_source.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `Source` construction and `as_source` dispatch."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from pressroom.document import Source, as_source


def test_from_text_keeps_line_terminators() -> None:
    src = Source.from_text("a\r\nb\nc")
    assert src.lines == ("a\r\n", "b\n", "c")
    assert src.text == "a\r\nb\nc"
    assert src.path is None


def test_from_path_records_path(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_bytes(b"one\r\ntwo\n")
    src = Source.from_path(path)
    assert src.lines == ("one\r\n", "two\n")
    assert src.path == path
    assert src.name == str(path)


def test_from_stream_uses_stream_name() -> None:
    assert Source.from_stream(io.StringIO("x\n")).name == "<stream>"
    assert Source.from_stream(io.StringIO("x\n"), name="in").name == "in"


def test_as_source_dispatch(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_text("p\n", encoding="utf-8")
    existing = Source.from_text("s\n")

    assert as_source(existing) is existing
    assert as_source(path).path == path
    assert as_source("t\n").lines == ("t\n",)
    assert as_source(io.StringIO("u\n")).lines == ("u\n",)
    assert as_source(["v\n", "w"]).lines == ("v\n", "w")


def test_as_source_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        as_source(42)  # type: ignore[arg-type]
