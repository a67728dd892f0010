# topmark:header:start
#
#   project      : Pressroom
#   file         : test_publisher.py
#   file_relpath : tests/test_publisher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""End-to-end tests for `pressroom.publisher.publish`."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, ClassVar

import pytest

from pressroom.config import InvalidValuePolicy
from pressroom.config.paths import CONFIG_FILE_NAME
from pressroom.core.diagnostics import Severity
from pressroom.core.errors import ConfigError
from pressroom.document import Source
from pressroom.publisher import publish
from pressroom.registry import register_writer, unregister_writer
from pressroom.writers import TextWriter
from tests.conftest import make_reporter, make_settings, mark_integration, write_config

if TYPE_CHECKING:
    from pathlib import Path

    from pressroom.document import Node

DOC = "= Release Notes\n\nShipped.\n.. internal only\n"


@mark_integration
def test_publish_text_round_trip() -> None:
    result = publish(DOC, no_config=True)
    assert result.output == DOC
    assert result.worst is None
    assert result.document.root.attributes["title"] == "Release Notes"
    assert result.settings.report_level == 4


@mark_integration
def test_publish_markdown_with_overrides() -> None:
    result = publish(DOC, writer="markdown", overrides={"strip-comments": "yes"}, no_config=True)
    assert result.output == "# Release Notes\n\nShipped.\n\n"
    assert result.writer.part_text("title") == "# Release Notes\n\n"


@mark_integration
def test_publish_uses_document_specific_config(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text(DOC, encoding="utf-8")
    write_config(tmp_path / CONFIG_FILE_NAME, "doctitle: off")

    result = publish(source, writer="markdown")

    assert "title" not in result.document.root.attributes
    assert result.output.startswith("# Release Notes\n\n")
    assert result.settings.config_files == ((tmp_path / CONFIG_FILE_NAME).resolve(),)


@mark_integration
def test_publish_explicit_config_and_policy(tmp_path: Path) -> None:
    cfg = write_config(tmp_path / "bad.conf", "report_level: loud")
    with pytest.raises(ConfigError):
        publish(DOC, config_files=[cfg], policy=InvalidValuePolicy.ABORT)
    result = publish(DOC, config_files=[cfg])
    assert result.settings.report_level == 4
    assert result.settings.diagnostics.stats().n_error == 1


@mark_integration
def test_publish_with_presolved_settings_to_destination(tmp_path: Path) -> None:
    target = tmp_path / "out.txt"
    result = publish(
        Source.from_lines(["a\n", "b\n"]),
        settings=make_settings(doctitle=False),
        destination=target,
    )
    assert target.read_text(encoding="utf-8") == "a\nb\n"
    assert result.output == "a\nb\n"


@mark_integration
def test_publish_reports_worst_recovered_condition() -> None:
    """Recovered visitor failures count towards ``worst``."""

    class FragileWriter(TextWriter):
        name: ClassVar[str] = "fragile"

        def visit_comment(self, node: Node) -> None:
            raise RuntimeError("cannot render comments")

    settings = make_settings()
    reporter, _ = make_reporter(settings)
    register_writer(FragileWriter)
    try:
        result = publish(DOC, writer="fragile", settings=settings, reporter=reporter)
    finally:
        unregister_writer("fragile")

    assert result.worst is not None
    assert result.worst.severity == Severity.ERROR
    assert result.writer.conditions == [result.worst]
    assert "internal only" not in result.output



@mark_integration
def test_publish_stream_source() -> None:
    result = publish(io.StringIO("streamed\n"), no_config=True)
    assert result.output == "streamed\n"
    assert result.document.source == "<stream>"


def test_publish_unknown_components() -> None:
    with pytest.raises(KeyError, match="reader"):
        publish("x", reader="nope", no_config=True)
    with pytest.raises(KeyError, match="writer"):
        publish("x", writer="nope", no_config=True)
