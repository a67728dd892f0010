# topmark:header:start
#
#   project      : Pressroom
#   file         : test_publish_command.py
#   file_relpath : tests/cli/test_publish_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for `pressroom publish`.

Exact output is checked through ``-o FILE``; stdout is only checked for
substrings (see `tests.cli.conftest`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pressroom.config.paths import CONFIG_FILE_NAME
from tests.cli.conftest import assert_SUCCESS, run_cli_in
from tests.conftest import mark_cli, write_config

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result

GUIDE = "= Guide\n\nFirst para\n.. editor note\n"


@mark_cli
def test_publish_text_to_file_round_trips(tmp_path: Path) -> None:
    (tmp_path / "guide.txt").write_bytes(GUIDE.replace("\n", "\r\n").encode())

    result: Result = run_cli_in(tmp_path, ["publish", "guide.txt", "-o", "out.txt"])

    assert_SUCCESS(result)
    assert (tmp_path / "out.txt").read_bytes() == GUIDE.replace("\n", "\r\n").encode()


@mark_cli
def test_publish_markdown_to_stdout(tmp_path: Path) -> None:
    (tmp_path / "guide.txt").write_text(GUIDE, encoding="utf-8")

    result: Result = run_cli_in(tmp_path, ["publish", "guide.txt", "--writer", "markdown"])

    assert_SUCCESS(result)
    assert "# Guide" in result.output
    assert "<!-- editor note -->" in result.output


@mark_cli
def test_publish_reads_stdin(tmp_path: Path) -> None:
    result: Result = run_cli_in(
        tmp_path, ["publish", "-", "-o", "out.txt"], input_text="from stdin\n"
    )
    assert_SUCCESS(result)
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "from stdin\n"


@mark_cli
def test_publish_single_part(tmp_path: Path) -> None:
    (tmp_path / "guide.txt").write_text(GUIDE, encoding="utf-8")

    result: Result = run_cli_in(
        tmp_path,
        ["publish", "guide.txt", "--writer", "markdown", "--part", "title", "-o", "title.md"],
    )

    assert_SUCCESS(result)
    assert (tmp_path / "title.md").read_text(encoding="utf-8") == "# Guide\n\n"


@mark_cli
def test_publish_set_override(tmp_path: Path) -> None:
    (tmp_path / "guide.txt").write_text(GUIDE, encoding="utf-8")

    result: Result = run_cli_in(
        tmp_path,
        [
            "publish",
            "guide.txt",
            "--writer",
            "markdown",
            "-s",
            "strip_comments=yes",
            "-o",
            "out.md",
        ],
    )

    assert_SUCCESS(result)
    assert (tmp_path / "out.md").read_text(encoding="utf-8") == "# Guide\n\nFirst para\n\n"


@mark_cli
def test_publish_honors_document_config_unless_disabled(tmp_path: Path) -> None:
    (tmp_path / "guide.txt").write_text(GUIDE, encoding="utf-8")
    write_config(tmp_path / CONFIG_FILE_NAME, "strip_comments: yes")

    stripped: Result = run_cli_in(tmp_path, ["publish", "guide.txt", "-o", "a.txt"])
    kept: Result = run_cli_in(tmp_path, ["publish", "guide.txt", "--no-config", "-o", "b.txt"])

    assert_SUCCESS(stripped)
    assert_SUCCESS(kept)
    assert (tmp_path / "a.txt").read_text(encoding="utf-8") == "= Guide\n\nFirst para\n"
    assert (tmp_path / "b.txt").read_text(encoding="utf-8") == GUIDE


@mark_cli
def test_publish_explicit_config_file(tmp_path: Path) -> None:
    (tmp_path / "guide.txt").write_text(GUIDE, encoding="utf-8")
    write_config(tmp_path / "conf" / "extra.conf", "strip-comments: on")

    result: Result = run_cli_in(
        tmp_path, ["publish", "guide.txt", "--config", "conf/extra.conf", "-o", "out.txt"]
    )

    assert_SUCCESS(result)
    assert "editor note" not in (tmp_path / "out.txt").read_text(encoding="utf-8")


@mark_cli
def test_publish_help_lists_components(tmp_path: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["publish", "--help"])
    assert_SUCCESS(result)
    assert "Readers: lines" in result.output
    assert "markdown" in result.output
