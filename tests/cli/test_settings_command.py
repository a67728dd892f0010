# topmark:header:start
#
#   project      : Pressroom
#   file         : test_settings_command.py
#   file_relpath : tests/cli/test_settings_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for `pressroom settings`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pressroom.constants import SETTINGS_BLOCK_END, SETTINGS_BLOCK_START
from pressroom.core.exit_codes import ExitCode
from tests.cli.conftest import assert_exit_code, assert_SUCCESS, run_cli_in
from tests.conftest import mark_cli, write_config

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


@mark_cli
def test_settings_dumps_toml_block(tmp_path: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["settings"])

    assert_SUCCESS(result)
    assert SETTINGS_BLOCK_START in result.output
    assert SETTINGS_BLOCK_END in result.output
    assert "[pressroom]" in result.output
    assert "report_level = 4" in result.output


@mark_cli
def test_settings_lines_format_with_override(tmp_path: Path) -> None:
    result: Result = run_cli_in(
        tmp_path, ["settings", "--format", "lines", "-s", "report_level=2"]
    )

    assert_SUCCESS(result)
    assert "report_level: 2" in result.output
    assert SETTINGS_BLOCK_START not in result.output


@mark_cli
def test_settings_lists_config_provenance(tmp_path: Path) -> None:
    conf: Path = write_config(tmp_path / "team.conf", "halt_level: 6")

    result: Result = run_cli_in(tmp_path, ["settings", "--config", "team.conf"])

    assert_SUCCESS(result)
    assert f"# from {conf.resolve()}" in result.output or f"# from {conf}" in result.output
    assert "halt_level = 6" in result.output


@mark_cli
def test_settings_for_document_reads_its_config(tmp_path: Path) -> None:
    (tmp_path / "doc.txt").write_text("text\n", encoding="utf-8")
    write_config(tmp_path / "pressroom.conf", "strip_comments: yes")

    found: Result = run_cli_in(tmp_path, ["settings", "doc.txt", "--format", "lines"])
    skipped: Result = run_cli_in(
        tmp_path, ["settings", "doc.txt", "--format", "lines", "--no-config"]
    )

    assert "strip_comments: true" in found.output
    assert "strip_comments: false" in skipped.output


@mark_cli
def test_settings_invalid_value_warns_or_aborts(tmp_path: Path) -> None:
    write_config(tmp_path / "bad.conf", "report_level: high")

    lenient: Result = run_cli_in(tmp_path, ["settings", "--config", "bad.conf"])
    strict: Result = run_cli_in(
        tmp_path, ["settings", "--config", "bad.conf", "--strict-config"]
    )

    assert_SUCCESS(lenient)
    assert "report_level" in lenient.output
    assert "report_level = 4" in lenient.output
    assert "1 configuration diagnostic(s): 1 error(s), 0 warning(s), 0 info" in lenient.output
    assert_exit_code(strict, ExitCode.CONFIG_ERROR)
