# topmark:header:start
#
#   project      : Pressroom
#   file         : test_exit_codes.py
#   file_relpath : tests/cli/test_exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI exit-code mapping for `pressroom publish` and `pressroom settings`."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pytest

from pressroom.core.diagnostics import Severity
from pressroom.core.exit_codes import ExitCode
from pressroom.readers import LineReader
from pressroom.registry import register_reader, unregister_reader
from tests.cli.conftest import assert_exit_code, assert_SUCCESS, run_cli_in
from tests.conftest import mark_cli, recording_transform, write_config

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from click.testing import Result

    from pressroom.transforms import TransformContext, TransformSpec


def _halt(ctx: TransformContext) -> None:
    raise ctx.condition(Severity.SEVERE, "unsupported construct", line=1)


class HaltingReader(LineReader):
    """Line reader whose only transform raises a SEVERE condition."""

    name: ClassVar[str] = "halting"
    transforms: ClassVar[tuple[TransformSpec, ...]] = (
        recording_transform([], "halt", 100, _halt),
    )


@pytest.fixture
def halting_reader() -> Iterator[str]:
    """Register `HaltingReader` for the duration of one test."""
    register_reader(HaltingReader)
    yield HaltingReader.name
    unregister_reader(HaltingReader.name)


@pytest.fixture
def notes(tmp_path: Path) -> Path:
    """A small source file in the test directory."""
    path = tmp_path / "notes.txt"
    path.write_text("= Notes\n\nBody.\n", encoding="utf-8")
    return path


@mark_cli
def test_missing_source_exits_66(tmp_path: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["publish", "absent.txt"])
    assert_exit_code(result, ExitCode.FILE_NOT_FOUND)
    assert "absent.txt" in result.output


@mark_cli
@pytest.mark.parametrize(
    "argv",
    [
        ["publish", "notes.txt", "--writer", "html"],
        ["publish", "notes.txt", "--reader", "rst"],
        ["publish", "notes.txt", "-s", "novalue"],
        ["publish", "notes.txt", "-s", "=1"],
        ["publish", "notes.txt", "--part", "footer"],
        ["-v", "-q", "publish", "notes.txt"],
    ],
)
def test_usage_errors_exit_64(tmp_path: Path, notes: Path, argv: list[str]) -> None:
    assert notes.exists()
    result: Result = run_cli_in(tmp_path, argv)
    assert_exit_code(result, ExitCode.USAGE_ERROR)


@mark_cli
def test_invalid_override_exits_78(tmp_path: Path, notes: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["publish", notes.name, "-s", "report_level=high"])
    assert_exit_code(result, ExitCode.CONFIG_ERROR)
    assert "report_level" in result.output


@mark_cli
def test_strict_config_exits_78(tmp_path: Path, notes: Path) -> None:
    write_config(tmp_path / "bad.conf", "report_level: high")

    lenient: Result = run_cli_in(
        tmp_path, ["publish", notes.name, "--config", "bad.conf", "-o", "out.txt"]
    )
    strict: Result = run_cli_in(
        tmp_path, ["publish", notes.name, "--config", "bad.conf", "--strict-config"]
    )

    assert_SUCCESS(lenient)
    assert_exit_code(strict, ExitCode.CONFIG_ERROR)
    assert "bad.conf" in strict.output


@mark_cli
def test_halt_exits_70(tmp_path: Path, notes: Path, halting_reader: str) -> None:
    result: Result = run_cli_in(tmp_path, ["publish", notes.name, "--reader", halting_reader])
    assert_exit_code(result, ExitCode.PIPELINE_ERROR)
    assert "unsupported construct" in result.output


@mark_cli
def test_raised_halt_level_recovers(tmp_path: Path, notes: Path, halting_reader: str) -> None:
    result: Result = run_cli_in(
        tmp_path,
        ["publish", notes.name, "--reader", halting_reader, "--halt-level", "10", "-o", "out.txt"],
    )

    assert_SUCCESS(result)
    written: str = (tmp_path / "out.txt").read_text(encoding="utf-8")
    assert written.startswith("= Notes\n\nBody.\n")
    assert "Pressroom System Messages" in written
    assert "SEVERE [line 1] unsupported construct" in written


@mark_cli
def test_undecodable_source_exits_74(tmp_path: Path) -> None:
    (tmp_path / "latin.txt").write_bytes(b"caf\xe9\n")
    result: Result = run_cli_in(tmp_path, ["publish", "latin.txt"])
    assert_exit_code(result, ExitCode.IO_ERROR)


@mark_cli
def test_unwritable_output_exits_74(tmp_path: Path, notes: Path) -> None:
    result: Result = run_cli_in(tmp_path, ["publish", notes.name, "-o", "missing/dir/out.txt"])
    assert_exit_code(result, ExitCode.IO_ERROR)
