# topmark:header:start
#
#   project      : Pressroom
#   file         : publish.py
#   file_relpath : src/pressroom/cli/commands/publish.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pressroom `publish` command.

Reads SOURCE (``-`` for STDIN) with a registered reader, runs the reader's
transforms and writes the result with a registered writer to stdout or
``--output``.

Exit codes:
    0 on success (recovered conditions end up in the diagnostics section),
    64 for usage errors, 66 when SOURCE does not exist, 70 when a condition
    reaches the halt-level, 74 for I/O errors and 78 for configuration errors.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from pressroom.cli.errors import (
    PressroomConfigError,
    PressroomFileNotFoundError,
    PressroomIOError,
    PressroomPipelineError,
    PressroomUsageError,
)
from pressroom.cli.options import CONTEXT_SETTINGS, common_config_options, parse_setting_overrides
from pressroom.config.keys import Keys
from pressroom.config.logging import get_logger
from pressroom.config.resolver import InvalidValuePolicy
from pressroom.core.diagnostics import MAX_SEVERITY, MIN_SEVERITY
from pressroom.core.errors import ConfigError, TransformHalt
from pressroom.document.source import Source
from pressroom.publisher import publish
from pressroom.registry import get_reader, get_writer, reader_names, writer_names
from pressroom.writers.base import write_part

if TYPE_CHECKING:
    from pressroom.cli.console import ClickConsole
    from pressroom.config.logging import PressroomLogger
    from pressroom.publisher import PublishResult

logger: PressroomLogger = get_logger(__name__)


def _load_source(source: Path) -> Source:
    if str(source) == "-":
        return Source.from_stream(click.get_text_stream("stdin"), name="<stdin>")
    if not source.exists():
        raise PressroomFileNotFoundError(f"No such file: {source}")
    try:
        return Source.from_path(source)
    except UnicodeDecodeError as exc:
        raise PressroomIOError(f"Cannot decode {source}: {exc}") from exc
    except OSError as exc:
        raise PressroomIOError(f"Cannot read {source}: {exc.strerror or exc}") from exc


@click.command(
    name="publish",
    context_settings=CONTEXT_SETTINGS,
    help="Read SOURCE, transform it and write the result.",
)
@click.argument("source", type=click.Path(dir_okay=False, allow_dash=True, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to this file instead of stdout.",
)
@click.option("--reader", "reader_name", default="lines", show_default=True, help="Reader name.")
@click.option("--writer", "writer_name", default="text", show_default=True, help="Writer name.")
@click.option("--part", default=None, help="Emit only this writer part.")
@click.option(
    "--report-level",
    type=click.IntRange(MIN_SEVERITY, MAX_SEVERITY),
    default=None,
    help="Report conditions at or above this severity.",
)
@click.option(
    "--halt-level",
    type=click.IntRange(MIN_SEVERITY, MAX_SEVERITY),
    default=None,
    help="Abort on conditions at or above this severity.",
)
@common_config_options
def publish_command(
    *,
    source: Path,
    output: Path | None,
    reader_name: str,
    writer_name: str,
    part: str | None,
    report_level: int | None,
    halt_level: int | None,
    config_files: tuple[Path, ...],
    no_config: bool,
    strict_config: bool,
    set_values: tuple[str, ...],
) -> None:
    """Publish one document."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    try:
        get_reader(reader_name)
        get_writer(writer_name)
    except KeyError as exc:
        raise PressroomUsageError(str(exc.args[0])) from exc

    overrides: dict[str, object] = dict(parse_setting_overrides(set_values))
    if report_level is not None:
        overrides[Keys.REPORT_LEVEL] = report_level
    if halt_level is not None:
        overrides[Keys.HALT_LEVEL] = halt_level

    src: Source = _load_source(source)
    try:
        result: PublishResult = publish(
            src,
            reader=reader_name,
            writer=writer_name,
            destination=output if part is None else None,
            overrides=overrides,
            config_files=config_files,
            no_config=no_config,
            policy=InvalidValuePolicy.ABORT if strict_config else InvalidValuePolicy.USE_DEFAULT,
        )
    except ConfigError as exc:
        raise PressroomConfigError(str(exc)) from exc
    except TransformHalt as exc:
        raise PressroomPipelineError(str(exc)) from exc
    except OSError as exc:
        raise PressroomIOError(f"Cannot write {output}: {exc.strerror or exc}") from exc

    text: str = result.output
    if part is not None:
        try:
            text = write_part(result.writer, part, output)
        except KeyError as exc:
            raise PressroomUsageError(str(exc.args[0])) from exc
        except OSError as exc:
            raise PressroomIOError(f"Cannot write {output}: {exc.strerror or exc}") from exc

    if output is None:
        console.print(text, nl=False)
    if result.worst is not None:
        logger.info("Worst recovered condition: %r", result.worst)


publish_command.epilog = (
    f"Readers: {', '.join(reader_names())}. Writers: {', '.join(writer_names())}."
)
