# topmark:header:start
#
#   project      : Pressroom
#   file         : settings.py
#   file_relpath : src/pressroom/cli/commands/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pressroom `settings` command.

Resolves settings exactly like `publish` would for SOURCE (or for no source)
and prints them, either as TOML between BEGIN/END markers or in the
``name: value`` configuration-file format.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from pressroom.cli.errors import PressroomConfigError
from pressroom.cli.options import CONTEXT_SETTINGS, common_config_options, parse_setting_overrides
from pressroom.config.io.render import to_config_lines, to_toml
from pressroom.config.registry import get_registry
from pressroom.config.resolver import InvalidValuePolicy, resolve_settings
from pressroom.constants import SETTINGS_BLOCK_END, SETTINGS_BLOCK_START
from pressroom.core.errors import ConfigError

if TYPE_CHECKING:
    from pressroom.cli.console import ClickConsole
    from pressroom.config.model import Settings
    from pressroom.core.diagnostics import DiagnosticStats


@click.command(
    name="settings",
    context_settings=CONTEXT_SETTINGS,
    help="Show the resolved settings for SOURCE (or without a source).",
)
@click.argument(
    "source",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["toml", "lines"]),
    default="toml",
    show_default=True,
    help="Output format.",
)
@common_config_options
def settings_command(
    *,
    source: Path | None,
    output_format: str,
    config_files: tuple[Path, ...],
    no_config: bool,
    strict_config: bool,
    set_values: tuple[str, ...],
) -> None:
    """Dump the resolved settings."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    try:
        settings: Settings = resolve_settings(
            source,
            extra_config_files=config_files,
            overrides=parse_setting_overrides(set_values),
            no_config=no_config,
            policy=InvalidValuePolicy.ABORT if strict_config else InvalidValuePolicy.USE_DEFAULT,
        )
    except ConfigError as exc:
        raise PressroomConfigError(str(exc)) from exc

    for diagnostic in settings.diagnostics:
        console.warn(f"{diagnostic.label}: {diagnostic.message}")
    if settings.diagnostics:
        stats: DiagnosticStats = settings.diagnostics.stats()
        console.warn(
            f"{stats.total} configuration diagnostic(s): {stats.n_error} error(s), "
            f"{stats.n_warning} warning(s), {stats.n_info} info"
        )

    if output_format == "lines":
        for path in settings.config_files:
            console.print(f"# from {path}")
        console.print(to_config_lines(settings.to_dict(), get_registry()), nl=False)
        return

    console.print(SETTINGS_BLOCK_START)
    for path in settings.config_files:
        console.print(f"# from {path}")
    console.print(to_toml(settings.to_dict()), nl=False)
    console.print(SETTINGS_BLOCK_END)
