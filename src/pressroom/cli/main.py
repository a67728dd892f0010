# topmark:header:start
#
#   project      : Pressroom
#   file         : main.py
#   file_relpath : src/pressroom/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pressroom CLI entry point.

Group-level options (verbosity, color) are initialized once and placed into
``ctx.obj``; subcommands read the console from there.
"""

from __future__ import annotations

import logging

import click

from pressroom.cli.commands.options import options_command
from pressroom.cli.commands.publish import publish_command
from pressroom.cli.commands.settings import settings_command
from pressroom.cli.commands.version import version_command
from pressroom.cli.console import ClickConsole
from pressroom.cli.options import CONTEXT_SETTINGS, common_verbose_options, resolve_verbosity
from pressroom.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(ctx: click.Context, *, verbose: int, quiet: int, no_color: bool) -> None:
    """Initialize logging and the console on the Click context.

    ``PRESSROOM_LOG_LEVEL`` takes precedence over ``-v`` / ``-q``.
    """
    ctx.obj = ctx.obj or {}

    level: int = resolve_verbosity(verbose, quiet)
    env_level: int | None = resolve_env_log_level()
    if env_level is not None:
        level = env_level
    ctx.obj["log_level"] = level
    enable_color: bool = not no_color and click.get_text_stream("stdout").isatty()

    setup_logging(level=level, color=enable_color)
    # StructuralWarning and friends go through the logging handlers.
    logging.captureWarnings(True)
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Pressroom document processor",
)
@common_verbose_options
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: int, no_color: bool) -> None:
    """Entry point for the Pressroom CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'pressroom publish SOURCE' to process a document.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(publish_command)
cli.add_command(settings_command)
cli.add_command(options_command)
cli.add_command(version_command)

if __name__ == "__main__":
    cli()
