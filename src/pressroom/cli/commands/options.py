# topmark:header:start
#
#   project      : Pressroom
#   file         : options.py
#   file_relpath : src/pressroom/cli/commands/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pressroom `options` command: list the settings catalogue."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pressroom.cli.options import CONTEXT_SETTINGS
from pressroom.config.registry import get_registry

if TYPE_CHECKING:
    from pressroom.cli.console import ClickConsole


@click.command(
    name="options",
    context_settings=CONTEXT_SETTINGS,
    help="List the recognized options with their type, default and description.",
)
def options_command() -> None:
    """List the settings catalogue."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    for spec in get_registry():
        default: str = spec.type.render(spec.default) if spec.default is not None else "-"
        console.print(
            f"{console.styled(spec.name, bold=True)} ({spec.type.describe()}, default: {default})"
        )
        if spec.description:
            console.print(f"    {spec.description}")
