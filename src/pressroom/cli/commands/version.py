# topmark:header:start
#
#   project      : Pressroom
#   file         : version.py
#   file_relpath : src/pressroom/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pressroom `version` command.

Prints the Pressroom version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pressroom.constants import PRESSROOM_VERSION

if TYPE_CHECKING:
    from pressroom.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of Pressroom.",
)
def version_command() -> None:
    """Show the current version of Pressroom."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]
    console.print(PRESSROOM_VERSION)
