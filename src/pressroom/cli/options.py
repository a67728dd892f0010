# topmark:header:start
#
#   project      : Pressroom
#   file         : options.py
#   file_relpath : src/pressroom/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI options and their resolution logic.

Reusable option decorators (verbosity, configuration sources, setting
overrides) live here so that commands stay thin.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, TypeVar

import click

from pressroom.cli.errors import PressroomUsageError
from pressroom.config.logging import LOG_LEVELS, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pressroom.config.logging import PressroomLogger

F = TypeVar("F", bound=Callable[..., Any])

logger: PressroomLogger = get_logger(__name__)

CONTEXT_SETTINGS: dict[str, Any] = {
    "help_option_names": ["-h", "--help"],
}

# Indexed by ``-v`` count (capped) and by ``-q`` count (capped).
_VERBOSE_LEVELS: tuple[str, ...] = ("WARNING", "INFO", "DEBUG", "TRACE")
_QUIET_LEVELS: tuple[str, ...] = ("WARNING", "ERROR", "CRITICAL")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the logging level from ``-v`` / ``-q`` counts.

    Behavior:
        The options are mutually exclusive. ``-vvv`` selects TRACE, ``-vv``
        DEBUG, ``-v`` INFO, ``-q`` ERROR and ``-qq`` CRITICAL. The default is
        WARNING.

    Raises:
        PressroomUsageError: If both flags are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise PressroomUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count:
        name: str = _VERBOSE_LEVELS[min(verbose_count, len(_VERBOSE_LEVELS) - 1)]
    else:
        name = _QUIET_LEVELS[min(quiet_count, len(_QUIET_LEVELS) - 1)]
    return LOG_LEVELS[name]


def parse_setting_overrides(pairs: Iterable[str]) -> dict[str, str]:
    """Turn ``NAME=VALUE`` strings into an overrides mapping (later pairs win).

    Raises:
        PressroomUsageError: If a pair has no ``=`` or an empty name.
    """
    overrides: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise PressroomUsageError(f"Expected NAME=VALUE, got {pair!r}")
        overrides[name.strip()] = value.strip()
    return overrides


def common_verbose_options(f: F) -> F:
    """Add mutually exclusive, counting ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Decrease log verbosity. Specify twice for even less.",
    )(f)
    return f


def common_config_options(f: F) -> F:
    """Add configuration-source options shared by ``publish`` and ``settings``.

    Adds ``--config FILE`` (repeatable), ``--no-config``, ``--strict-config``
    and ``-s/--set NAME=VALUE`` (repeatable).
    """
    f = click.option(
        "--config",
        "config_files",
        multiple=True,
        type=click.Path(dir_okay=False, path_type=Path),
        help="Extra configuration file merged after discovery (repeatable).",
    )(f)
    f = click.option(
        "--no-config",
        is_flag=True,
        default=False,
        help="Ignore the standard and document-specific configuration files.",
    )(f)
    f = click.option(
        "--strict-config",
        is_flag=True,
        default=False,
        help="Abort on invalid configuration values instead of using defaults.",
    )(f)
    f = click.option(
        "-s",
        "--set",
        "set_values",
        multiple=True,
        metavar="NAME=VALUE",
        help="Override a setting (repeatable; highest precedence).",
    )(f)
    return f
