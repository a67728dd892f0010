# topmark:header:start
#
#   project      : Pressroom
#   file         : errors.py
#   file_relpath : src/pressroom/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Pressroom CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes (see `pressroom.core.exit_codes.ExitCode`).

Styling:
    Exceptions prefer the project console if one is stored on the Click context
    (see `show()`); otherwise Click's default error display is used.
"""

from __future__ import annotations

from typing import IO, Any

import click

from pressroom.core.exit_codes import ExitCode


class PressroomCliError(click.ClickException):
    """Base class for all Pressroom CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorized later by `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error through the project console when available."""
        ctx = click.get_current_context(silent=True)
        obj = getattr(ctx, "obj", None) if ctx is not None else None
        console = obj.get("console") if isinstance(obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(f"Error: {self.format_message()}")


class PressroomUsageError(PressroomCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class PressroomConfigError(PressroomCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class PressroomFileNotFoundError(PressroomCliError):
    """Error when the input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class PressroomIOError(PressroomCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class PressroomPipelineError(PressroomCliError):
    """Error for runs halted by a condition at or above the halt-level."""

    exit_code = ExitCode.PIPELINE_ERROR


class PressroomUnexpectedError(PressroomCliError):
    """Error for unhandled/unknown errors (last-resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR
