# topmark:header:start
#
#   project      : Pressroom
#   file         : keys.py
#   file_relpath : src/pressroom/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical names of the built-in settings.

Centralizing the option names:
    - Avoids hard-coded strings scattered across the transform and writer layers
    - Keeps defaults, parsing and docs aligned

Renaming or removing a key is a breaking change for existing configuration files.
"""

from __future__ import annotations

from typing import Final


class Keys:
    """Built-in option names (normalized form)."""

    # Reserved: a `config` line includes another configuration file.
    CONFIG: Final[str] = "config"

    # Condition escalation
    REPORT_LEVEL: Final[str] = "report_level"
    HALT_LEVEL: Final[str] = "halt_level"

    # Transform scheduler
    DIAGNOSTICS_TITLE: Final[str] = "diagnostics_title"

    # Writer traversal
    VISITOR_ERRORS: Final[str] = "visitor_errors"
    OUTPUT_ENCODING: Final[str] = "output_encoding"

    # Built-in transforms
    STRIP_COMMENTS: Final[str] = "strip_comments"
    DOCTITLE: Final[str] = "doctitle"


DEFAULT_DIAGNOSTICS_TITLE: Final[str] = "Pressroom System Messages"

VISITOR_ERRORS_CONTINUE: Final[str] = "continue"
VISITOR_ERRORS_PROPAGATE: Final[str] = "propagate"
