# topmark:header:start
#
#   project      : Pressroom
#   file         : constants.py
#   file_relpath : src/pressroom/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pressroom Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

PRESSROOM_VERSION: str = get_version("pressroom")

SETTINGS_BLOCK_START: str = "# === BEGIN[TOML] ==="
SETTINGS_BLOCK_END: str = "# === END[TOML] ==="

VALUE_NOT_SET: str = "<not set>"
