# topmark:header:start
#
#   project      : Pressroom
#   file         : __init__.py
#   file_relpath : src/pressroom/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration file I/O: loading raw entries and rendering settings."""

from __future__ import annotations

from pressroom.config.io.loaders import (
    ConfigEntry,
    ConfigFile,
    load_config_file,
    parse_config_lines,
    parse_config_toml,
)
from pressroom.config.io.render import to_config_lines, to_toml

__all__ = [
    "ConfigEntry",
    "ConfigFile",
    "load_config_file",
    "parse_config_lines",
    "parse_config_toml",
    "to_config_lines",
    "to_toml",
]
