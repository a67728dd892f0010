# topmark:header:start
#
#   project      : Pressroom
#   file         : __init__.py
#   file_relpath : src/pressroom/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Settings handling for Pressroom.

This package holds the option catalogue (`SettingsRegistry`), the option type
descriptors, the immutable/mutable settings model and the resolver that merges
defaults, configuration files and overrides into one `Settings` per run.
"""

from __future__ import annotations

from pressroom.config import logging
from pressroom.config.keys import Keys
from pressroom.config.model import MutableSettings, Settings, default_settings
from pressroom.config.registry import (
    OptionSpec,
    SettingsRegistry,
    get_registry,
    normalize_option_name,
    register_component_options,
    register_option,
)
from pressroom.config.resolver import (
    InvalidValuePolicy,
    SettingsResolver,
    resolve_settings,
)
from pressroom.config.types import (
    BoolType,
    ChoiceType,
    IntRangeType,
    ListType,
    OptionType,
    PathType,
    StringType,
)

__all__ = [
    "BoolType",
    "ChoiceType",
    "IntRangeType",
    "InvalidValuePolicy",
    "Keys",
    "ListType",
    "MutableSettings",
    "OptionSpec",
    "OptionType",
    "PathType",
    "Settings",
    "SettingsRegistry",
    "SettingsResolver",
    "StringType",
    "default_settings",
    "get_registry",
    "logging",
    "normalize_option_name",
    "register_component_options",
    "register_option",
    "resolve_settings",
]
