# topmark:header:start
#
#   project      : Pressroom
#   file         : render.py
#   file_relpath : src/pressroom/config/io/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render settings as TOML or as the line configuration format.

TOML has no `null` value, so `None` entries are stripped during rendering.
Paths become strings and tuples become arrays.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit

from pressroom.config.io.loaders import TOML_SECTION
from pressroom.config.logging import get_logger

if TYPE_CHECKING:
    from pressroom.config.logging import PressroomLogger
    from pressroom.config.registry import SettingsRegistry

logger: PressroomLogger = get_logger(__name__)


def _to_toml_value(value: object) -> object:
    """Convert a settings value into a TOML-compatible value (None is dropped upstream)."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            out[str(k_any)] = _to_toml_value(v_any)
        return out
    if isinstance(value, (list, tuple)):
        seq: tuple[object, ...] = tuple(cast("tuple[object, ...]", value))
        return [_to_toml_value(v) for v in seq if v is not None]
    if isinstance(value, Path):
        return str(value)
    return value


def to_toml(values: Mapping[str, Any], *, section: str | None = TOML_SECTION) -> str:
    """Serialize a settings mapping to a TOML document string.

    Args:
        values: The settings to render (keys sorted in the output).
        section: Table to nest the values under; ``None`` renders top-level keys.

    Returns:
        str: TOML text.
    """
    body: object = _to_toml_value({k: values[k] for k in sorted(values)})
    doc: dict[str, object] = {section: body} if section else cast("dict[str, object]", body)
    return cast("str", cast("Any", tomlkit).dumps(doc))


def to_config_lines(values: Mapping[str, Any], registry: SettingsRegistry) -> str:
    """Render settings in the ``name: value`` line format.

    Recognized options use their type's text syntax; unknown keys are written as-is.
    """
    lines: list[str] = []
    for key in sorted(values):
        spec = registry.get(key)
        value: Any = values[key]
        text: str = spec.type.render(value) if spec is not None else str(value)
        lines.append(f"{key}: {text}")
    return "\n".join(lines) + ("\n" if lines else "")
