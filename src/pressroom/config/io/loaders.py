# topmark:header:start
#
#   project      : Pressroom
#   file         : loaders.py
#   file_relpath : src/pressroom/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read configuration files into raw entries.

Two source syntaxes are supported:

- the line format (default): one ``name: value`` pair per line; blank lines and
  lines starting with ``#`` are ignored; a line without ``:`` is a structural
  warning and is skipped;
- TOML (files ending in ``.toml``), parsed with `tomlkit`. Keys are taken from
  the ``[pressroom]`` table, else ``[tool.pressroom]``, else the top level.

Loaders do **not** interpret values: they return `ConfigEntry` items with
normalized names and raw values. Typing, ``config`` inclusion and merging are
the resolver's job.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from pressroom.config.logging import get_logger
from pressroom.config.registry import normalize_option_name
from pressroom.core.diagnostics import DiagnosticLog, Severity
from pressroom.core.errors import ConfigError, StructuralWarning

if TYPE_CHECKING:
    from pressroom.config.logging import PressroomLogger

logger: PressroomLogger = get_logger(__name__)

COMMENT_MARKER: Final[str] = "#"
SEPARATOR: Final[str] = ":"
TOML_SECTION: Final[str] = "pressroom"


@dataclass(frozen=True)
class ConfigEntry:
    """One ``name: value`` entry read from a configuration file.

    Attributes:
        name (str): Normalized option name.
        value (Any): Raw value: ``str`` for line sources, native TOML values otherwise.
        source (Path): The file the entry came from.
        line (int | None): 1-based line number (line sources only).
    """

    name: str
    value: Any
    source: Path
    line: int | None = None

    @property
    def is_text(self) -> bool:
        """Return True if the value is raw text that still needs parsing."""
        return isinstance(self.value, str)


@dataclass
class ConfigFile:
    """Entries and structural diagnostics read from one configuration file."""

    path: Path
    entries: list[ConfigEntry] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)


def warn_structural(
    diagnostics: DiagnosticLog,
    message: str,
    *,
    line: int | None = None,
) -> None:
    """Record and emit a `StructuralWarning` (never fatal)."""
    diagnostics.add(Severity.WARNING, message, line)
    warnings.warn(message, StructuralWarning, stacklevel=3)


def parse_config_lines(text: str, path: Path) -> ConfigFile:
    """Parse the line format into a `ConfigFile`.

    Args:
        text: The file contents.
        path: The file path (used for provenance and messages).

    Returns:
        ConfigFile: The entries in file order, plus structural diagnostics.
    """
    result = ConfigFile(path=path)
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line: str = raw_line.strip()
        if not line or line.startswith(COMMENT_MARKER):
            continue
        if SEPARATOR not in line:
            warn_structural(
                result.diagnostics,
                f"{path}:{lineno}: ignoring line without '{SEPARATOR}': {line!r}",
                line=lineno,
            )
            continue
        raw_name, _, value = line.partition(SEPARATOR)
        name: str = normalize_option_name(raw_name)
        if not name:
            warn_structural(
                result.diagnostics,
                f"{path}:{lineno}: ignoring entry without a name: {line!r}",
                line=lineno,
            )
            continue
        result.entries.append(ConfigEntry(name, value.strip(), path, lineno))
    logger.trace("Read %d entries from %s", len(result.entries), path)
    return result


def _select_toml_table(data: dict[str, Any]) -> dict[str, Any]:
    section: Any = data.get(TOML_SECTION)
    if isinstance(section, dict):
        return cast("dict[str, Any]", section)
    tool: Any = data.get("tool")
    if isinstance(tool, dict):
        nested: Any = cast("dict[str, Any]", tool).get(TOML_SECTION)
        if isinstance(nested, dict):
            return cast("dict[str, Any]", nested)
    return data


def parse_config_toml(text: str, path: Path) -> ConfigFile:
    """Parse a TOML configuration source into a `ConfigFile`.

    Raises:
        ConfigError: If the document is not valid TOML.
    """
    try:
        data_any: Any = tomlkit.parse(text).unwrap()
    except TomlkitParseError as exc:
        raise ConfigError(f"invalid TOML: {exc}", source=path) from exc

    result = ConfigFile(path=path)
    table: dict[str, Any] = _select_toml_table(cast("dict[str, Any]", data_any))
    for raw_name, value in table.items():
        if isinstance(value, dict):
            if raw_name not in (TOML_SECTION, "tool"):
                warn_structural(
                    result.diagnostics, f"{path}: ignoring nested table [{raw_name}]"
                )
            continue
        result.entries.append(ConfigEntry(normalize_option_name(raw_name), value, path))
    logger.trace("Read %d TOML entries from %s", len(result.entries), path)
    return result


def load_config_file(path: Path) -> ConfigFile:
    """Read and parse one configuration file, choosing the syntax by suffix.

    Raises:
        ConfigError: If the file cannot be read or (TOML) parsed.
    """
    try:
        text: str = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot read configuration file: {exc}", source=path) from exc
    if path.suffix.lower() == ".toml":
        return parse_config_toml(text, path)
    return parse_config_lines(text, path)
