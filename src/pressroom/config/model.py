# topmark:header:start
#
#   project      : Pressroom
#   file         : model.py
#   file_relpath : src/pressroom/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Settings model and merge policy.

This module defines:
    - `Settings`: an immutable, per-run settings mapping used by readers,
      transforms and writers.
    - `MutableSettings`: a mutable builder used while merging configuration
      sources; it can be frozen into `Settings` and thawed back for edits.

Scope:
    - *In scope*: data shapes, defaulting, merge policy
      (`MutableSettings.merge_with`), override application and freeze/thaw.
    - *Out of scope*: file discovery and parsing. Those live in
      `pressroom.config.resolver` and `pressroom.config.io`.

Immutability:
    - `Settings` wraps a read-only mapping and is ``frozen=True``. A run never
      observes settings changing under it. Use `Settings.thaw` → edit →
      `MutableSettings.freeze` for derived settings.

Invariant:
    - Every catalogue key has a value in every `Settings` built from
      `MutableSettings.from_defaults` (the default if nothing overrides it).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pressroom.config.keys import Keys
from pressroom.config.logging import get_logger
from pressroom.config.registry import get_registry
from pressroom.core.diagnostics import DiagnosticLog, FrozenDiagnosticLog
from pressroom.core.errors import ConfigError

if TYPE_CHECKING:
    from pressroom.config.logging import PressroomLogger
    from pressroom.config.registry import SettingsRegistry

logger: PressroomLogger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Settings(Mapping[str, Any]):
    """Immutable resolved settings for one document-processing run.

    Attributes:
        data (Mapping[str, Any]): Read-only ``{option: value}`` mapping.
        config_files (tuple[Path, ...]): Configuration files that contributed,
            in the order they were merged.
        diagnostics (FrozenDiagnosticLog): Warnings and recovered errors
            collected while resolving.
    """

    data: Mapping[str, Any]
    config_files: tuple[Path, ...] = ()
    diagnostics: FrozenDiagnosticLog = field(default_factory=FrozenDiagnosticLog)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def report_level(self) -> int:
        """Conditions at or above this severity are reported."""
        return int(self.data[Keys.REPORT_LEVEL])

    @property
    def halt_level(self) -> int:
        """Conditions at or above this severity abort the run."""
        return int(self.data[Keys.HALT_LEVEL])

    def thaw(self) -> MutableSettings:
        """Return a mutable copy for edits."""
        return MutableSettings(
            data=dict(self.data),
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a plain, sorted ``dict`` copy (for dumps and snapshots)."""
        return {k: self.data[k] for k in sorted(self.data)}


@dataclass
class MutableSettings:
    """Mutable settings builder used during resolution.

    Attributes:
        data (dict[str, Any]): Accumulated ``{option: value}`` entries.
        config_files (list[Path]): Contributing configuration files, in merge order.
        diagnostics (DiagnosticLog): Collected diagnostics.
    """

    data: dict[str, Any] = field(default_factory=lambda: {})
    config_files: list[Path] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    @classmethod
    def from_defaults(cls, registry: SettingsRegistry | None = None) -> MutableSettings:
        """Return a builder holding the default of every catalogue entry."""
        return cls(data=(registry if registry is not None else get_registry()).defaults())

    def merge_with(self, other: MutableSettings) -> MutableSettings:
        """Overlay ``other`` onto this builder, key by key (``other`` wins).

        Provenance and diagnostics are concatenated in merge order.

        Returns:
            MutableSettings: ``self``, for chaining.
        """
        self.data.update(other.data)
        for path in other.config_files:
            if path not in self.config_files:
                self.config_files.append(path)
        self.diagnostics.extend(other.diagnostics)
        return self

    def apply_overrides(
        self,
        overrides: Mapping[str, Any],
        registry: SettingsRegistry | None = None,
    ) -> MutableSettings:
        """Apply API/CLI overrides, validating recognized keys.

        String values are parsed with the option's text syntax; other values are
        coerced. Unknown keys are stored as given.

        Raises:
            ConfigError: If a recognized key receives an invalid value.
        """
        reg: SettingsRegistry = registry if registry is not None else get_registry()
        for raw_name, value in overrides.items():
            key: str = reg.intern(raw_name)
            spec = reg.get(key)
            if spec is None:
                self.data[key] = value
                continue
            try:
                if isinstance(value, str):
                    self.data[key] = spec.type.parse(value, base=Path.cwd())
                else:
                    self.data[key] = spec.type.coerce(value, base=Path.cwd())
            except ValueError as exc:
                raise ConfigError(str(exc), option=key, value=value) from exc
            logger.debug("Override %s = %r", key, self.data[key])
        return self

    def freeze(self) -> Settings:
        """Return an immutable `Settings` snapshot."""
        return Settings(
            data=MappingProxyType(dict(self.data)),
            config_files=tuple(self.config_files),
            diagnostics=self.diagnostics.freeze(),
        )


def default_settings(registry: SettingsRegistry | None = None) -> Settings:
    """Return settings holding only catalogue defaults."""
    return MutableSettings.from_defaults(registry).freeze()
