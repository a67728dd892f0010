# topmark:header:start
#
#   project      : Pressroom
#   file         : resolver.py
#   file_relpath : src/pressroom/config/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve one immutable `Settings` mapping per document-processing run.

Merge order (lowest → highest precedence):
    1) Catalogue defaults
    2) Standard configuration files, in search-path order
       (system ``/etc/pressroom.conf``, then the user files; see
       `pressroom.config.paths.standard_config_files`)
    3) The document-specific ``pressroom.conf`` next to a path-backed source
    4) Extra configuration files passed explicitly (in the order provided)
    5) Overrides (CLI ``-s name=value`` or API mappings)

Within one file:
    - ``config: <path>`` includes another file. Included files are resolved
      depth-first and merged in line order; the including file's own keys are
      merged last, so they override everything they include regardless of
      line position. Relative include paths resolve against the including
      file's directory.
    - Files already processed during this resolution are skipped, which breaks
      inclusion cycles.
    - Recognized keys are parsed by their declared type; unknown keys are kept
      as raw values.

Invalid values and unreadable files produce a `ConfigError`, handled by the
resolution's `InvalidValuePolicy` (or a caller-supplied callable).
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Union

from pressroom.config.io.loaders import ConfigFile, load_config_file
from pressroom.config.keys import Keys
from pressroom.config.logging import get_logger
from pressroom.config.model import MutableSettings, Settings
from pressroom.config.paths import abs_path_from, document_config_file, standard_config_files
from pressroom.config.registry import get_registry
from pressroom.core.diagnostics import Severity
from pressroom.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pressroom.config.io.loaders import ConfigEntry
    from pressroom.config.logging import PressroomLogger
    from pressroom.config.registry import SettingsRegistry

logger: PressroomLogger = get_logger(__name__)


class InvalidValuePolicy(Enum):
    """What to do with an invalid configuration value or unreadable file.

    Attributes:
        USE_DEFAULT: Record a diagnostic, log a warning and substitute the
            option's default (unreadable files are skipped).
        ABORT: Raise the `ConfigError` and abort resolution.
    """

    USE_DEFAULT = "use-default"
    ABORT = "abort"


# A callable policy receives the error and returns the value to use (or raises).
FallbackPolicy = Union[InvalidValuePolicy, Callable[[ConfigError], Any]]


class SettingsResolver:
    """Build `Settings` from defaults, configuration files and overrides.

    One resolver instance performs one resolution; it tracks processed files
    so that ``config`` chains cannot loop.

    Args:
        registry: Catalogue to resolve against (default: the process-wide one).
        policy: Handling of invalid values (see `InvalidValuePolicy`).
        search_path: Standard configuration files to consult; ``None`` uses
            `standard_config_files`.
    """

    def __init__(
        self,
        registry: SettingsRegistry | None = None,
        *,
        policy: FallbackPolicy = InvalidValuePolicy.USE_DEFAULT,
        search_path: Iterable[Path] | None = None,
    ) -> None:
        self.registry: SettingsRegistry = registry if registry is not None else get_registry()
        self.policy: FallbackPolicy = policy
        self.search_path: list[Path] | None = (
            [Path(p) for p in search_path] if search_path is not None else None
        )
        self._processed: set[Path] = set()

    # ------------------------------------------------------------------ sources

    def config_sources(self, source_path: Path | None = None) -> list[Path]:
        """Return the ordered list of files to consult (lowest precedence first).

        Missing standard files are kept in the list; they are skipped when read.
        """
        sources: list[Path] = list(
            self.search_path if self.search_path is not None else standard_config_files()
        )
        if source_path is not None:
            sources.append(document_config_file(source_path))
        return sources

    # --------------------------------------------------------------- resolution

    def resolve(
        self,
        source_path: Path | str | None = None,
        *,
        extra_config_files: Iterable[Path | str] = (),
        overrides: Mapping[str, Any] | None = None,
        no_config: bool = False,
    ) -> Settings:
        """Resolve settings for a source.

        Args:
            source_path: Path of a file-backed source, or None.
            extra_config_files: Explicit files merged after discovery, in order.
                A missing explicit file is a `ConfigError`.
            overrides: Highest-precedence values (validated for known keys).
            no_config: Skip the standard and document-specific files.

        Returns:
            Settings: The frozen settings for the run.

        Raises:
            ConfigError: Under the ``ABORT`` policy, or when an override is invalid.
        """
        self._processed = set()
        draft: MutableSettings = MutableSettings.from_defaults(self.registry)
        path: Path | None = Path(source_path) if source_path is not None else None

        if not no_config:
            for cfg_path in self.config_sources(path):
                if not cfg_path.is_file():
                    logger.trace("No configuration file at %s", cfg_path)
                    continue
                draft.merge_with(self.read_file(cfg_path))

        for extra in extra_config_files:
            extra_path: Path = abs_path_from(Path.cwd(), extra)
            if not extra_path.is_file():
                self._recover(
                    ConfigError("configuration file not found", source=extra_path), draft
                )
                continue
            draft.merge_with(self.read_file(extra_path))

        if overrides:
            draft.apply_overrides(overrides, self.registry)

        settings: Settings = draft.freeze()
        logger.debug("Resolved settings from %s", [str(p) for p in settings.config_files])
        return settings

    def read_file(self, path: Path) -> MutableSettings:
        """Resolve one configuration file (and its inclusions) into a builder.

        Returns an empty builder if ``path`` was already processed.
        """
        resolved: Path = path.resolve()
        result = MutableSettings()
        if resolved in self._processed:
            logger.debug("Skipping already processed configuration file %s", resolved)
            return result
        self._processed.add(resolved)

        try:
            cfg: ConfigFile = load_config_file(resolved)
        except ConfigError as exc:
            self._recover(exc, result)
            return result

        result.diagnostics.extend(cfg.diagnostics)
        own = MutableSettings(config_files=[resolved])
        for entry in cfg.entries:
            if entry.name == Keys.CONFIG:
                self._include(entry, result)
            else:
                self._apply_entry(entry, own)

        # The file's own keys override whatever it included.
        result.merge_with(own)
        return result

    def _include(self, entry: ConfigEntry, result: MutableSettings) -> None:
        raw: Any = entry.value
        if not isinstance(raw, str) or not raw.strip():
            self._recover(
                ConfigError(
                    "'config' expects a file path",
                    option=Keys.CONFIG,
                    value=raw,
                    source=entry.source,
                    line=entry.line,
                ),
                result,
            )
            return
        target: Path = abs_path_from(entry.source.parent, raw.strip())
        if not target.is_file():
            self._recover(
                ConfigError(
                    f"included configuration file not found: {target}",
                    option=Keys.CONFIG,
                    value=raw,
                    source=entry.source,
                    line=entry.line,
                ),
                result,
            )
            return
        logger.debug("Including %s from %s", target, entry.source)
        result.merge_with(self.read_file(target))

    def _apply_entry(self, entry: ConfigEntry, own: MutableSettings) -> None:
        spec = self.registry.get(entry.name)
        if spec is None:
            logger.debug("Unknown option '%s' in %s kept as raw value", entry.name, entry.source)
            own.data[entry.name] = entry.value
            return
        base: Path = entry.source.parent
        try:
            if entry.is_text:
                value: Any = spec.type.parse(entry.value, base=base)
            else:
                value = spec.type.coerce(entry.value, base=base)
        except ValueError as exc:
            own.data[entry.name] = self._recover(
                ConfigError(
                    f"invalid value for '{entry.name}': {exc}",
                    option=entry.name,
                    value=entry.value,
                    source=entry.source,
                    line=entry.line,
                ),
                own,
            )
            return
        own.data[entry.name] = value

    def _recover(self, error: ConfigError, draft: MutableSettings) -> Any:
        """Apply the fallback policy to ``error``; return the substitute value."""
        if self.policy is InvalidValuePolicy.ABORT:
            raise error
        if isinstance(self.policy, InvalidValuePolicy):
            logger.warning("%s; using default", error)
            draft.diagnostics.add(Severity.ERROR, str(error), error.line)
            spec = self.registry.get(error.option) if error.option else None
            return spec.default if spec is not None else None
        value: Any = self.policy(error)
        draft.diagnostics.add(Severity.WARNING, f"{error}; replaced by {value!r}", error.line)
        return value


def resolve_settings(
    source_path: Path | str | None = None,
    *,
    registry: SettingsRegistry | None = None,
    extra_config_files: Iterable[Path | str] = (),
    overrides: Mapping[str, Any] | None = None,
    no_config: bool = False,
    policy: FallbackPolicy = InvalidValuePolicy.USE_DEFAULT,
    search_path: Iterable[Path] | None = None,
) -> Settings:
    """Resolve settings for ``source_path`` (see `SettingsResolver.resolve`)."""
    resolver = SettingsResolver(registry, policy=policy, search_path=search_path)
    return resolver.resolve(
        source_path,
        extra_config_files=extra_config_files,
        overrides=overrides,
        no_config=no_config,
    )
