# topmark:header:start
#
#   project      : Pressroom
#   file         : registry.py
#   file_relpath : src/pressroom/config/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Settings catalogue: the process-wide set of recognized options.

Readers, writers and transforms declare their options as `OptionSpec` tuples
(``settings_spec``) and register them here before any document is processed.
Re-registering a name replaces its definition; the catalogue is keyed by the
normalized option name, so registration order among distinct names does not
matter.

The module-level ``registry`` is pre-populated with the built-in options listed
in `pressroom.config.keys.Keys`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from pressroom.config.keys import (
    DEFAULT_DIAGNOSTICS_TITLE,
    VISITOR_ERRORS_CONTINUE,
    VISITOR_ERRORS_PROPAGATE,
    Keys,
)
from pressroom.config.logging import get_logger
from pressroom.config.types import BoolType, ChoiceType, IntRangeType, OptionType, StringType
from pressroom.core.diagnostics import MAX_SEVERITY, MIN_SEVERITY
from pressroom.core.reporter import DEFAULT_HALT_LEVEL, DEFAULT_REPORT_LEVEL

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from pressroom.config.logging import PressroomLogger

logger: PressroomLogger = get_logger(__name__)


def normalize_option_name(name: str) -> str:
    """Return the canonical spelling of an option name (``Report-Level`` → ``report_level``)."""
    return name.strip().lower().replace("-", "_")


@dataclass(frozen=True)
class OptionSpec:
    """Definition of one catalogue entry.

    Attributes:
        name (str): Option name; normalized on registration.
        type (OptionType): Type descriptor used to parse and validate values.
        default (Any): Value used when no configuration source sets the option.
        description (str): One-line human description.
    """

    name: str
    type: OptionType
    default: Any
    description: str = ""


class SettingsComponent(Protocol):
    """Anything that declares options (readers, writers, transforms)."""

    settings_spec: tuple[OptionSpec, ...]


class SettingsRegistry:
    """Catalogue of recognized configuration options."""

    def __init__(self, specs: Iterable[OptionSpec] = ()) -> None:
        self._specs: dict[str, OptionSpec] = {}
        self.register_many(specs)

    def register_option(
        self,
        name: str,
        type: OptionType,  # noqa: A002 - mirrors the 4-tuple declaration
        default: Any,
        description: str = "",
    ) -> OptionSpec:
        """Register (or replace) an option definition.

        The default is validated against ``type`` so that every resolved
        settings mapping holds a well-typed value for every key.

        Raises:
            ValueError: If the name is empty or reserved, or the default is invalid.
        """
        key: str = normalize_option_name(name)
        if not key:
            raise ValueError("Option name must not be empty")
        if key == Keys.CONFIG:
            raise ValueError(f"'{Keys.CONFIG}' is reserved for configuration file inclusion")
        canonical_default: Any = type.coerce(default) if default is not None else None
        if default is None and not getattr(type, "nullable", False):
            raise ValueError(f"Option '{key}' needs a non-null default for {type.describe()}")
        spec = OptionSpec(key, type, canonical_default, description)
        if key in self._specs:
            logger.debug("Replacing option definition for '%s'", key)
        self._specs[key] = spec
        logger.trace("Registered option %s (%s, default=%r)", key, type.describe(), default)
        return spec

    def register(self, spec: OptionSpec) -> OptionSpec:
        """Register an `OptionSpec`."""
        return self.register_option(spec.name, spec.type, spec.default, spec.description)

    def register_many(self, specs: Iterable[OptionSpec]) -> None:
        """Register several option specs in order."""
        for spec in specs:
            self.register(spec)

    def register_component(self, component: SettingsComponent | type[SettingsComponent]) -> None:
        """Register the ``settings_spec`` options declared by a reader, writer or transform."""
        self.register_many(getattr(component, "settings_spec", ()))

    def intern(self, name: str) -> str:
        """Return the normalized name; known or not."""
        return normalize_option_name(name)

    def get(self, name: str) -> OptionSpec | None:
        """Return the spec for ``name`` (any spelling) or None."""
        return self._specs.get(normalize_option_name(name))

    def defaults(self) -> dict[str, Any]:
        """Return a fresh ``{name: default}`` mapping for every catalogue entry."""
        return {key: spec.default for key, spec in self._specs.items()}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_option_name(name) in self._specs

    def __iter__(self) -> Iterator[OptionSpec]:
        return iter(sorted(self._specs.values(), key=lambda s: s.name))

    def __len__(self) -> int:
        return len(self._specs)


BUILTIN_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec(
        Keys.REPORT_LEVEL,
        IntRangeType(MIN_SEVERITY, MAX_SEVERITY),
        DEFAULT_REPORT_LEVEL,
        "Report conditions at or above this severity (0..10).",
    ),
    OptionSpec(
        Keys.HALT_LEVEL,
        IntRangeType(MIN_SEVERITY, MAX_SEVERITY),
        DEFAULT_HALT_LEVEL,
        "Abort the run on conditions at or above this severity (0..10).",
    ),
    OptionSpec(
        Keys.DIAGNOSTICS_TITLE,
        StringType(),
        DEFAULT_DIAGNOSTICS_TITLE,
        "Title of the section collecting transform diagnostics.",
    ),
    OptionSpec(
        Keys.VISITOR_ERRORS,
        ChoiceType((VISITOR_ERRORS_CONTINUE, VISITOR_ERRORS_PROPAGATE)),
        VISITOR_ERRORS_CONTINUE,
        "What a writer does when a node visitor fails.",
    ),
    OptionSpec(
        Keys.OUTPUT_ENCODING,
        StringType(),
        "utf-8",
        "Text encoding used when writing output files.",
    ),
)

# Process-wide catalogue.
registry: SettingsRegistry = SettingsRegistry(BUILTIN_OPTIONS)


def register_option(
    name: str,
    type: OptionType,  # noqa: A002
    default: Any,
    description: str = "",
) -> OptionSpec:
    """Register an option in the process-wide catalogue."""
    return registry.register_option(name, type, default, description)


def register_component_options(component: SettingsComponent | type[SettingsComponent]) -> None:
    """Register a component's ``settings_spec`` in the process-wide catalogue."""
    registry.register_component(component)


def get_registry() -> SettingsRegistry:
    """Return the process-wide catalogue."""
    return registry
