# topmark:header:start
#
#   project      : Pressroom
#   file         : types.py
#   file_relpath : src/pressroom/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Option type descriptors for the settings catalogue.

Every catalogue entry declares one of these descriptors. A descriptor knows how
to:

- ``parse`` a raw string read from a text configuration line,
- ``coerce`` an already-typed value (TOML sources, API overrides, defaults),
- ``render`` a value back to the text configuration syntax.

All three raise ``ValueError`` on invalid input; the resolver converts that
into a `ConfigError` carrying the source location.

Path values declared in a configuration file are resolved against that file's
directory (see `pressroom.config.paths.abs_path_from`).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from pressroom.config.paths import abs_path_from

TRUE_WORDS: Final[frozenset[str]] = frozenset({"true", "yes", "on", "1"})
FALSE_WORDS: Final[frozenset[str]] = frozenset({"false", "no", "off", "0"})
NULL_WORDS: Final[frozenset[str]] = frozenset({"", "none", "null", "nil"})


class OptionType:
    """Base class for option type descriptors."""

    #: Short name shown in option listings.
    name: str = "value"

    def parse(self, raw: str, *, base: Path | None = None) -> Any:
        """Parse ``raw`` text into a typed value."""
        return self.coerce(raw.strip(), base=base)

    def coerce(self, value: Any, *, base: Path | None = None) -> Any:
        """Validate an already-typed value and return its canonical form."""
        raise NotImplementedError

    def render(self, value: Any) -> str:
        """Render ``value`` in text configuration syntax."""
        return "" if value is None else str(value)

    def describe(self) -> str:
        """Return a human-readable type description."""
        return self.name


@dataclass(frozen=True)
class BoolType(OptionType):
    """Boolean option: ``true/false``, ``yes/no``, ``on/off``, ``1/0``."""

    name = "boolean"

    def coerce(self, value: Any, *, base: Path | None = None) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            word = value.strip().lower()
            if word in TRUE_WORDS:
                return True
            if word in FALSE_WORDS:
                return False
        raise ValueError(f"expected a boolean, got {value!r}")

    def render(self, value: Any) -> str:
        return "true" if value else "false"


@dataclass(frozen=True)
class IntRangeType(OptionType):
    """Integer option bounded to ``minimum..maximum`` (inclusive)."""

    minimum: int
    maximum: int

    name = "integer"

    def coerce(self, value: Any, *, base: Path | None = None) -> int:
        if isinstance(value, bool):
            raise ValueError(f"expected an integer, got {value!r}")
        if isinstance(value, int):
            number = value
        elif isinstance(value, str):
            try:
                number = int(value.strip(), 10)
            except ValueError:
                raise ValueError(f"expected an integer, got {value!r}") from None
        else:
            raise ValueError(f"expected an integer, got {value!r}")
        if not self.minimum <= number <= self.maximum:
            raise ValueError(f"{number} is outside {self.minimum}..{self.maximum}")
        return number

    def describe(self) -> str:
        return f"integer {self.minimum}..{self.maximum}"


@dataclass(frozen=True)
class StringType(OptionType):
    """Free text option; when ``nullable``, empty/``none`` values become ``None``."""

    nullable: bool = False

    name = "string"

    def coerce(self, value: Any, *, base: Path | None = None) -> str | None:
        if value is None and self.nullable:
            return None
        if not isinstance(value, str):
            raise ValueError(f"expected a string, got {value!r}")
        if self.nullable and value.strip().lower() in NULL_WORDS:
            return None
        return value

    def describe(self) -> str:
        return "string or none" if self.nullable else "string"


@dataclass(frozen=True)
class PathType(OptionType):
    """Filesystem path option, resolved against the declaring source's directory."""

    nullable: bool = False

    name = "path"

    def coerce(self, value: Any, *, base: Path | None = None) -> Path | None:
        if value is None and self.nullable:
            return None
        if isinstance(value, Path):
            raw: str = str(value)
        elif isinstance(value, str):
            raw = value.strip()
        else:
            raise ValueError(f"expected a path, got {value!r}")
        if raw.lower() in NULL_WORDS:
            if self.nullable:
                return None
            raise ValueError("expected a path, got an empty value")
        return abs_path_from(base or Path.cwd(), raw)

    def describe(self) -> str:
        return "path or none" if self.nullable else "path"


@dataclass(frozen=True)
class ChoiceType(OptionType):
    """Enumerated symbol from a fixed set (case-insensitive)."""

    choices: tuple[str, ...]

    name = "choice"

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", tuple(c.strip().lower() for c in self.choices))

    def coerce(self, value: Any, *, base: Path | None = None) -> str:
        if not isinstance(value, str):
            raise ValueError(f"expected one of {', '.join(self.choices)}, got {value!r}")
        symbol = value.strip().lower()
        if symbol not in self.choices:
            raise ValueError(f"expected one of {', '.join(self.choices)}, got {value!r}")
        return symbol

    def describe(self) -> str:
        return "one of " + "|".join(self.choices)


@dataclass(frozen=True)
class ListType(OptionType):
    """List of values of one item type; text form is comma-separated."""

    item: OptionType

    name = "list"

    def parse(self, raw: str, *, base: Path | None = None) -> tuple[Any, ...]:
        parts: list[str] = [p.strip() for p in raw.split(",")]
        return tuple(self.item.parse(p, base=base) for p in parts if p)

    def coerce(self, value: Any, *, base: Path | None = None) -> tuple[Any, ...]:
        if isinstance(value, str):
            return self.parse(value, base=base)
        if not isinstance(value, Sequence):
            raise ValueError(f"expected a list, got {value!r}")
        return tuple(self.item.coerce(v, base=base) for v in value)

    def render(self, value: Any) -> str:
        return ", ".join(self.item.render(v) for v in value or ())

    def describe(self) -> str:
        return f"list of {self.item.describe()}"
