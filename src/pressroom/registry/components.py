# topmark:header:start
#
#   project      : Pressroom
#   file         : components.py
#   file_relpath : src/pressroom/registry/components.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Name → class registries for readers and writers.

Notes:
    * Registering a component also registers its options (and, for readers,
      the options of their transform classes) in the settings catalogue, so
      configuration files can set them before any document is processed.
    * Public views (`readers()`, `writers()`) are read-only `MappingProxyType`
      snapshots.
    * `unregister_reader()` / `unregister_writer()` exist for plugins and tests;
      they leave registered options in the catalogue.
"""

from __future__ import annotations

from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING

from pressroom.config.logging import get_logger
from pressroom.config.registry import get_registry
from pressroom.readers.lines import LineReader
from pressroom.writers.markdown import MarkdownWriter
from pressroom.writers.text import TextWriter

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pressroom.config.logging import PressroomLogger
    from pressroom.config.registry import SettingsRegistry
    from pressroom.readers.base import Reader
    from pressroom.writers.base import Writer

logger: PressroomLogger = get_logger(__name__)

_lock = RLock()
_READERS: dict[str, type[Reader]] = {}
_WRITERS: dict[str, type[Writer]] = {}


def register_reader(
    cls: type[Reader], *, registry: SettingsRegistry | None = None
) -> type[Reader]:
    """Register a reader class under ``cls.name`` (replacing any previous one)."""
    catalogue: SettingsRegistry = registry if registry is not None else get_registry()
    with _lock:
        catalogue.register_many(cls.option_specs())
        _READERS[cls.name] = cls
    logger.debug("Registered reader %r", cls.name)
    return cls


def register_writer(
    cls: type[Writer], *, registry: SettingsRegistry | None = None
) -> type[Writer]:
    """Register a writer class under ``cls.name`` (replacing any previous one)."""
    catalogue: SettingsRegistry = registry if registry is not None else get_registry()
    with _lock:
        catalogue.register_component(cls)
        _WRITERS[cls.name] = cls
    logger.debug("Registered writer %r", cls.name)
    return cls


def unregister_reader(name: str) -> bool:
    """Remove the reader registered as ``name``; return True if it existed."""
    with _lock:
        return _READERS.pop(name, None) is not None


def unregister_writer(name: str) -> bool:
    """Remove the writer registered as ``name``; return True if it existed."""
    with _lock:
        return _WRITERS.pop(name, None) is not None


def get_reader(name: str) -> type[Reader]:
    """Return the reader class registered as ``name``.

    Raises:
        KeyError: If unknown; the message lists the known names.
    """
    try:
        return _READERS[name]
    except KeyError:
        raise KeyError(f"Unknown reader {name!r} (known: {', '.join(reader_names())})") from None


def get_writer(name: str) -> type[Writer]:
    """Return the writer class registered as ``name``.

    Raises:
        KeyError: If unknown; the message lists the known names.
    """
    try:
        return _WRITERS[name]
    except KeyError:
        raise KeyError(f"Unknown writer {name!r} (known: {', '.join(writer_names())})") from None


def reader_names() -> list[str]:
    """Return the registered reader names, sorted."""
    return sorted(_READERS)


def writer_names() -> list[str]:
    """Return the registered writer names, sorted."""
    return sorted(_WRITERS)


def readers() -> Mapping[str, type[Reader]]:
    """Return a read-only snapshot of the reader registry."""
    return MappingProxyType(dict(_READERS))


def writers() -> Mapping[str, type[Writer]]:
    """Return a read-only snapshot of the writer registry."""
    return MappingProxyType(dict(_WRITERS))


register_reader(LineReader)
register_writer(TextWriter)
register_writer(MarkdownWriter)
