# topmark:header:start
#
#   project      : Pressroom
#   file         : paths.py
#   file_relpath : src/pressroom/config/paths.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure helpers for path normalization and configuration file locations.

These utilities centralize the path rules used by settings resolution. They do
no I/O beyond ``Path.resolve()`` and have no imports from the rest of
Pressroom (except logging), which makes them safe to use across modules.

Key behaviors:
    - ``abs_path_from(base, raw)``: resolve ``raw`` against ``base`` when
      relative; always returns an absolute, resolved `pathlib.Path`.
    - ``standard_config_files()``: the fixed, ordered list of system and
      user configuration locations (lowest precedence first).
    - ``document_config_file(source_path)``: the document-specific
      configuration file that sits next to a path-backed source.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pressroom.config.logging import get_logger

if TYPE_CHECKING:
    from os import PathLike

    from pressroom.config.logging import PressroomLogger

logger: PressroomLogger = get_logger(__name__)

CONFIG_FILE_NAME: Final[str] = "pressroom.conf"
SYSTEM_CONFIG_FILE: Final[Path] = Path("/etc") / CONFIG_FILE_NAME
CONFIG_PATH_ENV_VAR: Final[str] = "PRESSROOM_CONFIG_PATH"


def abs_path_from(base: Path, raw: str | PathLike[str]) -> Path:
    """Return an absolute Path for *raw* using *base* if *raw* is relative."""
    p = Path(os.path.expanduser(str(raw)))
    return (base / p).resolve() if not p.is_absolute() else p.resolve()


def user_config_files() -> list[Path]:
    """Return the user-level configuration locations (XDG first, then legacy)."""
    xdg: str | None = os.environ.get("XDG_CONFIG_HOME")
    base: Path = Path(xdg) if xdg else Path.home() / ".config"
    return [base / "pressroom" / CONFIG_FILE_NAME, Path.home() / f".{CONFIG_FILE_NAME}"]


def standard_config_files() -> list[Path]:
    """Return the standard configuration search path, lowest precedence first.

    When ``PRESSROOM_CONFIG_PATH`` is set, its ``os.pathsep``-separated entries
    replace the built-in list (empty entries are ignored).
    """
    override: str | None = os.environ.get(CONFIG_PATH_ENV_VAR)
    if override is not None:
        paths: list[Path] = [Path(p).expanduser() for p in override.split(os.pathsep) if p]
        logger.debug("Using %s search path: %s", CONFIG_PATH_ENV_VAR, paths)
        return paths
    return [SYSTEM_CONFIG_FILE, *user_config_files()]


def document_config_file(source_path: Path) -> Path:
    """Return the document-specific configuration file for a path-backed source."""
    return source_path.resolve().parent / CONFIG_FILE_NAME
