# topmark:header:start
#
#   project      : Pressroom
#   file         : source.py
#   file_relpath : src/pressroom/document/source.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input sources for readers.

A `Source` is the opaque input a reader parses: a file path, an open text
stream, in-memory text or a pre-split sequence of lines. Lines keep their
terminators (``keepends=True``) so that writers can reproduce the input exactly.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from pressroom.config.logging import get_logger

if TYPE_CHECKING:
    from pressroom.config.logging import PressroomLogger

logger: PressroomLogger = get_logger(__name__)


@dataclass(frozen=True)
class Source:
    """Text input for one document.

    Attributes:
        lines (tuple[str, ...]): Input lines, terminators included.
        name (str): Display name (path or ``<string>``/``<stream>``).
        path (Path | None): Backing file for path sources; None otherwise.
    """

    lines: tuple[str, ...]
    name: str = "<string>"
    path: Path | None = None

    @classmethod
    def from_path(cls, path: Path | str, encoding: str = "utf-8") -> Source:
        """Read a file-backed source.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnicodeDecodeError: If the file is not valid ``encoding`` text.
        """
        p = Path(path)
        with p.open("r", encoding=encoding, newline="") as fh:
            text: str = fh.read()
        logger.debug("Read %d characters from %s", len(text), p)
        return cls(tuple(text.splitlines(keepends=True)), name=str(p), path=p)

    @classmethod
    def from_text(cls, text: str, name: str = "<string>") -> Source:
        """Wrap in-memory text."""
        return cls(tuple(text.splitlines(keepends=True)), name=name)

    @classmethod
    def from_lines(cls, lines: Sequence[str], name: str = "<lines>") -> Source:
        """Wrap a pre-split line sequence (terminators are kept as given)."""
        return cls(tuple(lines), name=name)

    @classmethod
    def from_stream(cls, stream: IO[str], name: str | None = None) -> Source:
        """Read an open text stream to the end."""
        stream_name: Any = getattr(stream, "name", None)
        return cls.from_text(
            stream.read(), name=name or (str(stream_name) if stream_name else "<stream>")
        )

    @property
    def text(self) -> str:
        """Return the full input text."""
        return "".join(self.lines)


def as_source(obj: Source | Path | str | Sequence[str] | IO[str]) -> Source:
    """Coerce ``obj`` into a `Source`.

    Dispatch: `Source` as-is; `Path` → file; `str` → in-memory text; objects
    with ``read`` → stream; other sequences → pre-split lines.
    """
    if isinstance(obj, Source):
        return obj
    if isinstance(obj, Path):
        return Source.from_path(obj)
    if isinstance(obj, str):
        return Source.from_text(obj)
    if hasattr(obj, "read"):
        return Source.from_stream(obj)  # type: ignore[arg-type]
    if isinstance(obj, Sequence):
        return Source.from_lines(obj)
    raise TypeError(f"Cannot use {type(obj).__name__} as a document source")
