# topmark:header:start
#
#   project      : Pressroom
#   file         : __init__.py
#   file_relpath : src/pressroom/writers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Writers translating document trees into named output parts."""

from __future__ import annotations

from pressroom.writers.base import (
    SkipChildren,
    SkipDeparture,
    SkipSiblings,
    TraversalSignal,
    Writer,
    write_document,
    write_part,
)
from pressroom.writers.markdown import MarkdownWriter
from pressroom.writers.text import TextWriter

__all__ = [
    "MarkdownWriter",
    "SkipChildren",
    "SkipDeparture",
    "SkipSiblings",
    "TextWriter",
    "TraversalSignal",
    "Writer",
    "write_document",
    "write_part",
]
