# topmark:header:start
#
#   project      : Pressroom
#   file         : __init__.py
#   file_relpath : src/pressroom/readers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Readers turning sources into document trees."""

from __future__ import annotations

from pressroom.readers.base import Reader, new_document, read_document
from pressroom.readers.lines import LineReader

__all__ = ["LineReader", "Reader", "new_document", "read_document"]
