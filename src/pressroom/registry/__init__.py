# topmark:header:start
#
#   project      : Pressroom
#   file         : __init__.py
#   file_relpath : src/pressroom/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Component lookup by name.

Importing this package registers the bundled readers and writers (and their
options).
"""

from __future__ import annotations

from pressroom.registry.components import (
    get_reader,
    get_writer,
    reader_names,
    readers,
    register_reader,
    register_writer,
    unregister_reader,
    unregister_writer,
    writer_names,
    writers,
)

__all__ = [
    "get_reader",
    "get_writer",
    "reader_names",
    "readers",
    "register_reader",
    "register_writer",
    "unregister_reader",
    "unregister_writer",
    "writer_names",
    "writers",
]
