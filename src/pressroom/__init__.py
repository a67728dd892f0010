# topmark:header:start
#
#   project      : Pressroom
#   file         : __init__.py
#   file_relpath : src/pressroom/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pressroom package.

Pressroom is a document-processing core: readers parse sources into a document
tree, a priority-ordered scheduler runs transforms over it, and writers
serialize it into named output parts. Settings come from a typed option
catalogue merged with layered configuration files.
"""

from __future__ import annotations

# Loaded before `pressroom.core`, which depends on the configuration layer.
from pressroom import config  # noqa: F401
