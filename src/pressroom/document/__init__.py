# topmark:header:start
#
#   project      : Pressroom
#   file         : __init__.py
#   file_relpath : src/pressroom/document/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Document tree and input sources."""

from __future__ import annotations

from pressroom.document.nodes import DIAGNOSTICS_CLASS, Document, Node, NodeKind
from pressroom.document.source import Source, as_source

__all__ = ["DIAGNOSTICS_CLASS", "Document", "Node", "NodeKind", "Source", "as_source"]
