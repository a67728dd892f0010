# topmark:header:start
#
#   project      : Pressroom
#   file         : __main__.py
#   file_relpath : src/pressroom/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Pressroom via ``python -m pressroom``.

Examples:
    Publish a file as Markdown::

        python -m pressroom publish notes.txt --writer markdown
"""

from __future__ import annotations

from pressroom.cli.main import cli

if __name__ == "__main__":
    cli()
