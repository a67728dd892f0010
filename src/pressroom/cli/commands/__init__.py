# topmark:header:start
#
#   project      : Pressroom
#   file         : __init__.py
#   file_relpath : src/pressroom/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pressroom CLI subcommands."""
