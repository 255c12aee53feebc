# topmark:header:start
#
#   project      : Arbiter
#   file         : __init__.py
#   file_relpath : src/arbiter/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command-line interface for Arbiter (Click based)."""
