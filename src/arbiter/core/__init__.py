# topmark:header:start
#
#   project      : Arbiter
#   file         : __init__.py
#   file_relpath : src/arbiter/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core helpers shared by every Arbiter layer (enums, exceptions)."""
