# topmark:header:start
#
#   project      : Arbiter
#   file         : keys.py
#   file_relpath : src/arbiter/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for Arbiter configuration.

Keys defined here are external configuration API: they appear in
``arbiter.toml`` and under ``[tool.arbiter]`` in ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by Arbiter configuration.

    Example:
        ```toml
        [suppress]
        verifier = true
        "no errors" = false

        [suppress.analyzer]
        "Unread variables" = true
        ```
    """

    # pyproject.toml nesting
    SECTION_TOOL: Final[str] = "tool"
    SECTION_ARBITER: Final[str] = "arbiter"

    # [suppress]
    SECTION_SUPPRESS: Final[str] = "suppress"
