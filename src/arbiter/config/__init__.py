# topmark:header:start
#
#   project      : Arbiter
#   file         : __init__.py
#   file_relpath : src/arbiter/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for Arbiter: suppression settings, their TOML I/O, and logging.

The suppression configuration follows an immutable/mutable split:

- `MutableSuppressions` is the builder used while loading and merging sources.
- `Suppressions` is the frozen snapshot threaded into every arbitration call.
"""

from __future__ import annotations

from arbiter.config.model import (
    ConfigError,
    MutableSuppressions,
    StageSuppression,
    Suppressions,
)

__all__ = [
    "ConfigError",
    "MutableSuppressions",
    "StageSuppression",
    "Suppressions",
]
