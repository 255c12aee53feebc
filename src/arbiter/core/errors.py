# topmark:header:start
#
#   project      : Arbiter
#   file         : errors.py
#   file_relpath : src/arbiter/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Library exceptions.

These are raised while *loading* inputs (configuration files and report
bundles). Arbitration itself never raises for well-formed reports; CLI code
translates these into `arbiter.cli.errors` exceptions with exit codes.
"""

from __future__ import annotations


class ArbiterError(Exception):
    """Base class for all Arbiter library errors."""


class ConfigError(ArbiterError):
    """Invalid or malformed suppression configuration."""


class ReportFormatError(ArbiterError):
    """Input that cannot be interpreted as a bundle of stage reports."""
