# topmark:header:start
#
#   project      : Arbiter
#   file         : constants.py
#   file_relpath : src/arbiter/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Arbiter Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

ARBITER_VERSION: str = get_version("arbiter-feedback")

# Configuration file names
PYPROJECT_TOML_NAME: str = "pyproject.toml"

# File name under which the student's program is executed
STUDENT_MAIN_FILENAME: str = "__main__.py"

# Placeholder identifier emitted by the block converter for missing pieces
INCOMPLETE_BLOCK_IDENTIFIER: str = "___"
INCOMPLETE_BLOCK_NAME_ERROR: str = f"name '{INCOMPLETE_BLOCK_IDENTIFIER}' is not defined"

# Analyzer name recorded for the implicit return value of a function
IMPLICIT_RETURN_NAME: str = "*return"
