# topmark:header:start
#
#   project      : Arbiter
#   file         : exit_codes.py
#   file_relpath : src/arbiter/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Arbiter CLI.

Arbiter aligns with the BSD `sysexits` convention where practical. The one
divergence is ``HAS_FEEDBACK = 2``: the arbitration succeeded, but the
selected directive reports a problem with the student's program. Click's own
usage errors also exit with 2; tests tell them apart by the output.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Arbiter CLI.

    Attributes:
        SUCCESS: Clean outcome (success, no errors, completed).
        FAILURE: Generic failure.
        HAS_FEEDBACK: The directive reports a problem (syntax, runtime, ...).
        USAGE_ERROR: Invalid flags/arguments (``EX_USAGE``).
        DATA_ERROR: Report input that is not a valid bundle (``EX_DATAERR``).
        FILE_NOT_FOUND: Input file missing (``EX_NOINPUT``).
        IO_ERROR: Read failure (``EX_IOERR``).
        CONFIG_ERROR: Invalid configuration (``EX_CONFIG``).
    """

    SUCCESS = 0
    FAILURE = 1
    HAS_FEEDBACK = 2
    USAGE_ERROR = 64
    DATA_ERROR = 65
    FILE_NOT_FOUND = 66
    IO_ERROR = 74
    CONFIG_ERROR = 78
