# topmark:header:start
#
#   project      : Arbiter
#   file         : errors.py
#   file_relpath : src/arbiter/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Arbiter CLI.

Raise these in commands to fail with a standardized message and exit code.
They render through the project console when one is present in the Click
context, and fall back to Click's default display otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from arbiter.cli.exit_codes import ExitCode


class ArbiterCliError(click.ClickException):
    """Base class for all Arbiter CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (no color)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class ArbiterUsageError(ArbiterCliError):
    """Invalid flags or arguments."""

    exit_code = ExitCode.USAGE_ERROR


class ArbiterConfigError(ArbiterCliError):
    """Missing, invalid or malformed configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class ArbiterInputError(ArbiterCliError):
    """Report input that cannot be decoded or is not a report bundle."""

    exit_code = ExitCode.DATA_ERROR


class ArbiterFileNotFoundError(ArbiterCliError):
    """Input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ArbiterIOError(ArbiterCliError):
    """Input could not be read."""

    exit_code = ExitCode.IO_ERROR
