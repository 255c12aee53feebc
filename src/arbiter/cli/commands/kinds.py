# topmark:header:start
#
#   project      : Arbiter
#   file         : kinds.py
#   file_relpath : src/arbiter/cli/commands/kinds.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Arbiter `kinds` command: list analyzer issue kinds in precedence order."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from arbiter.cli.cli_types import EnumChoiceParam
from arbiter.cli.emitters import OutputFormat, emit_kinds
from arbiter.feedback.classifier import issue_kinds

if TYPE_CHECKING:
    from arbiter.cli.console import ConsoleLike


@click.command(
    name="kinds",
    help="List analyzer issue kinds, highest precedence first.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def kinds_command(*, output_format: OutputFormat | None = None) -> None:
    """List the analyzer issue kinds usable with ``--suppress analyzer:KIND``."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    emit_kinds(console, issue_kinds(), output_format or OutputFormat.TEXT)
