# topmark:header:start
#
#   project      : Arbiter
#   file         : version.py
#   file_relpath : src/arbiter/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Arbiter `version` command.

Prints the Arbiter version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from arbiter.cli.cli_types import EnumChoiceParam
from arbiter.cli.emitters import OutputFormat
from arbiter.constants import ARBITER_VERSION

if TYPE_CHECKING:
    from arbiter.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of Arbiter.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of Arbiter."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if output_format == OutputFormat.JSON:
        console.print(json.dumps({"version": ARBITER_VERSION}))
    else:
        console.print(console.styled(ARBITER_VERSION, bold=True))
