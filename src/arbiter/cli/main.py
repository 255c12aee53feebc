# topmark:header:start
#
#   project      : Arbiter
#   file         : main.py
#   file_relpath : src/arbiter/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Arbiter CLI entry point.

Group-level options (verbosity, color) are resolved once and stored in
``ctx.obj`` together with the program-output console; subcommands read them
from there.
"""

from __future__ import annotations

import click

from arbiter.cli.commands.arbitrate import arbitrate_command
from arbiter.cli.commands.dump_config import dump_config_command
from arbiter.cli.commands.kinds import kinds_command
from arbiter.cli.commands.version import version_command
from arbiter.cli.console import ClickConsole
from arbiter.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from arbiter.config.logging import get_logger, resolve_env_log_level, setup_logging

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize logging, color and the console on the Click context.

    ``ARBITER_LOG_LEVEL`` wins over ``-v``/``-q`` when set.
    """
    ctx.obj = ctx.obj or {}

    level: int = resolve_env_log_level() or resolve_verbosity(verbose, quiet)
    ctx.obj["log_level"] = level
    setup_logging(level=level)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Arbiter: select the one feedback message a student sees.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the Arbiter CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=ColorMode(color_mode) if color_mode else None,
        no_color=no_color,
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(arbitrate_command)

cli.add_command(dump_config_command)

cli.add_command(kinds_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
