# topmark:header:start
#
#   project      : Arbiter
#   file         : dump_config.py
#   file_relpath : src/arbiter/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Arbiter `dump-config` command.

Emits the effective suppression settings as an ``arbiter.toml`` document,
after merging the ``--config`` file and any ``--suppress`` overrides. The
output is wrapped between `# === BEGIN ===` and `# === END ===` markers for
easy parsing in tests or tooling.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from arbiter.cli.cli_types import SuppressionParam
from arbiter.cli.commands.arbitrate import resolve_suppressions
from arbiter.config.io import suppressions_to_toml
from arbiter.config.logging import get_logger

if TYPE_CHECKING:
    from arbiter.cli.console import ConsoleLike
    from arbiter.config.logging import ArbiterLogger
    from arbiter.config.model import Suppressions
    from arbiter.reports.model import Stage

logger: ArbiterLogger = get_logger(__name__)

BEGIN_MARKER: str = "# === BEGIN ==="
END_MARKER: str = "# === END ==="


@click.command(
    name="dump-config",
    help="Dump the effective suppression settings as TOML.",
    epilog="Output is wrapped between '# === BEGIN ===' and '# === END ===' markers.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML file with suppression settings (arbiter.toml or pyproject.toml).",
)
@click.option(
    "--suppress",
    "overrides",
    type=SuppressionParam(),
    multiple=True,
    help="Suppress a stage (STAGE) or one analyzer issue kind (STAGE:KIND). Repeatable.",
)
def dump_config_command(
    *,
    config_path: Path | None,
    overrides: tuple[tuple[Stage, str | None], ...],
) -> None:
    """Print the merged suppression settings as TOML."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    suppressions: Suppressions = resolve_suppressions(config_path, overrides)
    logger.trace("Suppressions after merging config and overrides: %s", suppressions)

    console.print(BEGIN_MARKER)
    console.print(suppressions_to_toml(suppressions.thaw()), nl=False)
    console.print(END_MARKER)
