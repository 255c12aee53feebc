# topmark:header:start
#
#   project      : Arbiter
#   file         : arbitrate.py
#   file_relpath : src/arbiter/cli/commands/arbitrate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Arbiter `arbitrate` command.

Reads the report bundle of one check cycle (JSON, from a file or STDIN),
applies the session's suppression settings and prints the selected
feedback directive.

Input:
    - ``REPORTS``: path to a JSON report bundle, or ``-`` for STDIN.
    - ``--config``: TOML file with a ``[suppress]`` table (``arbiter.toml``) or
      ``[tool.arbiter.suppress]`` (``pyproject.toml``).
    - ``--suppress STAGE`` / ``--suppress STAGE:KIND``: additional suppressions,
      applied after the config file.

Exit status:
    0 for clean outcomes (success, no errors, completed), 2 when the directive
    reports a problem with the student's program.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from arbiter.cli.cli_types import EnumChoiceParam, SuppressionParam
from arbiter.cli.emitters import OutputFormat, emit_directive
from arbiter.cli.errors import (
    ArbiterConfigError,
    ArbiterFileNotFoundError,
    ArbiterInputError,
    ArbiterIOError,
)
from arbiter.cli.exit_codes import ExitCode
from arbiter.config.io import load_suppressions
from arbiter.config.logging import get_logger
from arbiter.config.model import MutableSuppressions
from arbiter.core.errors import ConfigError, ReportFormatError
from arbiter.feedback.cascade import arbitrate
from arbiter.feedback.presentation import log_directive
from arbiter.reports.loaders import reports_from_data

if TYPE_CHECKING:
    from arbiter.cli.console import ConsoleLike
    from arbiter.config.logging import ArbiterLogger
    from arbiter.config.model import Suppressions
    from arbiter.feedback.directive import FeedbackDirective
    from arbiter.reports.model import Reports, Stage

logger: ArbiterLogger = get_logger(__name__)


def _read_reports_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        raise ArbiterFileNotFoundError(f"Report file not found: {source}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ArbiterInputError(f"Report file {source} is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ArbiterIOError(f"Cannot read report file {source}: {exc}") from exc


def load_reports(source: str) -> Reports:
    """Load and decode the report bundle from a path or ``-``."""
    text: str = _read_reports_text(source)
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ArbiterInputError(f"Report input is not valid JSON: {exc}") from exc
    try:
        return reports_from_data(data)
    except ReportFormatError as exc:
        raise ArbiterInputError(str(exc)) from exc


def resolve_suppressions(
    config_path: Path | None,
    overrides: tuple[tuple[Stage, str | None], ...],
) -> Suppressions:
    """Merge the config file and the ``--suppress`` overrides into one snapshot."""
    builder = MutableSuppressions()
    if config_path is not None:
        try:
            builder.merge_with(load_suppressions(config_path))
        except ConfigError as exc:
            raise ArbiterConfigError(str(exc)) from exc
    for stage, kind in overrides:
        if kind is None:
            builder.suppress_stage(stage)
        else:
            builder.suppress_kind(stage, kind)
    return builder.freeze()


@click.command(
    name="arbitrate",
    help="Select the feedback to show for one check cycle's reports.",
)
@click.argument("reports_source", metavar="REPORTS", default="-")
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
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def arbitrate_command(
    *,
    reports_source: str,
    config_path: Path | None,
    overrides: tuple[tuple[Stage, str | None], ...],
    output_format: OutputFormat | None,
) -> None:
    """Arbitrate a report bundle and print the selected directive."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    reports: Reports = load_reports(reports_source)
    suppressions: Suppressions = resolve_suppressions(config_path, overrides)
    logger.debug("Suppressions: %s", suppressions.to_dict())

    directive: FeedbackDirective = arbitrate(reports, suppressions)
    log_directive(directive, instructor=reports.instructor)

    emit_directive(console, directive, output_format or OutputFormat.TEXT)

    ctx.exit(ExitCode.SUCCESS if directive.outcome.is_clean else ExitCode.HAS_FEEDBACK)
