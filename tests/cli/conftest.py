# topmark:header:start
#
#   project      : Arbiter
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running Arbiter through `click.testing.CliRunner`.

Logging is pinned to CRITICAL through ``ARBITER_LOG_LEVEL`` for each
invocation so that program output on stdout can be parsed (e.g. as JSON)
regardless of how the runner mixes stdout and stderr.
"""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING, Any, Callable, Sequence

import pytest
from click.testing import CliRunner, Result

from arbiter.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path

RunCli = Callable[..., Result]


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
    log_level: str = "CRITICAL",
) -> Result:
    """Invoke the CLI with an isolated runner.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["arbitrate", "-"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.
        log_level (str): Value for ``ARBITER_LOG_LEVEL`` during the run.

    Returns:
        Result: The `click.testing.Result` of the invocation.
    """
    runner = CliRunner()
    return runner.invoke(
        cli,
        argv,
        input=input_text,
        env={"ARBITER_LOG_LEVEL": log_level},
    )


@pytest.fixture
def cli_runner() -> RunCli:
    """Return the `run_cli` helper."""
    return run_cli


@pytest.fixture
def write_reports(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a helper that writes a report bundle to a JSON file in ``tmp_path``."""

    def _write(data: dict[str, Any], name: str = "reports.json") -> Path:
        path: Path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
