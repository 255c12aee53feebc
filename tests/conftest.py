# topmark:header:start
#
#   project      : Arbiter
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Arbiter test suite.

Sets up verbose (TRACE) logging for test runs and provides small fixtures
for building report bundles.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    suppressions with `arbiter.config.MutableSuppressions` and `freeze()` them
    before calling `arbiter.arbitrate`.
"""

from __future__ import annotations

from typing import Any

import pytest

from arbiter.config import logging
from arbiter.reports.errors import RuntimeFailure, TracebackFrame
from arbiter.reports.model import Reports


@pytest.fixture(autouse=True)
def silence_arbiter_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the developer's ARBITER_LOG_LEVEL does not leak into test runs."""
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level for all tests."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def clean_reports() -> Reports:
    """A check cycle in which every stage succeeded and nothing was reported."""
    return Reports()


def runtime_error(
    type_name: str,
    *args: Any,
    filename: str = "__main__.py",
    lineno: int | None = 3,
    enhanced: str | None = None,
) -> RuntimeFailure:
    """Build a runtime failure with a single traceback frame (or none if lineno is None)."""
    frames: tuple[TracebackFrame, ...] = (
        (TracebackFrame(filename=filename, lineno=lineno),) if lineno is not None else ()
    )
    return RuntimeFailure(type_name=type_name, args=args, traceback=frames, enhanced=enhanced)


@pytest.fixture
def make_runtime_error() -> Any:
    """Factory fixture returning `runtime_error`."""
    return runtime_error
