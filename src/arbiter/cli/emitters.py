# topmark:header:start
#
#   project      : Arbiter
#   file         : emitters.py
#   file_relpath : src/arbiter/cli/emitters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Emitters that render directives and listings for the CLI.

Text output is colored with the category's `yachalk` colorizer when the
console has color enabled; JSON output is always plain.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from arbiter.cli.console import ConsoleLike
    from arbiter.feedback.directive import FeedbackDirective


class OutputFormat(str, Enum):
    """Output formats supported by the CLI."""

    TEXT = "text"
    JSON = "json"


def emit_directive_text(console: ConsoleLike, directive: FeedbackDirective) -> None:
    """Print a directive the way the feedback panel shows it."""
    title: str = directive.label
    if console.enable_color:
        title = directive.category.color(title)
    console.print(title)
    if directive.original:
        console.print(console.styled(f"  {directive.original}", dim=True))
    if directive.message:
        console.print()
        console.print(directive.message)
    if directive.line is not None:
        console.print()
        console.print(f"Line: {directive.line}")
    console.print()
    console.print(console.styled(f"[{directive.outcome.value}]", dim=True))


def emit_directive_json(console: ConsoleLike, directive: FeedbackDirective) -> None:
    console.print(json.dumps(directive.to_dict(), indent=2))


def emit_directive(
    console: ConsoleLike, directive: FeedbackDirective, fmt: OutputFormat
) -> None:
    if fmt == OutputFormat.JSON:
        emit_directive_json(console, directive)
    else:
        emit_directive_text(console, directive)


def emit_kinds(console: ConsoleLike, kinds: Sequence[str], fmt: OutputFormat) -> None:
    """Print analyzer issue kinds in precedence order."""
    if fmt == OutputFormat.JSON:
        console.print(json.dumps(list(kinds)))
        return
    width: int = len(str(len(kinds)))
    for index, kind in enumerate(kinds, start=1):
        console.print(f"{index:>{width}}. {kind}")
