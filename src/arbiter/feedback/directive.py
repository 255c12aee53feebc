# topmark:header:start
#
#   project      : Arbiter
#   file         : directive.py
#   file_relpath : src/arbiter/feedback/directive.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The feedback directive: the single result of an arbitration call.

A directive tells the presentation layer what to show (title, body, optional
original error text), which line to highlight, and which cascade branch
produced it (`Outcome`), so callers can log and test without matching labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from yachalk import chalk

from arbiter.core.enum_mixins import KeyedStrEnum
from arbiter.rendering.colored_enum import ColoredStrEnum


class Category(ColoredStrEnum):
    """Audience-facing class of a directive.

    ``INTERNAL`` is reserved for failures of the checking infrastructure
    itself and addresses instructors/developers; every other category
    addresses the student.
    """

    BLANK_PROGRAM = "blank-program", chalk.gray.bold
    SYNTAX = "syntax", chalk.red_bright
    SEMANTIC = "semantic", chalk.yellow
    RUNTIME = "runtime", chalk.red
    INSTRUCTOR = "instructor-feedback", chalk.magenta
    INTERNAL = "internal", chalk.bg_red.white.bold
    NO_ERRORS = "no-errors", chalk.green
    SUCCESS = "success", chalk.green_bright.bold
    COMPLETED = "completed", chalk.gray


class Outcome(KeyedStrEnum):
    """Closed tag identifying which cascade branch produced a directive."""

    VERIFIER = ("verifier", "Verifier")
    PARSER = ("parser", "Parser")
    INSTRUCTOR = ("instructor", "Instructor")
    ANALYZER = ("analyzer", "Analyzer")
    STUDENT = ("student", "Student")
    NO_ERRORS = ("no-errors", "No errors", ("no errors",))
    SUCCESS = ("success", "Success")
    COMPLETED = ("completed", "Completed")

    @property
    def is_clean(self) -> bool:
        """True when the branch reports no problem with the student's program."""
        return self in (Outcome.NO_ERRORS, Outcome.SUCCESS, Outcome.COMPLETED)


@dataclass(frozen=True)
class FeedbackDirective:
    """The one piece of feedback selected for display.

    Attributes:
        category (Category): Audience-facing class of the feedback.
        label (str): Title shown above the message.
        message (str): Message body; may be empty for `Outcome.COMPLETED`.
        outcome (Outcome): Cascade branch that fired.
        line (int | None): 1-based source line to highlight, if any.
        original (str | None): Original error text for the "original error" panel.
    """

    category: Category
    label: str
    message: str
    outcome: Outcome
    line: int | None = None
    original: str | None = None

    @property
    def is_internal(self) -> bool:
        return self.category is Category.INTERNAL

    @property
    def editor_line(self) -> int | None:
        """Return the 0-based line for editor highlighting, or None."""
        if self.line is None:
            return None
        return self.line - 1

    def log_entry(self) -> dict[str, str]:
        """Return the structured (category, label, message) event-log entry."""
        message: str = self.message
        if self.original:
            message = f"{self.original}\n|\n{self.message}"
        return {
            "category": self.category.value,
            "label": self.label,
            "message": message,
        }

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "category": self.category.value,
            "label": self.label,
            "message": self.message,
            "line": self.line,
            "outcome": self.outcome.value,
            "original": self.original,
        }
