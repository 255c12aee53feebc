# topmark:header:start
#
#   project      : Arbiter
#   file         : presentation.py
#   file_relpath : src/arbiter/feedback/presentation.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers for the presentation and event-logging boundary.

The arbitration engine returns a `FeedbackDirective` and does nothing else.
Callers then render it, highlight its line in the editor (0-based, see
`FeedbackDirective.editor_line`) and record it in their event log. This
module provides the pieces of that boundary that do not depend on a UI:

- `present_message`: the simpler "show exactly this one message" mode,
  used when feedback was already chosen elsewhere (e.g. by the instructor
  script) and only needs to be wrapped in a directive.
- `log_directive`: records the structured event-log entry of a directive.
  Internal errors are logged at ERROR so that they are never lost.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from arbiter.config.logging import get_logger
from arbiter.feedback.directive import Category, FeedbackDirective, Outcome

if TYPE_CHECKING:
    from arbiter.config.logging import ArbiterLogger
    from arbiter.reports.model import InstructorReport

logger: ArbiterLogger = get_logger(__name__)

INSTRUCTOR_FEEDBACK_TITLE: str = "Instructor Feedback"

_CATEGORY_OUTCOMES: dict[Category, Outcome] = {
    Category.BLANK_PROGRAM: Outcome.VERIFIER,
    Category.SYNTAX: Outcome.PARSER,
    Category.SEMANTIC: Outcome.ANALYZER,
    Category.RUNTIME: Outcome.STUDENT,
    Category.INSTRUCTOR: Outcome.INSTRUCTOR,
    Category.INTERNAL: Outcome.INSTRUCTOR,
    Category.NO_ERRORS: Outcome.NO_ERRORS,
    Category.SUCCESS: Outcome.SUCCESS,
    Category.COMPLETED: Outcome.COMPLETED,
}


def present_message(
    category: Category | str,
    label: str,
    message: str,
    line: int | None = None,
) -> FeedbackDirective:
    """Wrap one already-chosen message into a directive.

    - An instructor message labeled "explain" is titled "Instructor Feedback".
    - An instructor message labeled "No errors" is a `Category.NO_ERRORS` directive.
    - Unknown category names are treated as instructor feedback.

    Args:
        category (Category | str): Category, or its name as sent by the feedback script.
        label (str): Title of the message.
        message (str): Message body.
        line (int | None): 1-based line to highlight.

    Returns:
        FeedbackDirective: The wrapped message.
    """
    resolved: Category = _resolve_category(category)
    title: str = label
    if resolved is Category.INSTRUCTOR:
        if label.strip().lower() == "explain":
            title = INSTRUCTOR_FEEDBACK_TITLE
        elif label.strip().lower() == "no errors":
            resolved = Category.NO_ERRORS
    return FeedbackDirective(
        category=resolved,
        label=title,
        message=message,
        outcome=_CATEGORY_OUTCOMES[resolved],
        line=line,
    )


def _resolve_category(category: Category | str) -> Category:
    if isinstance(category, Category):
        return category
    token: str = category.strip().lower().replace("_", "-").replace(" ", "-")
    for member in Category:
        if member.value == token:
            return member
    if token == "instructor":
        return Category.INSTRUCTOR
    logger.debug("Unknown feedback category '%s'; treating as instructor feedback", category)
    return Category.INSTRUCTOR


def log_directive(
    directive: FeedbackDirective,
    *,
    instructor: InstructorReport | None = None,
) -> dict[str, str]:
    """Log the structured event entry of a directive and return it.

    Args:
        directive (FeedbackDirective): The directive being presented.
        instructor (InstructorReport | None): The cycle's instructor report; its
            compliments are logged at DEBUG (they are never arbitrated).

    Returns:
        dict[str, str]: The (category, label, message) entry for the event log.
    """
    entry: dict[str, str] = directive.log_entry()
    level: int = logging.ERROR if directive.is_internal else logging.INFO
    logger.log(level, "feedback %s|%s: %s", entry["category"], entry["label"], entry["message"])
    if instructor is not None and instructor.compliments:
        logger.debug("instructor compliments: %s", list(instructor.compliments))
    return entry
