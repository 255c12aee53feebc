# topmark:header:start
#
#   project      : Arbiter
#   file         : classifier.py
#   file_relpath : src/arbiter/feedback/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Analyzer issue classifier table.

The analyzer reports findings grouped by issue kind. When several kinds are
present at once, only one is shown, chosen by the position of its rule in
`ISSUE_RULES`. The order of that tuple is the precedence order; do not sort
it or turn it into a mapping.

Each rule looks at the first finding of its kind and either builds a
message or declines (returns None). Suppressed and empty kinds are skipped;
the first remaining kind ends the scan, so a declined finding yields no
analyzer directive at all and later kinds are never inspected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from arbiter.config.logging import get_logger
from arbiter.constants import IMPLICIT_RETURN_NAME
from arbiter.feedback.directive import Category, FeedbackDirective, Outcome

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from arbiter.config.logging import ArbiterLogger
    from arbiter.reports.model import Finding

logger: ArbiterLogger = get_logger(__name__)


class IssueKind:
    """Analyzer issue kind names, as they appear in analyzer reports."""

    ACTION_AFTER_RETURN: Final[str] = "Action after return"
    RETURN_OUTSIDE_FUNCTION: Final[str] = "Return outside function"
    UNCONNECTED_BLOCKS: Final[str] = "Unconnected blocks"
    ITERATION_VARIABLE_IS_LIST: Final[str] = "Iteration variable is iteration list"
    UNDEFINED_VARIABLES: Final[str] = "Undefined variables"
    POSSIBLY_UNDEFINED_VARIABLES: Final[str] = "Possibly undefined variables"
    UNREAD_VARIABLES: Final[str] = "Unread variables"
    OVERWRITTEN_VARIABLES: Final[str] = "Overwritten variables"
    EMPTY_ITERATIONS: Final[str] = "Empty iterations"
    NON_LIST_ITERATIONS: Final[str] = "Non-list iterations"
    INCOMPATIBLE_TYPES: Final[str] = "Incompatible types"
    READ_OUT_OF_SCOPE: Final[str] = "Read out of scope"


OPERATION_DESCRIPTION: Final[dict[str, str]] = {
    "Pow": "an exponent",
    "Add": "an addition",
    "Mult": "a multiplication",
    "Sub": "a subtraction",
    "Div": "a division",
    "Mod": "a modulo",
}

TYPE_DESCRIPTION: Final[dict[str, str]] = {
    "Num": "a number",
    "Str": "a string",
    "Tuple": "a tuple",
    "List": "a list",
    "Bool": "a boolean",
    "File": "a file",
    "None": "a None",
    "Set": "a set",
    "Function": "a function",
}


@dataclass(frozen=True)
class IssueRule:
    """One row of the classifier table.

    Attributes:
        kind (str): Issue kind name this rule handles.
        label (str): Title of the resulting directive.
        build (Callable[[Finding], tuple[str, int | None] | None]): Builds the message
            and line from the first finding, or returns None to decline it.
    """

    kind: str
    label: str
    build: Callable[[Finding], tuple[str, int | None] | None]


def _line(finding: Finding) -> str:
    return "an unknown line" if finding.line is None else str(finding.line)


def _action_after_return(f: Finding) -> tuple[str, int | None]:
    return (
        f"You performed an action after already returning from a function, on line "
        f"{_line(f)}. You can only return on a path once.",
        f.line,
    )


def _return_outside_function(f: Finding) -> tuple[str, int | None]:
    return (
        f"You attempted to return outside of a function on line {_line(f)}. "
        "But you can only return from within a function.",
        f.line,
    )


def _unconnected_blocks(f: Finding) -> tuple[str, int | None]:
    return (
        f"It looks like you have unconnected blocks on line {_line(f)}. Before you run "
        "your program, you must make sure that all of your blocks are connected and that "
        "there are no unfilled holes.",
        f.line,
    )


def _iteration_variable_is_list(f: Finding) -> tuple[str, int | None]:
    return (
        f"The variable `{f.name}` was iterated on line {_line(f)}, but you used the same "
        "variable as the iteration variable. You should choose a different variable name "
        "for the iteration variable. Usually, the iteration variable is the singular form "
        "of the iteration list (e.g., `for dog in dogs:`).",
        f.line,
    )


def _undefined_variable(f: Finding) -> tuple[str, int | None]:
    return (
        f"The variable `{f.name}` was used on line {_line(f)}, but it was not given a "
        "value on a previous line. You cannot use a variable until it has been given a "
        "value.",
        f.line,
    )


def _possibly_undefined_variable(f: Finding) -> tuple[str, int | None] | None:
    if f.name == IMPLICIT_RETURN_NAME:
        return None
    return (
        f"The variable `{f.name}` was used on line {_line(f)}, but it was possibly not "
        "given a value on a previous line. You cannot use a variable until it has been "
        "given a value. Check to make sure that this variable was declared in all of the "
        "branches of your decision.",
        f.line,
    )


def _unread_variable(f: Finding) -> tuple[str, int | None]:
    kind_name, kind_body = "variable", "value"
    if f.type_name == "Function":
        kind_name, kind_body = "function", "definition"
    # Reported without a line.
    return (
        f"The {kind_name} `{f.name}` was given a {kind_body}, but was never used after that.",
        None,
    )


def _overwritten_variable(f: Finding) -> tuple[str, int | None]:
    return (
        f"The variable `{f.name}` was given a value, but `{f.name}` was changed on line "
        f"{_line(f)} before it was used. One of the times that you gave `{f.name}` a "
        "value was incorrect.",
        f.line,
    )


def _empty_iteration(f: Finding) -> tuple[str, int | None] | None:
    if not f.name:
        return None
    return (
        f"The variable `{f.name}` was set as an empty list, and then you attempted to use "
        f"it in an iteration on line {_line(f)}. You should only iterate over non-empty "
        "lists.",
        f.line,
    )


def _non_list_iteration(f: Finding) -> tuple[str, int | None] | None:
    if not f.name:
        return None
    return (
        f"The variable `{f.name}` is not a list, but you used it in the iteration on line "
        f"{_line(f)}. You should only iterate over sequences like lists.",
        f.line,
    )


def _incompatible_types(f: Finding) -> tuple[str, int | None]:
    op: str = OPERATION_DESCRIPTION.get(f.operation or "", "an unknown")
    left: str = TYPE_DESCRIPTION.get(f.left_type or "", "an unknown value")
    right: str = TYPE_DESCRIPTION.get(f.right_type or "", "an unknown value")
    return (
        f"You used {op} operation with {left} and {right} on line {_line(f)}. But you "
        "can't do that with that operator. Make sure both sides of the operator are the "
        "right type.",
        f.line,
    )


def _read_out_of_scope(f: Finding) -> tuple[str, int | None]:
    return (
        f"You attempted to read a variable from a different scope on line {_line(f)}. "
        "You should only use variables inside the function they were declared in.",
        f.line,
    )


ISSUE_RULES: Final[tuple[IssueRule, ...]] = (
    IssueRule(IssueKind.ACTION_AFTER_RETURN, "Action after return", _action_after_return),
    IssueRule(
        IssueKind.RETURN_OUTSIDE_FUNCTION, "Return outside function", _return_outside_function
    ),
    IssueRule(IssueKind.UNCONNECTED_BLOCKS, "Unconnected blocks", _unconnected_blocks),
    IssueRule(IssueKind.ITERATION_VARIABLE_IS_LIST, "Iteration Problem", _iteration_variable_is_list),
    IssueRule(IssueKind.UNDEFINED_VARIABLES, "Initialization Problem", _undefined_variable),
    IssueRule(
        IssueKind.POSSIBLY_UNDEFINED_VARIABLES,
        "Initialization Problem",
        _possibly_undefined_variable,
    ),
    IssueRule(IssueKind.UNREAD_VARIABLES, "Unused Variable", _unread_variable),
    IssueRule(IssueKind.OVERWRITTEN_VARIABLES, "Overwritten Variable", _overwritten_variable),
    IssueRule(IssueKind.EMPTY_ITERATIONS, "Iterating over empty list", _empty_iteration),
    IssueRule(IssueKind.NON_LIST_ITERATIONS, "Iterating over non-list", _non_list_iteration),
    IssueRule(IssueKind.INCOMPATIBLE_TYPES, "Incompatible types", _incompatible_types),
    IssueRule(IssueKind.READ_OUT_OF_SCOPE, "Read out of scope", _read_out_of_scope),
)


def issue_kinds() -> tuple[str, ...]:
    """Return the issue kind names in precedence order."""
    return tuple(rule.kind for rule in ISSUE_RULES)


def classify_analyzer_issues(
    issues: Mapping[str, Sequence[Finding]] | None,
    suppressed: Mapping[str, bool] | None = None,
) -> FeedbackDirective | None:
    """Select the analyzer directive for a set of findings.

    Args:
        issues (Mapping[str, Sequence[Finding]] | None): Findings keyed by issue kind;
            kinds may be absent.
        suppressed (Mapping[str, bool] | None): Per-kind suppression flags.

    Returns:
        FeedbackDirective | None: A semantic directive with `Outcome.ANALYZER`, or
        None when no kind has findings or the first kind with findings declined.
        The later kinds are not inspected in that case.
    """
    if not issues:
        return None
    suppressed = suppressed or {}
    for rule in ISSUE_RULES:
        if suppressed.get(rule.kind, False):
            logger.trace("issue[%s] suppressed", rule.kind)
            continue
        findings: Sequence[Finding] = issues.get(rule.kind, ())
        if not findings:
            continue
        built: tuple[str, int | None] | None = rule.build(findings[0])
        if built is None:
            logger.debug("issue[%s] declined first finding %r", rule.kind, findings[0])
            return None
        message, line = built
        logger.debug("issue[%s] selected (line=%s)", rule.kind, line)
        return FeedbackDirective(
            category=Category.SEMANTIC,
            label=rule.label,
            message=message,
            outcome=Outcome.ANALYZER,
            line=line,
        )
    return None
