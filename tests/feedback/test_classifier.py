# topmark:header:start
#
#   project      : Arbiter
#   file         : test_classifier.py
#   file_relpath : tests/feedback/test_classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the analyzer issue classifier table."""

from __future__ import annotations

import pytest

from arbiter import classify_analyzer_issues
from arbiter.feedback.classifier import ISSUE_RULES, IssueKind, issue_kinds
from arbiter.feedback.directive import Category, Outcome
from arbiter.reports.model import Finding, Position


def _at(line: int | None, **fields: str) -> Finding:
    return Finding(position=Position(line=line), **fields)


def test_issue_kinds_precedence_order() -> None:
    assert issue_kinds() == (
        "Action after return",
        "Return outside function",
        "Unconnected blocks",
        "Iteration variable is iteration list",
        "Undefined variables",
        "Possibly undefined variables",
        "Unread variables",
        "Overwritten variables",
        "Empty iterations",
        "Non-list iterations",
        "Incompatible types",
        "Read out of scope",
    )
    assert len({rule.kind for rule in ISSUE_RULES}) == len(ISSUE_RULES)


@pytest.mark.parametrize("issues", [None, {}, {IssueKind.UNREAD_VARIABLES: ()}])
def test_no_findings_yields_none(issues: dict[str, tuple[Finding, ...]] | None) -> None:
    assert classify_analyzer_issues(issues) is None


def test_unknown_kinds_are_ignored() -> None:
    assert classify_analyzer_issues({"Shadowed builtins": (_at(3, name="list"),)}) is None


def test_earlier_kind_wins_regardless_of_mapping_order() -> None:
    issues = {
        IssueKind.READ_OUT_OF_SCOPE: (_at(9),),
        IssueKind.ACTION_AFTER_RETURN: (_at(2),),
    }
    directive = classify_analyzer_issues(issues)
    assert directive is not None
    assert directive.label == "Action after return"
    assert directive.line == 2
    assert directive.category is Category.SEMANTIC
    assert directive.outcome is Outcome.ANALYZER


def test_only_first_finding_is_reported() -> None:
    issues = {IssueKind.UNDEFINED_VARIABLES: (_at(4, name="x"), _at(2, name="y"))}
    directive = classify_analyzer_issues(issues)
    assert directive is not None
    assert "`x`" in directive.message
    assert "`y`" not in directive.message
    assert directive.line == 4


def test_suppressed_kind_is_skipped() -> None:
    issues = {
        IssueKind.UNDEFINED_VARIABLES: (_at(4, name="x"),),
        IssueKind.UNREAD_VARIABLES: (_at(7, name="y"),),
    }
    directive = classify_analyzer_issues(issues, {IssueKind.UNDEFINED_VARIABLES: True})
    assert directive is not None
    assert directive.label == "Unused Variable"
    assert directive.line is None


def test_kind_set_false_is_not_suppressed() -> None:
    issues = {IssueKind.UNDEFINED_VARIABLES: (_at(4, name="x"),)}
    directive = classify_analyzer_issues(issues, {IssueKind.UNDEFINED_VARIABLES: False})
    assert directive is not None
    assert directive.label == "Initialization Problem"


def test_all_kinds_suppressed_yields_none() -> None:
    issues = {IssueKind.UNREAD_VARIABLES: (_at(7, name="y"),)}
    assert classify_analyzer_issues(issues, {IssueKind.UNREAD_VARIABLES: True}) is None


def test_implicit_return_is_not_a_possibly_undefined_variable() -> None:
    """The implicit return slot ends the scan without a directive."""
    issues = {
        IssueKind.POSSIBLY_UNDEFINED_VARIABLES: (_at(5, name="*return"),),
        IssueKind.OVERWRITTEN_VARIABLES: (_at(8, name="total"),),
    }
    assert classify_analyzer_issues(issues) is None


def test_suppressed_possibly_undefined_does_not_end_scan() -> None:
    issues = {
        IssueKind.POSSIBLY_UNDEFINED_VARIABLES: (_at(5, name="*return"),),
        IssueKind.OVERWRITTEN_VARIABLES: (_at(8, name="total"),),
    }
    directive = classify_analyzer_issues(
        issues, {IssueKind.POSSIBLY_UNDEFINED_VARIABLES: True}
    )
    assert directive is not None
    assert directive.label == "Overwritten Variable"
    assert directive.line == 8


def test_possibly_undefined_variable_message() -> None:
    issues = {IssueKind.POSSIBLY_UNDEFINED_VARIABLES: (_at(5, name="value"),)}
    directive = classify_analyzer_issues(issues)
    assert directive is not None
    assert directive.label == "Initialization Problem"
    assert "`value`" in directive.message
    assert "possibly not given a value" in directive.message


def test_unread_function_is_described_as_function() -> None:
    issues = {IssueKind.UNREAD_VARIABLES: (_at(3, name="helper", type_name="Function"),)}
    directive = classify_analyzer_issues(issues)
    assert directive is not None
    assert directive.message.startswith("The function `helper` was given a definition")


def test_unread_variable_is_described_as_variable() -> None:
    issues = {IssueKind.UNREAD_VARIABLES: (_at(3, name="count", type_name="Num"),)}
    directive = classify_analyzer_issues(issues)
    assert directive is not None
    assert directive.message.startswith("The variable `count` was given a value")


@pytest.mark.parametrize(
    "kind", [IssueKind.EMPTY_ITERATIONS, IssueKind.NON_LIST_ITERATIONS]
)
def test_unnamed_iteration_findings_hide_later_kinds(kind: str) -> None:
    """An unnamed iteration finding yields nothing, even with later kinds present."""
    incompatible = _at(9, operation="Add", left_type="Num", right_type="Str")
    issues = {
        kind: (_at(3),),
        IssueKind.INCOMPATIBLE_TYPES: (incompatible,),
        IssueKind.READ_OUT_OF_SCOPE: (_at(10),),
    }
    assert classify_analyzer_issues(issues) is None


def test_empty_iteration_with_name() -> None:
    directive = classify_analyzer_issues({IssueKind.EMPTY_ITERATIONS: (_at(6, name="dogs"),)})
    assert directive is not None
    assert directive.label == "Iterating over empty list"
    assert "`dogs`" in directive.message


def test_incompatible_types_message() -> None:
    finding = _at(12, operation="Add", left_type="Num", right_type="Str")
    directive = classify_analyzer_issues({IssueKind.INCOMPATIBLE_TYPES: (finding,)})
    assert directive is not None
    assert directive.label == "Incompatible types"
    assert directive.message.startswith(
        "You used an addition operation with a number and a string on line 12."
    )


def test_incompatible_types_unknown_descriptions() -> None:
    finding = _at(12, operation="MatMult", left_type="Matrix")
    directive = classify_analyzer_issues({IssueKind.INCOMPATIBLE_TYPES: (finding,)})
    assert directive is not None
    assert "an unknown operation with an unknown value and an unknown value" in (
        directive.message
    )


def test_missing_line_is_described() -> None:
    directive = classify_analyzer_issues({IssueKind.RETURN_OUTSIDE_FUNCTION: (_at(None),)})
    assert directive is not None
    assert directive.line is None
    assert "an unknown line" in directive.message


@pytest.mark.parametrize(
    ("kind", "label"),
    [(rule.kind, rule.label) for rule in ISSUE_RULES],
)
def test_every_rule_produces_its_label(kind: str, label: str) -> None:
    finding = _at(3, name="item", operation="Sub", left_type="List", right_type="Num")
    directive = classify_analyzer_issues({kind: (finding,)})
    assert directive is not None
    assert directive.label == label
    assert directive.message
