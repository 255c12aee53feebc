# topmark:header:start
#
#   project      : Arbiter
#   file         : test_cascade.py
#   file_relpath : tests/feedback/test_cascade.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for the arbitration cascade in `arbiter.feedback.cascade`.

Each precedence step is exercised by synthesizing minimal `Reports` bundles
in which the step under test is the highest-ranked applicable one, plus a
few cross-step checks that the higher step wins.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

import pytest

from arbiter import MutableSuppressions, Suppressions, arbitrate
from arbiter.feedback.cascade import (
    CASCADE,
    partition_complaints,
    sort_complaints,
)
from arbiter.feedback.directive import Category, FeedbackDirective, Outcome
from arbiter.reports.errors import ParseFailure, TextFailure
from arbiter.reports.model import (
    AnalyzerReport,
    Complaint,
    Finding,
    InstructorReport,
    ParserReport,
    Position,
    Reports,
    StudentReport,
    VerifierReport,
)

pytestmark = pytest.mark.cascade


def _finding(line: int, name: str | None = None) -> Finding:
    return Finding(position=Position(line=line), name=name)


def _analyzer(**issues: list[Finding]) -> AnalyzerReport:
    return AnalyzerReport(issues={k.replace("_", " "): tuple(v) for k, v in issues.items()})


def _suppress(*stages: str) -> Suppressions:
    builder = MutableSuppressions()
    for stage in stages:
        builder.suppress_stage(stage)
    return builder.freeze()


# --- Step order ----------------------------------------------------------------


def test_cascade_rule_order_is_documented_order() -> None:
    """The rule tuple matches the documented precedence list."""
    assert [rule.name for rule in CASCADE] == [
        "verifier",
        "verifier-complaints",
        "parser",
        "instructor-failure",
        "instructor-complaints",
        "analyzer",
        "student",
        "hidden-correctness",
        "student-complaints",
        "complete",
        "fallback",
    ]


# --- 1) Verifier ---------------------------------------------------------------


def test_verifier_failure_wins_over_everything() -> None:
    """A failed verifier yields a blank-program directive regardless of other reports."""
    reports = Reports(
        verifier=VerifierReport(success=False, error=TextFailure("empty")),
        parser=ParserReport(success=False, error=ParseFailure(("bad", "f.py", 2))),
        instructor=InstructorReport(
            complaints=(Complaint("A", "a", priority="verifier"),), complete=True
        ),
        analyzer=_analyzer(Undefined_variables=[_finding(4, "x")]),
        student=StudentReport(success=False, error=TextFailure("boom")),
    )
    directive: FeedbackDirective = arbitrate(reports)
    assert directive.outcome is Outcome.VERIFIER
    assert directive.category is Category.BLANK_PROGRAM
    assert directive.label == "Blank Program"
    assert directive.line is None


def test_suppressed_verifier_falls_through() -> None:
    """Suppressing the verifier lets the next applicable step fire."""
    reports = Reports(verifier=VerifierReport(success=False))
    directive = arbitrate(reports, _suppress("verifier"))
    assert directive.outcome is Outcome.NO_ERRORS


# --- 2) Verifier-priority complaints -------------------------------------------


def test_verifier_complaint_precedes_parser_failure() -> None:
    """Verifier-priority complaints win over a parser failure."""
    reports = Reports(
        parser=ParserReport(success=False, error=ParseFailure(("bad", "f.py", 2))),
        instructor=InstructorReport(
            complaints=(
                Complaint("General", "g", priority="high"),
                Complaint("First", "first verifier", line=7, priority="verifier"),
                Complaint("Second", "second verifier", priority="verifier"),
            )
        ),
    )
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.INSTRUCTOR
    assert directive.category is Category.INSTRUCTOR
    assert (directive.label, directive.message, directive.line) == ("First", "first verifier", 7)


def test_verifier_complaint_ignores_instructor_suppression() -> None:
    """Verifier-priority complaints are reported even when the instructor stage is suppressed."""
    reports = Reports(
        instructor=InstructorReport(complaints=(Complaint("V", "v", priority="verifier"),))
    )
    directive = arbitrate(reports, _suppress("instructor"))
    assert directive.label == "V"


# --- 3) Parser -----------------------------------------------------------------


def test_parser_failure_produces_syntax_directive() -> None:
    """A failed parser yields a syntax directive at the parser's line."""
    error = ParseFailure(("bad input", "__main__.py", 5, (5, 3), "x = = 1"))
    directive = arbitrate(Reports(parser=ParserReport(success=False, error=error)))
    assert directive.outcome is Outcome.PARSER
    assert directive.category is Category.SYNTAX
    assert directive.label == "Syntax Error"
    assert directive.line == 5
    assert "x = = 1" in directive.message
    assert directive.original == "ParseError: bad input"


def test_suppressed_parser_falls_through_to_student() -> None:
    """With the parser suppressed, a student failure is reported instead."""
    reports = Reports(
        parser=ParserReport(success=False, error=ParseFailure(("bad", "f.py", 2))),
        student=StudentReport(success=False, error=TextFailure("boom")),
    )
    assert arbitrate(reports, _suppress("parser")).outcome is Outcome.STUDENT


# --- 4) Instructor stage failure -----------------------------------------------


def test_instructor_failure_without_traceback_is_internal(make_runtime_error: Any) -> None:
    """No traceback: the instructor script is at fault."""
    error = make_runtime_error("ValueError", "oops", lineno=None)
    reports = Reports(instructor=InstructorReport(success=False, error=error))
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.INSTRUCTOR
    assert directive.category is Category.INTERNAL
    assert directive.label == "Instructor Feedback Error"
    assert directive.original == "ValueError: oops"


def test_instructor_failure_in_student_file_is_runtime(make_runtime_error: Any) -> None:
    """A failure raised from the student's own file is an ordinary runtime error."""
    error = make_runtime_error("ZeroDivisionError", "division by zero", lineno=9)
    reports = Reports(instructor=InstructorReport(success=False, error=error))
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.STUDENT
    assert directive.category is Category.RUNTIME
    assert directive.label == "ZeroDivisionError"
    assert directive.line == 9


def test_instructor_failure_in_instructor_file_adjusts_line(make_runtime_error: Any) -> None:
    """The reported line is shifted back by the instructor report's line offset."""
    error = make_runtime_error("KeyError", "k", filename="instructor.py", lineno=25)
    reports = Reports(
        instructor=InstructorReport(
            success=False, error=error, filename="instructor.py", line_offset=20
        )
    )
    directive = arbitrate(reports)
    assert directive.category is Category.INTERNAL
    assert directive.label == "Instructor Feedback Error"
    assert directive.line == 5


def test_negative_adjusted_line_is_engine_error(make_runtime_error: Any) -> None:
    """A line above the offset signals inconsistent offset bookkeeping."""
    error = make_runtime_error("KeyError", "k", filename="instructor.py", lineno=3)
    reports = Reports(
        instructor=InstructorReport(
            success=False, error=error, filename="instructor.py", line_offset=20
        )
    )
    directive = arbitrate(reports)
    assert directive.category is Category.INTERNAL
    assert directive.label == "Feedback Engine Error"
    assert directive.outcome is Outcome.INSTRUCTOR
    assert directive.line == 3


def test_instructor_failure_in_other_file_is_internal(make_runtime_error: Any) -> None:
    error = make_runtime_error("KeyError", "k", filename="helpers.py", lineno=3)
    reports = Reports(
        instructor=InstructorReport(success=False, error=error, filename="instructor.py")
    )
    directive = arbitrate(reports)
    assert directive.label == "Instructor Feedback Error"
    assert directive.line is None


# --- 5) General complaints ------------------------------------------------------


def test_general_complaints_sorted_by_priority() -> None:
    """The highest-priority general complaint wins, not the first raised."""
    reports = Reports(
        instructor=InstructorReport(
            complaints=(
                Complaint("Low", "l", priority="low"),
                Complaint("High", "h", priority="high"),
                Complaint("Medium", "m"),
            )
        ),
        analyzer=_analyzer(Undefined_variables=[_finding(4, "x")]),
    )
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.INSTRUCTOR
    assert directive.label == "High"


def test_equal_priority_complaints_keep_input_order() -> None:
    """Stable sort: among equal priorities the first raised complaint is reported."""
    reports = Reports(
        instructor=InstructorReport(
            complaints=(
                Complaint("First", "1", priority="medium"),
                Complaint("Second", "2", priority="medium"),
            )
        )
    )
    assert arbitrate(reports).label == "First"


def test_suppressed_instructor_skips_general_complaints() -> None:
    reports = Reports(instructor=InstructorReport(complaints=(Complaint("C", "c"),)))
    assert arbitrate(reports, _suppress("instructor")).outcome is Outcome.NO_ERRORS


# --- 6) Analyzer ----------------------------------------------------------------


def test_analyzer_precedence_scenario() -> None:
    """Undefined variables outrank unread variables."""
    reports = Reports(
        analyzer=_analyzer(
            Undefined_variables=[_finding(4, "x")],
            Unread_variables=[_finding(7, "y")],
        )
    )
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.ANALYZER
    assert directive.category is Category.SEMANTIC
    assert directive.label == "Initialization Problem"
    assert directive.line == 4


def test_analyzer_kind_suppression_scenario() -> None:
    """Suppressing one kind exposes the next one without affecting others."""
    reports = Reports(
        analyzer=_analyzer(
            Undefined_variables=[_finding(4, "x")],
            Unread_variables=[_finding(7, "y")],
        )
    )
    suppressions = MutableSuppressions().suppress_kind("analyzer", "Undefined variables").freeze()
    directive = arbitrate(reports, suppressions)
    assert directive.outcome is Outcome.ANALYZER
    assert directive.label == "Unused Variable"
    assert directive.line is None


def test_analyzer_failure_is_internal_error() -> None:
    reports = Reports(analyzer=AnalyzerReport(success=False, error=TextFailure("crash")))
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.ANALYZER
    assert directive.category is Category.INTERNAL
    assert directive.label == "Analyzer Error"
    assert directive.original == "crash"


def test_analyzer_without_findings_falls_through_to_student() -> None:
    reports = Reports(
        analyzer=_analyzer(Unread_variables=[]),
        student=StudentReport(success=False, error=TextFailure("boom")),
    )
    assert arbitrate(reports).outcome is Outcome.STUDENT


def test_declined_analyzer_finding_falls_through_to_student(make_runtime_error: Any) -> None:
    """An unnamed empty iteration ends the analyzer step; later kinds stay hidden."""
    reports = Reports(
        analyzer=AnalyzerReport(
            issues={
                "Empty iterations": (_finding(3),),
                "Incompatible types": (_finding(9),),
            }
        ),
        student=StudentReport(success=False, error=make_runtime_error("TypeError", "t")),
    )
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.STUDENT
    assert directive.label == "TypeError"


def test_analyzer_stage_suppressed_entirely() -> None:
    reports = Reports(analyzer=AnalyzerReport(success=False, error=TextFailure("crash")))
    assert arbitrate(reports, _suppress("analyzer")).outcome is Outcome.NO_ERRORS


# --- 7/8) Student and hidden correctness ----------------------------------------


def test_student_failure_reported(make_runtime_error: Any) -> None:
    error = make_runtime_error("TypeError", "unsupported operand", lineno=12)
    directive = arbitrate(Reports(student=StudentReport(success=False, error=error)))
    assert directive.outcome is Outcome.STUDENT
    assert directive.category is Category.RUNTIME
    assert directive.label == "TypeError"
    assert directive.line == 12
    assert directive.original == "TypeError: unsupported operand"


def test_hide_correctness_masks_analyzer_and_student(make_runtime_error: Any) -> None:
    """Hidden correctness reports "no errors" even with analyzer findings and failures."""
    reports = Reports(
        instructor=InstructorReport(hide_correctness=True, complete=True),
        analyzer=_analyzer(Undefined_variables=[_finding(4, "x")]),
        student=StudentReport(success=False, error=make_runtime_error("NameError", "x")),
    )
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.NO_ERRORS
    assert directive.category is Category.NO_ERRORS


def test_hide_correctness_masks_student_failure_alone(make_runtime_error: Any) -> None:
    """A failed student run is withheld when correctness is hidden."""
    reports = Reports(
        instructor=InstructorReport(hide_correctness=True),
        student=StudentReport(success=False, error=make_runtime_error("NameError", "x")),
    )
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.NO_ERRORS
    assert directive.line is None


def test_hide_correctness_does_not_mask_parser() -> None:
    reports = Reports(
        parser=ParserReport(success=False, error=ParseFailure(("bad", "f.py", 1))),
        instructor=InstructorReport(hide_correctness=True),
    )
    assert arbitrate(reports).outcome is Outcome.PARSER


# --- 9/10/11) Gentle complaints, completion, fallback ----------------------------


def test_student_priority_complaint_after_clean_run() -> None:
    reports = Reports(
        instructor=InstructorReport(
            complaints=(
                Complaint("Gentle", "consider a loop", line=2, priority="student"),
                Complaint("Gentle 2", "later", priority="student"),
            ),
            complete=True,
        )
    )
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.INSTRUCTOR
    assert directive.label == "Gentle"
    assert directive.line == 2


def test_student_priority_complaint_yields_to_runtime_error(make_runtime_error: Any) -> None:
    reports = Reports(
        instructor=InstructorReport(complaints=(Complaint("Gentle", "g", priority="student"),)),
        student=StudentReport(success=False, error=make_runtime_error("NameError", "x")),
    )
    assert arbitrate(reports).outcome is Outcome.STUDENT


def test_complete_flag_reports_success(clean_reports: Reports) -> None:
    reports = replace(clean_reports, instructor=InstructorReport(complete=True))
    directive = arbitrate(reports)
    assert directive.outcome is Outcome.SUCCESS
    assert directive.category is Category.SUCCESS
    assert directive.label == "Complete!"


def test_complete_flag_ignored_when_instructor_suppressed() -> None:
    reports = Reports(instructor=InstructorReport(complete=True))
    assert arbitrate(reports, _suppress("instructor")).outcome is Outcome.NO_ERRORS


def test_fallback_no_errors(clean_reports: Reports) -> None:
    directive = arbitrate(clean_reports)
    assert directive.outcome is Outcome.NO_ERRORS
    assert directive.label == "No errors"
    assert directive.message


def test_fallback_completed_when_no_errors_suppressed(clean_reports: Reports) -> None:
    directive = arbitrate(clean_reports, _suppress("no errors"))
    assert directive.outcome is Outcome.COMPLETED
    assert directive.category is Category.COMPLETED
    assert directive.message == ""
    assert directive.line is None


# --- Properties ------------------------------------------------------------------


def test_arbitrate_is_idempotent(make_runtime_error: Any) -> None:
    """Identical inputs give identical directives."""
    reports = Reports(
        instructor=InstructorReport(complaints=(Complaint("C", "c", priority="low"),)),
        student=StudentReport(success=False, error=make_runtime_error("IndexError", "i")),
    )
    suppressions = _suppress("parser")
    first = arbitrate(reports, suppressions)
    second = arbitrate(reports, suppressions)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_arbitrate_does_not_mutate_inputs() -> None:
    complaints = (Complaint("B", "b", priority="low"), Complaint("A", "a", priority="high"))
    reports = Reports(instructor=InstructorReport(complaints=complaints))
    arbitrate(reports)
    assert reports.instructor.complaints == complaints


@pytest.mark.parametrize(
    "suppressed",
    [(), ("verifier",), ("verifier", "parser", "instructor", "analyzer", "student", "no errors")],
)
def test_arbitrate_is_total(suppressed: tuple[str, ...]) -> None:
    """Some directive is always produced, with a non-empty outcome tag."""
    reports = Reports(
        verifier=VerifierReport(success=False),
        parser=ParserReport(success=False),
        analyzer=AnalyzerReport(success=False),
        student=StudentReport(success=False),
    )
    directive = arbitrate(reports, _suppress(*suppressed))
    assert directive.outcome.value


# --- Complaint helpers -------------------------------------------------------------


def test_partition_complaints_keeps_order() -> None:
    complaints = (
        Complaint("s1", "", priority="student"),
        Complaint("g1", "", priority="low"),
        Complaint("v1", "", priority="verifier"),
        Complaint("s2", "", priority="student"),
        Complaint("g2", ""),
    )
    buckets = partition_complaints(complaints)
    assert [c.name for c in buckets.verifier] == ["v1"]
    assert [c.name for c in buckets.student] == ["s1", "s2"]
    assert [c.name for c in buckets.general] == ["g1", "g2"]


def test_sort_complaints_unknown_priority_last() -> None:
    complaints = [
        Complaint("unknown", "", priority="urgent-ish"),
        Complaint("low", "", priority="low"),
        Complaint("high", "", priority="HIGH"),
    ]
    assert [c.name for c in sort_complaints(complaints)] == ["high", "low", "unknown"]
