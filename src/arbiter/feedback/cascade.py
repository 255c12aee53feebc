# topmark:header:start
#
#   project      : Arbiter
#   file         : cascade.py
#   file_relpath : src/arbiter/feedback/cascade.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The arbitration cascade: select exactly one feedback directive.

`arbitrate` walks `CASCADE`, an ordered tuple of rules. Each rule has a
guard (does the rule apply to these reports and suppressions?) and a
producer (build the directive, or return None to fall through). The first
directive produced wins.

Precedence (high → low):
    1) verifier failure (blank program)
    2) verifier-priority complaints
    3) parser failure (syntax error)
    4) failure of the instructor feedback script itself
    5) general instructor complaints, stably sorted by priority
    6) analyzer failure or analyzer findings (unless correctness is hidden)
    7) student runtime failure (unless correctness is hidden)
    8) hidden correctness: generic "no errors"
    9) student-priority complaints
    10) completion flag
    11) fallback: "no errors", or "completed" when that is suppressed

The last rule always produces, so the cascade is total. The module holds no
state; the only side effect is DEBUG/TRACE logging.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from arbiter.config.logging import get_logger
from arbiter.config.model import Suppressions
from arbiter.constants import STUDENT_MAIN_FILENAME
from arbiter.feedback.classifier import classify_analyzer_issues
from arbiter.feedback.directive import Category, FeedbackDirective, Outcome
from arbiter.feedback.normalize import normalize_parse_error, normalize_runtime_error
from arbiter.reports.errors import RuntimeFailure, pretty_print_error
from arbiter.reports.model import ComplaintPriority, Stage

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from arbiter.config.logging import ArbiterLogger
    from arbiter.feedback.normalize import NormalizedParseError, NormalizedRuntimeError
    from arbiter.reports.errors import ErrorPayload, TracebackFrame
    from arbiter.reports.model import Complaint, InstructorReport, Reports

logger: ArbiterLogger = get_logger(__name__)


BLANK_PROGRAM_LABEL: Final[str] = "Blank Program"
BLANK_PROGRAM_MESSAGE: Final[str] = "You have not written any code yet."
NO_ERRORS_LABEL: Final[str] = "No errors"
NO_ERRORS_MESSAGE: Final[str] = "No errors reported. View your output on the left."
COMPLETE_LABEL: Final[str] = "Complete!"
COMPLETE_MESSAGE: Final[str] = "Great work!"
COMPLETED_LABEL: Final[str] = "Completed"

INSTRUCTOR_ERROR_LABEL: Final[str] = "Instructor Feedback Error"
INSTRUCTOR_ERROR_MESSAGE: Final[str] = (
    "Error in instructor feedback. Please show the above message to an instructor!"
)
ENGINE_ERROR_LABEL: Final[str] = "Feedback Engine Error"
ENGINE_ERROR_MESSAGE: Final[str] = (
    "Error in the feedback generation. Please show the above message to an instructor "
    "so they can contact a developer!"
)
ANALYZER_ERROR_LABEL: Final[str] = "Analyzer Error"
ANALYZER_ERROR_MESSAGE: Final[str] = (
    "Error in analyzer. Please show the above message to an instructor!"
)


# --- Complaint buckets ---


@dataclass(frozen=True)
class ComplaintBuckets:
    """Instructor complaints split by priority bucket, each in input order.

    Attributes:
        verifier (tuple[Complaint, ...]): Complaints surfaced right after the verifier.
        student (tuple[Complaint, ...]): Gentle complaints surfaced after a clean run.
        general (tuple[Complaint, ...]): Everything else.
    """

    verifier: tuple[Complaint, ...] = ()
    student: tuple[Complaint, ...] = ()
    general: tuple[Complaint, ...] = ()


def partition_complaints(complaints: Iterable[Complaint]) -> ComplaintBuckets:
    """Split complaints into verifier, student and general buckets (order kept)."""
    verifier: list[Complaint] = []
    student: list[Complaint] = []
    general: list[Complaint] = []
    for complaint in complaints:
        if complaint.has_priority(ComplaintPriority.VERIFIER):
            verifier.append(complaint)
        elif complaint.has_priority(ComplaintPriority.STUDENT):
            student.append(complaint)
        else:
            general.append(complaint)
    return ComplaintBuckets(
        verifier=tuple(verifier), student=tuple(student), general=tuple(general)
    )


def sort_complaints(complaints: Iterable[Complaint]) -> list[Complaint]:
    """Return complaints ordered by priority; equal priorities keep input order."""
    return sorted(complaints, key=lambda c: c.rank)


# --- Cascade input and rules ---


@dataclass(frozen=True)
class CascadeInput:
    """Everything a cascade rule may look at, computed once per call."""

    reports: Reports
    suppressions: Suppressions
    complaints: ComplaintBuckets

    @classmethod
    def build(cls, reports: Reports, suppressions: Suppressions) -> CascadeInput:
        return cls(
            reports=reports,
            suppressions=suppressions,
            complaints=partition_complaints(reports.instructor.complaints),
        )

    def suppressed(self, stage: Stage) -> bool:
        return self.suppressions.is_stage_suppressed(stage)


@dataclass(frozen=True)
class CascadeRule:
    """One precedence step of the cascade.

    Attributes:
        name (str): Stable name used in logs and tests.
        applies (Callable[[CascadeInput], bool]): Guard; the producer runs only when True.
        produce (Callable[[CascadeInput], FeedbackDirective | None]): Builds the
            directive, or returns None to fall through to the next rule.
    """

    name: str
    applies: Callable[[CascadeInput], bool]
    produce: Callable[[CascadeInput], FeedbackDirective | None]


def complaint_directive(complaint: Complaint) -> FeedbackDirective:
    return FeedbackDirective(
        category=Category.INSTRUCTOR,
        label=complaint.name,
        message=complaint.message,
        outcome=Outcome.INSTRUCTOR,
        line=complaint.line,
    )


def runtime_directive(error: ErrorPayload | None, *, outcome: Outcome) -> FeedbackDirective:
    normalized: NormalizedRuntimeError = normalize_runtime_error(error)
    return FeedbackDirective(
        category=Category.RUNTIME,
        label=normalized.title,
        message=normalized.body,
        outcome=outcome,
        line=normalized.line,
        original=normalized.original_text,
    )


def internal_error_directive(
    error: ErrorPayload | None,
    *,
    label: str,
    message: str,
    outcome: Outcome,
    line: int | None = None,
) -> FeedbackDirective:
    return FeedbackDirective(
        category=Category.INTERNAL,
        label=label,
        message=message,
        outcome=outcome,
        line=line,
        original=pretty_print_error(error),
    )


def no_errors_directive() -> FeedbackDirective:
    return FeedbackDirective(
        category=Category.NO_ERRORS,
        label=NO_ERRORS_LABEL,
        message=NO_ERRORS_MESSAGE,
        outcome=Outcome.NO_ERRORS,
    )


def classify_instructor_failure(report: InstructorReport) -> FeedbackDirective:
    """Explain a failure of the instructor feedback script.

    The first traceback frame decides who is at fault:

    - no traceback: the instructor script (internal error);
    - the student's main file: the student (ordinary runtime error);
    - the instructor file: the instructor script, reported at the line
      shifted back by ``line_offset``; a negative shifted line means the
      offset bookkeeping is wrong and is reported as a feedback-engine bug;
    - any other file: the instructor script.

    Args:
        report (InstructorReport): The failed instructor report.

    Returns:
        FeedbackDirective: A runtime directive (`Outcome.STUDENT`) or an internal-error
        directive (`Outcome.INSTRUCTOR`).
    """
    error: ErrorPayload | None = report.error
    frame: TracebackFrame | None = (
        error.first_frame if isinstance(error, RuntimeFailure) else None
    )
    if frame is None:
        logger.debug("instructor failure without traceback")
        return internal_error_directive(
            error,
            label=INSTRUCTOR_ERROR_LABEL,
            message=INSTRUCTOR_ERROR_MESSAGE,
            outcome=Outcome.INSTRUCTOR,
        )
    if frame.filename == STUDENT_MAIN_FILENAME:
        logger.debug("instructor failure raised from the student's file")
        return runtime_directive(error, outcome=Outcome.STUDENT)
    if (
        report.filename is not None
        and frame.filename == report.filename
        and frame.lineno is not None
    ):
        adjusted: int = frame.lineno - report.line_offset
        if adjusted < 0:
            logger.debug(
                "instructor failure line %s below offset %s", frame.lineno, report.line_offset
            )
            return internal_error_directive(
                error,
                label=ENGINE_ERROR_LABEL,
                message=ENGINE_ERROR_MESSAGE,
                outcome=Outcome.INSTRUCTOR,
                line=frame.lineno,
            )
        return internal_error_directive(
            error,
            label=INSTRUCTOR_ERROR_LABEL,
            message=INSTRUCTOR_ERROR_MESSAGE,
            outcome=Outcome.INSTRUCTOR,
            line=adjusted,
        )
    return internal_error_directive(
        error,
        label=INSTRUCTOR_ERROR_LABEL,
        message=INSTRUCTOR_ERROR_MESSAGE,
        outcome=Outcome.INSTRUCTOR,
    )


def _blank_program(_: CascadeInput) -> FeedbackDirective:
    return FeedbackDirective(
        category=Category.BLANK_PROGRAM,
        label=BLANK_PROGRAM_LABEL,
        message=BLANK_PROGRAM_MESSAGE,
        outcome=Outcome.VERIFIER,
    )


def _syntax_error(inp: CascadeInput) -> FeedbackDirective:
    parsed: NormalizedParseError = normalize_parse_error(inp.reports.parser.error)
    return FeedbackDirective(
        category=Category.SYNTAX,
        label=parsed.title,
        message=parsed.message,
        outcome=Outcome.PARSER,
        line=parsed.line,
        original=parsed.original_text,
    )


def _general_complaint(inp: CascadeInput) -> FeedbackDirective:
    return complaint_directive(sort_complaints(inp.complaints.general)[0])


def _analyzer(inp: CascadeInput) -> FeedbackDirective | None:
    analyzer = inp.reports.analyzer
    if analyzer.failed:
        return internal_error_directive(
            analyzer.error,
            label=ANALYZER_ERROR_LABEL,
            message=ANALYZER_ERROR_MESSAGE,
            outcome=Outcome.ANALYZER,
        )
    return classify_analyzer_issues(analyzer.issues, inp.suppressions.kinds(Stage.ANALYZER))


def _complete(_: CascadeInput) -> FeedbackDirective:
    return FeedbackDirective(
        category=Category.SUCCESS,
        label=COMPLETE_LABEL,
        message=COMPLETE_MESSAGE,
        outcome=Outcome.SUCCESS,
    )


def _fallback(inp: CascadeInput) -> FeedbackDirective:
    if not inp.suppressed(Stage.NO_ERRORS):
        return no_errors_directive()
    return FeedbackDirective(
        category=Category.COMPLETED,
        label=COMPLETED_LABEL,
        message="",
        outcome=Outcome.COMPLETED,
    )


CASCADE: Final[tuple[CascadeRule, ...]] = (
    CascadeRule(
        name="verifier",
        applies=lambda i: not i.suppressed(Stage.VERIFIER) and i.reports.verifier.failed,
        produce=_blank_program,
    ),
    CascadeRule(
        name="verifier-complaints",
        applies=lambda i: bool(i.complaints.verifier),
        produce=lambda i: complaint_directive(i.complaints.verifier[0]),
    ),
    CascadeRule(
        name="parser",
        applies=lambda i: not i.suppressed(Stage.PARSER) and i.reports.parser.failed,
        produce=_syntax_error,
    ),
    CascadeRule(
        name="instructor-failure",
        applies=lambda i: i.reports.instructor.failed,
        produce=lambda i: classify_instructor_failure(i.reports.instructor),
    ),
    CascadeRule(
        name="instructor-complaints",
        applies=lambda i: not i.suppressed(Stage.INSTRUCTOR) and bool(i.complaints.general),
        produce=_general_complaint,
    ),
    CascadeRule(
        name="analyzer",
        applies=lambda i: (
            not i.reports.instructor.hide_correctness and not i.suppressed(Stage.ANALYZER)
        ),
        produce=_analyzer,
    ),
    CascadeRule(
        name="student",
        applies=lambda i: (
            not i.reports.instructor.hide_correctness
            and not i.suppressed(Stage.STUDENT)
            and i.reports.student.failed
        ),
        produce=lambda i: runtime_directive(i.reports.student.error, outcome=Outcome.STUDENT),
    ),
    CascadeRule(
        name="hidden-correctness",
        applies=lambda i: i.reports.instructor.hide_correctness,
        produce=lambda _: no_errors_directive(),
    ),
    CascadeRule(
        name="student-complaints",
        applies=lambda i: not i.suppressed(Stage.INSTRUCTOR) and bool(i.complaints.student),
        produce=lambda i: complaint_directive(i.complaints.student[0]),
    ),
    CascadeRule(
        name="complete",
        applies=lambda i: not i.suppressed(Stage.INSTRUCTOR) and i.reports.instructor.complete,
        produce=_complete,
    ),
    CascadeRule(
        name="fallback",
        applies=lambda _: True,
        produce=_fallback,
    ),
)


def arbitrate(
    reports: Reports,
    suppressions: Suppressions | None = None,
) -> FeedbackDirective:
    """Select the single feedback directive for one check cycle.

    Args:
        reports (Reports): The stage reports of the cycle.
        suppressions (Suppressions | None): Session suppression settings; None
            suppresses nothing.

    Returns:
        FeedbackDirective: The directive of the first cascade rule that produced one.
    """
    inp: CascadeInput = CascadeInput.build(reports, suppressions or Suppressions.none())
    for rule in CASCADE:
        if not rule.applies(inp):
            logger.trace("cascade[%s] does not apply", rule.name)
            continue
        directive: FeedbackDirective | None = rule.produce(inp)
        if directive is None:
            logger.trace("cascade[%s] fell through", rule.name)
            continue
        logger.debug(
            "cascade[%s] outcome='%s' category='%s' label='%s'",
            rule.name,
            directive.outcome.value,
            directive.category.value,
            directive.label,
        )
        return directive
    # The fallback rule always produces.
    raise AssertionError("arbitration cascade produced no directive")
