# topmark:header:start
#
#   project      : Arbiter
#   file         : model.py
#   file_relpath : src/arbiter/reports/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable stage reports and their building blocks.

Sections:
    * Stage: closed vocabulary of analysis stages (and the ``no errors``
      suppression key).
    * ComplaintPriority: priority buckets for instructor complaints, with a
      fixed total order.
    * Complaint / Position / Finding: per-report payload items.
    * VerifierReport, ParserReport, InstructorReport, AnalyzerReport,
      StudentReport: one report per stage.
    * Reports: the bundle handed to `arbiter.arbitrate`.

Line numbers in reports are 1-based. Translation to an editor's 0-based
convention happens only at the presentation boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from arbiter.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from collections.abc import Mapping

    from arbiter.reports.errors import ErrorPayload


class Stage(KeyedStrEnum):
    """Analysis stages, in the order they run during a check cycle.

    ``NO_ERRORS`` is not a stage that produces a report; it is the key that
    suppresses the final "no errors" fallback.
    """

    VERIFIER = ("verifier", "Verifier")
    PARSER = ("parser", "Parser")
    INSTRUCTOR = ("instructor", "Instructor")
    ANALYZER = ("analyzer", "Analyzer")
    STUDENT = ("student", "Student")
    NO_ERRORS = ("no errors", "No errors")


class ComplaintPriority(KeyedStrEnum):
    """Priority buckets for instructor complaints, highest precedence first.

    ``VERIFIER`` complaints are surfaced right after the verifier stage;
    ``STUDENT`` complaints are gentle hints surfaced only once the program
    ran cleanly. The remaining tags rank general complaints.
    """

    VERIFIER = ("verifier", "Verifier")
    HIGH = ("high", "High")
    MEDIUM = ("medium", "Medium")
    LOW = ("low", "Low")
    STUDENT = ("student", "Student")

    @property
    def rank(self) -> int:
        """Position of this tag in the total order (0 sorts first)."""
        return list(type(self)).index(self)


def priority_rank(priority: str | None) -> int:
    """Return the sort rank of a raw priority tag.

    Unknown tags rank after every known tag.
    """
    known: ComplaintPriority | None = ComplaintPriority.parse(priority)
    if known is None:
        return len(ComplaintPriority)
    return known.rank


@dataclass(frozen=True)
class Complaint:
    """Message proposed by instructor-authored feedback code."""

    name: str
    message: str
    line: int | None = None
    priority: str = ComplaintPriority.MEDIUM.value

    @property
    def rank(self) -> int:
        return priority_rank(self.priority)

    def has_priority(self, priority: ComplaintPriority) -> bool:
        """Return True if this complaint is tagged with ``priority``."""
        return ComplaintPriority.parse(self.priority) is priority


@dataclass(frozen=True)
class Position:
    """Source position of a finding."""

    line: int | None = None
    column: int | None = None


@dataclass(frozen=True)
class Finding:
    """Structured fact recorded by the analyzer for one issue kind.

    Which optional fields are filled depends on the issue kind: variable
    issues carry ``name`` (and sometimes ``type_name``), incompatible-type
    issues carry ``operation``, ``left_type`` and ``right_type``.
    """

    position: Position = field(default_factory=Position)
    name: str | None = None
    type_name: str | None = None
    operation: str | None = None
    left_type: str | None = None
    right_type: str | None = None

    @property
    def line(self) -> int | None:
        return self.position.line


@dataclass(frozen=True)
class StageReport:
    """Outcome of one stage: success flag plus an error payload on failure."""

    success: bool = True
    error: ErrorPayload | None = None

    @property
    def failed(self) -> bool:
        return not self.success


@dataclass(frozen=True)
class VerifierReport(StageReport):
    """Block-validity check; fails on an empty or invalid program."""


@dataclass(frozen=True)
class ParserReport(StageReport):
    """Syntax parse of the student's code."""


@dataclass(frozen=True)
class StudentReport(StageReport):
    """Execution of the student's own program."""


@dataclass(frozen=True)
class InstructorReport(StageReport):
    """Result of running the instructor-authored feedback script.

    Attributes:
        complaints (tuple[Complaint, ...]): Complaints in the order they were raised.
        compliments (tuple[str, ...]): Positive remarks (never arbitrated).
        complete (bool): Whether the script marked the problem as solved.
        hide_correctness (bool): Whether correctness feedback must be withheld.
        filename (str | None): File name the instructor script runs under.
        line_offset (int): Lines prepended to the instructor script before it ran.
    """

    complaints: tuple[Complaint, ...] = ()
    compliments: tuple[str, ...] = ()
    complete: bool = False
    hide_correctness: bool = False
    filename: str | None = None
    line_offset: int = 0


@dataclass(frozen=True)
class AnalyzerReport(StageReport):
    """Static analysis findings grouped by issue kind name."""

    issues: Mapping[str, tuple[Finding, ...]] = field(default_factory=lambda: {})

    def findings(self, kind: str) -> tuple[Finding, ...]:
        """Return the findings recorded for ``kind`` (empty when absent)."""
        return tuple(self.issues.get(kind, ()))


@dataclass(frozen=True)
class Reports:
    """The five stage reports of one check cycle.

    A report that a caller does not provide is a successful, empty report.
    """

    verifier: VerifierReport = field(default_factory=VerifierReport)
    parser: ParserReport = field(default_factory=ParserReport)
    instructor: InstructorReport = field(default_factory=InstructorReport)
    analyzer: AnalyzerReport = field(default_factory=AnalyzerReport)
    student: StudentReport = field(default_factory=StudentReport)
