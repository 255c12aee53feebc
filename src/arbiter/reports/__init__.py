# topmark:header:start
#
#   project      : Arbiter
#   file         : __init__.py
#   file_relpath : src/arbiter/reports/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stage reports consumed by the arbitration engine.

Reports are produced once per check cycle by the external analysis stages
(verifier, parser, instructor feedback script, analyzer, student run) and
are immutable inputs to a single `arbiter.arbitrate` call.
"""

from __future__ import annotations

from arbiter.reports.errors import (
    ErrorPayload,
    ParseFailure,
    RuntimeFailure,
    TextFailure,
    TracebackFrame,
    pretty_print_error,
)
from arbiter.reports.model import (
    AnalyzerReport,
    Complaint,
    ComplaintPriority,
    Finding,
    InstructorReport,
    ParserReport,
    Position,
    Reports,
    Stage,
    StageReport,
    StudentReport,
    VerifierReport,
)

__all__ = [
    "AnalyzerReport",
    "Complaint",
    "ComplaintPriority",
    "ErrorPayload",
    "Finding",
    "InstructorReport",
    "ParseFailure",
    "ParserReport",
    "Position",
    "Reports",
    "RuntimeFailure",
    "Stage",
    "StageReport",
    "StudentReport",
    "TextFailure",
    "TracebackFrame",
    "VerifierReport",
    "pretty_print_error",
]
