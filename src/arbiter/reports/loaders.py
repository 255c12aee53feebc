# topmark:header:start
#
#   project      : Arbiter
#   file         : loaders.py
#   file_relpath : src/arbiter/reports/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build `Reports` from JSON-like mappings.

This is the input boundary used by the CLI and by callers that receive
reports over the wire. The expected document shape is::

    {
      "verifier":   {"success": true},
      "parser":     {"success": false, "error": {"type": "ParseError", "args": [...]}},
      "instructor": {"success": true, "complaints": [...], "complete": false,
                     "hide_correctness": false, "filename": "instructor.py",
                     "line_offset": 0, "compliments": []},
      "analyzer":   {"success": true, "issues": {"Undefined variables": [
                        {"name": "x", "position": {"line": 4}}]}},
      "student":    {"success": false, "error": {"type": "NameError", "args": [...],
                     "traceback": [{"filename": "__main__.py", "lineno": 3}]}}
    }

Missing stages are successful, empty reports. Error payloads are mapped to
the closed `ErrorPayload` variants: strings become `TextFailure`, a
``ParseError`` from the parser stage becomes `ParseFailure`, and any other
typed mapping becomes `RuntimeFailure`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from arbiter.config.logging import get_logger
from arbiter.core.errors import ReportFormatError
from arbiter.reports.errors import (
    ParseFailure,
    RuntimeFailure,
    TextFailure,
    TracebackFrame,
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
    StudentReport,
    VerifierReport,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from arbiter.config.logging import ArbiterLogger
    from arbiter.reports.errors import ErrorPayload

logger: ArbiterLogger = get_logger(__name__)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _as_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ReportFormatError(f"{what} must be an object, got {type(value).__name__}")
    return value


def error_from_data(data: Any, *, stage: Stage | None = None) -> ErrorPayload | None:
    """Map a raw error value to an error payload variant.

    Unrecognized shapes degrade to `TextFailure` holding their string form.
    """
    if data is None:
        return None
    if isinstance(data, str):
        return TextFailure(data)
    if not isinstance(data, dict):
        return TextFailure(str(data))
    type_name: Any = data.get("type") or data.get("name")
    raw_args: Any = data.get("args", ())
    args: tuple[object, ...] = (
        tuple(raw_args) if isinstance(raw_args, (list, tuple)) else (raw_args,)
    )
    if not type_name:
        message: Any = data.get("message")
        return TextFailure(str(message) if message is not None else str(data))
    if stage is Stage.PARSER and type_name == "ParseError":
        return ParseFailure(args=args)
    frames: list[TracebackFrame] = []
    for raw_frame in data.get("traceback") or ():
        if isinstance(raw_frame, dict):
            frames.append(
                TracebackFrame(
                    filename=raw_frame.get("filename"),
                    lineno=_as_int(raw_frame.get("lineno")),
                )
            )
    enhanced: Any = data.get("enhanced")
    return RuntimeFailure(
        type_name=str(type_name),
        args=args,
        traceback=tuple(frames),
        enhanced=str(enhanced) if enhanced else None,
    )


def finding_from_data(data: Mapping[str, Any]) -> Finding:
    """Build a finding; nested ``type``/``left``/``right`` objects contribute their ``name``."""

    def _name_of(value: Any) -> str | None:
        if isinstance(value, dict):
            value = value.get("name")
        return None if value is None else str(value)

    position: Mapping[str, Any] = _as_mapping(data.get("position"), "finding position")
    return Finding(
        position=Position(
            line=_as_int(position.get("line")),
            column=_as_int(position.get("column")),
        ),
        name=_name_of(data.get("name")),
        type_name=_name_of(data.get("type")),
        operation=_name_of(data.get("operation")),
        left_type=_name_of(data.get("left")),
        right_type=_name_of(data.get("right")),
    )


def complaint_from_data(data: Mapping[str, Any]) -> Complaint:
    priority: Any = data.get("priority")
    return Complaint(
        name=str(data.get("name", "")),
        message=str(data.get("message", "")),
        line=_as_int(data.get("line")),
        priority=str(priority) if priority else ComplaintPriority.MEDIUM.value,
    )


def _success(data: Mapping[str, Any]) -> bool:
    return bool(data.get("success", True))


def reports_from_data(data: Any) -> Reports:
    """Build the report bundle of one check cycle.

    Args:
        data (Any): Decoded JSON document, keyed by stage name.

    Returns:
        Reports: The bundle.

    Raises:
        ReportFormatError: If the document or one of its stage entries is not an object.
    """
    root: Mapping[str, Any] = _as_mapping(data, "report bundle")
    by_stage: dict[Stage, Mapping[str, Any]] = {}
    for key, value in root.items():
        stage: Stage | None = Stage.parse(str(key))
        if stage is None or stage is Stage.NO_ERRORS:
            logger.warning("Ignoring unknown report stage '%s'", key)
            continue
        by_stage[stage] = _as_mapping(value, f"'{key}' report")

    def _error(stage: Stage) -> ErrorPayload | None:
        return error_from_data(by_stage.get(stage, {}).get("error"), stage=stage)

    verifier = by_stage.get(Stage.VERIFIER, {})
    parser = by_stage.get(Stage.PARSER, {})
    instructor = by_stage.get(Stage.INSTRUCTOR, {})
    analyzer = by_stage.get(Stage.ANALYZER, {})
    student = by_stage.get(Stage.STUDENT, {})

    issues: dict[str, tuple[Finding, ...]] = {}
    for kind, findings in _as_mapping(analyzer.get("issues"), "analyzer issues").items():
        if not isinstance(findings, list):
            raise ReportFormatError(f"findings for '{kind}' must be a list")
        issues[str(kind)] = tuple(
            finding_from_data(_as_mapping(f, f"finding of '{kind}'")) for f in findings
        )

    # Older feedback engines name the collection "complaint".
    raw_complaints: Any = instructor.get("complaints", instructor.get("complaint")) or []
    complaints: tuple[Complaint, ...] = tuple(
        complaint_from_data(_as_mapping(c, "complaint")) for c in raw_complaints
    )

    reports = Reports(
        verifier=VerifierReport(success=_success(verifier), error=_error(Stage.VERIFIER)),
        parser=ParserReport(success=_success(parser), error=_error(Stage.PARSER)),
        instructor=InstructorReport(
            success=_success(instructor),
            error=_error(Stage.INSTRUCTOR),
            complaints=complaints,
            compliments=tuple(str(c) for c in instructor.get("compliments") or ()),
            complete=bool(instructor.get("complete", False)),
            hide_correctness=bool(instructor.get("hide_correctness", False)),
            filename=instructor.get("filename"),
            line_offset=_as_int(instructor.get("line_offset")) or 0,
        ),
        analyzer=AnalyzerReport(
            success=_success(analyzer), error=_error(Stage.ANALYZER), issues=issues
        ),
        student=StudentReport(success=_success(student), error=_error(Stage.STUDENT)),
    )
    logger.trace("Loaded reports: %r", reports)
    return reports
