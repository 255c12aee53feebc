# topmark:header:start
#
#   project      : Arbiter
#   file         : errors.py
#   file_relpath : src/arbiter/reports/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error payloads carried by failed stage reports.

A failed stage attaches one of three payload shapes, one per origin:

- `ParseFailure`: the parser's raw argument list
  (message, filename, line, column/excerpt details, excerpt).
- `RuntimeFailure`: an exception raised while executing code, with its type
  name, arguments, traceback frames and optional pre-computed explanation.
- `TextFailure`: anything else, kept as plain text.

Normalizers pattern-match on these classes instead of sniffing loose shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TracebackFrame:
    """One frame of a runtime traceback (innermost frame first)."""

    filename: str | None = None
    lineno: int | None = None


@dataclass(frozen=True)
class ParseFailure:
    """Syntax error reported by the parser stage."""

    args: tuple[object, ...] = ()

    @property
    def type_name(self) -> str:
        return "ParseError"


@dataclass(frozen=True)
class RuntimeFailure:
    """Exception raised while running student or instructor code.

    Attributes:
        type_name (str): Exception class name, e.g. ``"TypeError"``.
        args (tuple[object, ...]): Exception arguments, first one usually the message.
        traceback (tuple[TracebackFrame, ...]): Frames, the first one is where the
            failure surfaced.
        enhanced (str | None): Explanatory text already attached by the runtime.
    """

    type_name: str
    args: tuple[object, ...] = ()
    traceback: tuple[TracebackFrame, ...] = ()
    enhanced: str | None = None

    @property
    def first_frame(self) -> TracebackFrame | None:
        """Return the first traceback frame, if any."""
        return self.traceback[0] if self.traceback else None


@dataclass(frozen=True)
class TextFailure:
    """Opaque failure known only by its text."""

    text: str


ErrorPayload = Union[ParseFailure, RuntimeFailure, TextFailure]


def pretty_print_error(error: ErrorPayload | None) -> str:
    """Render an error payload as the "original error" text shown to users.

    Text payloads pass through unchanged; structured payloads render as
    ``"<type>: <message>"``. Never raises.
    """
    match error:
        case None:
            return ""
        case TextFailure(text=text):
            return text
        case ParseFailure() | RuntimeFailure():
            message: object = error.args[0] if error.args else ""
            return f"{error.type_name}: {message}"
    return str(error)
