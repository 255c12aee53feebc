# topmark:header:start
#
#   project      : Arbiter
#   file         : normalize.py
#   file_relpath : src/arbiter/feedback/normalize.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Turn raw parse and runtime error payloads into student-facing explanations.

Both normalizers are total: a malformed payload degrades to a best-effort
text (the pretty-printed error) and a missing line, never to an exception,
because arbitration must always produce a directive.

Runtime errors are explained by the first tier that applies:

1. a syntax error surfaced at runtime (``ParseError``), with its own line
   and code excerpt;
2. the incomplete-block placeholder (``___``) used as a name;
3. the `EXTENDED_ERROR_EXPLANATION` table, keyed by error type name;
4. the explanation already attached to the payload (``enhanced``);
5. the pretty-printed error itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from arbiter.config.logging import get_logger
from arbiter.constants import INCOMPLETE_BLOCK_NAME_ERROR
from arbiter.reports.errors import (
    ParseFailure,
    RuntimeFailure,
    TextFailure,
    pretty_print_error,
)

if TYPE_CHECKING:
    from arbiter.config.logging import ArbiterLogger
    from arbiter.reports.errors import ErrorPayload, TracebackFrame

logger: ArbiterLogger = get_logger(__name__)


SYNTAX_ERROR_TITLE: Final[str] = "Syntax Error"

PARSE_ERROR_INTRO: Final[str] = (
    "While attempting to process your Python code, I found a syntax error. "
    "In other words, your Python code has a mistake in it (e.g., misspelled a keyword, "
    "bad indentation, unnecessary symbol). You should check to make sure that you have "
    "written all of your code correctly. To me, it looks like the problem is on line "
)

RUNTIME_PARSE_ERROR_INTRO: Final[str] = (
    "While attempting to convert the Python code into blocks, I found a syntax error. "
    "In other words, your Python code has a spelling or grammatical mistake. You should "
    "check to make sure that you have written all of your code correctly. To me, it looks "
    "like the problem is on line "
)

INCOMPLETE_BLOCKS_EXPLANATION: Final[str] = (
    "You have incomplete blocks. Make sure that you do not have any dangling blocks or "
    "blocks that are connected incorrectly.\n\n"
    "If you look at the text view of your Python code, you'll see `___` in the code. "
    "The converter will create these `___` to show that you have a block that's missing "
    "a piece."
)

EXTENDED_ERROR_EXPLANATION: Final[dict[str, str]] = {
    "ParseError": (
        "A parse error means that Python does not understand the syntax on the line the "
        "error message points out. Common examples are forgetting commas between "
        "arguments or forgetting a colon at the end of a statement."
    ),
    "SyntaxError": (
        "A syntax error means that Python does not understand the syntax on the line the "
        "error message points out. Common examples are forgetting commas between "
        "arguments or forgetting a colon at the end of a statement."
    ),
    "TypeError": (
        "A type error occurs when you use an operation on a value of the wrong type. "
        "For example, you cannot add a number to a string, or call a list as if it were "
        "a function. Check the types of the values used on that line."
    ),
    "NameError": (
        "A name error almost always means that you have used a variable before it has a "
        "value. Often this may be a simple typo, so check the spelling carefully."
    ),
    "ValueError": (
        "A value error occurs when you pass a value of the right type but with an "
        "inappropriate value, such as converting the text \"hello\" into a number."
    ),
    "AttributeError": (
        "An attribute error means that you tried to use a method or attribute that the "
        "value does not have. Check the spelling of the attribute and the type of the "
        "value before the dot."
    ),
    "TokenError": (
        "Most of the time, a token error means that you have forgotten a closing "
        "parenthesis, bracket or quote. Look at the lines just before the one reported."
    ),
    "IndexError": (
        "An index error means that you tried to access a position that does not exist. "
        "Remember that lists start at index 0, so the last valid index is one less than "
        "the length."
    ),
    "KeyError": (
        "A key error means that you tried to look up a key that is not in the "
        "dictionary. Check the spelling of the key, including its capitalization."
    ),
    "ZeroDivisionError": (
        "A zero division error means that you divided a number by zero. Check the value "
        "of the divisor before dividing."
    ),
    "IndentationError": (
        "An indentation error means that the lines of a block are not lined up "
        "correctly. Every line inside the same block must start at the same column."
    ),
    "ImportError": (
        "An import error means that the module you tried to import does not exist or is "
        "not available here. Check the spelling of the module name."
    ),
    "RecursionError": (
        "A recursion error means that a function kept calling itself without ever "
        "stopping. Make sure your function has a base case that is eventually reached."
    ),
    "TimeoutError": (
        "A timeout error means that your program ran for too long. Look for a loop that "
        "never ends, or for a loop that does much more work than needed."
    ),
}


@dataclass(frozen=True)
class NormalizedParseError:
    """Parse error ready for display."""

    title: str
    original_text: str
    message: str
    line: int | None


@dataclass(frozen=True)
class NormalizedRuntimeError:
    """Runtime error ready for display."""

    title: str
    original_text: str
    body: str
    line: int | None


def _arg(args: tuple[object, ...], index: int) -> object | None:
    return args[index] if len(args) > index else None


def _as_line(value: object | None) -> int | None:
    """Return ``value`` as a line number, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _excerpt_suffix(excerpt: object | None) -> str:
    if excerpt is None or str(excerpt).strip() == "":
        return "."
    return f", where it says:\n    {excerpt}"


def _line_text(line: int | None) -> str:
    return "an unknown line" if line is None else str(line)


def normalize_parse_error(raw: ErrorPayload | None) -> NormalizedParseError:
    """Extract the line and code excerpt of a parser error.

    The parser's argument list is ``(message, filename, line, details, excerpt)``;
    the excerpt is appended to the explanation when present.

    Args:
        raw (ErrorPayload | None): The failed parser report's error.

    Returns:
        NormalizedParseError: Title, original text, explanation and best-effort line.
    """
    original: str = pretty_print_error(raw)
    args: tuple[object, ...] = raw.args if isinstance(raw, (ParseFailure, RuntimeFailure)) else ()
    line: int | None = _as_line(_arg(args, 2))
    excerpt: object | None = _arg(args, 4)
    if not args:
        logger.debug("Parse error without argument list: %r", raw)
    message: str = PARSE_ERROR_INTRO + _line_text(line) + _excerpt_suffix(excerpt)
    return NormalizedParseError(
        title=SYNTAX_ERROR_TITLE,
        original_text=original,
        message=message,
        line=line,
    )


def _runtime_parse_excerpt(args: tuple[object, ...]) -> object | None:
    details: object | None = _arg(args, 3)
    if isinstance(details, (list, tuple)) and len(details) > 2:
        return details[2]
    return None


def _explain_runtime(error: RuntimeFailure) -> tuple[str, int | None]:
    """Return the explanation text and, for runtime parse errors, their own line."""
    args: tuple[object, ...] = error.args
    if error.type_name == "ParseError":
        line: int | None = _as_line(_arg(args, 2))
        body: str = (
            RUNTIME_PARSE_ERROR_INTRO
            + _line_text(line)
            + _excerpt_suffix(_runtime_parse_excerpt(args))
        )
        return body, line
    if error.type_name == "NameError" and _arg(args, 0) == INCOMPLETE_BLOCK_NAME_ERROR:
        return INCOMPLETE_BLOCKS_EXPLANATION, None
    if error.type_name in EXTENDED_ERROR_EXPLANATION:
        return EXTENDED_ERROR_EXPLANATION[error.type_name], None
    if error.enhanced:
        return error.enhanced, None
    return pretty_print_error(error), None


def normalize_runtime_error(raw: ErrorPayload | None) -> NormalizedRuntimeError:
    """Explain a failed execution and locate it in the source.

    The line comes from the first traceback frame when there is one. A
    syntax error surfaced at runtime carries its own line, used when the
    traceback is empty.

    Args:
        raw (ErrorPayload | None): The failed execution's error.

    Returns:
        NormalizedRuntimeError: Title, original text, explanation and best-effort line.
    """
    original: str = pretty_print_error(raw)
    match raw:
        case RuntimeFailure():
            body, own_line = _explain_runtime(raw)
            frame: TracebackFrame | None = raw.first_frame
            line: int | None = _as_line(frame.lineno) if frame is not None else None
            return NormalizedRuntimeError(
                title=raw.type_name,
                original_text=original,
                body=body,
                line=line if line is not None else own_line,
            )
        case ParseFailure():
            parsed: NormalizedParseError = normalize_parse_error(raw)
            return NormalizedRuntimeError(
                title=SYNTAX_ERROR_TITLE,
                original_text=original,
                body=parsed.message,
                line=parsed.line,
            )
        case TextFailure():
            return NormalizedRuntimeError(
                title="Error", original_text=original, body=original, line=None
            )
    logger.debug("Runtime error without payload: %r", raw)
    return NormalizedRuntimeError(title="Error", original_text=original, body=original, line=None)
