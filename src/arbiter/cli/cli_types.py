# topmark:header:start
#
#   project      : Arbiter
#   file         : cli_types.py
#   file_relpath : src/arbiter/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom Click parameter types for the Arbiter CLI."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, NoReturn, Protocol, TypeVar, cast

import click

from arbiter.reports.model import Stage

if TYPE_CHECKING:

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    ParamTypeBase = click.ParamType

E = TypeVar("E", bound=Enum)


def _fail(message: str, param: click.Parameter | None, ctx: click.Context | None) -> NoReturn:
    raise click.BadParameter(message, param=param, ctx=ctx)


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of an Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> E:
        """Convert a CLI token (case-insensitive value or name) to an enum member."""
        if isinstance(value, self.enum_cls):
            return value
        token: str = str(value).strip().lower()
        for member in self.enum_cls:
            if token in (str(member.value).lower(), member.name.lower()):
                return member
        _fail(
            f"Invalid choice: {value!r}. Choose from: {', '.join(self.choices)}.", param, ctx
        )


class SuppressionParam(ParamTypeBase):
    """Parse ``STAGE`` or ``STAGE:KIND`` into a ``(stage, kind | None)`` pair."""

    name = "suppression"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> tuple[Stage, str | None]:
        """Convert a ``--suppress`` token."""
        if isinstance(value, tuple):
            return cast("tuple[Stage, str | None]", value)
        raw_stage, sep, kind = str(value).partition(":")
        stage: Stage | None = Stage.parse(raw_stage)
        if stage is None:
            _fail(
                f"Unknown stage {raw_stage!r}. Choose from: "
                f"{', '.join(s.value for s in Stage)}.",
                param,
                ctx,
            )
        if sep and not kind.strip():
            _fail(f"Missing issue kind after '{raw_stage}:'.", param, ctx)
        return stage, (kind.strip() if sep else None)
