# topmark:header:start
#
#   project      : Arbiter
#   file         : enum_mixins.py
#   file_relpath : src/arbiter/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Keyed string enums for Arbiter's closed vocabularies.

Stages, complaint priorities and outcome tags all travel through JSON report
bundles and TOML configuration as plain strings. `KeyedStrEnum` keeps the
stable machine key as the enum value, attaches a human label, and parses the
loose spellings found in real inputs ("No Errors", "no-errors", "no_errors").

Example:
    ```python
    class Stage(KeyedStrEnum):
        PARSER = ("parser", "Parser")
        NO_ERRORS = ("no errors", "No errors", ("no-errors",))

    assert Stage.parse("No_Errors") is Stage.NO_ERRORS
    assert Stage.PARSER.label == "Parser"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

_KS = TypeVar("_KS", bound="KeyedStrEnum")


def _norm_token(s: str) -> str:
    """Normalize an identifier-like string to match keys and aliases."""
    return s.strip().lower().replace("-", "_").replace(" ", "_")


class KeyedStrEnum(str, Enum):
    """Enum where `.value` is a stable machine key; metadata lives on attributes.

    Attributes:
        label (str): Human-readable label for the member.
        aliases (tuple[str, ...]): Alternative tokens accepted by `parse()`.
    """

    label: str
    aliases: tuple[str, ...]

    def __new__(
        cls: type[_KS],
        key: str,
        label: str,
        aliases: Iterable[str] = (),
    ) -> _KS:
        """Create a member with key, label, and optional aliases.

        Args:
            key (str): The stable machine key (stored as `.value`).
            label (str): The human-readable label.
            aliases (Iterable[str]): Optional aliases for parsing.

        Returns:
            _KS: The newly created enum member.
        """
        obj: _KS = str.__new__(cls, key)
        obj._value_ = key
        obj.label = label
        obj.aliases = tuple(aliases)
        return obj

    def __str__(self) -> str:
        return str(self.value)

    @property
    def key(self) -> str:
        """Stable machine key (same as `.value`)."""
        return str(self.value)

    @classmethod
    def parse(cls: type[_KS], raw: str | None) -> _KS | None:
        """Parse a token into an enum member, or None when it is unknown.

        Matches the key, the member name and the aliases; matching is
        case-insensitive and treats '-', ' ' and '_' alike.
        """
        if raw is None:
            return None
        token: str = _norm_token(raw)

        for m in cls:
            if token in (_norm_token(m.value), _norm_token(m.name)):
                return m
            if any(token == _norm_token(a) for a in m.aliases):
                return m
        return None
