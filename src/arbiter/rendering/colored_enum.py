# topmark:header:start
#
#   project      : Arbiter
#   file         : colored_enum.py
#   file_relpath : src/arbiter/rendering/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Color-aware string enum.

`ColoredStrEnum` stores a plain string value and, separately, a colorizer
(in practice a `yachalk` style). The value stays a scalar string so that
equality, hashing and JSON output behave like any other `str` enum, while
terminal emitters can call ``member.color(text)``.

Example:
    ```python
    from yachalk import chalk

    class Category(ColoredStrEnum):
        SYNTAX = ("syntax", chalk.red)
        SUCCESS = ("success", chalk.green)

    print(Category.SYNTAX.value)           # 'syntax'
    print(Category.SYNTAX.color("oops"))   # red "oops"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """Callable that decorates a string for display.

    Compatible with `yachalk.ChalkBuilder.__call__`.
    """

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Return the arguments joined by ``sep`` and decorated for display."""
        ...


class ColoredStrEnum(str, Enum):
    """Enum whose value is a string and that carries an associated colorizer."""

    _value_: str
    _color: Colorizer

    def __new__(cls, text: str, color: Colorizer) -> ColoredStrEnum:
        """Construct a colored enum member.

        Args:
            text (str): The textual value of the member.
            color (Colorizer): Callable used to colorize text for display.

        Returns:
            ColoredStrEnum: The newly constructed member.
        """
        obj: ColoredStrEnum = str.__new__(cls, text)
        obj._value_ = text
        obj._color = color
        return obj

    def __str__(self) -> str:
        return self._value_

    @property
    def color(self) -> Colorizer:
        """Return the colorizer associated with this member."""
        return self._color
