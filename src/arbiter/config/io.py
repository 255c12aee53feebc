# topmark:header:start
#
#   project      : Arbiter
#   file         : io.py
#   file_relpath : src/arbiter/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load suppression configuration from TOML.

Two file shapes are supported:

- ``arbiter.toml`` with a top-level ``[suppress]`` table, and
- ``pyproject.toml`` with ``[tool.arbiter.suppress]``.

Parsing is done with `tomlkit` and unwrapped to plain Python values before
validation by `MutableSuppressions.from_mapping`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from arbiter.config.keys import Toml
from arbiter.config.logging import get_logger
from arbiter.config.model import MutableSuppressions
from arbiter.constants import PYPROJECT_TOML_NAME
from arbiter.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from arbiter.config.logging import ArbiterLogger

logger: ArbiterLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> dict[str, Any]:
    """Read a TOML file and return its content as plain Python values.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    logger.debug("Loaded TOML config from %s", path)
    return doc.unwrap()


def extract_suppress_table(data: dict[str, Any], *, pyproject: bool) -> dict[str, Any]:
    """Return the ``suppress`` table of a parsed config document (empty if absent).

    Raises:
        ConfigError: If the table exists but is not a table.
    """
    root: Any = data
    if pyproject:
        root = data.get(Toml.SECTION_TOOL, {}).get(Toml.SECTION_ARBITER, {})
    table: Any = root.get(Toml.SECTION_SUPPRESS, {}) if isinstance(root, dict) else {}
    if not isinstance(table, dict):
        raise ConfigError(f"[{Toml.SECTION_SUPPRESS}] must be a table")
    return table


def load_suppressions(path: Path) -> MutableSuppressions:
    """Load suppression settings from an ``arbiter.toml`` or ``pyproject.toml`` file.

    Args:
        path (Path): The configuration file.

    Returns:
        MutableSuppressions: Builder holding the file's settings; call `freeze()`
        before arbitrating.

    Raises:
        ConfigError: If the file is unreadable, not TOML, or holds invalid values.
    """
    data: dict[str, Any] = load_toml_dict(path)
    table: dict[str, Any] = extract_suppress_table(
        data, pyproject=path.name == PYPROJECT_TOML_NAME
    )
    return MutableSuppressions.from_mapping(table)


def suppressions_to_toml(suppressions: MutableSuppressions) -> str:
    """Render suppression settings as an ``arbiter.toml`` document."""
    doc: tomlkit.TOMLDocument = tomlkit.document()
    table = tomlkit.table()
    for key, value in suppressions.stages.items():
        if isinstance(value, dict):
            kinds = tomlkit.inline_table()
            kinds.update(value)
            table.add(key, kinds)
        else:
            table.add(key, value)
    doc.add(Toml.SECTION_SUPPRESS, table)
    return tomlkit.dumps(doc)
