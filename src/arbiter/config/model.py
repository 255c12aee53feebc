# topmark:header:start
#
#   project      : Arbiter
#   file         : model.py
#   file_relpath : src/arbiter/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Suppression configuration model.

A suppression configuration states which stages, and which named issue
kinds within a stage, must never produce a feedback directive. Each stage
entry is either ``True`` (the whole stage is suppressed) or a mapping from
issue-kind name to boolean (fine-grained suppression; the stage itself stays
active). A stage without an entry is not suppressed.

The configuration is split the same way as other Arbiter settings:

- `MutableSuppressions`: builder used while loading and merging sources.
- `Suppressions`: frozen snapshot passed explicitly to each arbitration call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Union

from arbiter.config.logging import get_logger
from arbiter.core.errors import ConfigError
from arbiter.reports.model import Stage

if TYPE_CHECKING:
    from collections.abc import Mapping

    from arbiter.config.logging import ArbiterLogger

logger: ArbiterLogger = get_logger(__name__)

# ``True`` suppresses the stage; a mapping suppresses individual issue kinds.
StageSuppression = Union[bool, "Mapping[str, bool]"]

_EMPTY_KINDS: Mapping[str, bool] = MappingProxyType({})


def _stage_key(stage: Stage | str) -> str:
    """Return the canonical key for a stage name (unknown names pass through)."""
    if isinstance(stage, Stage):
        return stage.value
    known: Stage | None = Stage.parse(stage)
    return known.value if known is not None else stage


@dataclass(frozen=True)
class Suppressions:
    """Immutable suppression settings for one session.

    Use `MutableSuppressions` to build one, or `Suppressions.from_mapping`
    for configuration that is already a plain mapping.
    """

    stages: Mapping[str, StageSuppression] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def none(cls) -> Suppressions:
        """Return a configuration that suppresses nothing."""
        return cls()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Suppressions:
        """Build suppressions from a plain mapping (e.g. JSON or TOML data).

        Raises:
            ConfigError: If a value is neither a boolean nor a mapping of booleans.
        """
        return MutableSuppressions.from_mapping(data).freeze()

    def is_stage_suppressed(self, stage: Stage | str) -> bool:
        """Return True if the whole stage is suppressed."""
        return self.stages.get(_stage_key(stage)) is True

    def kinds(self, stage: Stage | str) -> Mapping[str, bool]:
        """Return the per-kind suppression map of a stage (empty if none)."""
        value: StageSuppression | None = self.stages.get(_stage_key(stage))
        if isinstance(value, bool) or value is None:
            return _EMPTY_KINDS
        return value

    def is_kind_suppressed(self, stage: Stage | str, kind: str) -> bool:
        """Return True if ``kind`` cannot be reported by ``stage``.

        A fully suppressed stage suppresses all of its kinds.
        """
        if self.is_stage_suppressed(stage):
            return True
        return bool(self.kinds(stage).get(kind, False))

    def to_dict(self) -> dict[str, bool | dict[str, bool]]:
        """Return a JSON/TOML-friendly copy of the settings."""
        out: dict[str, bool | dict[str, bool]] = {}
        for key, value in self.stages.items():
            out[key] = value if isinstance(value, bool) else dict(value)
        return out

    def thaw(self) -> MutableSuppressions:
        """Return a mutable copy for editing; the snapshot is left untouched."""
        thawed = MutableSuppressions()
        for key, value in self.stages.items():
            thawed.stages[key] = value if isinstance(value, bool) else dict(value)
        return thawed


@dataclass
class MutableSuppressions:
    """Mutable builder for `Suppressions`.

    Later sources win on merge: a stage set to a boolean replaces whatever
    was configured before; per-kind maps are merged key by key.
    """

    stages: dict[str, bool | dict[str, bool]] = field(default_factory=lambda: {})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> MutableSuppressions:
        """Validate and copy a plain mapping into a builder.

        Raises:
            ConfigError: If a value has an unsupported type.
        """
        built = cls()
        for raw_stage, value in data.items():
            stage_key: str = _stage_key(str(raw_stage))
            if Stage.parse(stage_key) is None:
                logger.warning("Unknown stage in suppression config: '%s'", raw_stage)
            if isinstance(value, bool):
                built.stages[stage_key] = value
                continue
            if not hasattr(value, "items"):
                raise ConfigError(
                    f"Suppression for stage '{raw_stage}' must be a boolean or a table, "
                    f"got {type(value).__name__}"
                )
            kinds: dict[str, bool] = {}
            for kind, flag in value.items():
                if not isinstance(flag, bool):
                    raise ConfigError(
                        f"Suppression for '{raw_stage}.{kind}' must be a boolean, "
                        f"got {type(flag).__name__}"
                    )
                kinds[str(kind)] = flag
            built.stages[stage_key] = kinds
        logger.trace("Suppressions from mapping: %s", built.stages)
        return built

    def suppress_stage(self, stage: Stage | str, suppressed: bool = True) -> MutableSuppressions:
        """Suppress (or explicitly un-suppress) a whole stage."""
        self.stages[_stage_key(stage)] = suppressed
        return self

    def suppress_kind(
        self, stage: Stage | str, kind: str, suppressed: bool = True
    ) -> MutableSuppressions:
        """Suppress a single issue kind of a stage.

        A stage that was suppressed as a whole keeps that setting.
        """
        key: str = _stage_key(stage)
        current: bool | dict[str, bool] | None = self.stages.get(key)
        if current is True:
            logger.debug("Stage '%s' already suppressed; ignoring kind '%s'", key, kind)
            return self
        kinds: dict[str, bool] = current if isinstance(current, dict) else {}
        kinds[kind] = suppressed
        self.stages[key] = kinds
        return self

    def merge_with(self, other: MutableSuppressions) -> MutableSuppressions:
        """Overlay ``other`` on top of this builder (in place)."""
        for key, value in other.stages.items():
            mine: bool | dict[str, bool] | None = self.stages.get(key)
            if isinstance(value, dict) and isinstance(mine, dict):
                mine.update(value)
            else:
                self.stages[key] = dict(value) if isinstance(value, dict) else value
        return self

    def freeze(self) -> Suppressions:
        """Return an immutable snapshot of the current settings."""
        frozen: dict[str, StageSuppression] = {}
        for key, value in self.stages.items():
            frozen[key] = value if isinstance(value, bool) else MappingProxyType(dict(value))
        return Suppressions(stages=MappingProxyType(frozen))
