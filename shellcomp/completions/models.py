"""Data models for shell completions.

The completion model is an immutable snapshot of the registry: generators
only ever see these types, never the live Command classes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

__all__ = [
    "CommandDescriptor",
    "CommandModel",
    "FlagDescriptor",
    "FlagKind",
    "ModelSnapshot",
    "SkippedCommand",
    "TopicStyle",
]


class FlagKind(StrEnum):
    """Whether a flag takes a value."""

    BOOLEAN = "boolean"
    VALUED = "valued"


class TopicStyle(StrEnum):
    """How users type hierarchical commands: `a:b` or `a b`."""

    COLON = "colon"
    SPACE = "space"


@dataclass(frozen=True)
class FlagDescriptor:
    """Completion spec for one flag. `description` is already sanitized."""

    kind: FlagKind
    description: str = ""
    hidden: bool = False
    multiple: bool = False  # valued flags only
    short_form: str | None = None
    allowed_values: tuple[str, ...] | None = None


@dataclass(frozen=True)
class CommandDescriptor:
    """Completion spec for one command id (aliases get their own descriptor)."""

    id: str
    description: str = ""
    flags: Mapping[str, FlagDescriptor] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))

    def public_flags(self) -> list[tuple[str, FlagDescriptor]]:
        """Return the (name, flag) pairs that may appear in a script."""
        return [(name, flag) for name, flag in self.flags.items() if not flag.hidden]


CommandModel = tuple[CommandDescriptor, ...]


@dataclass(frozen=True)
class SkippedCommand:
    """A registry command left out of the model."""

    id: str
    reason: str


@dataclass(frozen=True)
class ModelSnapshot:
    """Result of building the model: usable commands plus what was skipped."""

    commands: CommandModel = ()
    skipped: tuple[SkippedCommand, ...] = ()

    @property
    def ids(self) -> frozenset[str]:
        """All command ids in the snapshot."""
        return frozenset(command.id for command in self.commands)
