"""Data models for commands, flags and plugins."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

__all__ = ["FLAG_TYPES", "Command", "Flag", "Plugin"]

FLAG_TYPES = ("boolean", "option")


@dataclass
class Flag:
    """A command-line flag as declared by a command."""

    type: str  # "boolean" or "option"
    summary: str = ""
    description: str = ""
    char: str | None = None  # short form, eg: "f" for -f
    options: list[str] | None = None  # closed set of accepted values
    multiple: bool = False  # option may be repeated
    hidden: bool = False

    @classmethod
    def boolean(cls, summary: str = "", **kwargs: object) -> Flag:
        """Declare a flag taking no value."""
        return cls(type="boolean", summary=summary, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def option(cls, summary: str = "", **kwargs: object) -> Flag:
        """Declare a flag taking a value."""
        return cls(type="option", summary=summary, **kwargs)  # type: ignore[arg-type]


class Command:
    """Base class for application commands.

    Subclasses describe themselves through class attributes::

        class Deploy(Command):
            id = "apps:deploy"
            summary = "Deploy an application"
            aliases = ["deploy"]
            flags = {"force": Flag.boolean("Skip confirmation", char="f")}
    """

    id: ClassVar[str] = ""
    summary: ClassVar[str | None] = None
    description: ClassVar[str | None] = None
    hidden: ClassVar[bool] = False
    aliases: ClassVar[list[str]] = []
    flags: ClassVar[dict[str, Flag]] = {}


@dataclass
class Plugin:
    """A named group of commands, in declaration order."""

    name: str
    commands: list[type[Command]] = field(default_factory=list)
