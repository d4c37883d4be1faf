"""Command classes declared in TOML.

A manifest describes commands without Python code::

    [commands."apps:deploy"]
    summary = "Deploy an application"
    aliases = ["deploy"]

    [commands."apps:deploy".flags.force]
    type = "boolean"
    char = "f"

Values are copied as found: validation happens when the completion model
is built, so that one malformed entry only costs that command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .models import Command, Flag

if TYPE_CHECKING:
    from ..config import Configuration

__all__ = ["commands_from_manifest", "make_command", "make_flag"]

_FLAG_FIELDS = ("summary", "description", "char", "options", "multiple", "hidden")


def make_flag(table: dict[str, Any]) -> Flag:
    """Build a Flag from a TOML table, ignoring unknown keys."""
    return Flag(type=table.get("type", ""), **{key: table[key] for key in _FLAG_FIELDS if key in table})


def make_command(command_id: str, table: dict[str, Any]) -> type[Command]:
    """Build a Command subclass from a TOML table."""
    flags = table.get("flags", {})
    attrs = {
        "id": command_id,
        "summary": table.get("summary"),
        "description": table.get("description"),
        "hidden": table.get("hidden", False),
        "aliases": table.get("aliases", []),
        "flags": (
            {name: make_flag(value) if isinstance(value, dict) else value for name, value in flags.items()}
            if isinstance(flags, dict)
            else flags
        ),
    }
    class_name = "".join(part.capitalize() for part in command_id.replace(" ", ":").replace(".", ":").split(":"))
    return type(f"{class_name or 'Anonymous'}Command", (Command,), attrs)


def commands_from_manifest(config: Configuration) -> list[type[Command]]:
    """Return the commands declared under `[commands]`, in file order."""
    section = config.section("commands")
    commands: list[type[Command]] = []
    for command_id, table in section.items():
        if not isinstance(table, dict):
            config.log.warning("Ignoring commands.%s: expected a table, got %r", command_id, table)
            continue
        commands.append(make_command(command_id, table))
    return commands
