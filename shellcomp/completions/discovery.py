"""Completion model discovery.

Snapshots the live command registry into an immutable `ModelSnapshot`.
Each command is read on its own: a command whose metadata cannot be read
is recorded as skipped and the others are still completed.
"""

from __future__ import annotations

from dataclasses import replace
from functools import reduce
from typing import TYPE_CHECKING, Any

from ..commands.models import FLAG_TYPES
from ..config import coerce_to_bool
from ..logging_setup import get_logger
from .models import CommandDescriptor, FlagDescriptor, FlagKind, ModelSnapshot, SkippedCommand
from .sanitize import sanitize_description

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..commands.models import Command
    from ..commands.registry import CommandRegistry

__all__ = ["build_command_model", "describe_command", "describe_flag"]

_READ_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


def _text(summary: Any, description: Any) -> str:
    raw = summary or description or ""
    if not isinstance(raw, str):
        msg = f"description must be a string, got {type(raw).__name__}"
        raise TypeError(msg)
    return sanitize_description(raw)


def describe_flag(name: str, flag: Any) -> FlagDescriptor:
    """Build the descriptor of a flag.

    Raises:
        ValueError: On an unknown flag type or a short form longer than one character
        TypeError: If the accepted values are a single string
        AttributeError: If `flag` does not look like a Flag
    """
    if flag.type not in FLAG_TYPES:
        msg = f"flag {name} has unknown type {flag.type!r}"
        raise ValueError(msg)
    if flag.char is not None and len(flag.char) != 1:
        msg = f"flag {name} short form must be one character, got {flag.char!r}"
        raise ValueError(msg)
    if isinstance(flag.options, str):
        msg = f"flag {name} options must be a list of values"
        raise TypeError(msg)
    is_option = flag.type == "option"
    return FlagDescriptor(
        kind=FlagKind.VALUED if is_option else FlagKind.BOOLEAN,
        description=_text(flag.summary, flag.description),
        hidden=coerce_to_bool(flag.hidden),
        multiple=is_option and coerce_to_bool(flag.multiple),
        short_form=flag.char or None,
        allowed_values=tuple(str(value) for value in flag.options) if flag.options else None,
    )


def describe_command(command: type[Command]) -> list[CommandDescriptor]:
    """Build the descriptors of a visible command: itself, then one per alias.

    Raises:
        AttributeError, KeyError, TypeError, ValueError: On unreadable metadata
    """
    description = _text(command.summary, command.description)
    flags = {name: describe_flag(name, flag) for name, flag in (command.flags or {}).items()}
    aliases = command.aliases or []
    if isinstance(aliases, str):
        msg = "aliases must be a list of ids"
        raise TypeError(msg)
    ids = [command.id, *aliases]
    for command_id in ids:
        if not isinstance(command_id, str) or not command_id.strip():
            msg = f"invalid command id {command_id!r}"
            raise ValueError(msg)
    return [CommandDescriptor(id=command_id, description=description, flags=flags) for command_id in ids]


def _accumulate(snapshot: ModelSnapshot, command: type[Command]) -> ModelSnapshot:
    """Fold step: add the descriptors of `command`, or record why it was skipped."""
    command_id = str(getattr(command, "id", "") or getattr(command, "__name__", repr(command)))
    try:
        if coerce_to_bool(getattr(command, "hidden", False)):
            return snapshot
        descriptors = describe_command(command)
    except _READ_ERRORS as e:
        return replace(snapshot, skipped=(*snapshot.skipped, SkippedCommand(command_id, str(e))))

    known = snapshot.ids
    added: list[CommandDescriptor] = []
    skipped: list[SkippedCommand] = []
    for descriptor in descriptors:
        if descriptor.id in known:
            skipped.append(SkippedCommand(descriptor.id, f"duplicate command id (from {command_id})"))
            continue
        known = known | {descriptor.id}
        added.append(descriptor)
    return ModelSnapshot(commands=(*snapshot.commands, *added), skipped=(*snapshot.skipped, *skipped))


def build_command_model(registry: CommandRegistry | Iterable[type[Command]]) -> ModelSnapshot:
    """Snapshot the visible commands of a registry, in declaration order.

    Args:
        registry: A CommandRegistry or any iterable of Command classes

    Returns:
        The model plus the commands that were skipped and why
    """
    commands = registry.commands() if hasattr(registry, "commands") else registry
    snapshot = reduce(_accumulate, commands, ModelSnapshot())
    log = get_logger("completions")
    for skipped in snapshot.skipped:
        log.warning("Skipping completion for %s: %s", skipped.id, skipped.reason)
    log.debug("%d completion entries, %d skipped", len(snapshot.commands), len(snapshot.skipped))
    return snapshot
