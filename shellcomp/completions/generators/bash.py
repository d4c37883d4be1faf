"""Bash completion script generator.

Bash completion is name-only: commands and the long names of their public
flags, without values or descriptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import TopicStyle
from .bash_templates import BASH_COLON_TEMPLATE, BASH_SPACES_TEMPLATE

if TYPE_CHECKING:
    from ..models import CommandDescriptor, CommandModel

__all__ = ["bash_commands_with_flags_list", "generate_bash"]

TEMPLATES = {
    TopicStyle.COLON: BASH_COLON_TEMPLATE,
    TopicStyle.SPACE: BASH_SPACES_TEMPLATE,
}


def _public_flags(command: CommandDescriptor) -> str:
    return " ".join(f"--{name}" for name, _ in command.public_flags())


def bash_commands_with_flags_list(commands: CommandModel) -> str:
    """Return one `<id> <--flag ...>` line per command.

    The space after the id is kept when the command has no public flag.
    """
    return "\n".join(f"{command.id} {_public_flags(command).strip()}" for command in commands)


def generate_bash(commands: CommandModel, cli_bin: str, style: TopicStyle = TopicStyle.COLON) -> str:
    """Generate the bash completion function.

    Args:
        commands: The command model
        cli_bin: Name of the completed binary
        style: Topic separator style, selects the template

    Returns:
        The content of the `<cli_bin>.bash` file
    """
    return TEMPLATES[style].replace("<CLI_BIN>", cli_bin).replace("<BASH_COMMANDS_WITH_FLAGS_LIST>", bash_commands_with_flags_list(commands))
