"""Fish completion script generator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import CommandDescriptor, CommandModel, FlagDescriptor

__all__ = ["generate_fish"]


def _helpers(cli_bin: str) -> str:
    return f"""
function __fish_{cli_bin}_needs_command
  set cmd (commandline -opc)
  if [ (count $cmd) -eq 1 ]
    return 0
  else
    return 1
  end
end

function __fish_{cli_bin}_using_command
  set cmd (commandline -opc)
  if [ (count $cmd) -gt 1 ]
    if [ $argv[1] = $cmd[2] ]
      return 0
    end
  end
  return 1
end"""


def _flag_directive(cli_bin: str, command: CommandDescriptor, name: str, flag: FlagDescriptor) -> str:
    parts = [f"complete -f -c {cli_bin} -n '__fish_{cli_bin}_using_command {command.id}' -l {name}"]
    if flag.short_form:
        parts.append(f"-s {flag.short_form}")
    if flag.allowed_values:
        parts.append(f'-r -a "{" ".join(flag.allowed_values)}"')
    if flag.description:
        parts.append(f'-d "{flag.description}"')
    return " ".join(parts)


def generate_fish(commands: CommandModel, cli_bin: str) -> str:
    """Generate the fish completion file.

    Args:
        commands: The command model
        cli_bin: Name of the completed binary

    Returns:
        The content of the `<cli_bin>.fish` file
    """
    completions = [_helpers(cli_bin)]
    for command in commands:
        completions.append(f"complete -f -c {cli_bin} -n '__fish_{cli_bin}_needs_command' -a {command.id} -d \"{command.description}\"")
        completions.extend(_flag_directive(cli_bin, command, name, flag) for name, flag in command.public_flags())
    return "\n".join(completions)
