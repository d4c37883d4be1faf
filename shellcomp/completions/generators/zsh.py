"""Zsh completion script generators.

Two flavors exist: `generate_zsh` for applications whose topics are
separated by colons (`mycli apps:deploy`) and `generate_zsh_spaces` for
space-separated topics (`mycli apps deploy`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import FlagKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..models import CommandDescriptor, CommandModel, FlagDescriptor

__all__ = ["generate_zsh", "generate_zsh_spaces", "zsh_flag_spec"]


def zsh_flag_spec(name: str, flag: FlagDescriptor) -> str:
    """Render one `_arguments` spec.

    `--name[desc]` for booleans, `--name=-[desc]:` for valued flags,
    prefixed with `*` when a valued flag may be repeated.
    """
    if flag.kind == FlagKind.BOOLEAN:
        return f"--{name}[{flag.description}]"
    repeat = "*" if flag.multiple else ""
    return f"{repeat}--{name}=-[{flag.description}]:"


_PATTERN_SPECIALS = frozenset(" \t()|;&<>*?[]\"'$`\\")


def _escape_id(command_id: str) -> str:
    return command_id.replace(":", "\\:")


def _case_pattern(command_id: str) -> str:
    """Backslash the characters a `case` pattern would otherwise interpret."""
    return "".join(f"\\{char}" if char in _PATTERN_SPECIALS else char for char in command_id)


def _colon_key(command_id: str) -> str:
    return command_id.replace(" ", ":")


def _flag_specs(command: CommandDescriptor) -> str:
    return "\n".join(f'"{zsh_flag_spec(name, flag)}"' for name, flag in command.public_flags())


def _all_commands_meta(commands: CommandModel) -> str:
    return "\n".join(f'"{_escape_id(command.id)}:{command.description}"' for command in commands)


def _flags_case_branches(commands: CommandModel, key: Callable[[str], str] = str) -> str:
    # foo)
    #   _command_flags=(
    #     "--boolean[bool descr]"
    #     "--value=-[value descr]:"
    #   )
    # ;;
    return "\n".join(
        f"""{_case_pattern(key(command.id))})
  _command_flags=(
    {_flag_specs(command)}
  )
;;
"""
        for command in commands
    )


def generate_zsh(commands: CommandModel, cli_bin: str) -> str:
    """Generate the zsh completion function for colon-separated topics.

    Args:
        commands: The command model
        cli_bin: Name of the completed binary

    Returns:
        The content of the `_<cli_bin>` completion file
    """
    return f"""#compdef {cli_bin}
_{cli_bin} () {{
  local _command_id=${{words[2]}}
  local _cur=${{words[CURRENT]}}
  local -a _command_flags=()

  ## public cli commands & flags
  local -a _all_commands=(
{_all_commands_meta(commands)}
  )

  _set_flags () {{
    case $_command_id in
{_flags_case_branches(commands)}
    esac
  }}
  ## end public cli commands & flags

  _complete_commands () {{
    _describe -t all-commands "all commands" _all_commands
  }}

  if [ $CURRENT -gt 2 ]; then
    if [[ "$_cur" == -* ]]; then
      _set_flags
    else
      _path_files
    fi
  fi


  _arguments -S '1: :_complete_commands' \\
                $_command_flags
}}

_{cli_bin}
"""


def _topic_children(commands: CommandModel) -> dict[str, dict[str, str]]:
    """Map each topic path to its next segments and their descriptions.

    `apps:deploy` registers `apps` under the root topic "" and `deploy`
    under `apps`. A topic with no command of its own has an empty
    description. Insertion order follows the model.
    """
    children: dict[str, dict[str, str]] = {}
    for command in commands:
        segments = _colon_key(command.id).split(":")
        for depth, segment in enumerate(segments):
            parent = ":".join(segments[:depth])
            is_leaf = depth == len(segments) - 1
            siblings = children.setdefault(parent, {})
            if is_leaf:
                siblings[segment] = command.description
            else:
                siblings.setdefault(segment, "")
    return children


def _valued_flags(commands: CommandModel) -> str:
    """Spellings of every public flag taking a separate value, eg: `"--region" "-r"`."""
    spellings: dict[str, None] = {}
    for command in commands:
        for name, flag in command.public_flags():
            if flag.kind == FlagKind.VALUED:
                spellings[f"--{name}"] = None
                if flag.short_form:
                    spellings[f"-{flag.short_form}"] = None
    return " ".join(f'"{spelling}"' for spelling in spellings)


def _subcommands_case_branches(commands: CommandModel) -> str:
    branches = []
    for topic, segments in _topic_children(commands).items():
        entries = "\n    ".join(f'"{_escape_id(segment)}:{description}"' for segment, description in segments.items())
        pattern = _case_pattern(topic) if topic else '""'
        branches.append(
            f"""{pattern})
  _subcommands=(
    {entries}
  )
;;
"""
        )
    return "\n".join(branches)


def generate_zsh_spaces(commands: CommandModel, cli_bin: str) -> str:
    """Generate the zsh completion function for space-separated topics.

    The words typed after the binary, flags and the values following a
    valued flag excepted, are joined with colons to find both the command
    (for its flags) and the topic (for the next segments to offer). Valued
    flags are recognized by name across all commands.

    Args:
        commands: The command model
        cli_bin: Name of the completed binary

    Returns:
        The content of the `_<cli_bin>` completion file
    """
    return f"""#compdef {cli_bin}
_{cli_bin} () {{
  local _cur=${{words[CURRENT]}}
  local -a _valued_flags=({_valued_flags(commands)})
  local -a _typed=()
  local _word _skip_value=0
  # flags and the values of valued flags are not part of the command id
  for _word in "${{(@)words[2,CURRENT-1]}}"; do
    if (( _skip_value )); then
      _skip_value=0
    elif [[ "$_word" == -* ]]; then
      (( ${{_valued_flags[(Ie)$_word]}} )) && _skip_value=1
    else
      _typed+=("$_word")
    fi
  done
  local _command_id=${{(j.:.)_typed}}
  local -a _command_flags=()
  local -a _subcommands=()

  ## public cli commands & flags
  _set_flags () {{
    case $_command_id in
{_flags_case_branches(commands, _colon_key)}
    esac
  }}

  _set_subcommands () {{
    case $_command_id in
{_subcommands_case_branches(commands)}
    esac
  }}
  ## end public cli commands & flags

  if [[ "$_cur" == -* ]]; then
    _set_flags
    if (( ${{#_command_flags}} )); then
      _arguments -S $_command_flags
    fi
  else
    _set_subcommands
    if (( ${{#_subcommands}} )); then
      _describe -t subcommands "subcommands" _subcommands
    else
      _path_files
    fi
  fi
}}

_{cli_bin}
"""
