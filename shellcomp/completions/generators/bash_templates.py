r"""Bash completion function templates.

`<CLI_BIN>` is replaced by the binary name and
`<BASH_COMMANDS_WITH_FLAGS_LIST>` by one `id --flag1 --flag2` line per
command.
"""

__all__ = ["BASH_COLON_TEMPLATE", "BASH_SPACES_TEMPLATE"]

BASH_COLON_TEMPLATE = r"""#!/usr/bin/env bash

_<CLI_BIN>_autocomplete()
{

  local cur="${COMP_WORDS[COMP_CWORD]}" opts IFS=$' \t\n'
  COMPREPLY=()

  local commands="
<BASH_COMMANDS_WITH_FLAGS_LIST>
"

  if [[ "$cur" != "-"* ]]; then
    opts=$(printf "$commands" | grep -Eo '^[a-zA-Z0-9:_-]+')
  else
    local __COMP_WORDS
    if [[ ${COMP_WORDS[2]} == ":" ]]; then
      #subcommand
      __COMP_WORDS=$(printf "%s" "${COMP_WORDS[@]:1:3}")
    else
      #command
      __COMP_WORDS="${COMP_WORDS[@]:1:1}"
    fi
    opts=$(printf "$commands" | grep "^${__COMP_WORDS} " | sed -n "s/^${__COMP_WORDS} //p")
  fi
  _get_comp_words_by_ref -n : cur
  COMPREPLY=( $(compgen -W "${opts}" -- ${cur}) )
  __ltrim_colon_completions "$cur"
  return 0

}

complete -o default -F _<CLI_BIN>_autocomplete <CLI_BIN>
"""

BASH_SPACES_TEMPLATE = r"""#!/usr/bin/env bash

# Joins its arguments with the first one: join_by ":" a b c -> a:b:c
function join_by { local IFS="$1"; shift; echo "$*"; }

_<CLI_BIN>_autocomplete()
{

  local cur="${COMP_WORDS[COMP_CWORD]}" opts normalizedCommand colonPrefix IFS=$' \t\n'
  COMPREPLY=()

  local commands="
<BASH_COMMANDS_WITH_FLAGS_LIST>
"

  function __trim_colon_commands()
  {
    # Turn $commands into an array
    commands=("${commands[@]}")

    if [[ -z "$colonPrefix" ]]; then
      colonPrefix="$normalizedCommand:"
    fi

    # Remove colon-word prefix from $commands
    commands=( "${commands[@]/$colonPrefix}" )

    for i in "${!commands[@]}"; do
      if [[ "${commands[$i]}" == "$normalizedCommand" ]]; then
        # A topic the user already typed must not be suggested again
        unset "commands[$i]"
      else
        # Trim subcommands from each command
        commands[$i]="${commands[$i]%%:*}"
      fi
    done
  }

  if [[ "$cur" != "-"* ]]; then
    # Command
    __COMP_WORDS=( "${COMP_WORDS[@]:1}" )

    # "mycli command subcom" -> "command:subcom"
    normalizedCommand="$( printf "%s" "$(join_by ":" "${__COMP_WORDS[@]}")" )"

    # "mycli com subcommand subsubcom" -> "com:subcommand:"
    colonPrefix="${normalizedCommand%"${normalizedCommand##*:}"}"

    if [[ -z "$normalizedCommand" ]]; then
      # Nothing typed yet: offer the top level commands only
      opts=$(printf "%s " "${commands[@]}" | grep -Eo '^[a-zA-Z0-9_-]+')
    else
      # Keep the commands matching what was typed, then trim them to the next segment
      commands=( $(compgen -W "$commands" -- "${normalizedCommand}") )
      __trim_colon_commands "$colonPrefix"

      opts=$(printf "%s " "${commands[@]}")
    fi
  else
    # Flag

    # "mycli command subcommand --fl" -> "command:subcommand"
    normalizedCommand="$( printf "%s" "$(join_by ":" "${COMP_WORDS[@]:1:($COMP_CWORD - 1)}")" )"

    # Find the command line in $commands and keep only its flags
    opts=$(printf "%s " "${commands[@]}" | grep "^${normalizedCommand} " | sed -n "s/^${normalizedCommand} //p")
  fi

  COMPREPLY=($(compgen -W "$opts" -- "${cur}"))
}

complete -F _<CLI_BIN>_autocomplete <CLI_BIN>
"""
