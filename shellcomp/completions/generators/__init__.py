"""Shell completion generators.

Provides one generator per supported shell and `generate` to pick the
right one (and the right topic style flavor) by name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...models import UsageError
from ..models import TopicStyle
from .bash import generate_bash
from .fish import generate_fish
from .zsh import generate_zsh, generate_zsh_spaces

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..models import CommandModel

__all__ = ["GENERATORS", "generate", "generate_bash", "generate_fish", "generate_zsh", "generate_zsh_spaces"]


def _zsh(commands: CommandModel, cli_bin: str, style: TopicStyle) -> str:
    if style == TopicStyle.SPACE:
        return generate_zsh_spaces(commands, cli_bin)
    return generate_zsh(commands, cli_bin)


def _fish(commands: CommandModel, cli_bin: str, _style: TopicStyle) -> str:
    return generate_fish(commands, cli_bin)


GENERATORS: dict[str, Callable[[CommandModel, str, TopicStyle], str]] = {
    "bash": generate_bash,
    "zsh": _zsh,
    "fish": _fish,
}


def generate(shell: str, commands: CommandModel, cli_bin: str, style: TopicStyle = TopicStyle.COLON) -> str:
    """Render the completion script of `shell` for `commands`.

    Raises:
        UsageError: If the shell is not supported
    """
    try:
        generator = GENERATORS[shell]
    except KeyError as e:
        raise UsageError(f"Unsupported shell: {shell}. Supported: {', '.join(GENERATORS)}") from e
    return generator(commands, cli_bin, style)
