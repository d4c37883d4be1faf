"""Snippets users source from their shell rc file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..utils import env_var_name

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ["bash_setup_script", "zsh_setup_script"]


def bash_setup_script(bash_functions_dir: Path, cli_bin: str) -> str:
    """Source `<cli_bin>.bash` if it exists."""
    setup = bash_functions_dir / f"{cli_bin}.bash"
    var = f"{env_var_name(cli_bin)}_AC_BASH_COMPFUNC_PATH"
    return f"{var}={setup} && test -f ${var} && source ${var};\n"


def zsh_setup_script(zsh_functions_dir: Path) -> str:
    """Put the generated functions in fpath, then initialize completion."""
    return f"""
fpath=(
{zsh_functions_dir}
$fpath
);
autoload -Uz compinit;
compinit;
"""
