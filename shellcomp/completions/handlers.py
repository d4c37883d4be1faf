"""Completion file creation and setup instructions.

Decides where every artifact goes, which topic style to render, then
writes the files. The generators themselves stay pure.
"""

from __future__ import annotations

import asyncio
import os
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import aiofiles
import aiofiles.os

from ..constants import AUTOCOMPLETE_DIR_NAME, DEFAULT_FISH_COMPLETIONS_DIR, ERROR_LOG_NAME, SUPPORTED_SHELLS, TOPIC_SEPARATOR_ENV
from ..logging_setup import get_logger
from ..models import ShellcompError, UsageError
from ..utils import env_var_name
from .discovery import build_command_model
from .generators import generate
from .models import TopicStyle
from .setup_scripts import bash_setup_script, zsh_setup_script

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..commands.registry import CommandRegistry
    from ..config import Settings
    from .models import ModelSnapshot

__all__ = ["CompletionPaths", "create", "fish_completions_dir", "instructions", "render_script", "select_topic_style"]


def select_topic_style(topic_separator: str, env: Mapping[str, str] | None = None) -> TopicStyle:
    """Pick the topic style: spaces only when configured and not overridden.

    Args:
        topic_separator: The configured separator
        env: Environment to read the override from (defaults to os.environ)
    """
    if env is None:
        env = os.environ
    if env.get(TOPIC_SEPARATOR_ENV) == "colon" or topic_separator != " ":
        return TopicStyle.COLON
    return TopicStyle.SPACE


def fish_completions_dir() -> Path:
    """Ask pkg-config where fish completions live, with a user-level fallback."""
    log = get_logger("completions")
    try:
        result = subprocess.run(
            ["pkg-config", "--variable", "completionsdir", "fish"],  # noqa: S607
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        log.warning("Cannot locate the fish completions directory (%s), using %s", e, DEFAULT_FISH_COMPLETIONS_DIR)
        return Path(DEFAULT_FISH_COMPLETIONS_DIR).expanduser()
    directory = result.stdout.rstrip()
    if not directory:
        log.warning("pkg-config knows no fish completions directory, using %s", DEFAULT_FISH_COMPLETIONS_DIR)
        return Path(DEFAULT_FISH_COMPLETIONS_DIR).expanduser()
    return Path(directory)


@dataclass(frozen=True)
class CompletionPaths:
    """Where the artifacts of one binary are written."""

    cache_dir: Path
    cli_bin: str
    fish_dir: Path

    @property
    def autocomplete_dir(self) -> Path:
        """<cache_dir>/autocomplete"""
        return self.cache_dir / AUTOCOMPLETE_DIR_NAME

    @property
    def bash_functions_dir(self) -> Path:
        """<cache_dir>/autocomplete/functions/bash"""
        return self.autocomplete_dir / "functions" / "bash"

    @property
    def zsh_functions_dir(self) -> Path:
        """<cache_dir>/autocomplete/functions/zsh"""
        return self.autocomplete_dir / "functions" / "zsh"

    @property
    def bash_setup(self) -> Path:
        return self.autocomplete_dir / "bash_setup"

    @property
    def zsh_setup(self) -> Path:
        return self.autocomplete_dir / "zsh_setup"

    @property
    def error_log(self) -> Path:
        return self.autocomplete_dir / ERROR_LOG_NAME

    @property
    def bash_completion(self) -> Path:
        return self.bash_functions_dir / f"{self.cli_bin}.bash"

    @property
    def zsh_completion(self) -> Path:
        return self.zsh_functions_dir / f"_{self.cli_bin}"

    @property
    def fish_completion(self) -> Path:
        return self.fish_dir / f"{self.cli_bin}.fish"

    @classmethod
    def for_settings(cls, settings: Settings, fish_dir: Path | None = None) -> CompletionPaths:
        """Paths for `settings`, asking pkg-config for the fish directory if not given."""
        return cls(
            cache_dir=settings.cache_dir,
            cli_bin=settings.cli_bin,
            fish_dir=fish_dir if fish_dir is not None else fish_completions_dir(),
        )


def render_script(shell: str, snapshot: ModelSnapshot, settings: Settings, env: Mapping[str, str] | None = None) -> str:
    """Render the completion script of one shell for `settings`."""
    style = select_topic_style(settings.topic_separator, env)
    return generate(shell, snapshot.commands, settings.cli_bin, style)


async def _write(path: Path, content: str) -> None:
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(content)


async def write_log_file(path: Path, messages: list[str]) -> None:
    """Append timestamped lines to the autocomplete error log."""
    if not messages:
        return
    stamp = time.strftime("%Y-%m-%dT%H:%M:%S")
    async with aiofiles.open(path, "a", encoding="utf-8") as f:
        await f.write("".join(f"[{stamp}] {message}\n" for message in messages))


def _error_if_windows() -> None:
    if sys.platform == "win32":
        msg = "Autocomplete is not currently supported on Windows"
        raise ShellcompError(msg)


async def create(
    settings: Settings,
    registry: CommandRegistry,
    paths: CompletionPaths | None = None,
    env: Mapping[str, str] | None = None,
) -> ModelSnapshot:
    """Generate and write every completion artifact.

    Args:
        settings: Binary name, topic separator and cache directory
        registry: The live command registry, snapshotted once
        paths: Destination paths (derived from settings when omitted)
        env: Environment for the topic separator override (defaults to os.environ)

    Returns:
        The snapshot the scripts were generated from

    Raises:
        ShellcompError: On Windows or when a file cannot be written
    """
    _error_if_windows()
    log = get_logger("completions")
    if paths is None:
        paths = CompletionPaths.for_settings(settings)

    snapshot = build_command_model(registry)
    style = select_topic_style(settings.topic_separator, env)
    log.debug("Generating completions for %s (%s topics)", settings.cli_bin, style)

    artifacts = {
        paths.bash_setup: bash_setup_script(paths.bash_functions_dir, settings.cli_bin),
        paths.zsh_setup: zsh_setup_script(paths.zsh_functions_dir),
        paths.bash_completion: generate("bash", snapshot.commands, settings.cli_bin, style),
        paths.zsh_completion: generate("zsh", snapshot.commands, settings.cli_bin, style),
        paths.fish_completion: generate("fish", snapshot.commands, settings.cli_bin, style),
    }

    try:
        for directory in (paths.autocomplete_dir, paths.bash_functions_dir, paths.zsh_functions_dir, paths.fish_dir):
            await aiofiles.os.makedirs(directory, exist_ok=True)
        await asyncio.gather(*(_write(path, content) for path, content in artifacts.items()))
        await write_log_file(paths.error_log, [f"Skipped {skipped.id}: {skipped.reason}" for skipped in snapshot.skipped])
    except OSError as e:
        log.critical("Failed to write completion files: %s", e)
        raise ShellcompError from e

    for path in artifacts:
        log.info("Wrote %s", path)
    return snapshot


def instructions(shell: str, settings: Settings, paths: CompletionPaths) -> str:
    """Tell the user how to enable completions for `shell`.

    Raises:
        UsageError: If the shell is not supported
    """
    if shell not in SUPPORTED_SHELLS:
        msg = f"Unsupported shell: {shell}. Supported: {', '.join(SUPPORTED_SHELLS)}"
        raise UsageError(msg)

    cli_bin = settings.cli_bin
    if shell == "bash":
        var = f"{env_var_name(cli_bin)}_AC_BASH_SETUP_PATH"
        return (
            f"Setup Instructions for {cli_bin.upper()} CLI Autocomplete ---\n\n"
            "1) Add the autocomplete env var to your bash profile and source it\n"
            f"$ echo '{var}={paths.bash_setup} && test -f ${var} && source ${var};' >> ~/.bashrc; source ~/.bashrc\n\n"
            "2) Test it out, e.g.:\n"
            f"$ {cli_bin} <TAB><TAB>                 # Command completion\n"
            f"$ {cli_bin} command --<TAB><TAB>       # Flag completion\n"
        )
    if shell == "zsh":
        var = f"{env_var_name(cli_bin)}_AC_ZSH_SETUP_PATH"
        return (
            f"Setup Instructions for {cli_bin.upper()} CLI Autocomplete ---\n\n"
            "1) Add the autocomplete env var to your zsh profile and source it\n"
            f"$ echo '{var}={paths.zsh_setup} && test -f ${var} && source ${var};' >> ~/.zshrc; source ~/.zshrc\n\n"
            "NOTE: After sourcing, you can run `$ compaudit -D` to ensure no permissions conflicts are present\n\n"
            "2) Test it out, e.g.:\n"
            f"$ {cli_bin} <TAB>                 # Command completion\n"
            f"$ {cli_bin} command --<TAB>       # Flag completion\n"
        )
    return (
        f"Setup Instructions for {cli_bin.upper()} CLI Autocomplete ---\n\n"
        f"1) The completions were installed to {paths.fish_completion}\n"
        "   Reload your shell or run: source ~/.config/fish/config.fish\n\n"
        "2) Test it out, e.g.:\n"
        f"$ {cli_bin} <TAB>                 # Command completion\n"
        f"$ {cli_bin} command --<TAB>       # Flag completion\n"
    )
