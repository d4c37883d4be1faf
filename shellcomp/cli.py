"""shellcomp command line interface.

Usage:
    shellcomp [--config FILE] [--debug LOGFILE] create
    shellcomp [--config FILE] [--debug LOGFILE] script <bash|zsh|fish>
    shellcomp [--config FILE] [--debug LOGFILE] instructions [bash|zsh|fish]
    shellcomp help
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .ansi import MessageStyles, style_for
from .commands.registry import CommandRegistry
from .completions.discovery import build_command_model
from .completions.handlers import CompletionPaths, create, instructions, render_script
from .config import Settings
from .config_loader import ConfigLoader
from .constants import SUPPORTED_SHELLS
from .logging_setup import get_logger, init_logger
from .models import ExitCode, ShellcompError, UsageError

if TYPE_CHECKING:
    import logging

__all__ = ["main"]

USAGE = __doc__.split("Usage:\n", 1)[1].rstrip() if __doc__ else ""


def use_param(argv: list[str], txt: str) -> str:
    """Check if parameter `txt` is in argv.

    If found, removes it from argv & returns the argument value
    """
    v = ""
    if txt in argv:
        i = argv.index(txt)
        if i + 1 >= len(argv):
            msg = f"{txt} expects a value"
            raise UsageError(msg)
        v = argv[i + 1]
        del argv[i : i + 2]
    return v


def _load(log: logging.Logger, config_filename: str) -> tuple[Settings, CommandRegistry]:
    config = ConfigLoader(log).load(config_filename)
    settings = Settings.from_config(config)
    return settings, CommandRegistry.from_config(config, settings.plugins)


def _shell_argument(args: list[str], default: str | None = None) -> str:
    shell = args[0] if args else default
    if not shell:
        msg = f"Missing shell, expected one of: {', '.join(SUPPORTED_SHELLS)}"
        raise UsageError(msg)
    if shell not in SUPPORTED_SHELLS:
        msg = f"Unsupported shell: {shell}. Supported: {', '.join(SUPPORTED_SHELLS)}"
        raise UsageError(msg)
    return shell


def run_create(log: logging.Logger, config_filename: str) -> ExitCode:
    """Write every completion file and report where they went."""
    settings, registry = _load(log, config_filename)
    paths = CompletionPaths.for_settings(settings)
    snapshot = asyncio.run(create(settings, registry, paths))
    print(f"Completions for {len(snapshot.commands)} commands written to {style_for(str(paths.autocomplete_dir), MessageStyles.PATH, sys.stdout)}")
    print(f"Fish completions written to {style_for(str(paths.fish_completion), MessageStyles.PATH, sys.stdout)}")
    print(f"Run {style_for('shellcomp instructions', MessageStyles.COMMAND, sys.stdout)} to enable them")
    if snapshot.skipped:
        print(f"{len(snapshot.skipped)} commands skipped, see {paths.error_log}", file=sys.stderr)
    return ExitCode.SUCCESS


def run_script(log: logging.Logger, config_filename: str, args: list[str]) -> ExitCode:
    """Print one completion script on stdout."""
    shell = _shell_argument(args)
    settings, registry = _load(log, config_filename)
    print(render_script(shell, build_command_model(registry), settings), end="")
    return ExitCode.SUCCESS


def run_instructions(log: logging.Logger, config_filename: str, args: list[str]) -> ExitCode:
    """Print the setup instructions of a shell (the login shell by default)."""
    shell = _shell_argument(args, Path(os.environ.get("SHELL", "")).name or None)
    settings, _ = _load(log, config_filename)
    paths = CompletionPaths.for_settings(settings, fish_dir=None if shell == "fish" else settings.cache_dir)
    print(instructions(shell, settings, paths))
    return ExitCode.SUCCESS


def run(argv: list[str]) -> ExitCode:
    """Run the CLI on `argv` (without the program name)."""
    argv = list(argv)
    try:
        debug_flag = use_param(argv, "--debug")
        config_filename = use_param(argv, "--config")
    except UsageError as e:
        init_logger()
        get_logger().error("%s", e)
        return e.exit_code

    if debug_flag:
        init_logger(filename=debug_flag, force_debug=True)
    else:
        init_logger()
    log = get_logger()

    if not argv or argv[0] in {"help", "--help", "-h"}:
        print(f"Usage:\n{USAGE}")
        return ExitCode.SUCCESS if argv else ExitCode.USAGE_ERROR

    action, args = argv[0], argv[1:]
    try:
        if action == "create":
            return run_create(log, config_filename)
        if action == "script":
            return run_script(log, config_filename, args)
        if action == "instructions":
            return run_instructions(log, config_filename, args)
    except ShellcompError as e:
        if e.args:
            log.error("%s", e)
        return e.exit_code

    log.error("Unknown action: %s", action)
    print(f"Usage:\n{USAGE}", file=sys.stderr)
    return ExitCode.USAGE_ERROR


def main() -> None:
    """Entry point of the `shellcomp` script."""
    sys.exit(run(sys.argv[1:]))
