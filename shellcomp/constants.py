"""Shared constants for shellcomp."""

import os
from pathlib import Path

__all__ = [
    "AUTOCOMPLETE_DIR_NAME",
    "CONFIG_FILE",
    "DEFAULT_FISH_COMPLETIONS_DIR",
    "DEFAULT_TOPIC_SEPARATOR",
    "ERROR_LOG_NAME",
    "SUPPORTED_SHELLS",
    "TOPIC_SEPARATOR_ENV",
    "XDG_CACHE_HOME",
]

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
XDG_CACHE_HOME = Path(os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache")

CONFIG_FILE = _xdg_config_home / "shellcomp" / "config.toml"

# Supported shells for completion generation
SUPPORTED_SHELLS = ("bash", "zsh", "fish")

# Set to "colon" to force colon-separated topics whatever the configuration says
TOPIC_SEPARATOR_ENV = "SHELLCOMP_AUTOCOMPLETE_TOPIC_SEPARATOR"

DEFAULT_TOPIC_SEPARATOR = ":"

# <cache_dir>/autocomplete holds every generated artifact except the fish file
AUTOCOMPLETE_DIR_NAME = "autocomplete"
ERROR_LOG_NAME = "autocomplete.log"

# Used when pkg-config cannot tell where fish looks for completions
DEFAULT_FISH_COMPLETIONS_DIR = "~/.config/fish/completions"
