"""Configuration file loading utilities.

Loads TOML configuration files, directories of TOML files and their
`include` directives into a single `Configuration`.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import Configuration
from .constants import CONFIG_FILE
from .models import ConfigError
from .utils import merge

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader"]


class ConfigLoader:
    """Handles loading and merging configuration files."""

    def __init__(self, log: logging.Logger) -> None:
        self.log = log

    def load(self, config_filename: str = "") -> Configuration:
        """Load configuration from file or directory.

        Args:
            config_filename: Optional path to config file or directory.
                           If empty, uses the default CONFIG_FILE location.

        Raises:
            ConfigError: If config file not found or has syntax errors.
        """
        return Configuration(self._open_config(config_filename), logger=self.log)

    def _open_config(self, config_filename: str = "") -> dict[str, Any]:
        if config_filename:
            fname = Path(os.path.expandvars(config_filename)).expanduser()
            if fname.is_dir():
                config = self._load_config_directory(fname)
            else:
                config = self._load_config_file(fname)
        else:
            fname = CONFIG_FILE
            config = self._load_config_file(fname)

        section = config.get("shellcomp")
        includes = section.pop("include", []) if isinstance(section, dict) else []
        if isinstance(includes, str):
            includes = [includes]
        for extra_config in includes:
            extra_path = Path(os.path.expandvars(extra_config)).expanduser()
            if not extra_path.is_absolute():
                extra_path = fname.parent / extra_path if fname.is_file() else fname / extra_path
            merge(config, self._open_config(str(extra_path)))

        return config

    def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        """Load and merge all .toml files from a directory, in name order."""
        config: dict[str, Any] = {}
        for toml_file in sorted(f.name for f in directory.iterdir()):
            if not toml_file.endswith(".toml"):
                continue
            merge(config, self._load_config_file(directory / toml_file))
        return config

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single configuration file.

        Raises:
            ConfigError: If file not found or has syntax errors
        """
        if not fname.exists():
            self.log.critical("Config file not found! Please create %s", fname)
            raise ConfigError

        self.log.info("Loading %s", fname)
        with fname.open("rb") as f:
            try:
                return tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                self.log.critical("Problem reading %s: %s", fname, e)
                raise ConfigError from e
