"""Configuration wrapper providing typed access, and the resolved settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import DEFAULT_TOPIC_SEPARATOR, XDG_CACHE_HOME
from .models import ConfigError

if TYPE_CHECKING:
    import logging

__all__ = ["BOOL_FALSE_STRINGS", "Configuration", "Settings", "coerce_to_bool"]

ConfigValueType = float | bool | str | list | dict

BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Coerce a value to boolean, handling loose typing.

    Args:
        value: The value to coerce
        default: Default value if value is None

    Returns:
        The boolean value

    Behavior:
        - None → default
        - Empty string → False
        - Explicit falsy strings ("false", "no", "off", "0", "disabled") → False
        - Any other non-empty string → True
        - Non-string values → bool(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return False
        return value.lower().strip() not in BOOL_FALSE_STRINGS
    return bool(value)


class Configuration(dict):
    """A configuration section with typed accessors.

    Wraps one TOML table (eg: `[shellcomp]`) and logs invalid values
    instead of raising, falling back to the given defaults.
    """

    def __init__(self, *args: Any, logger: logging.Logger, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.log = logger

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value.

        Args:
            name: The key name
            default: Default value if key is missing
        """
        value = self.get(name)
        if value is None:
            return default
        return str(value)

    def get_list(self, name: str) -> list[str]:
        """Get a list of strings, a single string counts as a one-item list."""
        value = self.get(name)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(item) for item in value]
        self.log.warning("Invalid list value for %s: %s", name, value)
        return []

    def section(self, name: str) -> Configuration:
        """Return the sub-table `name` (empty when missing or not a table)."""
        value = self.get(name)
        if value is None:
            return Configuration(logger=self.log)
        if not isinstance(value, dict):
            self.log.warning("Expected a table for %s, got: %s", name, value)
            return Configuration(logger=self.log)
        return Configuration(value, logger=self.log)


@dataclass(frozen=True)
class Settings:
    """Settings needed to generate and install completions."""

    cli_bin: str
    topic_separator: str = DEFAULT_TOPIC_SEPARATOR
    cache_dir: Path = field(default_factory=lambda: XDG_CACHE_HOME)
    plugins: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config: Configuration) -> Settings:
        """Build the settings from the `[shellcomp]` section of a configuration.

        Raises:
            ConfigError: If `bin` is not set
        """
        section = config.section("shellcomp")
        cli_bin = section.get_str("bin").strip()
        if not cli_bin:
            config.log.critical("The [shellcomp] section must define `bin`")
            raise ConfigError
        cache_dir = section.get_str("cache_dir")
        return cls(
            cli_bin=cli_bin,
            topic_separator=section.get_str("topic_separator", DEFAULT_TOPIC_SEPARATOR),
            cache_dir=Path(cache_dir).expanduser() if cache_dir else XDG_CACHE_HOME / cli_bin,
            plugins=tuple(section.get_list("plugins")),
        )
