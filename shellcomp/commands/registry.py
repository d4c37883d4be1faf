"""Command registry - the live list of plugins and their commands.

The registry is mutable and filled while plugins are discovered; the
completion code never reads it directly but through a snapshot, see
`shellcomp.completions.discovery.build_command_model`.
"""

from __future__ import annotations

import importlib
import inspect
from typing import TYPE_CHECKING

from ..logging_setup import get_logger
from ..models import ConfigError
from .manifest import commands_from_manifest
from .models import Command, Plugin

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import ModuleType

    from ..config import Configuration

__all__ = ["CommandRegistry", "extract_commands_from_module"]

MANIFEST_PLUGIN = "manifest"


def extract_commands_from_module(module: ModuleType) -> list[type[Command]]:
    """Extract the commands a module provides.

    An explicit `COMMANDS` list wins, otherwise every Command subclass
    defined in the module (not imported into it) is used, in definition order.
    """
    explicit = getattr(module, "COMMANDS", None)
    if explicit is not None:
        return list(explicit)
    return [
        obj
        for obj in vars(module).values()
        if inspect.isclass(obj) and issubclass(obj, Command) and obj is not Command and obj.__module__ == module.__name__
    ]


class CommandRegistry:
    """Ordered collection of plugins."""

    def __init__(self) -> None:
        self.plugins: dict[str, Plugin] = {}
        self.log = get_logger("registry")

    def add_plugin(self, plugin: Plugin) -> None:
        """Register a plugin, replacing any previous plugin with the same name."""
        if plugin.name in self.plugins:
            self.log.warning("Plugin %s registered twice, keeping the last one", plugin.name)
        self.plugins[plugin.name] = plugin

    def add_commands(self, name: str, commands: list[type[Command]]) -> Plugin:
        """Register `commands` as a new plugin called `name`."""
        plugin = Plugin(name=name, commands=list(commands))
        self.add_plugin(plugin)
        return plugin

    def load_module(self, module_path: str) -> Plugin:
        """Import `module_path` and register its commands as a plugin.

        Raises:
            ConfigError: If the module cannot be imported
        """
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            self.log.critical("Unable to load plugin %s: %s", module_path, e)
            raise ConfigError from e
        commands = extract_commands_from_module(module)
        self.log.debug("Plugin %s provides %d commands", module_path, len(commands))
        return self.add_commands(module_path, commands)

    def load_manifest(self, config: Configuration) -> Plugin | None:
        """Register the commands declared in `[commands]` tables, if any."""
        commands = commands_from_manifest(config)
        if not commands:
            return None
        return self.add_commands(MANIFEST_PLUGIN, commands)

    def commands(self) -> Iterator[type[Command]]:
        """Iterate over every registered command, plugin by plugin."""
        for plugin in self.plugins.values():
            yield from plugin.commands

    @classmethod
    def from_config(cls, config: Configuration, plugins: tuple[str, ...] = ()) -> CommandRegistry:
        """Build a registry from plugin modules, then the config's manifest."""
        registry = cls()
        for module_path in plugins:
            registry.load_module(module_path)
        registry.load_manifest(config)
        return registry
