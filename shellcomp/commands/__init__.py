"""Command framework for applications that want shell completions.

This package provides:
- models: Flag, Command and Plugin definitions
- manifest: command classes built from `[commands]` TOML tables
- registry: the live, ordered registry of plugins and their commands
"""
