"""Shell completion generation.

This package provides:
- models: the immutable command model the generators read
- discovery: snapshotting a command registry into that model
- generators: bash, zsh and fish script rendering
- handlers: writing the scripts and setup snippets to the cache directory
"""

from __future__ import annotations

from .discovery import build_command_model
from .generators import GENERATORS, generate
from .handlers import CompletionPaths, create, instructions, render_script, select_topic_style
from .models import CommandDescriptor, FlagDescriptor, FlagKind, ModelSnapshot, SkippedCommand, TopicStyle
from .sanitize import sanitize_description

__all__ = [
    "GENERATORS",
    "CommandDescriptor",
    "CompletionPaths",
    "FlagDescriptor",
    "FlagKind",
    "ModelSnapshot",
    "SkippedCommand",
    "TopicStyle",
    "build_command_model",
    "create",
    "generate",
    "instructions",
    "render_script",
    "sanitize_description",
    "select_topic_style",
]
