"""Common error and status types."""

from enum import IntEnum

__all__ = ["ConfigError", "ExitCode", "ShellcompError", "UsageError"]


class ExitCode(IntEnum):
    """Exit codes for the shellcomp CLI."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Unknown action, missing or invalid arguments
    CONFIG_ERROR = 2  # Config file missing, unreadable or incomplete
    GENERATION_ERROR = 4  # Writing the completion files failed


class ShellcompError(Exception):
    """Failure reported to the user without a traceback.

    Raised bare once the details were logged, or with a message to display.
    """

    exit_code = ExitCode.GENERATION_ERROR


class ConfigError(ShellcompError):
    """The configuration or one of its plugins cannot be loaded."""

    exit_code = ExitCode.CONFIG_ERROR


class UsageError(ShellcompError):
    """Invalid command line arguments."""

    exit_code = ExitCode.USAGE_ERROR
