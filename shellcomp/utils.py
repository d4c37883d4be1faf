"""Utilities."""

from typing import Any

__all__ = ["env_var_name", "merge"]


def merge(merged: dict[str, Any], obj2: dict[str, Any]) -> dict[str, Any]:
    """Merge the content of obj2 into merged.

    Nested dictionaries are merged recursively and lists are concatenated,
    any other value from obj2 replaces the existing one.

    Eg:
        merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}
    """
    for key, value in obj2.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merge(merged[key], value)
        elif key in merged and isinstance(merged[key], list) and isinstance(value, list):
            merged[key] += value
        else:
            merged[key] = value
    return merged


def env_var_name(cli_bin: str) -> str:
    """Return the environment variable prefix for a binary (`my-cli` -> `MY_CLI`)."""
    return cli_bin.upper().replace("-", "_")
