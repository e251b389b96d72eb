"""Utility modules for the publish tool."""

from registry_publish.utils.shell import (
    ShellError,
    format_command,
    is_command_available,
    mask_credentials,
    run,
)

__all__ = [
    "run",
    "format_command",
    "mask_credentials",
    "is_command_available",
    "ShellError",
]
