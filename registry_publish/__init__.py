"""Publish packages to a community registry through a fork and pull request."""

__version__ = "0.1.0"

from registry_publish.exceptions import (
    AbortedError,
    ConfigurationError,
    FileError,
    GitError,
    MissingRepoError,
    NetworkError,
    PackageInfoError,
    PublishToolError,
)

__all__ = [
    "__version__",
    "PublishToolError",
    "ConfigurationError",
    "AbortedError",
    "MissingRepoError",
    "FileError",
    "NetworkError",
    "GitError",
    "PackageInfoError",
]
