"""Hosting platform access for the community registry."""

from registry_publish.registry.client import RegistryClient, read_fork_flag, search_fork

__all__ = [
    "RegistryClient",
    "read_fork_flag",
    "search_fork",
]
