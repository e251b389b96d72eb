"""Git operations and utilities.

A small API over the git commands the publish workflow needs. Queries
report unavailable values as None; operations raise GitError on failure.
"""

from registry_publish.git.operations import clone, commit, push, set_remote_url
from registry_publish.git.queries import (
    config_get,
    get_origin_url,
    get_user_name,
    has_git_metadata,
    has_hg_metadata,
    strip_git_suffix,
)

__all__ = [
    # Query operations
    "config_get",
    "get_user_name",
    "get_origin_url",
    "strip_git_suffix",
    "has_git_metadata",
    "has_hg_metadata",
    # Modification operations
    "clone",
    "set_remote_url",
    "commit",
    "push",
]
