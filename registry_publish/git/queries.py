"""Git state query operations.

Read-only queries used by the publish workflow. A failing read is treated
as "value unavailable" and reported as None instead of raising.
"""

from pathlib import Path

from registry_publish.utils.shell import ShellError, run


def config_get(key: str, cwd: Path | None = None, timeout: int = 30) -> str | None:
    """Read a git configuration value.

    Args:
        key: Configuration key (e.g., "user.name", "remote.origin.url")
        cwd: Working directory (defaults to current directory)
        timeout: Maximum execution time in seconds

    Returns:
        Stripped value, or None when git exits non-zero, is missing,
        times out, or the value is empty
    """
    try:
        result = run(["git", "config", "--get", key], cwd=cwd, check=False, timeout=timeout)
    except ShellError:
        return None
    if result.returncode != 0:
        return None
    value = result.stdout.strip()
    return value or None


def get_user_name(cwd: Path | None = None) -> str | None:
    """Get the configured git identity (``user.name``)."""
    return config_get("user.name", cwd=cwd)


def get_origin_url(cwd: Path | None = None) -> str | None:
    """Get the configured URL of the ``origin`` remote."""
    return config_get("remote.origin.url", cwd=cwd)


def strip_git_suffix(url: str) -> str:
    """Remove a trailing ``.git`` from a repository URL."""
    if url.endswith(".git"):
        return url[: -len(".git")]
    return url


def has_git_metadata(path: Path) -> bool:
    """Check whether ``path`` holds a git working tree (.git directory)."""
    return (path / ".git").is_dir()


def has_hg_metadata(path: Path) -> bool:
    """Check whether ``path`` holds a mercurial working tree (.hg directory)."""
    return (path / ".hg").is_dir()
