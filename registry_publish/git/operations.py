"""Git operations that change a repository.

Each operation runs one git command through registry_publish.utils.shell
and turns a ShellError into a GitError that says what to check next.
"""

from pathlib import Path

from registry_publish.exceptions import GitError
from registry_publish.utils.shell import ShellError, mask_credentials, run


def _git(
    args: list[str],
    cwd: Path | None,
    timeout: int,
    message: str,
    fix_hint: str,
) -> None:
    try:
        run(["git", *args], cwd=cwd, check=True, timeout=timeout)
    except ShellError as e:
        raise GitError(message, details=str(e), fix_hint=fix_hint) from e


def clone(
    url: str,
    destination: Path,
    cwd: Path | None = None,
    timeout: int = 300,
) -> None:
    """Clone a repository into ``destination``.

    Args:
        url: Repository URL to clone
        destination: Target directory (must not exist yet, or be empty)
        cwd: Working directory for the git process
        timeout: Maximum execution time in seconds

    Raises:
        GitError: If the clone fails
    """
    _git(
        ["clone", url, str(destination)],
        cwd,
        timeout,
        f"Failed to clone {mask_credentials(url)}",
        f"Ensure {destination} does not exist and the repository is reachable.",
    )


def set_remote_url(
    url: str,
    remote: str = "origin",
    cwd: Path | None = None,
    timeout: int = 30,
) -> None:
    """Point an existing remote of the repository at ``cwd`` to ``url``."""
    _git(
        ["remote", "set-url", remote, url],
        cwd,
        timeout,
        f"Failed to set URL of remote '{remote}'",
        "Run 'git remote -v' in the fork to check its remotes.",
    )


def commit(
    message: str,
    files: str | list[str],
    cwd: Path | None = None,
    timeout: int = 30,
) -> None:
    """Commit the current content of tracked ``files``.

    The paths go straight to ``git commit``, so anything else that is
    staged stays out of the commit.

    Raises:
        GitError: If the commit fails, including when nothing changed
    """
    file_list = [files] if isinstance(files, str) else list(files)
    _git(
        ["commit", *file_list, "-m", message],
        cwd,
        timeout,
        "Failed to create git commit",
        "Run 'git status' in the fork to check its state.",
    )


def push(
    remote: str = "origin",
    branch: str | None = None,
    cwd: Path | None = None,
    timeout: int = 300,
) -> None:
    """Push ``branch`` (or the current branch) to a remote name or URL.

    The remote may embed credentials; they never reach the error message.

    Raises:
        GitError: If the push fails
    """
    args = ["push", remote]
    if branch:
        args.append(branch)
    _git(
        args,
        cwd,
        timeout,
        f"Failed to push {branch or 'current branch'} to '{mask_credentials(remote)}'",
        "The change is committed locally; push it manually from the fork.",
    )
