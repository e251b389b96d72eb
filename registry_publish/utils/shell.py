"""Subprocess execution for the git commands the workflow runs.

Commands run without a shell and without a terminal. git is told never to
prompt, so a missing credential fails the command instead of hanging the
workflow. Command lines and error output are masked before they are
stored on a ShellError, because push URLs can embed a password.
"""

import os
import re
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

# Matches CSI sequences such as ESC[32m
ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")

# user:password@ segment of an http(s) URL
CREDENTIALS_PATTERN = re.compile(r"(https?://)[^/@\s]+@")

NON_INTERACTIVE_ENV = {"GIT_TERMINAL_PROMPT": "0"}


class ShellError(Exception):
    """A command failed, timed out, or could not be started.

    Attributes:
        cmd: Command line with credentials masked
        returncode: Exit code, or None when the process never completed
        stderr: Error output with credentials masked
    """

    def __init__(self, cmd: str, returncode: int | None, stderr: str = "") -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.returncode is None:
            status = "did not complete"
        else:
            status = f"exited with code {self.returncode}"
        if self.stderr:
            return f"'{self.cmd}' {status}: {self.stderr}"
        return f"'{self.cmd}' {status}"


def strip_ansi(text: str) -> str:
    """Remove color escape sequences from command output."""
    return ANSI_PATTERN.sub("", text) if text else ""


def mask_credentials(text: str) -> str:
    """Replace embedded ``user:password@`` URL segments with ``***@``."""
    return CREDENTIALS_PATTERN.sub(r"\1***@", text)


def format_command(args: Sequence[str]) -> str:
    """Render an argument list as a masked, shell-quoted command line."""
    return mask_credentials(shlex.join(args))


def run(
    args: Sequence[str],
    cwd: Path | None = None,
    check: bool = True,
    timeout: int = 300,
) -> subprocess.CompletedProcess[str]:
    """Run a command and capture its output.

    Args:
        args: Program and arguments
        cwd: Working directory for the command
        check: Whether to raise ShellError on non-zero exit
        timeout: Maximum execution time in seconds

    Returns:
        CompletedProcess with color codes stripped from stdout/stderr

    Raises:
        ShellError: If the program is missing, times out, or (with check)
            exits non-zero
    """
    cmd = list(args)
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            env={**os.environ, **NON_INTERACTIVE_ENV},
        )
    except FileNotFoundError as e:
        raise ShellError(format_command(cmd), None, str(e)) from e
    except subprocess.TimeoutExpired as e:
        raise ShellError(format_command(cmd), None, f"timed out after {timeout}s") from e

    result.stdout = strip_ansi(result.stdout)
    result.stderr = strip_ansi(result.stderr)

    if check and result.returncode != 0:
        raise ShellError(
            format_command(cmd),
            result.returncode,
            mask_credentials(result.stderr.strip()),
        )
    return result


def is_command_available(cmd: str) -> bool:
    """Check if a command is available in PATH."""
    return shutil.which(cmd) is not None
