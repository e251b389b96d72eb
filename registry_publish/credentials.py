"""Credential resolution for the hosting platform.

The user name comes from the local git identity when one is configured,
otherwise from a prompt. The password is always prompted for, masked.
"""

import base64
from dataclasses import dataclass, field
from pathlib import Path

from registry_publish.git import queries as git_queries
from registry_publish.prompts import Prompter, ask_required


def encode_token(username: str, password: str) -> str:
    """Base64 encode ``username:password`` for a Basic-Auth header."""
    return base64.b64encode(f"{username}:{password}".encode()).decode("ascii")


@dataclass(frozen=True)
class Credentials:
    """Credentials for one run. Never persisted."""

    username: str
    password: str = field(repr=False)
    auth_token: str = field(repr=False)

    @classmethod
    def from_login(cls, username: str, password: str) -> "Credentials":
        return cls(
            username=username,
            password=password,
            auth_token=encode_token(username, password),
        )


def resolve_credentials(prompter: Prompter, cwd: Path | None = None) -> Credentials:
    """Obtain the user's credentials.

    Args:
        prompter: Source of interactive answers
        cwd: Directory whose git configuration provides ``user.name``

    Returns:
        Credentials with the derived Basic-Auth token

    Raises:
        AbortedError: If the user leaves the user name or password empty
    """
    username = git_queries.get_user_name(cwd=cwd)
    if not username:
        username = ask_required(prompter, "Github user name: ")
    password = ask_required(prompter, f"Github password for {username}: ", password=True)
    return Credentials.from_login(username, password)
