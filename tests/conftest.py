"""Pytest fixtures for publish tool tests.

Provides common fixtures for:
- Temporary project directories
- Git repository setup
- A local registry repository with a manifest
- Credentials and configuration
"""

import copy
import json
import os
import subprocess
from collections.abc import Generator
from pathlib import Path

import pytest

from registry_publish.config.models import PublishConfig
from registry_publish.credentials import Credentials
from registry_publish.package_info import PackageInfo

SAMPLE_ENTRIES = [
    {
        "name": "argparse",
        "url": "https://github.com/iffy/nim-argparse",
        "method": "git",
        "tags": ["cli", "option", "argparse"],
        "description": "WIP strongly-typed argument parser with sub command support",
        "license": "MIT",
        "web": "https://github.com/iffy/nim-argparse",
    },
    {
        "name": "jester",
        "url": "https://github.com/dom96/jester",
        "method": "git",
        "tags": ["web", "http", "framework", "dsl"],
        "description": "A sinatra-like web framework for Nim.",
        "license": "MIT",
        "web": "https://github.com/dom96/jester",
    },
]


def git(*args: str, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary directory for tests.

    Yields:
        Path to temporary directory
    """
    yield tmp_path


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a temporary package directory.

    Returns:
        Path to project directory
    """
    project = temp_dir / "test-project"
    project.mkdir()
    return project


@pytest.fixture
def git_repo(project_dir: Path) -> Path:
    """Create a git repository in the project directory.

    Returns:
        Path to git repository
    """
    git("init", cwd=project_dir)
    git("config", "user.email", "test@test.com", cwd=project_dir)
    git("config", "user.name", "Test User", cwd=project_dir)
    return project_dir


@pytest.fixture
def nimble_package(project_dir: Path) -> Path:
    """Create a package with a .nimble descriptor.

    Returns:
        Path to package directory
    """
    (project_dir / "mypkg.nimble").write_text(
        '# Package\n\n'
        'version       = "0.1.0"\n'
        'author        = "Alice"\n'
        'description   = "A tiny package"\n'
        'license       = "MIT"\n\n'
        '# Dependencies\n\n'
        'requires "nim >= 1.6.0"\n',
        encoding="utf-8",
    )
    return project_dir


@pytest.fixture
def manifest_file(temp_dir: Path) -> Path:
    """Write a two-entry manifest with CRLF line endings and trailing spaces.

    Returns:
        Path to packages.json
    """
    text = json.dumps(SAMPLE_ENTRIES, indent=4).replace("\n", "  \r\n")
    path = temp_dir / "packages.json"
    path.write_bytes(text.encode("utf-8"))
    return path


@pytest.fixture
def registry_repo(temp_dir: Path) -> Path:
    """Create a git repository holding a committed packages.json.

    Returns:
        Path to the registry repository
    """
    repo = temp_dir / "registry"
    repo.mkdir()
    git("init", cwd=repo)
    git("config", "user.email", "test@test.com", cwd=repo)
    git("config", "user.name", "Test User", cwd=repo)
    (repo / "packages.json").write_text(json.dumps(SAMPLE_ENTRIES, indent=2) + "\n")
    git("add", "packages.json", cwd=repo)
    git("commit", "-m", "Initial manifest", cwd=repo)
    return repo


@pytest.fixture
def package_info() -> PackageInfo:
    return PackageInfo(name="mypkg", description="A tiny package", license="MIT")


@pytest.fixture
def credentials() -> Credentials:
    return Credentials.from_login("alice", "s3cret")


@pytest.fixture
def publish_config(clean_env: None) -> PublishConfig:
    return PublishConfig()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Temporarily clean environment variables.

    Removes REGISTRY_PUBLISH_* environment variables during test.
    """
    old_env = {}
    for key in list(os.environ.keys()):
        if key.startswith("REGISTRY_PUBLISH_"):
            old_env[key] = os.environ.pop(key)

    yield

    os.environ.update(old_env)


@pytest.fixture
def sample_entries() -> list[dict[str, object]]:
    """Return a fresh copy of the manifest entries used by manifest_file."""
    return copy.deepcopy(SAMPLE_ENTRIES)
