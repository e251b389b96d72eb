"""Publish workflow orchestration.

Coordinates the complete publish process:
1. Authenticate
2. Locate or create the registry fork
3. Validate the local fork directory
4. Detect the package's source URL and method
5. Collect tags
6. Append the record to the manifest
7. Commit and push
8. Open the pull request

Every step receives the directories it works in explicitly; the process
working directory is never changed. Errors are not caught here, they
propagate to the caller unchanged.
"""

import time
import urllib.parse
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from registry_publish import manifest
from registry_publish.config.models import PublishConfig
from registry_publish.credentials import Credentials, resolve_credentials
from registry_publish.exceptions import MissingRepoError
from registry_publish.git import operations as git_ops
from registry_publish.git import queries as git_queries
from registry_publish.manifest import ManifestRecord
from registry_publish.package_info import PackageInfo
from registry_publish.prompts import Prompter, ask_required
from registry_publish.registry.client import RegistryClient
from registry_publish.utils.shell import mask_credentials

console = Console()


def derive_push_url(origin_url: str | None, creds: Credentials) -> str:
    """Build the push target for the fork.

    HTTPS URLs get ``user:password@`` inserted so git does not ask for the
    password a second time. Both parts are percent-encoded so reserved
    characters cannot end the userinfo early. Without an origin URL the
    remote name is used.
    """
    if not origin_url:
        return "origin"
    url = git_queries.strip_git_suffix(origin_url.strip())
    prefix = "https://"
    if url.startswith(prefix):
        user = urllib.parse.quote(creds.username, safe="")
        password = urllib.parse.quote(creds.password, safe="")
        url = f"{prefix}{user}:{password}@{url[len(prefix):]}"
    return url


@dataclass
class WorkflowState:
    """What the workflow has learned so far."""

    credentials: Credentials | None = None
    fork_existed: bool | None = None
    fork_dir: Path | None = None
    source_url: str = ""
    method: str = ""
    tags: list[str] = field(default_factory=list)
    pull_request_url: str | None = None


@dataclass
class PublishWorkflow:
    """Orchestrates publishing one package to the community registry."""

    package: PackageInfo
    package_dir: Path
    config: PublishConfig
    prompter: Prompter
    client: RegistryClient | None = None
    sleep: Callable[[float], None] = time.sleep
    fork_dir: Path | None = None
    url: str | None = None
    tags: str | None = None
    verbose: bool = False
    console: Console = field(default_factory=lambda: console)

    state: WorkflowState = field(default_factory=WorkflowState)
    api: RegistryClient = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize computed fields."""
        self.package_dir = self.package_dir.resolve()
        self.api = (
            self.client if self.client is not None else RegistryClient.from_config(self.config)
        )

    @property
    def registry_name(self) -> str:
        return f"{self.config.registry.owner}/{self.config.registry.repo}"

    @property
    def default_fork_dir(self) -> Path:
        if self.fork_dir is not None:
            return self.fork_dir
        return self.package_dir.parent / self.config.registry.fork_dir_name

    def _step(self, name: str) -> None:
        self.console.print(f"\n[bold cyan]>[/bold cyan] {name}...")

    def _done(self, message: str) -> None:
        self.console.print(f"[green]  {message}[/green]")

    def _trace(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[dim]  {mask_credentials(message)}[/dim]")

    def _resolve_answer(self, answer: str) -> Path:
        path = Path(answer).expanduser()
        if not path.is_absolute():
            path = self.package_dir / path
        return path

    def run(self) -> WorkflowState:
        """Execute the complete publish workflow.

        Returns:
            The final workflow state

        Raises:
            PublishToolError: Any failure; nothing is retried or rolled back
        """
        self._step("Authenticating")
        creds = self.authenticate()
        self._done(f"Authenticated as {creds.username}")

        self._step(f"Locating fork of {self.registry_name}")
        fork_dir = self.locate_fork(creds)

        self._step("Checking fork directory")
        fork_dir = self.validate_fork_dir(fork_dir)
        self._done(f"Using fork at {fork_dir}")

        self._step("Detecting package source")
        url, method = self.detect_source(self.package_dir)
        self._done(f"{method}: {url}")

        self._step("Collecting tags")
        tags = self.collect_tags()
        self._done(", ".join(tags) if tags else "No tags")

        self._step(f"Updating {self.config.registry.manifest_file}")
        self.update_manifest(fork_dir, url, tags, method)

        self._step("Committing and pushing")
        self.commit_and_push(fork_dir, creds)

        self._step("Opening pull request")
        self.open_pull_request(creds)

        self.console.print("\n[bold green]Pull request successful.[/bold green]")
        if self.state.pull_request_url:
            self.console.print(self.state.pull_request_url)
        return self.state

    def authenticate(self) -> Credentials:
        """Resolve credentials for the hosting platform."""
        creds = resolve_credentials(self.prompter, cwd=self.package_dir)
        self.state.credentials = creds
        return creds

    def locate_fork(self, creds: Credentials) -> Path:
        """Find the local fork directory, creating and cloning the fork if needed.

        Returns:
            The candidate fork directory (not yet validated)

        Raises:
            AbortedError: If a required directory prompt is left empty
            NetworkError: If the fork cannot be created
            GitError: If cloning or the remote rewrite fails
        """
        fork_dir = self.default_fork_dir
        self._trace(f"GET /repos/{creds.username}/{self.config.registry.repo}")
        exists = self.api.fork_exists(creds)
        self.state.fork_existed = exists

        if not exists:
            self._trace(f"POST /repos/{self.registry_name}/forks")
            self.api.create_fork(creds)
            delay = self.config.timeouts.settle_delay
            self.console.print(f"  Waiting {delay}s to let the platform create the fork...")
            self.sleep(delay)

            if fork_dir.exists():
                fork_dir = self._resolve_answer(
                    ask_required(self.prompter, "Directory where to clone into: ")
                )
            self.clone_fork(creds, fork_dir)
        elif not fork_dir.is_dir():
            fork_dir = self._resolve_answer(
                ask_required(
                    self.prompter,
                    f"According to github, you already forked {self.registry_name}.\n"
                    "Please give the path to it: ",
                )
            )

        self.state.fork_dir = fork_dir
        return fork_dir

    def clone_fork(self, creds: Credentials, fork_dir: Path) -> None:
        """Clone the user's fork and switch its origin to SSH for pushing."""
        registry = self.config.registry
        clone_url = f"{registry.web_url}/{creds.username}/{registry.repo}"
        ssh_url = f"{registry.ssh_host}:{creds.username}/{registry.repo}.git"
        timeout = self.config.timeouts.git_operations

        self.console.print(f"  Cloning {clone_url} into {fork_dir}")
        git_ops.clone(clone_url, fork_dir, cwd=self.package_dir.parent, timeout=timeout)
        self._trace(f"git remote set-url origin {ssh_url}")
        git_ops.set_remote_url(ssh_url, cwd=fork_dir)

    def validate_fork_dir(self, fork_dir: Path | None) -> Path:
        """Make sure the fork directory exists.

        Raises:
            MissingRepoError: If no usable directory was found
        """
        if fork_dir is None or not fork_dir.is_dir():
            raise MissingRepoError(
                f"Cannot find {self.config.registry.fork_dir_name} git repository. Stopping.",
                details=f"Looked for: {fork_dir}" if fork_dir else None,
                fix_hint="Clone your fork of the registry and pass its path with --fork-dir",
            )
        return fork_dir

    def detect_source(self, package_dir: Path) -> tuple[str, str]:
        """Determine where the package's source lives and how to fetch it.

        Returns:
            Tuple of (url, method) with method "git" or "hg"

        Raises:
            MissingRepoError: If the package directory is not a git or hg repository
            AbortedError: If the URL prompt is left empty
        """
        url = ""
        if git_queries.has_git_metadata(package_dir):
            method = "git"
            origin = git_queries.get_origin_url(cwd=package_dir)
            if origin:
                url = git_queries.strip_git_suffix(origin)
        elif git_queries.has_hg_metadata(package_dir):
            method = "hg"
        else:
            raise MissingRepoError(
                "No .git nor .hg directory found. Stopping.",
                details=f"Package directory: {package_dir}",
            )

        if self.url:
            url = self.url
        if not url:
            url = ask_required(self.prompter, f"Github URL of {self.package.name}: ")

        self.state.source_url = url
        self.state.method = method
        return url, method

    def collect_tags(self) -> list[str]:
        """Ask for a whitespace separated tag list; empty is allowed."""
        if self.tags is not None:
            answer = self.tags
        else:
            answer = self.prompter.ask("Please enter a whitespace separated list of tags: ")
        tags = answer.split()
        self.state.tags = tags
        return tags

    def update_manifest(
        self,
        fork_dir: Path,
        url: str,
        tags: list[str],
        method: str,
    ) -> Path:
        """Append the package record to the fork's manifest.

        Returns:
            Path of the rewritten manifest

        Raises:
            FileError: If the manifest is missing or malformed
        """
        manifest_path = fork_dir / self.config.registry.manifest_file
        existing = manifest.find_package(manifest.load_manifest(manifest_path), self.package.name)
        if existing is not None:
            self.console.print(
                f"[yellow]  Warning: {existing.get('name')} is already listed in "
                f"{manifest_path.name}[/yellow]"
            )

        record = ManifestRecord.from_package(self.package, url, tags, method)
        entries = manifest.append_record(record, manifest_path)
        self._done(f"Added {record.name} as entry {len(entries)}")
        return manifest_path

    def commit_and_push(self, fork_dir: Path, creds: Credentials) -> None:
        """Commit the manifest and push it to the fork.

        Raises:
            GitError: If commit or push fails; a failed push leaves the commit in place
        """
        registry = self.config.registry
        git_ops.commit(
            f"Added package {self.package.name}",
            registry.manifest_file,
            cwd=fork_dir,
        )
        self._done(f"Committed {registry.manifest_file}")

        push_url = derive_push_url(git_queries.get_origin_url(cwd=fork_dir), creds)
        self.console.print(f"  git push {mask_credentials(push_url)} {registry.branch}")
        git_ops.push(
            push_url,
            registry.branch,
            cwd=fork_dir,
            timeout=self.config.timeouts.git_operations,
        )
        self._done("Pushed")

    def open_pull_request(self, creds: Credentials) -> str | None:
        """Open the pull request against the canonical registry."""
        self._trace(f"POST /repos/{self.registry_name}/pulls")
        pr_url = self.api.create_pull_request(creds, self.package.name)
        self.state.pull_request_url = pr_url
        return pr_url
