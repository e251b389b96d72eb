"""Command-line interface for the publish tool.

Provides commands for:
- publish: Add the current package to the community registry
- init-config: Generate configuration
- status: Show the effective configuration
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from registry_publish import __version__
from registry_publish.config.defaults import write_default_config
from registry_publish.config.loader import load_config
from registry_publish.exceptions import GitError, PublishToolError
from registry_publish.package_info import load_package_info
from registry_publish.prompts import ConsolePrompter, Prompter, ScriptedPrompter
from registry_publish.utils.shell import is_command_available
from registry_publish.workflow import PublishWorkflow

app = typer.Typer(
    name="registry-publish",
    help="Publish a package to a community registry via fork and pull request",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"registry-publish version {__version__}")
        raise typer.Exit()


def report_error(error: PublishToolError) -> None:
    """Print an error and exit with its code."""
    console.print(f"[red]Error:[/red] {error.message}")
    if error.details:
        console.print(f"[dim]{error.details}[/dim]")
    if error.fix_hint:
        console.print(f"[yellow]Fix:[/yellow] {error.fix_hint}")
    raise typer.Exit(code=error.exit_code)


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Publish a package to a community registry.

    Forks the registry repository, appends the package to its manifest,
    pushes the change and opens a pull request.
    """
    pass


@app.command()
def publish(
    package_dir: Path = typer.Option(  # noqa: B008
        Path("."),
        "--package-dir",
        "-p",
        help="Directory of the package to publish",
    ),
    name: str | None = typer.Option(  # noqa: B008
        None,
        "--name",
        help="Package name (defaults to the .nimble file name)",
    ),
    description: str | None = typer.Option(  # noqa: B008
        None,
        "--description",
        help="Package description (defaults to the .nimble file)",
    ),
    license: str | None = typer.Option(  # noqa: B008
        None,
        "--license",
        help="Package license (defaults to the .nimble file)",
    ),
    url: str | None = typer.Option(  # noqa: B008
        None,
        "--url",
        help="Source URL (skips detection from the git remote)",
    ),
    tags: str | None = typer.Option(  # noqa: B008
        None,
        "--tags",
        "-t",
        help="Whitespace separated tags (skips the tags prompt)",
    ),
    fork_dir: Path | None = typer.Option(  # noqa: B008
        None,
        "--fork-dir",
        help="Local clone of your registry fork",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    no_input: bool = typer.Option(  # noqa: B008
        False,
        "--no-input",
        help="Never prompt; abort when an answer would be needed",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Show git commands and API calls",
    ),
) -> None:
    """Add the package to the registry manifest and open a pull request.

    Examples:
        registry-publish publish
        registry-publish publish --tags "web http"
        registry-publish publish --fork-dir ../packages-fork
    """
    try:
        project_root = package_dir.resolve()
        cfg = load_config(config, project_root=project_root)
        package = load_package_info(
            project_root,
            name=name,
            description=description,
            license=license,
        )

        if not is_command_available("git"):
            raise GitError(
                "git is not installed",
                fix_hint="Install git and make sure it is on PATH",
            )

        prompter: Prompter = ScriptedPrompter() if no_input else ConsolePrompter(console)
        target = f"{cfg.registry.owner}/{cfg.registry.repo}"
        console.print(f"Publishing [bold]{package.name}[/bold] to {target}")

        workflow = PublishWorkflow(
            package=package,
            package_dir=project_root,
            config=cfg,
            prompter=prompter,
            fork_dir=fork_dir.resolve() if fork_dir else None,
            url=url,
            tags=tags,
            verbose=verbose,
            console=console,
        )
        workflow.run()

    except PublishToolError as e:
        report_error(e)


@app.command(name="init-config")
def init_config(
    output: Path = typer.Option(  # noqa: B008
        Path("config/registry_publish.yml"),
        "--output",
        "-o",
        help="Output path for configuration file",
    ),
    force: bool = typer.Option(  # noqa: B008
        False,
        "--force",
        "-f",
        help="Overwrite existing configuration",
    ),
) -> None:
    """Generate a configuration file with the default values.

    Examples:
        registry-publish init-config
        registry-publish init-config -o registry_publish.yml
    """
    if output.exists() and not force:
        console.print(f"[red]Configuration already exists:[/red] {output}")
        console.print("Use --force to overwrite")
        raise typer.Exit(code=1)

    try:
        write_default_config(output)
        console.print(f"[green]Configuration written to:[/green] {output}")
    except PublishToolError as e:
        report_error(e)


@app.command()
def status(
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
) -> None:
    """Show the effective configuration."""
    try:
        cfg = load_config(config)

        table = Table(title="Publish Settings")
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="green")

        registry = cfg.registry
        table.add_row("Registry", f"{registry.owner}/{registry.repo}")
        table.add_row("API", registry.api_url)
        table.add_row("Branch", registry.branch)
        table.add_row("Manifest", registry.manifest_file)
        table.add_row("Fork Directory", registry.fork_dir_name)
        table.add_row("Settle Delay", f"{cfg.timeouts.settle_delay}s")

        console.print(table)

    except PublishToolError as e:
        report_error(e)


if __name__ == "__main__":
    app()
