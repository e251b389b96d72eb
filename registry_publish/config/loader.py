"""Loading of registry_publish.yml / registry_publish.toml.

A configuration file is optional. Without one, the built-in defaults from
the models apply, still subject to REGISTRY_PUBLISH_* environment overrides.
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from registry_publish.config.models import PublishConfig
from registry_publish.exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

SEARCH_PATHS = [
    "config/registry_publish.yml",
    "config/registry_publish.yaml",
    "registry_publish.yml",
    "registry_publish.yaml",
    "registry_publish.toml",
]

INIT_HINT = "Run 'registry-publish init-config' to create a configuration file"


def _parse_yaml(text: str, path: Path) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {path}",
            details=str(e),
            fix_hint="Check YAML syntax at the indicated line",
        ) from e


def _parse_toml(text: str, path: Path) -> Any:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}",
            details=str(e),
            fix_hint="Check TOML syntax at the indicated line",
        ) from e


PARSERS: dict[str, Callable[[str, Path], Any]] = {
    ".yml": _parse_yaml,
    ".yaml": _parse_yaml,
    ".toml": _parse_toml,
}


def read_config_file(path: Path) -> dict[str, Any]:
    """Read one configuration file into a plain mapping.

    An empty file yields an empty mapping.

    Raises:
        ConfigurationError: If the file is missing, has an unknown extension,
            does not parse, or does not hold a mapping
    """
    parser = PARSERS.get(path.suffix)
    if parser is None:
        raise ConfigurationError(
            f"Unsupported config format: {path.suffix or path.name}",
            fix_hint="Use a .yml, .yaml or .toml file",
        )

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}", fix_hint=INIT_HINT) from None
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to read {path}", details=str(e)) from e

    data = parser(text, path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in {path}",
            details=f"Expected a mapping at top level, got {type(data).__name__}",
        )
    return data


def find_config(project_root: Path) -> Path | None:
    """Return the first configuration file found under ``project_root``."""
    for search_path in SEARCH_PATHS:
        candidate = project_root / search_path
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    project_root: Path | None = None,
) -> PublishConfig:
    """Load the effective publish configuration.

    Args:
        path: Explicit config file; relative paths resolve against
            ``project_root``. Unlike the searched locations it must exist.
        project_root: Directory searched for SEARCH_PATHS (defaults to cwd)

    Raises:
        ConfigurationError: If an explicit file is missing or any file is invalid
    """
    if project_root is None:
        project_root = Path.cwd()

    if path is not None:
        config_path: Path | None = path if path.is_absolute() else project_root / path
    else:
        config_path = find_config(project_root)

    data = read_config_file(config_path) if config_path is not None else {}

    try:
        return PublishConfig(**data)
    except ValidationError as e:
        source = config_path or "environment"
        raise ConfigurationError(
            f"Invalid configuration in {source}",
            details=str(e),
            fix_hint="Check the configuration values match expected types",
        ) from e
