"""Default configuration generation."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from registry_publish.config.models import PublishConfig
from registry_publish.exceptions import ConfigurationError

SECTIONS = [
    ("registry", "Community Registry"),
    ("timeouts", "Timeouts (seconds)"),
    ("user_agent", "HTTP Client"),
]


def generate_default_config() -> dict[str, Any]:
    """Return the built-in defaults as a plain dictionary."""
    # model_construct skips environment overrides
    return PublishConfig.model_construct().model_dump()


def generate_config_header() -> str:
    """Build the comment block written at the top of a new config file."""
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    return (
        "# registry-publish configuration\n"
        f"# Generated: {timestamp}\n"
        "#\n"
        "# Every value can be overridden with REGISTRY_PUBLISH_* environment\n"
        "# variables, e.g. REGISTRY_PUBLISH_REGISTRY__OWNER=my-org\n"
    )


def write_default_config(output_path: Path) -> None:
    """Generate and write a default configuration file.

    Args:
        output_path: Path to write configuration

    Raises:
        ConfigurationError: If file cannot be written
    """
    config = generate_default_config()

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(generate_config_header())
            for key, title in SECTIONS:
                f.write(f"\n# {title}\n")
                yaml.safe_dump(
                    {key: config[key]},
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to write configuration to {output_path}",
            details=str(e),
        ) from e
