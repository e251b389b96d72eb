"""Pydantic v2 configuration models for registry_publish.yml.

These models provide:
- Type-safe configuration loading
- Automatic validation
- Default values that target the nim-lang/packages registry
- Environment variable override support
"""

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from registry_publish import __version__


class RegistryConfig(BaseModel):
    """Location of the community registry and its manifest."""

    owner: str = Field(
        default="nim-lang",
        description="Owner of the canonical registry repository",
    )
    repo: str = Field(
        default="packages",
        description="Name of the registry repository",
    )
    api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the hosting platform REST API",
    )
    web_url: str = Field(
        default="https://github.com",
        description="Base URL used to clone forks over HTTPS",
    )
    ssh_host: str = Field(
        default="git@github.com",
        description="SSH user and host used for the fork's push remote",
    )
    branch: str = Field(
        default="master",
        description="Branch that receives the manifest change",
    )
    manifest_file: str = Field(
        default="packages.json",
        description="Manifest file path inside the registry repository",
    )
    fork_dir_name: str = Field(
        default="nimble-packages-fork",
        description="Directory name of the local fork, next to the package",
    )

    @field_validator("api_url", "web_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("fork_dir_name")
    @classmethod
    def validate_fork_dir_name(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v:
            raise ValueError("fork_dir_name must be a single path component")
        return v


class TimeoutsConfig(BaseModel):
    """Timeout configuration in seconds."""

    settle_delay: int = Field(
        default=10,
        ge=0,
        description="Wait after fork creation before cloning",
    )
    http: int = Field(
        default=30,
        ge=1,
        description="HTTP request timeout",
    )
    git_operations: int = Field(
        default=300,
        ge=10,
        description="Git clone/push timeout",
    )


class PublishConfig(BaseSettings):
    """Root configuration model for registry_publish.yml.

    Supports environment variable overrides with REGISTRY_PUBLISH_ prefix.
    Example: REGISTRY_PUBLISH_REGISTRY__OWNER=my-org
    """

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
    user_agent: str = Field(
        default=f"registry-publish/{__version__}",
        description="User-Agent header sent to the REST API",
    )

    model_config = {
        "env_prefix": "REGISTRY_PUBLISH_",
        "env_nested_delimiter": "__",
    }
