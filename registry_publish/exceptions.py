"""Custom exception hierarchy for the publish tool.

Exit codes follow Unix conventions:
- 1: General error
- 2: Configuration error
- 3: User aborted
- 4: Missing repository
- 5: Manifest file error
- 6: Network error
- 7: Git error
- 8: Package metadata error
"""


class PublishToolError(Exception):
    """Base exception for all publish tool errors.

    Each subclass defines an exit_code for CLI error reporting.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Brief error message
            details: Detailed explanation of what went wrong
            fix_hint: Suggested command or action to fix the issue
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"\nDetails: {self.details}")
        if self.fix_hint:
            parts.append(f"\nFix: {self.fix_hint}")
        return "".join(parts)


class ConfigurationError(PublishToolError):
    """Configuration file errors.

    Raised when:
    - An explicitly given config file does not exist
    - Config file has invalid syntax (YAML/TOML)
    - Config values fail validation
    """

    exit_code = 2


class AbortedError(PublishToolError):
    """The user declined to supply a required input."""

    exit_code = 3

    def __init__(
        self,
        message: str = "User aborted the process.",
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        super().__init__(message, details=details, fix_hint=fix_hint)


class MissingRepoError(PublishToolError):
    """No usable repository was found.

    Raised when:
    - The local fork of the registry cannot be located
    - The package directory has neither .git nor .hg metadata
    """

    exit_code = 4


class FileError(PublishToolError):
    """Manifest file failures.

    Raised when:
    - The manifest file does not exist or cannot be read
    - The manifest is not valid JSON
    - The top-level JSON value is not an array
    """

    exit_code = 5


class NetworkError(PublishToolError):
    """Network/API failures.

    Raised when:
    - HTTP requests fail
    - The API answers with an error status
    - Connection timeouts
    """

    exit_code = 6


class GitError(PublishToolError):
    """Git operation failures.

    Raised when:
    - Clone fails
    - Remote rewrite fails
    - Commit or push fails
    """

    exit_code = 7


class PackageInfoError(PublishToolError):
    """Package metadata could not be determined."""

    exit_code = 8
