"""Editing of the registry's JSON manifest.

The manifest is a JSON array of package records. Records are appended at
the end and the whole document is rewritten in a canonical form: two-space
indentation, no trailing spaces, ``\\n`` line endings.
"""

import json
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from registry_publish.exceptions import FileError
from registry_publish.package_info import PackageInfo

# A run of spaces directly before a line terminator, or a bare terminator
LINE_END_PATTERN = re.compile(r" *(?:\r\n|\r|\n)")


@dataclass
class ManifestRecord:
    """One package entry of the manifest. Field order is the JSON key order."""

    name: str
    url: str
    method: str
    tags: list[str] = field(default_factory=list)
    description: str = ""
    license: str = ""
    web: str = ""

    def __post_init__(self) -> None:
        if not self.web:
            self.web = self.url

    @classmethod
    def from_package(
        cls,
        package: PackageInfo,
        url: str,
        tags: str | list[str],
        method: str,
    ) -> "ManifestRecord":
        """Build a record; a tag string is split on whitespace."""
        tag_list = tags.split() if isinstance(tags, str) else list(tags)
        return cls(
            name=package.name,
            url=url,
            method=method,
            tags=tag_list,
            description=package.description,
            license=package.license,
            web=url,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def cleanup_whitespace(text: str) -> str:
    """Remove trailing spaces and normalize line endings to ``\\n``.

    Spaces are only dropped when a line terminator follows them; spaces at
    the very end of the text and tabs are left alone.
    """
    return LINE_END_PATTERN.sub("\n", text)


def render_manifest(entries: list[Any]) -> str:
    """Serialize manifest entries in canonical form."""
    return cleanup_whitespace(json.dumps(entries, indent=2, ensure_ascii=False)) + "\n"


def load_manifest(path: Path) -> list[Any]:
    """Load and check the manifest.

    Raises:
        FileError: If the file is missing, unreadable, invalid JSON, or not an array
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileError(
            f"Manifest not found: {path}",
            fix_hint="Make sure the fork is a clone of the registry repository",
        ) from None
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Failed to read manifest {path}", details=str(e)) from e
    except json.JSONDecodeError as e:
        raise FileError(
            f"Invalid JSON in manifest {path}",
            details=str(e),
            fix_hint="Reset the fork to the upstream manifest before publishing",
        ) from e

    if not isinstance(data, list):
        raise FileError(
            f"Manifest {path} is not a JSON array",
            details=f"Top-level value is a {type(data).__name__}",
        )
    return data


def find_package(entries: list[Any], name: str) -> dict[str, Any] | None:
    """Return the entry whose name matches ``name`` case-insensitively."""
    wanted = name.lower()
    for entry in entries:
        if isinstance(entry, dict) and str(entry.get("name", "")).lower() == wanted:
            return entry
    return None


def append_record(record: ManifestRecord, path: Path) -> list[Any]:
    """Append ``record`` to the manifest at ``path`` and rewrite the file.

    Returns:
        The entries as written, new record last

    Raises:
        FileError: If the manifest cannot be loaded or written
    """
    entries = load_manifest(path)
    entries.append(record.to_dict())

    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(render_manifest(entries))
    except OSError as e:
        raise FileError(f"Failed to write manifest {path}", details=str(e)) from e
    return entries
