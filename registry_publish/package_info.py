"""Package metadata for the record being published.

Values come from CLI options first, then from the package's ``.nimble``
descriptor (``description = "..."``, ``license = "..."``).
"""

import re
from dataclasses import dataclass
from pathlib import Path

from registry_publish.exceptions import PackageInfoError

DESCRIPTOR_SUFFIX = ".nimble"

FIELD_PATTERN = re.compile(r'^\s*(\w+)\s*=\s*"((?:[^"\\]|\\.)*)"', re.MULTILINE)


@dataclass(frozen=True)
class PackageInfo:
    """Name, description and license of the package being published."""

    name: str
    description: str
    license: str


def find_descriptor(package_dir: Path) -> Path | None:
    """Return the single package descriptor in ``package_dir``, if any.

    Raises:
        PackageInfoError: If more than one descriptor exists
    """
    candidates = sorted(package_dir.glob(f"*{DESCRIPTOR_SUFFIX}"))
    if len(candidates) > 1:
        names = ", ".join(p.name for p in candidates)
        raise PackageInfoError(
            f"Found more than one package descriptor in {package_dir}",
            details=names,
            fix_hint="Pass --name, --description and --license explicitly",
        )
    return candidates[0] if candidates else None


def parse_descriptor(path: Path) -> dict[str, str]:
    """Read ``key = "value"`` fields from a descriptor file.

    Raises:
        PackageInfoError: If the file cannot be read
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PackageInfoError(f"Failed to read {path}", details=str(e)) from e

    fields: dict[str, str] = {}
    for key, value in FIELD_PATTERN.findall(content):
        fields.setdefault(key.lower(), value.replace('\\"', '"'))
    return fields


def load_package_info(
    package_dir: Path,
    name: str | None = None,
    description: str | None = None,
    license: str | None = None,
) -> PackageInfo:
    """Resolve package metadata.

    Explicit arguments win over descriptor values. The name defaults to the
    descriptor's file stem.

    Raises:
        PackageInfoError: If a field cannot be determined
    """
    fields: dict[str, str] = {}
    descriptor = find_descriptor(package_dir)
    if descriptor is not None:
        fields = parse_descriptor(descriptor)
        fields.setdefault("name", descriptor.stem)

    name = name or fields.get("name") or None
    if description is None:
        description = fields.get("description")
    if license is None:
        license = fields.get("license")

    if name is None or description is None or license is None:
        missing = [
            key
            for key, value in (("name", name), ("description", description), ("license", license))
            if value is None
        ]
        raise PackageInfoError(
            f"Could not determine package {', '.join(missing)}",
            details=f"No value given and none found in a {DESCRIPTOR_SUFFIX} file in {package_dir}",
            fix_hint="Pass the missing values with --name, --description or --license",
        )

    return PackageInfo(name=name, description=description, license=license)
