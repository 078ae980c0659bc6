"""OSSTP manifest output — structured YAML mapping or flat CSV rows."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields

import structlog
import yaml

from osstp.archive import ArchiveLocation, canonical_name

log = structlog.get_logger("osstp.manifest")

REPOSITORY_LABEL = "Other"

# Dataclass field -> YAML key, in output order.
_YAML_KEYS = {
    "name": "name",
    "license": "license",
    "repository": "repository",
    "url": "url",
    "other_distribution": "other-distribution",
    "other_url": "other-url",
    "version": "version",
}


@dataclass
class OutputEntry:
    """One manifest entry, keyed by :meth:`package_id` in the output mapping."""

    name: str
    license: str
    repository: str
    url: str
    other_distribution: str
    other_url: str
    version: str

    @property
    def package_id(self) -> str:
        return f"other:{self.name}:{self.version}"

    def to_dict(self) -> dict[str, str]:
        return {_YAML_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> OutputEntry:
        return cls(**{attr: str(data.get(key) or "") for attr, key in _YAML_KEYS.items()})


def build_entry(
    import_path: str, version: str, license: str | None, location: ArchiveLocation
) -> OutputEntry:
    return OutputEntry(
        name=canonical_name(import_path),
        license=license or "",
        repository=REPOSITORY_LABEL,
        url=location.url,
        other_distribution=location.destination,
        other_url=f"http://{import_path}",
        version=version,
    )


def add_entry(entries: dict[str, OutputEntry], entry: OutputEntry, import_path: str) -> None:
    """Insert *entry*; a duplicate package id replaces the earlier entry."""
    prev = entries.get(entry.package_id)
    if prev is not None:
        log.warning(
            "manifest.entry_overwritten",
            package_id=entry.package_id,
            old_source=prev.other_url,
            new_source=f"http://{import_path}",
        )
    entries[entry.package_id] = entry


def render_yaml(entries: Mapping[str, OutputEntry]) -> str:
    """Serialize the manifest mapping, sorted by package id."""
    data = {pkg_id: entries[pkg_id].to_dict() for pkg_id in sorted(entries)}
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)


def load_yaml(text: str) -> dict[str, OutputEntry]:
    """Parse a manifest produced by :func:`render_yaml`."""
    data = yaml.safe_load(text) or {}
    return {str(pkg_id): OutputEntry.from_dict(entry) for pkg_id, entry in data.items()}


def render_rows(rows: Iterable[tuple[str, str, str]]) -> str:
    """Serialize ``(import_path, version, license)`` rows as CSV lines."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    for row in rows:
        writer.writerow(row)
    return buf.getvalue()
