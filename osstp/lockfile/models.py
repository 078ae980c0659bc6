"""Data models for the lock-file reader."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DependencyRecord:
    """A single dependency declared in a lock file.

    ``resolved_license`` starts empty and is filled in by the license detector.
    """

    import_path: str
    declared_version: str | None = None
    declared_revision: str | None = None
    resolved_license: str | None = None
