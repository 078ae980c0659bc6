"""Read a project's lock file into an ordered list of dependency records."""

from __future__ import annotations

from pathlib import Path

import structlog

# Ensure parsers are registered before any read runs.
import osstp.lockfile.parsers  # noqa: F401
from osstp.exceptions import LockfileError, LockfileNotFoundError
from osstp.lockfile.models import DependencyRecord
from osstp.lockfile.registry import PARSER_REGISTRY, LockfileParser, discover_lockfile

log = structlog.get_logger("osstp.lockfile")

DEFAULT_VERSION = "master"


def read_lockfile(
    root: Path, lock_format: str | None = None
) -> tuple[LockfileParser, list[DependencyRecord]]:
    """Load the lock file under *root*.

    With *lock_format* unset, the first registered format whose file exists
    is used. Returns the parser that handled the file (callers pick the
    output variant from its ``lock_format``) and the parsed records.

    Raises :class:`LockfileNotFoundError` when no lock file is present and
    :class:`LockfileParseError` when it is malformed.
    """
    if lock_format is None:
        found = discover_lockfile(root)
        if found is None:
            names = ", ".join(p.file_name for p in PARSER_REGISTRY.values())
            raise LockfileNotFoundError(f"no lock file found in {root} (looked for {names})")
        parser, file_path = found
    else:
        parser = PARSER_REGISTRY.get(lock_format)
        if parser is None:
            raise LockfileError(f"unknown lock file format: {lock_format!r}")
        file_path = root / parser.file_name
        if not file_path.is_file():
            raise LockfileNotFoundError(f"{file_path} does not exist")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LockfileError(f"cannot read {file_path}: {exc}") from exc

    deps = parser.parse(file_path, content)
    log.info("lockfile.loaded", file=file_path.name, format=parser.lock_format, count=len(deps))
    return parser, deps


def resolve_version(dep: DependencyRecord) -> str:
    """Pick the version to report: version, then revision, then ``master``."""
    if dep.declared_version:
        return dep.declared_version
    if dep.declared_revision:
        return dep.declared_revision
    log.warning("lockfile.version_missing", name=dep.import_path)
    return DEFAULT_VERSION
