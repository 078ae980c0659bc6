"""Parser for dep's Gopkg.lock files."""

from __future__ import annotations

import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from osstp.exceptions import LockfileParseError
from osstp.lockfile.models import DependencyRecord
from osstp.lockfile.registry import register_parser


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


class GopkgLockParser:
    lock_format = "dep"
    file_name = "Gopkg.lock"

    def parse(self, file_path: Path, content: str) -> list[DependencyRecord]:
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise LockfileParseError(file_path.name, str(exc)) from exc

        projects = data.get("projects", [])
        if not isinstance(projects, list):
            raise LockfileParseError(file_path.name, "'projects' must be an array of tables")

        deps: list[DependencyRecord] = []
        for idx, project in enumerate(projects):
            if not isinstance(project, dict):
                raise LockfileParseError(file_path.name, f"projects[{idx}] is not a table")
            name = project.get("name")
            if not name or not isinstance(name, str):
                raise LockfileParseError(file_path.name, f"projects[{idx}] has no name")

            deps.append(
                DependencyRecord(
                    import_path=name,
                    declared_version=_optional_str(project.get("version")),
                    declared_revision=_optional_str(project.get("revision")),
                )
            )

        return deps


register_parser(GopkgLockParser())
