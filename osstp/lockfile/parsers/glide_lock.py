"""Parser for Glide's glide.lock files."""

from __future__ import annotations

from pathlib import Path

import yaml

from osstp.exceptions import LockfileParseError
from osstp.lockfile.models import DependencyRecord
from osstp.lockfile.registry import register_parser


class GlideLockParser:
    lock_format = "glide"
    file_name = "glide.lock"

    def parse(self, file_path: Path, content: str) -> list[DependencyRecord]:
        # BaseLoader keeps every scalar as text: "1.10" and "0123456" are versions, not numbers
        try:
            data = yaml.load(content, Loader=yaml.BaseLoader) or {}
        except yaml.YAMLError as exc:
            raise LockfileParseError(file_path.name, str(exc)) from exc

        if not isinstance(data, dict):
            raise LockfileParseError(file_path.name, "top level must be a mapping")

        imports = data.get("imports") or []
        if not isinstance(imports, list):
            raise LockfileParseError(file_path.name, "'imports' must be a list")

        deps: list[DependencyRecord] = []
        for idx, item in enumerate(imports):
            if not isinstance(item, dict):
                raise LockfileParseError(file_path.name, f"imports[{idx}] is not a mapping")
            name = item.get("name")
            if not name or not isinstance(name, str):
                raise LockfileParseError(file_path.name, f"imports[{idx}] has no name")

            version = item.get("version") or None
            if version is not None and not isinstance(version, str):
                raise LockfileParseError(file_path.name, f"imports[{idx}] version is not a scalar")

            deps.append(DependencyRecord(import_path=name, declared_version=version))

        return deps


register_parser(GlideLockParser())
