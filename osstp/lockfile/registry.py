"""Lock-file parser registry — match lock files in a project root to parsers."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from osstp.lockfile.models import DependencyRecord


@runtime_checkable
class LockfileParser(Protocol):
    """Interface that every lock-file parser must satisfy."""

    lock_format: str
    file_name: str

    def parse(self, file_path: Path, content: str) -> list[DependencyRecord]: ...


# Insertion order is the auto-detection priority.
PARSER_REGISTRY: dict[str, LockfileParser] = {}


def register_parser(parser: LockfileParser) -> None:
    """Register a parser instance by its lock_format."""
    PARSER_REGISTRY[parser.lock_format] = parser


def discover_lockfile(root: Path) -> tuple[LockfileParser, Path] | None:
    """Return the first registered parser whose lock file exists under *root*."""
    for parser in PARSER_REGISTRY.values():
        candidate = root / parser.file_name
        if candidate.is_file():
            return parser, candidate
    return None
