"""Lock-file reader — load declared dependencies from Gopkg.lock or glide.lock."""

from osstp.lockfile.models import DependencyRecord
from osstp.lockfile.reader import read_lockfile, resolve_version

__all__ = ["DependencyRecord", "read_lockfile", "resolve_version"]
