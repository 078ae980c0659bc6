"""Source-archive URL synthesis — guess a tarball URL from an import path.

Lock files record only an import path and a version, so the download URL is
inferred from hosting conventions. Rules are tried in order; the first match
wins. Nothing here verifies that the guessed URL exists.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

STAGING_DIR = "osstp-pkg-tmp"
CODELOAD_BASE = "https://codeload.github.com"


class ArchiveLocation(NamedTuple):
    url: str
    destination: str


class ArchiveRule(NamedTuple):
    """One hosting convention.

    ``matches`` receives the full import path; ``build`` receives the path
    remainder (everything after the host) and the version.
    """

    name: str
    matches: Callable[[str], bool]
    build: Callable[[str, str], ArchiveLocation]


def split_host(import_path: str) -> tuple[str, str]:
    """Split ``host/rest`` into ``(host, rest)``; a bare host is its own remainder."""
    host, sep, rest = import_path.partition("/")
    if not sep:
        return host, import_path
    return host, rest


def canonical_name(import_path: str) -> str:
    """Lower-cased last path segment with ``/`` and ``.`` replaced by ``_``."""
    last = import_path.rstrip("/").rsplit("/", 1)[-1]
    return last.replace("/", "_").replace(".", "_").lower()


def _location(owner_repo: str, filename_stem: str, version: str) -> ArchiveLocation:
    return ArchiveLocation(
        url=f"{CODELOAD_BASE}/{owner_repo}/tar.gz/{version}",
        destination=f"{STAGING_DIR}/{filename_stem}-{version}.tar.gz",
    )


# ── rule builders ─────────────────────────────────────────────────────────


def _prefix(prefix: str) -> Callable[[str], bool]:
    return lambda import_path: import_path.startswith(prefix)


def _mirror(owner: str, repo: str) -> Callable[[str, str], ArchiveLocation]:
    """Fixed GitHub mirror regardless of the sub-package path."""
    return lambda _rest, version: _location(f"{owner}/{repo}", repo, version)


def _github_matches(import_path: str) -> bool:
    if not import_path.startswith("github.com"):
        return False
    parts = split_host(import_path)[1].split("/")
    return len(parts) >= 2 and all(parts[:2])


def _github(rest: str, version: str) -> ArchiveLocation:
    owner, repo = rest.split("/")[:2]
    return _location(f"{owner}/{repo}", repo, version)


def _gopkg_in(rest: str, version: str) -> ArchiveLocation:
    # gopkg.in/user/pkg.v3 -> user/pkg ; gopkg.in/pkg.v3[/sub] -> go-pkg/pkg
    stem = rest.split(".", 1)[0]
    if "/" in stem:
        owner, repo = stem.split("/")[:2]
        return _location(f"{owner}/{repo}", repo, version)
    return _location(f"go-{stem}/{stem}", stem, version)


def _k8s_io(rest: str, version: str) -> ArchiveLocation:
    repo = rest.split("/")[0]
    return _location(f"kubernetes/{repo}", repo, version)


def _golang_org_matches(import_path: str) -> bool:
    if not import_path.startswith("golang.org"):
        return False
    return len(split_host(import_path)[1].split("/")) >= 2


def _golang_org(rest: str, version: str) -> ArchiveLocation:
    # golang.org/x/net -> golang/net
    repo = rest.split("/")[1]
    return _location(f"golang/{repo}", repo, version)


def _default(rest: str, version: str) -> ArchiveLocation:
    # Best effort: assume the remainder is a GitHub owner/repo layout.
    last = rest.rstrip("/").rsplit("/", 1)[-1]
    return _location(rest, last, version)


HOSTING_RULES: list[ArchiveRule] = [
    ArchiveRule("github", _github_matches, _github),
    ArchiveRule("google-cloud-go", _prefix("cloud.google.com/go"), _mirror("GoogleCloudPlatform", "google-cloud-go")),
    ArchiveRule("google-api-go-client", _prefix("google.golang.org/api"), _mirror("google", "google-api-go-client")),
    ArchiveRule("grpc-go", _prefix("google.golang.org/grpc"), _mirror("grpc", "grpc-go")),
    ArchiveRule("appengine", _prefix("google.golang.org/appengine"), _mirror("golang", "appengine")),
    ArchiveRule("camlistore", _prefix("camlistore.org"), _mirror("camlistore", "camlistore")),
    ArchiveRule("go4", _prefix("go4.org"), _mirror("camlistore", "go4")),
    ArchiveRule("gopkg.in", _prefix("gopkg.in"), _gopkg_in),
    ArchiveRule("k8s.io", _prefix("k8s.io"), _k8s_io),
    ArchiveRule("golang.org", _golang_org_matches, _golang_org),
]

DEFAULT_RULE = ArchiveRule("default", lambda _import_path: True, _default)


def match_rule(import_path: str, rules: list[ArchiveRule] | None = None) -> ArchiveRule:
    """Return the first rule matching *import_path*, or :data:`DEFAULT_RULE`."""
    for rule in HOSTING_RULES if rules is None else rules:
        if rule.matches(import_path):
            return rule
    return DEFAULT_RULE


def synthesize(import_path: str, version: str) -> ArchiveLocation:
    """Guess the tarball URL and staging path for *import_path* at *version*."""
    rule = match_rule(import_path)
    return rule.build(split_host(import_path)[1], version)
