"""Tests for the lock-file reader and parsers."""

from __future__ import annotations

from pathlib import Path

import pytest

from osstp.exceptions import LockfileError, LockfileNotFoundError, LockfileParseError
from osstp.lockfile.models import DependencyRecord
from osstp.lockfile.parsers.glide_lock import GlideLockParser
from osstp.lockfile.parsers.gopkg_lock import GopkgLockParser
from osstp.lockfile.reader import read_lockfile, resolve_version
from osstp.lockfile.registry import PARSER_REGISTRY, discover_lockfile

GOPKG_LOCK = """\
# This file is autogenerated, do not edit; changes may be undone by the next 'dep ensure'.


[[projects]]
  name = "github.com/foo/bar"
  packages = ["."]
  revision = "0123456789abcdef0123456789abcdef01234567"
  version = "1.2.0"

[[projects]]
  branch = "master"
  name = "golang.org/x/net"
  packages = ["context"]
  revision = "a1b2c3d4"

[solve-meta]
  analyzer-name = "dep"
  analyzer-version = 1
  inputs-digest = "deadbeef"
  solver-name = "gps-cdcl"
  solver-version = 1
"""

GLIDE_LOCK = """\
hash: 2c2f5a4ba7e0d3b5a0f0e7e5c4f0a1b2
updated: 2017-06-01T10:00:00.000000000-07:00
imports:
- name: github.com/howeyc/gopass
  version: v0.1
- name: gopkg.in/yaml.v2
  version: a5b47d31c556af34a302ce5d659e6fea44d90de0
  subpackages:
  - foo
testImports: []
"""


# ── Registry ─────────────────────────────────────────────────────────────


class TestRegistry:
    def test_all_parsers_registered(self):
        assert {"dep", "glide"}.issubset(PARSER_REGISTRY.keys())

    def test_dep_takes_priority(self):
        assert list(PARSER_REGISTRY)[:2] == ["dep", "glide"]

    def test_discover_gopkg_lock(self, tmp_path):
        (tmp_path / "Gopkg.lock").write_text(GOPKG_LOCK)
        parser, path = discover_lockfile(tmp_path)
        assert parser.lock_format == "dep"
        assert path.name == "Gopkg.lock"

    def test_discover_prefers_gopkg_over_glide(self, tmp_path):
        (tmp_path / "Gopkg.lock").write_text(GOPKG_LOCK)
        (tmp_path / "glide.lock").write_text(GLIDE_LOCK)
        parser, _ = discover_lockfile(tmp_path)
        assert parser.lock_format == "dep"

    def test_discover_empty_dir(self, tmp_path):
        assert discover_lockfile(tmp_path) is None


# ── GopkgLockParser ──────────────────────────────────────────────────────


class TestGopkgLockParser:
    @pytest.fixture
    def parser(self):
        return GopkgLockParser()

    def test_projects_in_order(self, parser, tmp_path):
        f = tmp_path / "Gopkg.lock"
        deps = parser.parse(f, GOPKG_LOCK)
        assert [d.import_path for d in deps] == ["github.com/foo/bar", "golang.org/x/net"]

    def test_version_and_revision(self, parser, tmp_path):
        deps = parser.parse(tmp_path / "Gopkg.lock", GOPKG_LOCK)
        assert deps[0].declared_version == "1.2.0"
        assert deps[0].declared_revision == "0123456789abcdef0123456789abcdef01234567"
        assert deps[1].declared_version is None
        assert deps[1].declared_revision == "a1b2c3d4"

    def test_license_starts_unset(self, parser, tmp_path):
        deps = parser.parse(tmp_path / "Gopkg.lock", GOPKG_LOCK)
        assert all(d.resolved_license is None for d in deps)

    def test_no_projects(self, parser, tmp_path):
        assert parser.parse(tmp_path / "Gopkg.lock", "[solve-meta]\nsolver-version = 1\n") == []

    def test_invalid_toml(self, parser, tmp_path):
        with pytest.raises(LockfileParseError, match="Gopkg.lock"):
            parser.parse(tmp_path / "Gopkg.lock", "[[projects]\nname = ")

    def test_projects_not_a_list(self, parser, tmp_path):
        with pytest.raises(LockfileParseError):
            parser.parse(tmp_path / "Gopkg.lock", 'projects = "nope"\n')

    def test_project_without_name(self, parser, tmp_path):
        with pytest.raises(LockfileParseError, match="no name"):
            parser.parse(tmp_path / "Gopkg.lock", '[[projects]]\nversion = "1.0"\n')


# ── GlideLockParser ──────────────────────────────────────────────────────


class TestGlideLockParser:
    @pytest.fixture
    def parser(self):
        return GlideLockParser()

    def test_imports_in_order(self, parser, tmp_path):
        deps = parser.parse(tmp_path / "glide.lock", GLIDE_LOCK)
        assert [d.import_path for d in deps] == ["github.com/howeyc/gopass", "gopkg.in/yaml.v2"]
        assert deps[0].declared_version == "v0.1"
        assert deps[0].declared_revision is None

    @pytest.mark.parametrize("raw", ["1.5", "1.10", "0123456", "1e3", "2017", "true"])
    def test_version_kept_verbatim(self, parser, tmp_path, raw):
        deps = parser.parse(tmp_path / "glide.lock", f"imports:\n- name: example.com/x\n  version: {raw}\n")
        assert deps[0].declared_version == raw

    def test_empty_version_is_none(self, parser, tmp_path):
        deps = parser.parse(tmp_path / "glide.lock", "imports:\n- name: example.com/x\n  version:\n")
        assert deps[0].declared_version is None

    def test_version_not_scalar(self, parser, tmp_path):
        with pytest.raises(LockfileParseError, match="version"):
            parser.parse(tmp_path / "glide.lock", "imports:\n- name: example.com/x\n  version: [a, b]\n")

    def test_missing_version(self, parser, tmp_path):
        deps = parser.parse(tmp_path / "glide.lock", "imports:\n- name: example.com/x\n")
        assert deps[0].declared_version is None

    def test_empty_file(self, parser, tmp_path):
        assert parser.parse(tmp_path / "glide.lock", "") == []

    def test_invalid_yaml(self, parser, tmp_path):
        with pytest.raises(LockfileParseError):
            parser.parse(tmp_path / "glide.lock", "imports: [unclosed\n")

    def test_top_level_not_mapping(self, parser, tmp_path):
        with pytest.raises(LockfileParseError, match="mapping"):
            parser.parse(tmp_path / "glide.lock", "- a\n- b\n")

    def test_import_without_name(self, parser, tmp_path):
        with pytest.raises(LockfileParseError):
            parser.parse(tmp_path / "glide.lock", "imports:\n- version: v1\n")


# ── read_lockfile ────────────────────────────────────────────────────────


class TestReadLockfile:
    def test_auto_detects_gopkg(self, tmp_path, log_output):
        (tmp_path / "Gopkg.lock").write_text(GOPKG_LOCK)
        parser, deps = read_lockfile(tmp_path)
        assert parser.lock_format == "dep"
        assert len(deps) == 2
        assert log_output.entries[-1]["event"] == "lockfile.loaded"
        assert log_output.entries[-1]["count"] == 2

    def test_explicit_glide(self, tmp_path):
        (tmp_path / "Gopkg.lock").write_text(GOPKG_LOCK)
        (tmp_path / "glide.lock").write_text(GLIDE_LOCK)
        parser, deps = read_lockfile(tmp_path, "glide")
        assert parser.lock_format == "glide"
        assert deps[0].import_path == "github.com/howeyc/gopass"

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(LockfileNotFoundError, match="Gopkg.lock"):
            read_lockfile(tmp_path)

    def test_explicit_format_missing_file(self, tmp_path):
        (tmp_path / "Gopkg.lock").write_text(GOPKG_LOCK)
        with pytest.raises(LockfileNotFoundError, match="glide.lock"):
            read_lockfile(tmp_path, "glide")

    def test_unknown_format(self, tmp_path):
        with pytest.raises(LockfileError, match="unknown"):
            read_lockfile(tmp_path, "npm")

    def test_malformed_file_is_fatal(self, tmp_path):
        (tmp_path / "Gopkg.lock").write_text("this is = = not toml")
        with pytest.raises(LockfileParseError):
            read_lockfile(tmp_path)


# ── resolve_version ──────────────────────────────────────────────────────


class TestResolveVersion:
    def test_prefers_version(self):
        dep = DependencyRecord("github.com/a/b", declared_version="v1.0", declared_revision="abc")
        assert resolve_version(dep) == "v1.0"

    def test_falls_back_to_revision(self):
        dep = DependencyRecord("github.com/a/b", declared_version="", declared_revision="abc")
        assert resolve_version(dep) == "abc"

    def test_defaults_to_master_with_warning(self, log_output):
        dep = DependencyRecord("github.com/a/b")
        assert resolve_version(dep) == "master"
        warnings = [e for e in log_output.entries if e["event"] == "lockfile.version_missing"]
        assert len(warnings) == 1
        assert warnings[0]["name"] == "github.com/a/b"
        assert warnings[0]["log_level"] == "warning"

    def test_no_warning_when_version_present(self, log_output):
        resolve_version(DependencyRecord("github.com/a/b", declared_version="v1"))
        assert not any(e["event"] == "lockfile.version_missing" for e in log_output.entries)
