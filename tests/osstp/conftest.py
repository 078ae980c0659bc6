"""Shared fixtures for osstp tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog
from structlog.testing import LogCapture


@pytest.fixture(autouse=True)
def log_output():
    """Capture structlog events instead of printing them."""
    capture = LogCapture()
    structlog.configure(processors=[capture])
    yield capture
    structlog.reset_defaults()


@pytest.fixture
def make_vendor(tmp_path: Path):
    """Create ``vendor/<import_path>`` under tmp_path, optionally with a license file."""

    def _make(import_path: str, license_text: str | None = None, file_name: str = "LICENSE") -> Path:
        pkg_dir = tmp_path / "vendor" / import_path
        pkg_dir.mkdir(parents=True)
        (pkg_dir / "main.go").write_text("package main\n")
        if license_text is not None:
            (pkg_dir / file_name).write_text(license_text)
        return pkg_dir

    return _make
