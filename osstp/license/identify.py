"""Identify the license of a source tree from its top-level license file.

Detection is two-step: find exactly one candidate license file by name, then
classify its text against a priority-ordered list of signature phrases.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from osstp.exceptions import (
    LicenseFileNotFoundError,
    MultipleLicenseFilesError,
    UnrecognizedLicenseError,
)

LICENSE_MIT = "MIT"
LICENSE_NEW_BSD = "NewBSD"
LICENSE_FREE_BSD = "FreeBSD"
LICENSE_APACHE_20 = "Apache-2.0"
LICENSE_MPL_20 = "MPL-2.0"
LICENSE_GPL_20 = "GPL-2.0"
LICENSE_GPL_30 = "GPL-3.0"
LICENSE_LGPL_21 = "LGPL-2.1"
LICENSE_LGPL_30 = "LGPL-3.0"
LICENSE_AGPL_30 = "AGPL-3.0"
LICENSE_CDDL_10 = "CDDL-1.0"
LICENSE_EPL_10 = "EPL-1.0"
LICENSE_UNLICENSE = "Unlicense"
LICENSE_ISC = "ISC"

_BASE_NAMES = ("license", "licence", "copying", "unlicense")
_SUFFIXES = ("", ".txt", ".md", ".rst")

# Lower-cased file names accepted as license files
LICENSE_FILE_NAMES: frozenset[str] = frozenset(
    [base + suffix for base in _BASE_NAMES for suffix in _SUFFIXES]
    + ["license-mit", "mit-license"]
)

_WHITESPACE_RE = re.compile(r"\s+")


def _has(*phrases: str) -> Callable[[str], bool]:
    return lambda text: all(p in text for p in phrases)


def _has_any(*phrases: str) -> Callable[[str], bool]:
    return lambda text: any(p in text for p in phrases)


# (license_type, predicate) ordered by priority; the BSD pair relies on
# NewBSD being checked before FreeBSD.
SIGNATURES: list[tuple[str, Callable[[str], bool]]] = [
    (
        LICENSE_MIT,
        _has("permission is hereby granted, free of charge, to any person obtaining a copy of this software"),
    ),
    (
        LICENSE_APACHE_20,
        _has_any(
            "apache license version 2.0, january 2004",
            "http://www.apache.org/licenses/license-2.0",
        ),
    ),
    (LICENSE_GPL_20, _has("gnu general public license version 2, june 1991")),
    (LICENSE_GPL_30, _has("gnu general public license version 3, 29 june 2007")),
    (LICENSE_LGPL_21, _has("gnu lesser general public license version 2.1, february 1999")),
    (LICENSE_LGPL_30, _has("gnu lesser general public license version 3, 29 june 2007")),
    (LICENSE_AGPL_30, _has("gnu affero general public license version 3, 19 november 2007")),
    (LICENSE_MPL_20, _has("mozilla public license", "version 2.0")),
    (
        LICENSE_NEW_BSD,
        _has("redistribution and use in source and binary forms", "neither the name of"),
    ),
    (LICENSE_FREE_BSD, _has("redistribution and use in source and binary forms")),
    (LICENSE_CDDL_10, _has("common development and distribution license (cddl) version 1.0")),
    (LICENSE_EPL_10, _has("eclipse public license - v 1.0")),
    (
        LICENSE_UNLICENSE,
        _has("this is free and unencumbered software released into the public domain"),
    ),
    (
        LICENSE_ISC,
        _has("permission to use, copy, modify, and/or distribute this software for any"),
    ),
]


@dataclass
class License:
    """A license identified in a directory."""

    type: str
    text: str
    file: Path


def normalize_text(text: str) -> str:
    """Lower-case and collapse all whitespace runs to single spaces."""
    return _WHITESPACE_RE.sub(" ", text.lower()).strip()


def guess_type(text: str) -> str:
    """Classify license *text*. Raises :class:`UnrecognizedLicenseError`."""
    comp = normalize_text(text)
    for license_type, matches in SIGNATURES:
        if matches(comp):
            return license_type
    raise UnrecognizedLicenseError("license type unrecognized")


def find_license_file(directory: Path) -> Path:
    """Return the single license file directly inside *directory*."""
    try:
        candidates = sorted(
            entry
            for entry in directory.iterdir()
            if entry.is_file() and entry.name.lower() in LICENSE_FILE_NAMES
        )
    except OSError as exc:
        raise LicenseFileNotFoundError(f"cannot list {directory}: {exc}") from exc
    if not candidates:
        raise LicenseFileNotFoundError(f"no license file found in {directory}")
    if len(candidates) > 1:
        raise MultipleLicenseFilesError(str(directory), [c.name for c in candidates])
    return candidates[0]


def identify_license(directory: Path) -> License:
    """Find and classify the license file in *directory*.

    Raises a :class:`~osstp.exceptions.LicenseDetectionError` subclass when
    no single license file exists or its text is not recognized.
    """
    license_file = find_license_file(directory)
    try:
        text = license_file.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise LicenseFileNotFoundError(f"cannot read {license_file}: {exc}") from exc
    return License(type=guess_type(text), text=text, file=license_file)
