"""Audit pipeline — lock file -> license detection -> archive URLs -> manifest."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from osstp.archive import synthesize
from osstp.downloader import DEFAULT_TIMEOUT, ArchiveDownloader
from osstp.exceptions import DownloadError
from osstp.license.detector import DetectionOutcome, LicenseDetector
from osstp.lockfile.reader import read_lockfile, resolve_version
from osstp.manifest import OutputEntry, add_entry, build_entry

log = structlog.get_logger("osstp.audit")


@dataclass
class AuditSettings:
    """Run configuration assembled by the CLI."""

    root: Path = Path(".")
    lock_format: str | None = None
    download: bool = False
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class AuditReport:
    """Everything a run produced, in lock-file order."""

    lock_format: str
    entries: dict[str, OutputEntry] = field(default_factory=dict)
    rows: list[tuple[str, str, str]] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    unversioned: list[str] = field(default_factory=list)
    download_failures: list[str] = field(default_factory=list)


def run_audit(
    settings: AuditSettings,
    detector: LicenseDetector | None = None,
    downloader: ArchiveDownloader | None = None,
) -> AuditReport:
    """Run the full pipeline for the project at ``settings.root``.

    Only lock-file errors propagate; every per-dependency problem is
    recorded on the report instead.
    """
    parser, deps = read_lockfile(settings.root, settings.lock_format)
    detector = detector or LicenseDetector()
    report = AuditReport(lock_format=parser.lock_format)

    owned_downloader = None
    if settings.download and downloader is None:
        owned_downloader = downloader = ArchiveDownloader(timeout=settings.timeout)

    try:
        for dep in deps:
            if detector.detect(settings.root, dep) is DetectionOutcome.MISSING:
                report.missing.append(dep.import_path)

            if not dep.declared_version and not dep.declared_revision:
                report.unversioned.append(dep.import_path)
            version = resolve_version(dep)

            location = synthesize(dep.import_path, version)
            entry = build_entry(dep.import_path, version, dep.resolved_license, location)
            add_entry(report.entries, entry, dep.import_path)
            report.rows.append((dep.import_path, version, entry.license))

            if downloader is not None and settings.download:
                try:
                    downloader.download(location.url, settings.root / location.destination)
                except DownloadError as exc:
                    log.error("download.failed", name=dep.import_path, url=location.url, error=str(exc))
                    report.download_failures.append(dep.import_path)
    finally:
        if owned_downloader is not None:
            owned_downloader.close()

    return report
