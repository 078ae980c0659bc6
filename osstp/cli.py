"""CLI entry point: osstp-manifest.

Usage:
    osstp-manifest                       # Gopkg.lock -> YAML manifest on stdout
    osstp-manifest --download            # also fetch source tarballs into osstp-pkg-tmp/
    osstp-manifest --lockfile-format glide
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from osstp.audit import AuditReport, AuditSettings, run_audit
from osstp.core.logging import setup_logging
from osstp.downloader import DEFAULT_TIMEOUT
from osstp.exceptions import LockfileError
from osstp.manifest import render_rows, render_yaml


def _print_report(report: AuditReport) -> None:
    if report.lock_format == "glide":
        click.echo(render_rows(report.rows), nl=False)
    else:
        click.echo(render_yaml(report.entries))

    _print_block("The following packages are missing license files:", report.missing)
    _print_block(
        "The following packages are missing a version and a revision (reported as master):",
        report.unversioned,
    )
    _print_block("The following packages could not be downloaded:", report.download_failures)


def _print_block(heading: str, names: list[str]) -> None:
    if not names:
        return
    click.echo(f"\n\n{heading}", err=True)
    for name in names:
        click.echo(f" -> {name}", err=True)


@click.command()
@click.option("--download", is_flag=True, default=False, help="Download the dependencies too")
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Project directory holding the lock file and vendor/",
)
@click.option(
    "--lockfile-format",
    type=click.Choice(["auto", "dep", "glide"]),
    default="auto",
    help="Lock file to read (auto: Gopkg.lock, then glide.lock)",
)
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    envvar="OSSTP_HTTP_TIMEOUT",
    help="HTTP timeout in seconds for --download",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(download: bool, root: Path, lockfile_format: str, timeout: float, verbose: bool) -> None:
    """Generate an OSSTP manifest for a project's vendored Go dependencies."""
    setup_logging(verbose)

    settings = AuditSettings(
        root=root,
        lock_format=None if lockfile_format == "auto" else lockfile_format,
        download=download,
        timeout=timeout,
    )
    try:
        report = run_audit(settings)
    except LockfileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _print_report(report)


if __name__ == "__main__":
    main()
