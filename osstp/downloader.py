"""Synchronous source-archive downloader."""

from __future__ import annotations

import os
from pathlib import Path

import httpx
import structlog

from osstp.exceptions import DownloadError

log = structlog.get_logger("osstp.downloader")

DEFAULT_TIMEOUT = 30.0  # seconds


class ArchiveDownloader:
    """Fetch archives one at a time and write them to disk. No retries."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, client: httpx.Client | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    # ── lifecycle ──────────────────────────────────────────────────────────

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> ArchiveDownloader:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ── public ─────────────────────────────────────────────────────────────

    def download(self, url: str, destination: Path) -> None:
        """GET *url* and write the body to *destination*, synced to disk.

        Raises :class:`DownloadError` on HTTP status >= 400, transport
        failure, or a local write failure.
        """
        log.info("download.started", url=url, destination=str(destination))
        try:
            with self._client.stream("GET", url) as resp:
                if resp.status_code >= 400:
                    raise DownloadError(
                        f"Got HTTP status code >= 400: {resp.status_code} {resp.reason_phrase}"
                    )
                destination.parent.mkdir(parents=True, exist_ok=True)
                with open(destination, "wb") as f:
                    f.write(resp.read())
                    f.flush()
                    os.fsync(f.fileno())
        except httpx.HTTPError as exc:
            raise DownloadError(f"request to {url} failed: {exc}") from exc
        except OSError as exc:
            raise DownloadError(f"cannot write {destination}: {exc}") from exc
