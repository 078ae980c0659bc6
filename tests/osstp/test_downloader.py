"""Tests for the archive downloader — HTTP faked with httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from osstp.downloader import ArchiveDownloader
from osstp.exceptions import DownloadError

TARBALL = b"\x1f\x8b\x08\x00fake-tarball-bytes"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)


class TestArchiveDownloader:
    def test_writes_body(self, tmp_path):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            return httpx.Response(200, content=TARBALL)

        dest = tmp_path / "osstp-pkg-tmp" / "bar-1.2.0.tar.gz"
        with ArchiveDownloader(client=_client(handler)) as downloader:
            downloader.download("https://codeload.github.com/foo/bar/tar.gz/1.2.0", dest)
        assert dest.read_bytes() == TARBALL

    def test_truncates_existing_file(self, tmp_path):
        dest = tmp_path / "pkg.tar.gz"
        dest.write_bytes(b"old contents that are longer than the new body")
        downloader = ArchiveDownloader(client=_client(lambda r: httpx.Response(200, content=b"new")))
        downloader.download("https://example.com/pkg.tar.gz", dest)
        assert dest.read_bytes() == b"new"

    def test_follows_redirects(self, tmp_path):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(302, headers={"Location": "https://example.com/new"})
            return httpx.Response(200, content=TARBALL)

        dest = tmp_path / "x.tar.gz"
        ArchiveDownloader(client=_client(handler)).download("https://example.com/old", dest)
        assert dest.read_bytes() == TARBALL

    @pytest.mark.parametrize("status", [400, 404, 500])
    def test_error_status(self, tmp_path, status):
        dest = tmp_path / "x.tar.gz"
        downloader = ArchiveDownloader(client=_client(lambda r: httpx.Response(status)))
        with pytest.raises(DownloadError, match=f"Got HTTP status code >= 400: {status}"):
            downloader.download("https://example.com/x", dest)
        assert not dest.exists()

    def test_transport_error(self, tmp_path):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DownloadError, match="connection refused"):
            ArchiveDownloader(client=_client(handler)).download("https://example.com/x", tmp_path / "x")

    def test_write_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        downloader = ArchiveDownloader(client=_client(lambda r: httpx.Response(200, content=b"x")))
        with pytest.raises(DownloadError, match="cannot write"):
            downloader.download("https://example.com/x", blocker / "x.tar.gz")

    def test_injected_client_not_closed(self):
        client = _client(lambda r: httpx.Response(200))
        ArchiveDownloader(client=client).close()
        assert not client.is_closed
