"""Unit tests for the static asset responder."""

from __future__ import annotations

import http.client
from collections.abc import Generator
from pathlib import Path
from urllib.parse import urlsplit

import httpx
import pytest

from star_editor_e2e.models import ErrorCode, ResourceError
from star_editor_e2e.server.responder import (
    ensure_asset_available,
    get_mime_type,
    resolve_request_path,
    serve_assets,
)

EDITOR_HTML = b"<!doctype html><title>editor</title>"


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Create a served root with the default document and a sibling secret."""
    root = tmp_path / "site"
    (root / "demo").mkdir(parents=True)
    (root / "demo" / "constellation-editor.html").write_bytes(EDITOR_HTML)
    (root / "demo" / "app.js").write_text("console.log(1);")
    (root / "demo" / "Logo.PNG").write_bytes(b"\x89PNG")
    (tmp_path / "secret.txt").write_text("outside")
    return root


@pytest.fixture
def base_url(site_root: Path) -> Generator[str]:
    with serve_assets(site_root, port=0) as url:
        yield url


class TestGetMimeType:
    """Tests for get_mime_type function."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("index.html", "text/html; charset=utf-8"),
            ("app.js", "application/javascript; charset=utf-8"),
            ("style.css", "text/css; charset=utf-8"),
            ("data.json", "application/json; charset=utf-8"),
            ("icon.svg", "image/svg+xml"),
            ("photo.png", "image/png"),
            ("photo.jpg", "image/jpeg"),
            ("photo.JPEG", "image/jpeg"),
            ("archive.zip", "application/octet-stream"),
            ("README", "application/octet-stream"),
        ],
    )
    def test_lookup(self, name: str, expected: str) -> None:
        assert get_mime_type(Path(name)) == expected


class TestResolveRequestPath:
    """Tests for resolve_request_path function."""

    def test_root_maps_to_default_document(self, site_root: Path) -> None:
        resolved = resolve_request_path(site_root, "/")

        assert resolved == (site_root / "demo" / "constellation-editor.html").resolve()

    def test_query_string_is_ignored(self, site_root: Path) -> None:
        resolved = resolve_request_path(site_root, "/demo/app.js?v=2")

        assert resolved == (site_root / "demo" / "app.js").resolve()

    def test_percent_decoding(self, site_root: Path) -> None:
        resolved = resolve_request_path(site_root, "/demo/my%20file.js")

        assert resolved.name == "my file.js"

    @pytest.mark.parametrize("target", ["/../secret.txt", "/demo/../../secret.txt", "/%2e%2e/secret.txt"])
    def test_traversal_is_rejected(self, site_root: Path, target: str) -> None:
        with pytest.raises(PermissionError):
            resolve_request_path(site_root, target)


class TestServeAssets:
    """Tests for the running responder."""

    def test_default_document(self, base_url: str) -> None:
        response = httpx.get(f"{base_url}/", trust_env=False)

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/html; charset=utf-8"
        assert response.content == EDITOR_HTML

    def test_content_type_from_extension(self, base_url: str) -> None:
        response = httpx.get(f"{base_url}/demo/Logo.PNG", trust_env=False)

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"

    def test_missing_file_is_404(self, base_url: str) -> None:
        response = httpx.get(f"{base_url}/demo/missing.js", trust_env=False)

        assert response.status_code == 404
        assert response.text == "Not found"

    def test_null_byte_is_404(self, base_url: str) -> None:
        """A percent-encoded NUL cannot name a file; the server keeps answering."""
        parts = urlsplit(base_url)
        conn = http.client.HTTPConnection(parts.hostname, parts.port, timeout=5)
        try:
            conn.request("GET", "/demo/a%00.html")
            response = conn.getresponse()
            body = response.read()
        finally:
            conn.close()

        assert response.status == 404
        assert body == b"Not found"
        assert httpx.get(f"{base_url}/", trust_env=False).status_code == 200

    def test_directory_is_404(self, base_url: str) -> None:
        response = httpx.get(f"{base_url}/demo", trust_env=False)

        assert response.status_code == 404

    def test_traversal_is_403(self, base_url: str) -> None:
        """Raw request target escaping the root is forbidden."""
        parts = urlsplit(base_url)
        conn = http.client.HTTPConnection(parts.hostname, parts.port, timeout=5)
        try:
            conn.request("GET", "/../secret.txt")
            response = conn.getresponse()
            body = response.read()
        finally:
            conn.close()

        assert response.status == 403
        assert body == b"Forbidden"

    def test_socket_is_released_on_exit(self, site_root: Path) -> None:
        with serve_assets(site_root, port=0) as url:
            pass

        with pytest.raises(httpx.TransportError):
            httpx.get(f"{url}/", trust_env=False, timeout=1.0)

    def test_released_when_block_raises(self, site_root: Path) -> None:
        with pytest.raises(RuntimeError, match="scenario failed"):
            with serve_assets(site_root, port=0) as url:
                raise RuntimeError("scenario failed")

        with pytest.raises(httpx.TransportError):
            httpx.get(f"{url}/", trust_env=False, timeout=1.0)


class TestEnsureAssetAvailable:
    """Tests for ensure_asset_available function."""

    @pytest.mark.asyncio
    async def test_available(self, base_url: str) -> None:
        await ensure_asset_available(f"{base_url}/demo/constellation-editor.html")

    @pytest.mark.asyncio
    async def test_missing_raises_resource_error(self, base_url: str) -> None:
        with pytest.raises(ResourceError) as exc_info:
            await ensure_asset_available(f"{base_url}/demo/nope.html")

        assert exc_info.value.code == ErrorCode.RESOURCE_UNAVAILABLE
        assert exc_info.value.details["status_code"] == 404

    @pytest.mark.asyncio
    async def test_unreachable_raises_resource_error(self, site_root: Path) -> None:
        with serve_assets(site_root, port=0) as url:
            pass

        with pytest.raises(ResourceError, match="Could not reach"):
            await ensure_asset_available(f"{url}/", timeout=1.0)
