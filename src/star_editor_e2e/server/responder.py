"""Static asset responder for the editor page.

Serves files below a fixed root on a loopback address for the duration of
a ``with serve_assets(...)`` block.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Generator
from contextlib import contextmanager
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import unquote, urlsplit

import httpx

from star_editor_e2e.config import DEFAULT_DOCUMENT, DEFAULT_HOST, DEFAULT_PORT
from star_editor_e2e.models import ResourceError

logger = logging.getLogger(__name__)

MIME_TYPES: dict[str, str] = {
    ".html": "text/html; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}
DEFAULT_MIME_TYPE = "application/octet-stream"
PLAIN_TEXT = "text/plain; charset=utf-8"


def get_mime_type(path: Path) -> str:
    """Map a file extension to its Content-Type (case-insensitive)."""
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_MIME_TYPE)


def resolve_request_path(root: Path, request_target: str, default_document: str = DEFAULT_DOCUMENT) -> Path:
    """Resolve a request target to a file path below ``root``.

    The query string is dropped, the path is percent-decoded, and ``/``
    maps to ``default_document``.

    Args:
        root: Directory files are served from
        request_target: Raw request target (e.g. "/demo/app.js?v=2")
        default_document: Path served for "/"

    Returns:
        Absolute path of the requested file (may not exist)

    Raises:
        PermissionError: If the path escapes ``root``
        ValueError: If the decoded path contains a NUL byte
    """
    root = root.resolve()
    request_path = unquote(urlsplit(request_target).path) or "/"
    if request_path == "/":
        request_path = default_document

    full_path = (root / ("." + request_path)).resolve()
    if full_path != root and not full_path.is_relative_to(root):
        raise PermissionError(f"{request_target} escapes the asset root")
    return full_path


def _make_handler(root: Path, default_document: str) -> type[BaseHTTPRequestHandler]:
    class AssetHandler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802 - http.server naming
            try:
                full_path = resolve_request_path(root, self.path, default_document)
            except PermissionError:
                self._send(403, b"Forbidden", PLAIN_TEXT)
                return
            except ValueError:
                # No file name can hold a NUL byte
                self._send(404, b"Not found", PLAIN_TEXT)
                return

            try:
                body = full_path.read_bytes()
            except (OSError, ValueError):
                self._send(404, b"Not found", PLAIN_TEXT)
                return
            self._send(200, body, get_mime_type(full_path))

        def _send(self, status: int, body: bytes, content_type: str) -> None:
            self.send_response(status)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format: str, *args: object) -> None:  # noqa: A002
            logger.debug("%s - %s", self.address_string(), format % args)

    return AssetHandler


@contextmanager
def serve_assets(
    root: Path,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    default_document: str = DEFAULT_DOCUMENT,
) -> Generator[str]:
    """Serve ``root`` over HTTP until the block exits.

    Args:
        root: Directory to serve
        host: Loopback address to bind
        port: Port to bind, 0 for an ephemeral port
        default_document: Path served for "/"

    Yields:
        Base URL of the running server (e.g. "http://127.0.0.1:4173")
    """
    server = ThreadingHTTPServer((host, port), _make_handler(root.resolve(), default_document))
    bound_host, bound_port = server.server_address[:2]
    thread = threading.Thread(target=server.serve_forever, name="asset-responder", daemon=True)
    thread.start()
    base_url = f"http://{bound_host}:{bound_port}"
    logger.info("Serving %s at %s", root, base_url)
    try:
        yield base_url
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=1.0)
        logger.info("Asset responder stopped")


async def ensure_asset_available(url: str, timeout: float = 10.0) -> None:
    """Check that a required asset is served.

    Args:
        url: Absolute URL of the asset
        timeout: Request timeout in seconds

    Raises:
        ResourceError: If the request fails or answers with an error status
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, trust_env=False) as client:
            response = await client.get(url)
    except httpx.TransportError as e:
        raise ResourceError(f"Could not reach {url}: {e}", details={"url": url}) from e

    if response.status_code >= 400:
        raise ResourceError(
            f"Required asset {url} answered {response.status_code}",
            details={"url": url, "status_code": response.status_code, "response": response.text},
        )
    logger.debug("Asset available: %s", url)
