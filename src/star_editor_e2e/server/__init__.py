"""Loopback static file server for the editor page."""

from star_editor_e2e.server.responder import ensure_asset_available, get_mime_type, serve_assets

__all__ = ["ensure_asset_available", "get_mime_type", "serve_assets"]
