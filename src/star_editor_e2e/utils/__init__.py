"""Utility modules for star-editor-e2e."""

from star_editor_e2e.utils.logging import get_logger, setup_logging

__all__ = ["setup_logging", "get_logger"]
