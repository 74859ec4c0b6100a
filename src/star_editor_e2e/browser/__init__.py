"""Browser module for star-editor-e2e.

Provides the Playwright-based browser session and its gesture helpers.
"""

from star_editor_e2e.browser.events import DownloadCapture, EventLog
from star_editor_e2e.browser.session import BrowserSession

__all__ = ["BrowserSession", "DownloadCapture", "EventLog"]
