"""star-editor-e2e: headless acceptance harness for the constellation editor."""

from star_editor_e2e.browser.session import BrowserSession
from star_editor_e2e.config import HarnessConfig, SettleDelays
from star_editor_e2e.models import (
    DownloadError,
    ErrorCode,
    HarnessError,
    NavigationError,
    ResourceError,
    WaitTimeoutError,
)
from star_editor_e2e.runner import run_scenario

__all__ = [
    "BrowserSession",
    "DownloadError",
    "ErrorCode",
    "HarnessConfig",
    "HarnessError",
    "NavigationError",
    "ResourceError",
    "SettleDelays",
    "WaitTimeoutError",
    "run_scenario",
]
