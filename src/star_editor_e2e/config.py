"""Harness configuration.

Settings come from STAR_EDITOR_E2E_* environment variables, with defaults
matching the canonical local run. CLI options may override them.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, Field

# Environment variable names
HEADLESS_ENV_VAR = "STAR_EDITOR_E2E_HEADLESS"
ROOT_ENV_VAR = "STAR_EDITOR_E2E_ROOT"
PORT_ENV_VAR = "STAR_EDITOR_E2E_PORT"
ARTIFACT_DIR_ENV_VAR = "STAR_EDITOR_E2E_ARTIFACT_DIR"
LOG_LEVEL_ENV_VAR = "STAR_EDITOR_E2E_LOG_LEVEL"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4173
DEFAULT_DOCUMENT = "/demo/constellation-editor.html"

# Timeouts (milliseconds)
DEFAULT_NAVIGATION_TIMEOUT_MS = 30000
DEFAULT_READY_TIMEOUT_MS = 30000
DEFAULT_DOWNLOAD_TIMEOUT_MS = 10000
DEFAULT_POLL_INTERVAL_MS = 100


def get_headless_mode() -> bool:
    """Get headless mode from STAR_EDITOR_E2E_HEADLESS environment variable.

    Default: True (headless mode for CI/CD stability)
    Set STAR_EDITOR_E2E_HEADLESS=false to show the browser window for debugging.

    Returns:
        True if headless mode is enabled (default)
    """
    return os.environ.get(HEADLESS_ENV_VAR, "true").lower() != "false"


def get_log_level() -> int:
    """Get log level from STAR_EDITOR_E2E_LOG_LEVEL (default: WARNING)."""
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


class SettleDelays(BaseModel):
    """Fixed waits used where the editor exposes no readiness signal (ms).

    Attributes:
        ready: After the overlay hit-rect appears; the editor finishes
            its layout through several deferred timers
        drag: After releasing a dragged star
        delete: After a right-click delete
        save: After clicking save, before reading the dialog log
    """

    ready: int = 2000
    drag: int = 200
    delete: int = 200
    save: int = 150


class HarnessConfig(BaseModel):
    """Settings for one harness run."""

    root: Path = Field(default_factory=Path.cwd)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    document: str = DEFAULT_DOCUMENT
    headless: bool = True
    artifact_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS
    ready_timeout_ms: int = DEFAULT_READY_TIMEOUT_MS
    download_timeout_ms: int = DEFAULT_DOWNLOAD_TIMEOUT_MS
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    settle: SettleDelays = Field(default_factory=SettleDelays)

    @classmethod
    def from_env(cls) -> HarnessConfig:
        """Build a config from STAR_EDITOR_E2E_* environment variables."""
        values: dict[str, object] = {"headless": get_headless_mode()}
        if root := os.environ.get(ROOT_ENV_VAR):
            values["root"] = Path(root)
        if port := os.environ.get(PORT_ENV_VAR):
            values["port"] = int(port)
        if artifact_dir := os.environ.get(ARTIFACT_DIR_ENV_VAR):
            values["artifact_dir"] = Path(artifact_dir)
        return cls.model_validate(values)

    @property
    def base_url(self) -> str:
        """Base URL of the asset responder."""
        return f"http://{self.host}:{self.port}"

    @property
    def editor_url(self) -> str:
        """Absolute URL of the editor page."""
        return f"{self.base_url}{self.document}"
