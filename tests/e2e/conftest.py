"""E2E test fixtures for star-editor-e2e.

Runs the harness against a local copy of the constellation editor.
Requires Playwright's Chromium (``playwright install chromium``).
"""

from __future__ import annotations

from pathlib import Path

import pytest

from star_editor_e2e.config import HarnessConfig, get_headless_mode

FIXTURE_ROOT = Path(__file__).parent / "fixtures"


@pytest.fixture
def e2e_config(tmp_path: Path) -> HarnessConfig:
    """Config serving the fixture editor on an ephemeral port.

    Headless unless STAR_EDITOR_E2E_HEADLESS=false.
    """
    return HarnessConfig(
        root=FIXTURE_ROOT,
        port=0,
        headless=get_headless_mode(),
        artifact_dir=tmp_path / "artifacts",
        ready_timeout_ms=10000,
        download_timeout_ms=10000,
    )
