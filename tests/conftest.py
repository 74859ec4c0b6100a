"""Pytest configuration and shared fixtures for star-editor-e2e tests.

This module provides Playwright page mocks and a harness config used
across the unit tests.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from star_editor_e2e.browser.session import BrowserSession
from star_editor_e2e.config import HarnessConfig, SettleDelays


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None]:
    """Drop handlers installed by setup_logging after each test.

    The CLI binds its handler to the runner's captured stderr, which is
    closed once the invocation ends.
    """
    yield
    logger = logging.getLogger("star_editor_e2e")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# ============================================================================
# Playwright Mocks
# ============================================================================


@pytest.fixture
def mock_locator() -> MagicMock:
    """Create a mock Playwright Locator.

    ``first`` and ``nth()`` return the same locator so calls can be
    asserted in one place.
    """
    locator = MagicMock()
    locator.count = AsyncMock(return_value=1)
    locator.bounding_box = AsyncMock(return_value={"x": 100.0, "y": 50.0, "width": 400.0, "height": 200.0})
    locator.click = AsyncMock()
    locator.text_content = AsyncMock(return_value="0")
    locator.first = locator
    locator.nth = MagicMock(return_value=locator)
    return locator


@pytest.fixture
def mock_page(mock_locator: MagicMock) -> MagicMock:
    """Create a mock Playwright Page.

    Returns:
        MagicMock with async page, mouse and locator methods.
    """
    page = MagicMock()
    page.goto = AsyncMock(return_value=MagicMock(status=200))
    page.evaluate = AsyncMock(return_value=None)
    page.fill = AsyncMock()
    page.locator = MagicMock(return_value=mock_locator)
    page.mouse = MagicMock()
    page.mouse.move = AsyncMock()
    page.mouse.down = AsyncMock()
    page.mouse.up = AsyncMock()
    page.mouse.click = AsyncMock()
    page.on = MagicMock()
    return page


@pytest.fixture
def started_session(mock_page: MagicMock) -> BrowserSession:
    """Create a BrowserSession wired to mocks instead of a real browser.

    Returns:
        Session whose page, context, browser and driver are mocks.
    """
    session = BrowserSession(poll_interval_ms=1)
    session._page = mock_page
    session._context = AsyncMock()
    session._browser = AsyncMock()
    session._playwright = AsyncMock()
    return session


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def harness_config(tmp_path: Path) -> HarnessConfig:
    """Create a config with no settle delays and a temporary artifact dir."""
    return HarnessConfig(
        root=tmp_path,
        port=0,
        artifact_dir=tmp_path / "artifacts",
        ready_timeout_ms=50,
        download_timeout_ms=50,
        poll_interval_ms=1,
        settle=SettleDelays(ready=0, drag=0, delete=0, save=0),
    )
