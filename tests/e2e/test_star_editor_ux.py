"""End-to-end run of the star-editor-ux scenario in real Chromium."""

from __future__ import annotations

import json

import pytest

from star_editor_e2e.browser.session import BrowserSession
from star_editor_e2e.config import HarnessConfig
from star_editor_e2e.models import ResourceError
from star_editor_e2e.runner import run_scenario
from star_editor_e2e.scenario.editor import StarEditorPage
from star_editor_e2e.scenario.star_editor import EXPORT_FILENAME
from star_editor_e2e.server.responder import serve_assets

pytestmark = pytest.mark.e2e


@pytest.mark.asyncio
async def test_full_scenario_passes(e2e_config: HarnessConfig) -> None:
    results = await run_scenario(e2e_config)

    assert [result.name for result in results] == [
        "open editor and wait for overlay",
        "add two stars",
        "drag first star",
        "delete second star",
        "add a star again",
        "save constellation",
        "export constellations",
    ]
    exported = json.loads((e2e_config.artifact_dir / EXPORT_FILENAME).read_text(encoding="utf-8"))
    assert exported["constellations"][-1]["name"] == "Test UX"
    assert len(exported["constellations"][-1]["stars"]) == 2


@pytest.mark.asyncio
async def test_missing_editor_fails_before_browser(e2e_config: HarnessConfig) -> None:
    config = e2e_config.model_copy(update={"document": "/demo/missing.html"})

    with pytest.raises(ResourceError):
        await run_scenario(config)


@pytest.mark.asyncio
async def test_delete_removes_clicked_star(e2e_config: HarnessConfig) -> None:
    """Right-clicking the second star leaves the first one in place."""
    with serve_assets(e2e_config.root, e2e_config.host, 0, e2e_config.document) as base_url:
        config = e2e_config.model_copy(update={"port": int(base_url.rsplit(":", 1)[1])})
        async with BrowserSession.open(headless=config.headless) as session:
            editor = StarEditorPage(session, config)
            await editor.open()
            await editor.wait_until_ready()

            await editor.add_star(0.2, 0.2)
            first = await editor.first_star_position()
            await editor.add_star(0.8, 0.8)
            await editor.delete_star(1)

            assert await editor.star_count() == 1
            assert await editor.first_star_position() == first
