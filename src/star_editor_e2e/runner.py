"""Run the star-editor-ux scenario end to end.

Resources nest as asset server -> browser session, and are released in
reverse order on every exit path.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from star_editor_e2e.browser.session import BrowserSession
from star_editor_e2e.scenario.editor import StarEditorPage
from star_editor_e2e.scenario.star_editor import build_scenario
from star_editor_e2e.server.responder import ensure_asset_available, serve_assets

if TYPE_CHECKING:
    from star_editor_e2e.config import HarnessConfig
    from star_editor_e2e.scenario.executor import StepResult

logger = logging.getLogger(__name__)


async def run_scenario(config: HarnessConfig) -> list[StepResult]:
    """Serve the editor, open a browser session and run the scenario.

    Args:
        config: Harness settings

    Returns:
        Results of the completed steps

    Raises:
        AssertionError: If an observed state differs from the expected one
        HarnessError: If navigation, a wait, an asset or a download fails
    """
    with serve_assets(config.root, config.host, config.port, config.document) as base_url:
        # Port 0 binds an ephemeral port; point the config at the real one
        bound_port = int(base_url.rsplit(":", 1)[1])
        config = config.model_copy(update={"port": bound_port})
        await ensure_asset_available(config.editor_url)

        async with BrowserSession.open(
            headless=config.headless,
            poll_interval_ms=config.poll_interval_ms,
        ) as session:
            editor = StarEditorPage(session, config)
            scenario = build_scenario(editor, session, config)
            return await scenario.run()
