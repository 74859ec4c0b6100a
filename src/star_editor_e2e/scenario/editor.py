"""Page object for the constellation editor.

Wraps the editor's DOM contract: the SVG overlay, its rendered stars, the
star counter, the name field, the save/export buttons and the localStorage
entry holding saved constellations.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from star_editor_e2e.assertions import assert_true
from star_editor_e2e.browser.geometry import offset
from star_editor_e2e.models import BoundingBox, ExportDocument, StarPosition

if TYPE_CHECKING:
    from star_editor_e2e.browser.events import DownloadCapture
    from star_editor_e2e.browser.session import BrowserSession
    from star_editor_e2e.config import HarnessConfig

logger = logging.getLogger(__name__)

# DOM contract
OVERLAY_SELECTOR = "#constellation-overlay"
OVERLAY_HIT_SELECTOR = "#constellation-overlay rect.overlay-hit"
STAR_SELECTOR = "#constellation-overlay .star-circle"
STAR_COUNT_SELECTOR = "#star-count"
NAME_INPUT_SELECTOR = "#constellation-name"
SAVE_BUTTON_SELECTOR = "#btn-save"
EXPORT_BUTTON_SELECTOR = "#btn-export"
STORAGE_KEY = "customConstellations"

OVERLAY_READY_PREDICATE = f"() => !!document.querySelector({OVERLAY_HIT_SELECTOR!r})"

FIRST_STAR_POSITION_JS = f"""
() => {{
    const c = document.querySelector({STAR_SELECTOR!r});
    return c ? {{ cx: Number(c.getAttribute("cx")), cy: Number(c.getAttribute("cy")) }} : null;
}}
"""

# -1 flags an entry that is not a JSON array
STORED_COUNT_JS = """
(key) => {
    const raw = localStorage.getItem(key);
    if (!raw) return 0;
    try {
        const parsed = JSON.parse(raw);
        return Array.isArray(parsed) ? parsed.length : -1;
    } catch (error) {
        return -1;
    }
}
"""


class StarEditorPage:
    """High-level operations on the constellation editor.

    Attributes:
        session: Browser session showing the editor
        config: Harness settings (URLs, timeouts, settle delays)
    """

    def __init__(self, session: BrowserSession, config: HarnessConfig) -> None:
        self.session = session
        self.config = config

    async def open(self) -> None:
        """Navigate to the editor and wait until the DOM is parsed."""
        await self.session.navigate(
            self.config.editor_url,
            wait_until="domcontentloaded",
            timeout_ms=self.config.navigation_timeout_ms,
        )

    async def wait_until_ready(self) -> None:
        """Wait for the overlay and its hit-test rectangle, then let layout finish."""
        await self.session.wait_for_selector(OVERLAY_SELECTOR, self.config.ready_timeout_ms)
        await self.session.wait_for_predicate(OVERLAY_READY_PREDICATE, self.config.ready_timeout_ms)
        # The editor lays the overlay out across several deferred timers
        await self.session.settle(self.config.settle.ready)

    async def overlay_box(self) -> BoundingBox:
        """Measure the overlay.

        Raises:
            AssertionError: If the overlay is not rendered
        """
        box = await self.session.bounding_box(OVERLAY_SELECTOR)
        assert_true(box is not None, "Overlay is not measurable")
        assert box is not None
        return box

    async def star_count(self) -> int:
        """Read the star counter; an empty counter reads as 0."""
        raw = (await self.session.text_content(STAR_COUNT_SELECTOR) or "").strip()
        if not raw:
            return 0
        try:
            return int(raw)
        except ValueError:
            raise AssertionError(f"Star counter is not a number: {raw!r}") from None

    async def first_star_position(self) -> StarPosition | None:
        """Position of the first rendered star, or None if there is none."""
        raw = await self.session.evaluate(FIRST_STAR_POSITION_JS)
        return StarPosition.model_validate(raw) if raw else None

    async def add_star(self, rel_x: float, rel_y: float) -> None:
        """Click the overlay at a fractional position to create a star."""
        await self.session.click_at_relative(OVERLAY_SELECTOR, rel_x, rel_y)

    async def drag_star_by(self, position: StarPosition, dx: float, dy: float, steps: int) -> None:
        """Drag the star rendered at ``position`` by (dx, dy)."""
        box = await self.overlay_box()
        start = offset(box.origin, position.cx, position.cy)
        await self.session.drag_by(start, dx, dy, steps)

    async def delete_star(self, ordinal: int) -> None:
        """Right-click the star at ``ordinal`` (0-based rendering order)."""
        await self.session.click(STAR_SELECTOR, button="right", nth=ordinal)

    async def set_name(self, name: str) -> None:
        await self.session.fill(NAME_INPUT_SELECTOR, name)

    async def save(self) -> None:
        await self.session.click(SAVE_BUTTON_SELECTOR)

    async def stored_constellation_count(self) -> int:
        """Number of constellations in localStorage (0 if absent, -1 if malformed)."""
        return int(await self.session.evaluate(STORED_COUNT_JS, STORAGE_KEY))

    async def export(self) -> DownloadCapture:
        """Click export and wait for the resulting download.

        Raises:
            DownloadError: If no download starts in time
        """
        async with self.session.expect_download(self.config.download_timeout_ms) as capture:
            await self.session.click(EXPORT_BUTTON_SELECTOR)
        logger.info("Export downloaded as %s", capture.suggested_filename)
        return capture


def load_export(path: Path) -> ExportDocument:
    """Parse an exported file.

    Raises:
        AssertionError: If the file is not a JSON object with a ``constellations`` array
    """
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    assert_true(
        isinstance(data, dict) and isinstance(data.get("constellations"), list),
        "Exported JSON must contain a constellations array",
    )
    return ExportDocument.model_validate(data)
