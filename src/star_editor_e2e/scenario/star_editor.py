"""The star-editor-ux acceptance scenario.

Adds, drags, deletes, saves and exports stars in the constellation editor,
checking the visible state after each operation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from star_editor_e2e.assertions import assert_equal, assert_true
from star_editor_e2e.scenario.editor import load_export
from star_editor_e2e.scenario.executor import ScenarioExecutor, Step

if TYPE_CHECKING:
    from star_editor_e2e.browser.session import BrowserSession
    from star_editor_e2e.config import HarnessConfig
    from star_editor_e2e.models import StarPosition
    from star_editor_e2e.scenario.editor import StarEditorPage

logger = logging.getLogger(__name__)

SCENARIO_NAME = "star-editor-ux"

FIRST_CLICK = (0.45, 0.55)
SECOND_CLICK = (0.58, 0.48)
READD_CLICK = (0.62, 0.40)
DRAG_DELTA = (35, 25)
DRAG_STEPS = 8
MOVE_THRESHOLD = 3
# Ordinal in rendering order; stars have no stable id
DELETED_STAR_ORDINAL = 1
CONSTELLATION_NAME = "Test UX"
SAVE_CONFIRMATION = "sauvegardée"
EXPORT_FILENAME = "custom-stars.json"


@dataclass
class _ScenarioState:
    before_drag: StarPosition | None = None
    stored_before_save: int = 0


def build_scenario(
    editor: StarEditorPage,
    session: BrowserSession,
    config: HarnessConfig,
) -> ScenarioExecutor:
    """Build the star-editor-ux scenario against an opened editor session.

    Args:
        editor: Page object for the editor
        session: Session owning the dialog log
        config: Harness settings (settle delays, artifact directory)

    Returns:
        Executor with the fixed, ordered steps
    """
    state = _ScenarioState()

    async def open_editor() -> None:
        await editor.open()
        await editor.wait_until_ready()
        await editor.overlay_box()

    async def add_two_stars() -> None:
        await editor.add_star(*FIRST_CLICK)
        await editor.add_star(*SECOND_CLICK)
        assert_equal(await editor.star_count(), 2, "Star count after adding two stars")

    async def drag_first_star() -> None:
        state.before_drag = await editor.first_star_position()
        assert_true(state.before_drag is not None, "No star to drag")
        assert state.before_drag is not None

        await editor.drag_star_by(state.before_drag, *DRAG_DELTA, steps=DRAG_STEPS)
        await session.settle(config.settle.drag)

        after_drag = await editor.first_star_position()
        assert_true(after_drag is not None, "Star missing after drag")
        assert after_drag is not None
        assert_true(
            after_drag.moved_beyond(state.before_drag, MOVE_THRESHOLD),
            f"Drag did not move the star: {state.before_drag} -> {after_drag}",
        )
        assert_equal(await editor.star_count(), 2, "Star count after drag")

    async def delete_second_star() -> None:
        await editor.delete_star(DELETED_STAR_ORDINAL)
        await session.settle(config.settle.delete)
        assert_equal(await editor.star_count(), 1, "Right-click must delete the clicked star")

    async def readd_star() -> None:
        await editor.add_star(*READD_CLICK)
        assert_equal(await editor.star_count(), 2, "Star count after adding a star again")

    async def save_constellation() -> None:
        state.stored_before_save = await editor.stored_constellation_count()
        dialogs_before = len(session.dialogs)
        await editor.set_name(CONSTELLATION_NAME)
        await editor.save()
        await session.settle(config.settle.save)

        shown = session.dialogs.snapshot()[dialogs_before:]
        assert_equal(len(shown), 1, f"Dialogs shown by save {shown}")
        assert_true(
            SAVE_CONFIRMATION in shown[0],
            f"Saving must show a confirmation dialog, got {shown}",
        )
        stored = await editor.stored_constellation_count()
        assert_true(
            stored >= max(state.stored_before_save, 0) + 1,
            f"Constellation was not persisted to localStorage ({state.stored_before_save} -> {stored})",
        )

    async def export_constellations() -> None:
        downloads_before = len(session.downloads)
        capture = await editor.export()
        assert_equal(len(session.downloads) - downloads_before, 1, "Downloads started by export")
        assert_equal(capture.suggested_filename, EXPORT_FILENAME, "Exported file name")

        path = await capture.save_as(config.artifact_dir / EXPORT_FILENAME)
        document = load_export(path)
        logger.info("Export holds %d constellation(s)", len(document.constellations))

    return ScenarioExecutor(
        name=SCENARIO_NAME,
        steps=[
            Step("open editor and wait for overlay", open_editor),
            Step("add two stars", add_two_stars),
            Step("drag first star", drag_first_star),
            Step("delete second star", delete_second_star),
            Step("add a star again", readd_star),
            Step("save constellation", save_constellation),
            Step("export constellations", export_constellations),
        ],
    )
