"""Scenario execution for star-editor-e2e."""

from star_editor_e2e.scenario.editor import StarEditorPage
from star_editor_e2e.scenario.executor import ScenarioExecutor, Step, StepResult
from star_editor_e2e.scenario.star_editor import SCENARIO_NAME, build_scenario

__all__ = ["SCENARIO_NAME", "ScenarioExecutor", "StarEditorPage", "Step", "StepResult", "build_scenario"]
