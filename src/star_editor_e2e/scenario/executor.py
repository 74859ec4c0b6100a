"""Ordered, fail-fast scenario execution."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """One scenario step: an action followed by its settle wait and assertions.

    Attributes:
        name: Human-readable step name used in logs
        run: Coroutine function performing the step
    """

    name: str
    run: Callable[[], Awaitable[None]]


@dataclass
class StepResult:
    """Timing of a completed step."""

    name: str
    elapsed: float


@dataclass
class ScenarioExecutor:
    """Runs steps strictly in order, stopping at the first failure.

    Attributes:
        name: Scenario name reported on pass/fail
        steps: Steps to run, in order
        results: Steps completed so far
    """

    name: str
    steps: Sequence[Step]
    results: list[StepResult] = field(default_factory=list)

    async def run(self) -> list[StepResult]:
        """Run every step.

        Returns:
            Results of all steps

        Raises:
            Exception: Whatever the failing step raised, unchanged
        """
        self.results.clear()
        total = len(self.steps)
        for index, step in enumerate(self.steps, start=1):
            logger.info("[%s] step %d/%d: %s", self.name, index, total, step.name)
            started = time.monotonic()
            try:
                await step.run()
            except Exception as e:
                logger.error(
                    "[%s] step %d/%d failed: %s: %s",
                    self.name,
                    index,
                    total,
                    type(e).__name__,
                    e,
                )
                raise
            self.results.append(StepResult(name=step.name, elapsed=time.monotonic() - started))
        logger.info("[%s] all %d steps passed", self.name, total)
        return self.results
