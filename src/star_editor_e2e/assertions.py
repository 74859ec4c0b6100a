"""Scenario assertions.

A failed assertion raises AssertionError, which aborts the scenario.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def assert_equal(actual: object, expected: object, message: str) -> None:
    """Fail unless ``actual == expected``.

    Args:
        actual: Observed value
        expected: Required value
        message: Failure description

    Raises:
        AssertionError: If the values differ
    """
    if actual != expected:
        logger.debug("assert_equal failed: expected=%r actual=%r", expected, actual)
        raise AssertionError(f"{message} (expected {expected!r}, got {actual!r})")


def assert_true(condition: object, message: str) -> None:
    """Fail unless ``condition`` is truthy.

    Raises:
        AssertionError: If the condition is falsy
    """
    if not condition:
        raise AssertionError(message)
