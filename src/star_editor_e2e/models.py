"""Pydantic data models for star-editor-e2e.

This module defines the value types exchanged between the browser session
and the scenario, the exported document schema, and the error taxonomy.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    """A point in viewport coordinates."""

    x: float
    y: float


class BoundingBox(BaseModel):
    """An element rectangle in viewport coordinates.

    Attributes:
        x: Left edge
        y: Top edge
        width: Rectangle width
        height: Rectangle height
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def origin(self) -> Point:
        """Top-left corner of the rectangle."""
        return Point(x=self.x, y=self.y)


class StarPosition(BaseModel):
    """Position of a rendered star in overlay-local coordinates.

    Read from the ``cx``/``cy`` attributes of a ``.star-circle`` element.
    """

    cx: float
    cy: float

    def moved_beyond(self, other: StarPosition, threshold: float) -> bool:
        """Check whether either axis differs from ``other`` by more than ``threshold``.

        Args:
            other: Position to compare against
            threshold: Minimum exclusive distance on a single axis

        Returns:
            True if at least one axis moved strictly more than threshold
        """
        return abs(self.cx - other.cx) > threshold or abs(self.cy - other.cy) > threshold


class ExportDocument(BaseModel):
    """Document written by the editor's JSON export.

    Only the ``constellations`` array is required; other fields are kept.
    """

    model_config = ConfigDict(extra="allow")

    constellations: list[Any]


class ErrorCode(str, Enum):
    """Error codes for harness failures."""

    NAVIGATION_FAILED = "navigation_failed"
    WAIT_TIMEOUT = "wait_timeout"
    RESOURCE_UNAVAILABLE = "resource_unavailable"
    DOWNLOAD_MISSING = "download_missing"


class HarnessError(Exception):
    """Base exception for unrecoverable harness errors.

    Attributes:
        code: Error code
        message: Human-readable error message
        details: Additional error details
    """

    default_code: ErrorCode = ErrorCode.NAVIGATION_FAILED

    def __init__(
        self,
        message: str,
        details: dict[str, object] | None = None,
        code: ErrorCode | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message
            details: Additional context (e.g., url, status code, timeout)
            code: Error code, defaults to the subclass code
        """
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NavigationError(HarnessError):
    """The page failed to load."""

    default_code = ErrorCode.NAVIGATION_FAILED


class WaitTimeoutError(HarnessError, TimeoutError):
    """A readiness or event wait exceeded its budget."""

    default_code = ErrorCode.WAIT_TIMEOUT


class ResourceError(HarnessError):
    """The asset responder refused or could not find a required asset."""

    default_code = ErrorCode.RESOURCE_UNAVAILABLE


class DownloadError(HarnessError):
    """No download event was observed."""

    default_code = ErrorCode.DOWNLOAD_MISSING
