"""Coordinate helpers for pointer gestures.

Pure functions; callers pass a freshly queried bounding box each time.
"""

from __future__ import annotations

from star_editor_e2e.models import BoundingBox, Point


def relative_point(box: BoundingBox, rel_x: float, rel_y: float) -> Point:
    """Convert fractional coordinates inside ``box`` to a viewport point.

    Args:
        box: Target rectangle in viewport coordinates
        rel_x: Fraction of the width from the left edge
        rel_y: Fraction of the height from the top edge

    Returns:
        Absolute viewport point
    """
    return Point(x=box.x + box.width * rel_x, y=box.y + box.height * rel_y)


def offset(origin: Point, dx: float, dy: float) -> Point:
    """Return ``origin`` shifted by (dx, dy)."""
    return Point(x=origin.x + dx, y=origin.y + dy)


def interpolate(start: Point, dx: float, dy: float, steps: int) -> list[Point]:
    """Linearly interpolate ``steps`` points from ``start`` toward ``start + (dx, dy)``.

    The first point is one step away from ``start`` and the last one is the
    target itself; ``start`` is not included.

    Raises:
        ValueError: If steps is less than 1
    """
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")
    return [Point(x=start.x + dx * i / steps, y=start.y + dy * i / steps) for i in range(1, steps + 1)]
