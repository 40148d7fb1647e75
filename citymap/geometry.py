"""
citymap/geometry.py
===================
Shared primitives for the city map.

Every coordinate here lives in *virtual map space*: a fixed extent
(typically 1200 x 1200 units) with the origin at the top-left and ``y``
growing downwards, independent of the window size.  Screen-space values
only appear in :mod:`ui.camera`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple


class Point(NamedTuple):
    """2-D position.  Unpacks straight into pygame draw calls."""
    x: float
    y: float


# ── Roads ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RoadSegment:
    """A drawable road polyline.

    Parameters
    ----------
    points : tuple of Point
        Ordered polyline vertices (at least two).
    width : float
        Stroke width in map units, strictly positive.
    is_main : bool
        Main roads are wider and carry a dashed centre-line.
    """

    points: Tuple[Point, ...]
    width: float
    is_main: bool = False

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise ValueError("a road needs at least two points")
        if self.width <= 0:
            raise ValueError(f"road width must be positive, got {self.width}")

    def is_horizontal(self) -> bool:
        return all(p.y == self.points[0].y for p in self.points)

    def is_vertical(self) -> bool:
        return all(p.x == self.points[0].x for p in self.points)

    def is_axis_aligned(self) -> bool:
        return self.is_horizontal() or self.is_vertical()


@dataclass(frozen=True)
class RoadGrid:
    """Generated road network plus the snapping lattice.

    ``horizontal_lines`` holds the ``y`` of every horizontal lattice road,
    ``vertical_lines`` the ``x`` of every vertical one, both in generation
    order.  Each value has exactly one axis-aligned segment in ``segments``.
    """

    segments: Tuple[RoadSegment, ...]
    horizontal_lines: Tuple[float, ...]
    vertical_lines: Tuple[float, ...]

    def segment_for_line(self, axis: str, value: float) -> Optional[RoadSegment]:
        """Return the lattice road for *value* on *axis* (``"h"`` or ``"v"``)."""
        for seg in self.segments:
            if axis == "h" and seg.is_horizontal() and seg.points[0].y == value:
                return seg
            if axis == "v" and seg.is_vertical() and seg.points[0].x == value:
                return seg
        return None


# ── Decoration ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Building:
    """Decorative building footprint.

    ``hsl`` is ``(hue_deg, saturation_pct, lightness_pct)``; ``lit``
    enables the window-light pattern when the footprint is large enough.
    """

    x: float
    y: float
    w: float
    h: float
    hsl: Tuple[float, float, float]
    lit: bool = False


@dataclass(frozen=True)
class Label:
    """Map text drawn with its baseline at ``(x, y)``."""
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class Park:
    """Circular green area."""
    x: float
    y: float
    r: float
