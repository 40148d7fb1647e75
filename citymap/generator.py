"""
citymap/generator.py
====================
Deterministic map generation.

* :func:`generate_road_grid` depends on the extent only, so a route
  computed by :mod:`citymap.router` always lands on a road that the
  renderer actually drew.
* :func:`generate_buildings` depends on extent and seed and draws from
  the Park–Miller "minimal standard" generator (:class:`LehmerRandom`),
  so re-rendering the same scene never jitters.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .geometry import Building, Point, RoadGrid, RoadSegment

log = logging.getLogger(__name__)

# ── Lattice layout (fractions of the extent) ──────────────────────────────────
H_LINE_FRACTIONS: Tuple[float, ...] = (
    0.06, 0.14, 0.22, 0.30, 0.38, 0.46, 0.54, 0.62, 0.70, 0.78, 0.86, 0.94,
)
V_LINE_FRACTIONS: Tuple[float, ...] = (
    0.08, 0.20, 0.32, 0.44, 0.56, 0.68, 0.80, 0.92,
)

MAIN_ROAD_EVERY = 3
ROAD_OVERHANG = 50.0

H_MAIN_WIDTH = 8.0
H_MINOR_WIDTH = 3.0
V_MAIN_WIDTH = 7.0
V_MINOR_WIDTH = 2.5

# (x1, y1, x2, y2) as extent fractions, plus stroke width
DIAGONALS: Tuple[Tuple[float, float, float, float, float], ...] = (
    (0.08, 0.08, 0.55, 0.42, 4.0),
    (0.65, 0.15, 0.88, 0.65, 3.5),
)

# ── Building layout ───────────────────────────────────────────────────────────
DEFAULT_BUILDING_COUNT = 110
BUILDING_OVERFLOW = 40.0
LIT_THRESHOLD = 0.65  # ~35% of buildings are lit


class LehmerRandom:
    """Park–Miller minimal-standard generator (multiplier 16807, modulus 2^31-1).

    Returns floats in ``[0, 1)`` computed as ``(s - 1) / (m - 1)``.  The
    state is an exact integer, so the stream matches any other
    implementation of the same recurrence bit for bit.
    """

    MULTIPLIER = 16807
    MODULUS = 2147483647

    def __init__(self, seed: int) -> None:
        self.state = int(seed)

    def next_int(self) -> int:
        self.state = (self.state * self.MULTIPLIER) % self.MODULUS
        return self.state

    def random(self) -> float:
        return (self.next_int() - 1) / (self.MODULUS - 1)


def _lattice_width(index: int, main_w: float, minor_w: float) -> Tuple[float, bool]:
    is_main = index % MAIN_ROAD_EVERY == 0
    return (main_w if is_main else minor_w), is_main


def generate_road_grid(extent_w: float, extent_h: float) -> RoadGrid:
    """Build the fixed road lattice for an extent.

    Horizontal roads run from ``-50`` to ``extent_w + 50`` so their caps
    never show at the map edge; vertical roads likewise.  Every third
    line (index 0, 3, 6, ...) is a main road.  Two diagonal roads are
    added for realism; they are not part of the snapping lattice.
    """
    segments: List[RoadSegment] = []
    h_lines: List[float] = []
    v_lines: List[float] = []

    for i, frac in enumerate(H_LINE_FRACTIONS):
        y = extent_h * frac
        width, is_main = _lattice_width(i, H_MAIN_WIDTH, H_MINOR_WIDTH)
        segments.append(RoadSegment(
            points=(Point(-ROAD_OVERHANG, y), Point(extent_w + ROAD_OVERHANG, y)),
            width=width,
            is_main=is_main,
        ))
        h_lines.append(y)

    for i, frac in enumerate(V_LINE_FRACTIONS):
        x = extent_w * frac
        width, is_main = _lattice_width(i, V_MAIN_WIDTH, V_MINOR_WIDTH)
        segments.append(RoadSegment(
            points=(Point(x, -ROAD_OVERHANG), Point(x, extent_h + ROAD_OVERHANG)),
            width=width,
            is_main=is_main,
        ))
        v_lines.append(x)

    for fx1, fy1, fx2, fy2, width in DIAGONALS:
        segments.append(RoadSegment(
            points=(Point(extent_w * fx1, extent_h * fy1),
                    Point(extent_w * fx2, extent_h * fy2)),
            width=width,
        ))

    log.debug("road_grid extent=%sx%s segments=%d", extent_w, extent_h, len(segments))
    return RoadGrid(
        segments=tuple(segments),
        horizontal_lines=tuple(h_lines),
        vertical_lines=tuple(v_lines),
    )


def generate_buildings(
    extent_w: float,
    extent_h: float,
    seed: int,
    count: int = DEFAULT_BUILDING_COUNT,
) -> List[Building]:
    """Scatter *count* buildings over the extent from a seeded stream.

    Draw order per building is fixed: x, y, w, h, hue, saturation,
    lightness, lit.  Positions overflow the extent by 40 units on every
    side so the edges are not clipped sharply.
    """
    rng = LehmerRandom(seed)
    buildings: List[Building] = []
    span_w = extent_w + 2 * BUILDING_OVERFLOW
    span_h = extent_h + 2 * BUILDING_OVERFLOW

    for _ in range(count):
        x = rng.random() * span_w - BUILDING_OVERFLOW
        y = rng.random() * span_h - BUILDING_OVERFLOW
        w = 12 + rng.random() * 50
        h = 12 + rng.random() * 40
        hsl = (
            215 + rng.random() * 25,
            12 + rng.random() * 12,
            10 + rng.random() * 10,
        )
        lit = rng.random() > LIT_THRESHOLD
        buildings.append(Building(x=x, y=y, w=w, h=h, hsl=hsl, lit=lit))

    log.debug("buildings extent=%sx%s seed=%s count=%d", extent_w, extent_h, seed, count)
    return buildings
