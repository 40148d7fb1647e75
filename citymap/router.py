#!/usr/bin/env python3
"""
citymap/router.py
=================
Grid-snapping router.

:func:`build_grid_route` turns two arbitrary points into a Manhattan-style
path over the road lattice produced by :func:`citymap.generator.generate_road_grid`.
This is a fixed-shape heuristic, not a search: the route drops onto the
vertical road nearest the start, turns onto a horizontal road biased
towards the start, crosses to the vertical road nearest the end and, if
the destination sits on a different horizontal road, jogs once more.

Also provides two arc-length helpers used by the scene controller to
move the tracked vehicle along a route:

* :func:`route_length` — total polyline length.
* :func:`point_along_route` — position at a given distance from the start.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .geometry import Point, RoadGrid

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutePolicy:
    """Tunables of the snapping heuristic.

    The defaults reproduce the reference routes exactly; they were tuned
    for a 1200 x 1200 extent.
    """

    snap_threshold: float = 3.0
    """Perpendicular offset below which no extra snap/exit waypoint is added."""

    mid_blend: float = 0.45
    """Factor applied to ``start.y + end.y`` to pick the crossing road."""

    jog_threshold: float = 20.0
    """Minimum distance between crossing road and destination road for a second jog."""


DEFAULT_POLICY = RoutePolicy()


def nearest_line(lines: Sequence[float], target: float) -> float:
    """Lattice value closest to *target*; ties go to the earliest line."""
    if not lines:
        raise ValueError("lattice is empty")
    return min(lines, key=lambda v: abs(v - target))


def build_grid_route(
    start: Point,
    end: Point,
    grid: RoadGrid,
    extent_w: float,
    extent_h: float,
    policy: Optional[RoutePolicy] = None,
) -> List[Point]:
    """Snap a start/end pair onto the road lattice.

    Parameters
    ----------
    start, end : Point
        Requested endpoints in virtual map space.  No bounds check is
        applied; points outside the extent snap to the globally nearest
        lattice lines.
    grid : RoadGrid
        Lattice built for ``extent_w`` x ``extent_h``.
    extent_w, extent_h : float
        Map extent; kept in the signature so callers pass the same extent
        they generated the grid from.
    policy : RoutePolicy, optional
        Heuristic tunables (defaults to :data:`DEFAULT_POLICY`).

    Returns
    -------
    list of Point
        4 to 7 points.  The first is ``start`` and the last is ``end``
        exactly; every interior point has ``x`` on a vertical lattice road
        or ``y`` on a horizontal one.
    """
    policy = policy or DEFAULT_POLICY
    start = Point(*start)
    end = Point(*end)
    h_lines = grid.horizontal_lines
    v_lines = grid.vertical_lines

    route = [start]

    v_road1 = nearest_line(v_lines, start.x)
    if abs(v_road1 - start.x) > policy.snap_threshold:
        route.append(Point(v_road1, start.y))

    h_mid = nearest_line(h_lines, (start.y + end.y) * policy.mid_blend)
    route.append(Point(v_road1, h_mid))

    v_road2 = nearest_line(v_lines, end.x)
    route.append(Point(v_road2, h_mid))

    h_end = nearest_line(h_lines, end.y)
    if abs(h_end - h_mid) > policy.jog_threshold:
        route.append(Point(v_road2, h_end))
        if abs(v_road2 - end.x) > policy.snap_threshold:
            route.append(Point(end.x, h_end))

    route.append(end)

    log.debug(
        "route start=(%.1f,%.1f) end=(%.1f,%.1f) extent=%sx%s points=%d",
        start.x, start.y, end.x, end.y, extent_w, extent_h, len(route),
    )
    return route


# ── Arc-length helpers ────────────────────────────────────────────────────────

def _cumulative_lengths(route: Sequence[Point]) -> np.ndarray:
    pts = np.asarray(route, dtype=float)
    seg = np.hypot(np.diff(pts[:, 0]), np.diff(pts[:, 1]))
    return np.concatenate(([0.0], np.cumsum(seg)))


def route_length(route: Sequence[Point]) -> float:
    """Total length of the polyline in map units."""
    if len(route) < 2:
        return 0.0
    return float(_cumulative_lengths(route)[-1])


def point_along_route(route: Sequence[Point], distance: float) -> Point:
    """Position *distance* units from the start, clamped to the endpoints."""
    if not route:
        raise ValueError("route is empty")
    if len(route) == 1:
        return Point(*route[0])
    cum = _cumulative_lengths(route)
    d = min(max(0.0, float(distance)), float(cum[-1]))
    pts = np.asarray(route, dtype=float)
    x = float(np.interp(d, cum, pts[:, 0]))
    y = float(np.interp(d, cum, pts[:, 1]))
    return Point(x, y)
