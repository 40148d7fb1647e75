"""
citymap — Procedural city map core
==================================

Modules
-------
geometry
    :class:`Point`, :class:`RoadSegment`, :class:`RoadGrid`,
    :class:`Building`, :class:`Label`, :class:`Park` primitives.
generator
    Deterministic road lattice and seeded building layout.
router
    :func:`build_grid_route` grid-snapping router and route helpers.
"""

from .geometry import Point, RoadSegment, RoadGrid, Building, Label, Park
from .generator import LehmerRandom, generate_road_grid, generate_buildings
from .router import RoutePolicy, build_grid_route, route_length, point_along_route

__all__ = [
    "Point",
    "RoadSegment",
    "RoadGrid",
    "Building",
    "Label",
    "Park",
    "LehmerRandom",
    "generate_road_grid",
    "generate_buildings",
    "RoutePolicy",
    "build_grid_route",
    "route_length",
    "point_along_route",
]
