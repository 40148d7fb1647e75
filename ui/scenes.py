"""
ui/scenes.py
============
Scene presets and the generate → route → options pipeline.

A :class:`SceneSpec` names everything a screen needs (extent, seed,
endpoints, decorations); :func:`build_scene` runs the map core once and
returns an immutable :class:`Scene` that the view renders and animates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from citymap.generator import DEFAULT_BUILDING_COUNT, generate_buildings, generate_road_grid
from citymap.geometry import Building, Label, Park, Point, RoadGrid
from citymap.router import RoutePolicy, build_grid_route, route_length
from config import HOME_SEED, NAV_EXTENT, NAV_SEED
from ui.types import RenderOptions

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SceneSpec:
    """Inputs for one screen.  ``start``/``end`` absent means "no route"."""
    name: str
    extent_w: float
    extent_h: float
    seed: int
    start: Optional[Point] = None
    end: Optional[Point] = None
    labels: Sequence[Label] = field(default_factory=tuple)
    parks: Sequence[Park] = field(default_factory=tuple)
    show_water: bool = True
    pickup_pin: Optional[Point] = None
    driver_dot: Optional[Point] = None
    building_count: int = DEFAULT_BUILDING_COUNT


@dataclass(frozen=True)
class Scene:
    """Generated, routed scene ready to render."""
    spec: SceneSpec
    grid: RoadGrid
    buildings: Tuple[Building, ...]
    route: Tuple[Point, ...]
    options: RenderOptions

    @property
    def route_length(self) -> float:
        return route_length(self.route)


def build_scene(spec: SceneSpec, policy: Optional[RoutePolicy] = None) -> Scene:
    """Generate the map for *spec*, route it and assemble render options."""
    grid = generate_road_grid(spec.extent_w, spec.extent_h)
    buildings = generate_buildings(spec.extent_w, spec.extent_h, spec.seed,
                                   count=spec.building_count)

    route: List[Point] = []
    if spec.start is not None and spec.end is not None:
        route = build_grid_route(spec.start, spec.end, grid,
                                 spec.extent_w, spec.extent_h, policy)

    options = RenderOptions(
        show_water=spec.show_water,
        parks=tuple(spec.parks),
        route=tuple(route) or None,
        drop_pin=spec.end,
        pickup_pin=spec.pickup_pin,
        labels=tuple(spec.labels),
        driver_dot=spec.driver_dot,
    )
    log.info("scene_built name=%s extent=%sx%s seed=%d route_points=%d",
             spec.name, spec.extent_w, spec.extent_h, spec.seed, len(route))
    return Scene(spec=spec, grid=grid, buildings=tuple(buildings),
                 route=tuple(route), options=options)


# ── Presets ───────────────────────────────────────────────────────────────────

def home_scene(width: float, height: float) -> SceneSpec:
    """Window-sized map behind the ride request: pickup pin and idle driver."""
    pickup = Point(width * 0.48, height * 0.35)
    return SceneSpec(
        name="home",
        extent_w=width,
        extent_h=height,
        seed=HOME_SEED,
        pickup_pin=pickup,
        driver_dot=Point(pickup.x - 25, pickup.y + 35),
        parks=(Park(width * 0.3, height * 0.22, 25),),
        labels=(
            Label("Dadar West", pickup.x - 55, pickup.y - 18),
            Label("Prabhadevi", width * 0.15, height * 0.45),
            Label("Mahim", width * 0.65, height * 0.2),
        ),
    )


def _nav_parks(w: float, h: float) -> Tuple[Park, ...]:
    return (Park(w * 0.25, h * 0.35, 30), Park(w * 0.7, h * 0.55, 25))


def trip_scene(seed: int = NAV_SEED) -> SceneSpec:
    """Dadar → Marine Drive on the 1200 x 1200 navigation map."""
    return SceneSpec(
        name="trip",
        extent_w=NAV_EXTENT,
        extent_h=NAV_EXTENT,
        seed=seed,
        start=Point(580, 850),
        end=Point(260, 120),
        parks=_nav_parks(NAV_EXTENT, NAV_EXTENT),
        labels=(
            Label("Dadar", 600, 870),
            Label("Mahim", 300, 680),
            Label("Bandra", 200, 500),
            Label("Worli", 700, 400),
            Label("Marine Drive", 220, 105),
        ),
    )


def reroute_scene(seed: int = NAV_SEED) -> SceneSpec:
    """Bandra → Jogeshwari after the destination changes mid-trip."""
    return SceneSpec(
        name="reroute",
        extent_w=NAV_EXTENT,
        extent_h=NAV_EXTENT,
        seed=seed,
        start=Point(400, 800),
        end=Point(900, 180),
        parks=_nav_parks(NAV_EXTENT, NAV_EXTENT),
        labels=(
            Label("Bandra", 350, 820),
            Label("Khar", 500, 650),
            Label("Santacruz", 600, 480),
            Label("Vile Parle", 400, 320),
            Label("Jogeshwari E", 860, 165),
        ),
    )
