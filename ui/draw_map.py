"""
ui/draw_map.py
==============
Renders the night-mode navigation map onto a pygame surface:
  background, water, buildings (with window lights), parks, roads with
  dashed centre-lines, the route overlay, pins, labels and the driver dot.

All functions are *pure renderers*: they read data and draw to a surface.
Drawing happens in virtual map space (one surface pixel per map unit);
:mod:`ui.camera` decides where and how large the surface appears on screen.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence, Tuple

import pygame

from citymap.geometry import Building, Label, Park, Point, RoadGrid, RoadSegment
from ui.constants import (
    COLOR_MAP_BG, COLOR_WATER, COLOR_BUILDING_OUTLINE, COLOR_WINDOW_LIGHT,
    COLOR_PARK, COLOR_ROAD_MAIN, COLOR_ROAD_MINOR, COLOR_ROAD_CENTRE_DASH,
    COLOR_ROUTE_GLOW, COLOR_ROUTE, COLOR_DROP_PIN, COLOR_PICKUP_PIN,
    COLOR_PIN_RING, COLOR_LABEL, COLOR_DRIVER_HALO, COLOR_DRIVER_DOT,
    WATER_OFFSET_X, WATER_RADII,
    BUILDING_OUTLINE_W, WINDOW_MIN_W, WINDOW_MIN_H, WINDOW_INSET,
    WINDOW_PITCH_X, WINDOW_PITCH_Y, WINDOW_SIZE,
    CENTRE_DASH, CENTRE_DASH_W, ROUTE_GLOW_W, ROUTE_LINE_W,
    PIN_RING_W, DROP_PIN_RADII, PICKUP_PIN_RADII,
    DRIVER_HALO_R, DRIVER_DOT_R, DRIVER_RING_W,
    LABEL_FONT, LABEL_SIZE,
)
from ui.helpers import (
    dash_segments, draw_alpha_circle, draw_alpha_ellipse, draw_alpha_rect,
    draw_polyline, get_font, hsl_to_rgb, render_text,
)
from ui.types import RenderOptions

log = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════════
#  PUBLIC  render_map()  — single entry point
# ══════════════════════════════════════════════════════════════════════════════

def render_map(
    surface: pygame.Surface,
    extent_w: float,
    extent_h: float,
    grid: RoadGrid,
    buildings: Sequence[Building],
    options: RenderOptions = RenderOptions(),
) -> None:
    """Draw the complete map in z-order.

    Calling twice with identical arguments yields identical pixels: the
    extent is cleared first and nothing is cached between calls.
    """
    _draw_background(surface, extent_w, extent_h)

    if options.show_water:
        _draw_water(surface, extent_w, extent_h)

    for b in buildings:
        _draw_building(surface, b)

    for park in options.parks:
        _draw_park(surface, park)

    for road in grid.segments:
        _draw_road(surface, road)

    if options.route:
        _draw_route(surface, options.route)

    if options.drop_pin is not None:
        _draw_pin(surface, options.drop_pin, DROP_PIN_RADII, COLOR_DROP_PIN)

    if options.pickup_pin is not None:
        _draw_pin(surface, options.pickup_pin, PICKUP_PIN_RADII, COLOR_PICKUP_PIN)

    for label in options.labels:
        _draw_label(surface, label)

    if options.driver_dot is not None:
        draw_driver_dot(surface, options.driver_dot)

    log.debug(
        "render_map extent=%sx%s buildings=%d roads=%d route=%s",
        extent_w, extent_h, len(buildings), len(grid.segments),
        len(options.route) if options.route else 0,
    )


def draw_driver_dot(surface: pygame.Surface, centre: Tuple[float, float]) -> None:
    """Blue "you are here" dot with a soft halo and a white ring."""
    draw_alpha_circle(surface, COLOR_DRIVER_HALO, centre, DRIVER_HALO_R)
    ring = DRIVER_RING_W / 2.0
    pygame.draw.circle(surface, COLOR_PIN_RING, centre, DRIVER_DOT_R + ring)
    pygame.draw.circle(surface, COLOR_DRIVER_DOT, centre, DRIVER_DOT_R - ring)


# ══════════════════════════════════════════════════════════════════════════════
#  PRIVATE helpers
# ══════════════════════════════════════════════════════════════════════════════

def _rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
    return pygame.Rect(int(round(x)), int(round(y)),
                       max(1, int(round(w))), max(1, int(round(h))))


# ── Background / water ────────────────────────────────────────────────────────

def _draw_background(surface: pygame.Surface, extent_w: float, extent_h: float) -> None:
    surface.fill(COLOR_MAP_BG, _rect(0, 0, extent_w, extent_h))


def _draw_water(surface: pygame.Surface, extent_w: float, extent_h: float) -> None:
    draw_alpha_ellipse(surface, COLOR_WATER,
                       (extent_w + WATER_OFFSET_X, extent_h * 0.5), WATER_RADII)


# ── Buildings ─────────────────────────────────────────────────────────────────

def _draw_building(surface: pygame.Surface, b: Building) -> None:
    rect = _rect(b.x, b.y, b.w, b.h)
    pygame.draw.rect(surface, hsl_to_rgb(*b.hsl), rect)
    draw_alpha_rect(surface, COLOR_BUILDING_OUTLINE, rect, width=BUILDING_OUTLINE_W)

    if b.lit and b.w > WINDOW_MIN_W and b.h > WINDOW_MIN_H:
        _draw_windows(surface, b, rect)


def _draw_windows(surface: pygame.Surface, b: Building, rect: pygame.Rect) -> None:
    """Regular grid of small lit windows, inset from the footprint edges."""
    layer = pygame.Surface(rect.size, pygame.SRCALPHA)
    ww, wh = WINDOW_SIZE
    wx = b.x + WINDOW_INSET
    while wx < b.x + b.w - WINDOW_INSET:
        wy = b.y + WINDOW_INSET
        while wy < b.y + b.h - WINDOW_INSET:
            layer.fill(COLOR_WINDOW_LIGHT, (int(round(wx - rect.x)),
                                            int(round(wy - rect.y)), ww, wh))
            wy += WINDOW_PITCH_Y
        wx += WINDOW_PITCH_X
    surface.blit(layer, rect.topleft)


# ── Parks ─────────────────────────────────────────────────────────────────────

def _draw_park(surface: pygame.Surface, park: Park) -> None:
    draw_alpha_circle(surface, COLOR_PARK, (park.x, park.y), park.r)


# ── Roads ─────────────────────────────────────────────────────────────────────

def _draw_road(surface: pygame.Surface, road: RoadSegment) -> None:
    color = COLOR_ROAD_MAIN if road.is_main else COLOR_ROAD_MINOR
    draw_polyline(surface, color, road.points, road.width)

    if road.is_main:
        dash, gap = CENTRE_DASH
        for a, b in dash_segments(road.points, dash, gap):
            draw_polyline(surface, COLOR_ROAD_CENTRE_DASH, (a, b),
                          CENTRE_DASH_W, rounded=False)


# ── Route ─────────────────────────────────────────────────────────────────────

def _draw_route(surface: pygame.Surface, route: Sequence[Point]) -> None:
    """Two passes over the same polyline: a wide faint glow, then the line."""
    draw_polyline(surface, COLOR_ROUTE_GLOW, route, ROUTE_GLOW_W)
    draw_polyline(surface, COLOR_ROUTE, route, ROUTE_LINE_W)


# ── Pins ──────────────────────────────────────────────────────────────────────

def _draw_pin(
    surface: pygame.Surface,
    centre: Point,
    radii: Tuple[int, int],
    color: Tuple[int, int, int],
) -> None:
    outer, inner = radii
    ring = PIN_RING_W / 2.0
    pygame.draw.circle(surface, COLOR_PIN_RING, centre, outer + ring)
    pygame.draw.circle(surface, color, centre, outer - ring)
    pygame.draw.circle(surface, COLOR_PIN_RING, centre, inner)


# ── Labels ────────────────────────────────────────────────────────────────────

def _draw_label(surface: pygame.Surface, label: Label) -> None:
    font = get_font(LABEL_FONT, LABEL_SIZE, bold=True)
    top = label.y - font.get_ascent()
    render_text(surface, font, label.text,
                (int(round(label.x)), int(math.floor(top))), COLOR_LABEL)
