#!/usr/bin/env python3
"""Visual constants shared across all renderers.

Map colours mirror the night-mode palette of the navigation screen.
Translucent colours carry their alpha as a fourth channel (CSS alpha
``a`` becomes ``round(a * 255)``).
"""

from __future__ import annotations

from typing import Tuple

from .types import ColorRGB, ColorRGBA

# ── Map layers ────────────────────────────────────────────────────────────────
COLOR_MAP_BG: ColorRGB = (13, 21, 32)                  # #0d1520
COLOR_WATER: ColorRGBA = (8, 25, 50, 128)
COLOR_BUILDING_OUTLINE: ColorRGBA = (30, 40, 55, 128)
COLOR_WINDOW_LIGHT: ColorRGBA = (255, 200, 80, 38)
COLOR_PARK: ColorRGBA = (15, 55, 25, 102)
COLOR_ROAD_MAIN: ColorRGBA = (55, 65, 85, 242)
COLOR_ROAD_MINOR: ColorRGBA = (35, 45, 60, 178)
COLOR_ROAD_CENTRE_DASH: ColorRGBA = (90, 100, 120, 102)
COLOR_ROUTE_GLOW: ColorRGBA = (59, 130, 246, 31)
COLOR_ROUTE: ColorRGB = (59, 130, 246)                 # #3b82f6
COLOR_DROP_PIN: ColorRGB = (255, 68, 68)               # #ff4444
COLOR_PICKUP_PIN: ColorRGB = (0, 210, 106)             # #00d26a
COLOR_PIN_RING: ColorRGB = (255, 255, 255)
COLOR_LABEL: ColorRGBA = (200, 200, 220, 140)
COLOR_DRIVER_HALO: ColorRGBA = (59, 130, 246, 51)
COLOR_DRIVER_DOT: ColorRGB = (59, 130, 246)

# ── Map geometry ──────────────────────────────────────────────────────────────
WATER_OFFSET_X = 60
WATER_RADII: Tuple[int, int] = (180, 500)

BUILDING_OUTLINE_W = 1
WINDOW_MIN_W = 22
WINDOW_MIN_H = 18
WINDOW_INSET = 3
WINDOW_PITCH_X = 7
WINDOW_PITCH_Y = 6
WINDOW_SIZE: Tuple[int, int] = (3, 2)

CENTRE_DASH: Tuple[float, float] = (6.0, 10.0)
CENTRE_DASH_W = 1

ROUTE_GLOW_W = 22
ROUTE_LINE_W = 6

PIN_RING_W = 3
DROP_PIN_RADII: Tuple[int, int] = (12, 5)
PICKUP_PIN_RADII: Tuple[int, int] = (10, 4)

DRIVER_HALO_R = 10
DRIVER_DOT_R = 6
DRIVER_RING_W = 2

LABEL_FONT = "inter,arial,helvetica"
LABEL_SIZE = 11


class ViewConstants:
    """Mixin providing every view-level colour / layout constant."""

    BG_COLOR: ColorRGB = (8, 12, 20)
    HUD_BG_COLOR: ColorRGBA = (14, 20, 30, 220)
    HUD_BORDER_COLOR: ColorRGB = (42, 52, 70)
    HUD_TEXT_COLOR: ColorRGB = (220, 225, 235)
    HUD_DIM_COLOR: ColorRGB = (130, 140, 160)
    ACCEPT_COLOR: ColorRGB = (0, 210, 106)
    WARNING_COLOR: ColorRGB = (255, 60, 60)

    MIN_ZOOM = 0.5
    MAX_ZOOM = 4.0
    ZOOM_STEP = 0.2

    SCREENSHOT_DIR = "screenshots"
