"""
ui/helpers.py
=============
Pure utility functions shared across UI modules:
alpha-surface drawing, polylines with round joins, dash splitting,
HSL colour conversion, font caching and text blitting.
"""

from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

import pygame

from citymap.geometry import Point

# ── Colour helpers ────────────────────────────────────────────────────────────

def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> Tuple[int, int, int]:
    """Convert CSS-style HSL (degrees, percent, percent) to an RGB tuple."""
    c = pygame.Color(0, 0, 0)
    c.hsla = (hue % 360, saturation, lightness, 100)
    return c.r, c.g, c.b


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_rect(
    target: pygame.Surface,
    color: Tuple[int, ...],
    rect: pygame.Rect,
    border_radius: int = 0,
    width: int = 0,
) -> None:
    """Draw a semi-transparent rectangle (colour tuple with 4 channels)."""
    if rect.w < 1 or rect.h < 1:
        return
    tmp = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    pygame.draw.rect(tmp, color, (0, 0, rect.w, rect.h), width=width,
                     border_radius=border_radius)
    target.blit(tmp, rect.topleft)


def draw_alpha_circle(
    target: pygame.Surface,
    color: Tuple[int, ...],
    centre: Tuple[float, float],
    radius: float,
) -> None:
    """Draw a semi-transparent circle."""
    if radius < 1:
        return
    r = int(math.ceil(radius))
    size = r * 2
    tmp = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(tmp, color, (r, r), radius)
    target.blit(tmp, (int(round(centre[0])) - r, int(round(centre[1])) - r))


def draw_alpha_ellipse(
    target: pygame.Surface,
    color: Tuple[int, ...],
    centre: Tuple[float, float],
    radii: Tuple[float, float],
) -> None:
    """Draw a semi-transparent axis-aligned ellipse."""
    rx, ry = int(round(radii[0])), int(round(radii[1]))
    if rx < 1 or ry < 1:
        return
    tmp = pygame.Surface((rx * 2, ry * 2), pygame.SRCALPHA)
    pygame.draw.ellipse(tmp, color, (0, 0, rx * 2, ry * 2))
    target.blit(tmp, (int(round(centre[0])) - rx, int(round(centre[1])) - ry))


def draw_polyline(
    target: pygame.Surface,
    color: Tuple[int, ...],
    points: Sequence[Tuple[float, float]],
    width: float,
    rounded: bool = True,
) -> None:
    """Stroke a polyline, optionally with round caps and joins.

    The stroke is drawn opaque onto a scratch ``SRCALPHA`` surface that
    covers the polyline's bounding box and then blitted once, so a
    translucent colour blends as a single layer even where segments and
    joins overlap.
    """
    if len(points) < 2:
        return
    half = width / 2.0
    pad = int(math.ceil(half)) + 1
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    left = int(math.floor(min(xs))) - pad
    top = int(math.floor(min(ys))) - pad
    w = int(math.ceil(max(xs))) + pad - left + 1
    h = int(math.ceil(max(ys))) + pad - top + 1

    tmp = pygame.Surface((w, h), pygame.SRCALPHA)
    local = [(x - left, y - top) for x, y in points]
    line_w = max(1, int(round(width)))
    pygame.draw.lines(tmp, color, False, local, line_w)
    if rounded and line_w > 2:
        for p in local:
            pygame.draw.circle(tmp, color, p, half)
    target.blit(tmp, (left, top))


def dash_segments(
    points: Sequence[Tuple[float, float]],
    dash: float,
    gap: float,
) -> List[Tuple[Point, Point]]:
    """Split a polyline into the "on" pieces of a dash pattern.

    The pattern restarts at the first vertex and continues across
    vertices, matching a canvas ``setLineDash([dash, gap])`` stroke.
    """
    if dash <= 0:
        return []
    period = dash + gap
    pieces: List[Tuple[Point, Point]] = []
    phase = 0.0  # distance into the current period
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        seg_len = math.hypot(x2 - x1, y2 - y1)
        if seg_len == 0:
            continue
        ux, uy = (x2 - x1) / seg_len, (y2 - y1) / seg_len
        t = 0.0
        while t < seg_len:
            if phase < dash:
                run = min(dash - phase, seg_len - t)
                pieces.append((
                    Point(x1 + ux * t, y1 + uy * t),
                    Point(x1 + ux * (t + run), y1 + uy * (t + run)),
                ))
            else:
                run = min(period - phase, seg_len - t)
            t += run
            phase = (phase + run) % period
    return pieces


# ── Text helpers ──────────────────────────────────────────────────────────────

_FONT_CACHE: Dict[Tuple[str, int, bool], pygame.font.Font] = {}


def get_font(name: str, size: int, bold: bool = False) -> pygame.font.Font:
    """Return a cached system font, initialising the font module on demand."""
    if not pygame.font.get_init():
        # fonts from an earlier font.init() are unusable after font.quit()
        _FONT_CACHE.clear()
        pygame.font.init()
    key = (name, size, bold)
    font = _FONT_CACHE.get(key)
    if font is None:
        font = pygame.font.SysFont(name, size, bold=bold)
        _FONT_CACHE[key] = font
    return font


def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …).

    A fourth colour channel is applied as surface alpha.
    """
    img = font.render(text, True, color[:3])
    if len(color) == 4:
        img.set_alpha(color[3])
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect
