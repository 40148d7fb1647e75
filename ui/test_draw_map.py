#!/usr/bin/env python3
"""
Off-screen rendering tests: layer pixels, idempotence and the pure
drawing helpers.
"""

from __future__ import annotations

import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame

from citymap.generator import generate_buildings, generate_road_grid
from citymap.geometry import Building, Label, Park, Point, RoadGrid
from ui.constants import COLOR_DROP_PIN, COLOR_MAP_BG, COLOR_PICKUP_PIN, COLOR_ROUTE
from ui.draw_map import render_map
from ui.helpers import dash_segments, hsl_to_rgb
from ui.scenes import build_scene, home_scene, trip_scene
from ui.types import RenderOptions

_EMPTY_GRID = RoadGrid(segments=(), horizontal_lines=(), vertical_lines=())


def _rgb(surface: pygame.Surface, x: int, y: int):
    return tuple(surface.get_at((x, y)))[:3]


class RenderLayerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        pygame.init()

    def _render(self, w=200, h=200, grid=_EMPTY_GRID, buildings=(), **options):
        surf = pygame.Surface((w, h))
        surf.fill((255, 0, 255))
        render_map(surf, w, h, grid, buildings, RenderOptions(**options))
        return surf

    def test_background_fills_the_extent(self) -> None:
        surf = self._render()
        for x, y in [(0, 0), (199, 0), (0, 199), (199, 199), (100, 100)]:
            self.assertEqual(_rgb(surf, x, y), COLOR_MAP_BG)

    def test_water_is_optional(self) -> None:
        dry = self._render(400, 400)
        wet = self._render(400, 400, show_water=True)
        self.assertEqual(_rgb(dry, 390, 200), COLOR_MAP_BG)
        water = _rgb(wet, 390, 200)
        self.assertNotEqual(water, COLOR_MAP_BG)
        self.assertGreater(water[2], COLOR_MAP_BG[2])
        # far left is outside the ellipse
        self.assertEqual(_rgb(wet, 5, 200), COLOR_MAP_BG)

    def test_route_line_is_opaque_over_glow(self) -> None:
        surf = self._render(route=(Point(20, 50), Point(180, 50)))
        self.assertEqual(_rgb(surf, 100, 50), COLOR_ROUTE)
        glow = _rgb(surf, 100, 59)
        self.assertNotEqual(glow, COLOR_MAP_BG)
        self.assertNotEqual(glow, COLOR_ROUTE)

    def test_pins(self) -> None:
        surf = self._render(drop_pin=Point(60, 60), pickup_pin=Point(140, 140))
        self.assertEqual(_rgb(surf, 60, 60), (255, 255, 255))
        self.assertEqual(_rgb(surf, 68, 60), COLOR_DROP_PIN)
        self.assertEqual(_rgb(surf, 147, 140), COLOR_PICKUP_PIN)
        self.assertEqual(_rgb(surf, 60 + 20, 60), COLOR_MAP_BG)

    def test_route_drawn_under_pins(self) -> None:
        surf = self._render(route=(Point(20, 60), Point(180, 60)), drop_pin=Point(100, 60))
        self.assertEqual(_rgb(surf, 108, 60), COLOR_DROP_PIN)

    def test_lit_building_shows_windows(self) -> None:
        hsl = (220.0, 15.0, 15.0)
        dark = self._render(buildings=[Building(10, 10, 40, 30, hsl, lit=False)])
        lit = self._render(buildings=[Building(10, 10, 40, 30, hsl, lit=True)])
        base = _rgb(dark, 13, 13)
        self.assertEqual(base, hsl_to_rgb(*hsl))
        self.assertNotEqual(_rgb(lit, 13, 13), base)
        # gap between window columns keeps the building colour
        self.assertEqual(_rgb(lit, 17, 13), base)

    def test_small_lit_building_has_no_windows(self) -> None:
        hsl = (220.0, 15.0, 15.0)
        surf = self._render(buildings=[Building(10, 10, 20, 30, hsl, lit=True)])
        self.assertEqual(_rgb(surf, 13, 13), hsl_to_rgb(*hsl))

    def test_park_tints_background(self) -> None:
        surf = self._render(parks=(Park(100, 100, 30),))
        tinted = _rgb(surf, 100, 100)
        self.assertNotEqual(tinted, COLOR_MAP_BG)
        self.assertGreater(tinted[1], COLOR_MAP_BG[1])

    def test_render_is_idempotent(self) -> None:
        grid = generate_road_grid(300, 300)
        buildings = generate_buildings(300, 300, seed=42, count=40)
        options = dict(
            show_water=True,
            parks=(Park(90, 100, 25),),
            route=(Point(20, 30), Point(150, 30), Point(150, 250)),
            drop_pin=Point(150, 250),
            labels=(Label("Dadar", 40, 80),),
            driver_dot=Point(120, 140),
        )
        first = self._render(300, 300, grid, buildings, **options)
        second = pygame.Surface((300, 300))
        second.fill((0, 255, 0))
        render_map(second, 300, 300, grid, buildings, RenderOptions(**options))
        render_map(second, 300, 300, grid, buildings, RenderOptions(**options))
        self.assertTrue(np.array_equal(pygame.surfarray.array3d(first),
                                       pygame.surfarray.array3d(second)))

    def test_preset_scenes_render(self) -> None:
        for spec in (home_scene(420, 780), trip_scene()):
            scene = build_scene(spec)
            surf = pygame.Surface((int(spec.extent_w), int(spec.extent_h)))
            render_map(surf, spec.extent_w, spec.extent_h, scene.grid,
                       scene.buildings, scene.options)
            pixels = pygame.surfarray.array3d(surf)
            self.assertGreater(len(np.unique(pixels.reshape(-1, 3), axis=0)), 10)


class HelperTests(unittest.TestCase):
    def test_dash_segments_straight_line(self) -> None:
        pieces = dash_segments([(0, 0), (40, 0)], 6, 10)
        self.assertEqual([(a.x, b.x) for a, b in pieces], [(0, 6), (16, 22), (32, 38)])

    def test_dash_pattern_continues_across_vertices(self) -> None:
        pieces = dash_segments([(0, 0), (10, 0), (10, 10)], 6, 10)
        self.assertEqual(pieces, [
            (Point(0, 0), Point(6, 0)),
            (Point(10, 6), Point(10, 10)),
        ])

    def test_dash_segments_degenerate(self) -> None:
        self.assertEqual(dash_segments([(0, 0), (0, 0)], 6, 10), [])
        self.assertEqual(dash_segments([(0, 0), (10, 0)], 0, 10), [])

    def test_hsl_to_rgb(self) -> None:
        for hsl, rgb in [((0, 100, 50), (255, 0, 0)),
                         ((120, 100, 50), (0, 255, 0)),
                         ((220, 0, 20), (51, 51, 51))]:
            for got, want in zip(hsl_to_rgb(*hsl), rgb):
                self.assertAlmostEqual(got, want, delta=1)


if __name__ == "__main__":
    unittest.main()
