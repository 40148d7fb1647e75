#!/usr/bin/env python3
"""
Determinism and lattice tests for the map generator.
"""

from __future__ import annotations

import unittest

from citymap.generator import (
    LehmerRandom,
    generate_buildings,
    generate_road_grid,
)
from citymap.geometry import Point, RoadSegment


class LehmerRandomTests(unittest.TestCase):
    def test_first_draws_for_seed_42(self) -> None:
        rng = LehmerRandom(42)
        self.assertEqual(rng.next_int(), 42 * 16807)
        self.assertEqual(rng.next_int(), (42 * 16807 * 16807) % 2147483647)

    def test_known_minimal_standard_value(self) -> None:
        # Park & Miller: seed 1 reaches 1043618065 after 10000 steps.
        rng = LehmerRandom(1)
        for _ in range(10000):
            value = rng.next_int()
        self.assertEqual(value, 1043618065)

    def test_floats_stay_in_unit_interval(self) -> None:
        rng = LehmerRandom(77)
        for _ in range(1000):
            f = rng.random()
            self.assertGreaterEqual(f, 0.0)
            self.assertLess(f, 1.0)


class RoadGridTests(unittest.TestCase):
    def test_same_extent_same_grid(self) -> None:
        self.assertEqual(generate_road_grid(1200, 1200), generate_road_grid(1200, 1200))

    def test_lattice_sizes_and_diagonals(self) -> None:
        grid = generate_road_grid(1200, 900)
        self.assertEqual(len(grid.horizontal_lines), 12)
        self.assertEqual(len(grid.vertical_lines), 8)
        self.assertEqual(len(grid.segments), 22)
        diagonals = [s for s in grid.segments if not s.is_axis_aligned()]
        self.assertEqual(len(diagonals), 2)
        self.assertTrue(all(not s.is_main for s in diagonals))

    def test_every_lattice_line_has_exactly_one_road(self) -> None:
        grid = generate_road_grid(1200, 1200)
        for y in grid.horizontal_lines:
            matches = [
                s for s in grid.segments
                if s.is_horizontal() and s.points[0].y == y
            ]
            self.assertEqual(len(matches), 1, msg=f"y={y}")
            self.assertEqual(matches[0].points[0].x, -50)
            self.assertEqual(matches[0].points[-1].x, 1250)
        for x in grid.vertical_lines:
            matches = [
                s for s in grid.segments
                if s.is_vertical() and s.points[0].x == x
            ]
            self.assertEqual(len(matches), 1, msg=f"x={x}")
            self.assertIs(grid.segment_for_line("v", x), matches[0])

    def test_every_third_line_is_main(self) -> None:
        grid = generate_road_grid(1200, 1200)
        for i, y in enumerate(grid.horizontal_lines):
            seg = grid.segment_for_line("h", y)
            self.assertEqual(seg.is_main, i % 3 == 0)
            self.assertEqual(seg.width, 8.0 if i % 3 == 0 else 3.0)
        for i, x in enumerate(grid.vertical_lines):
            seg = grid.segment_for_line("v", x)
            self.assertEqual(seg.is_main, i % 3 == 0)
            self.assertEqual(seg.width, 7.0 if i % 3 == 0 else 2.5)

    def test_lines_scale_with_extent(self) -> None:
        grid = generate_road_grid(1000, 500)
        self.assertAlmostEqual(grid.horizontal_lines[0], 30.0)
        self.assertAlmostEqual(grid.vertical_lines[-1], 920.0)

    def test_segment_validation(self) -> None:
        with self.assertRaises(ValueError):
            RoadSegment(points=(Point(0, 0),), width=2.0)
        with self.assertRaises(ValueError):
            RoadSegment(points=(Point(0, 0), Point(1, 0)), width=0.0)


class BuildingTests(unittest.TestCase):
    def test_same_seed_same_buildings(self) -> None:
        a = generate_buildings(1200, 1200, 77)
        b = generate_buildings(1200, 1200, 77)
        self.assertEqual(a, b)

    def test_different_seed_differs(self) -> None:
        self.assertNotEqual(
            generate_buildings(1200, 1200, 42),
            generate_buildings(1200, 1200, 77),
        )

    def test_first_building_follows_lehmer_stream(self) -> None:
        rng = LehmerRandom(42)
        expected_x = rng.random() * (1200 + 80) - 40
        expected_y = rng.random() * (1200 + 80) - 40
        first = generate_buildings(1200, 1200, 42)[0]
        self.assertEqual(first.x, expected_x)
        self.assertEqual(first.y, expected_y)
        self.assertAlmostEqual(first.x, ((42 * 16807 - 1) / 2147483646) * 1280 - 40)

    def test_count_is_configurable(self) -> None:
        self.assertEqual(len(generate_buildings(1200, 1200, 1)), 110)
        self.assertEqual(len(generate_buildings(1200, 1200, 1, count=5)), 5)
        self.assertEqual(generate_buildings(1200, 1200, 1, count=0), [])

    def test_ranges(self) -> None:
        for b in generate_buildings(1200, 1200, 99):
            self.assertTrue(-40 <= b.x < 1240)
            self.assertTrue(-40 <= b.y < 1240)
            self.assertTrue(12 <= b.w < 62)
            self.assertTrue(12 <= b.h < 52)
            hue, sat, light = b.hsl
            self.assertTrue(215 <= hue < 240)
            self.assertTrue(12 <= sat < 24)
            self.assertTrue(10 <= light < 20)

    def test_some_buildings_are_lit(self) -> None:
        lit = sum(1 for b in generate_buildings(1200, 1200, 77) if b.lit)
        self.assertGreater(lit, 10)
        self.assertLess(lit, 80)


if __name__ == "__main__":
    unittest.main()
