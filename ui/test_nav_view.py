#!/usr/bin/env python3
"""
Headless tests for scene presets and the navigation view's scene
lifecycle (drift subscription, tracked position, key handling).
"""

from __future__ import annotations

import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from citymap.geometry import Point
from gps.drift_source import GeoDriftSource
from gps.fix import GeoFix
from ui.helpers import get_font
from ui.nav_view import NavigationView
from ui.scenes import build_scene, home_scene, reroute_scene, trip_scene


class ScenePresetTests(unittest.TestCase):
    def test_trip_route_runs_from_start_to_drop_pin(self) -> None:
        scene = build_scene(trip_scene())
        self.assertEqual(scene.route[0], Point(580, 850))
        self.assertEqual(scene.route[-1], Point(260, 120))
        self.assertEqual(scene.options.drop_pin, Point(260, 120))
        self.assertEqual(len(scene.buildings), 110)
        self.assertGreater(scene.route_length, 0)

    def test_reroute_keeps_map_and_changes_route(self) -> None:
        trip = build_scene(trip_scene())
        reroute = build_scene(reroute_scene())
        self.assertEqual(trip.buildings, reroute.buildings)
        self.assertEqual(reroute.route[0], Point(400, 800))
        self.assertEqual(reroute.route[-1], Point(900, 180))

    def test_home_scene_has_no_route(self) -> None:
        scene = build_scene(home_scene(420, 780))
        self.assertEqual(scene.route, ())
        self.assertIsNone(scene.options.route)
        self.assertIsNotNone(scene.options.pickup_pin)
        self.assertIsNotNone(scene.options.driver_dot)


class NavigationViewTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        pygame.init()

    def setUp(self) -> None:
        self.source = GeoDriftSource()
        self.view = NavigationView(self.source, width=420, height=780)
        self.view.screen = pygame.display.set_mode((420, 780))
        self.view.font_small = get_font("arial", 15)
        self.view.font_tiny = get_font("arial", 12)
        self.view.font_title = get_font("arial", 24, bold=True)
        self.view.show_home()

    def test_home_screen_has_no_camera(self) -> None:
        self.assertFalse(self.view.on_trip)
        self.assertEqual(self.source.subscriber_count, 0)
        self.view.draw_frame(1 / 60)

    def test_accept_starts_trip_and_subscribes_camera(self) -> None:
        self.view._handle_key(pygame.K_RETURN)
        self.assertTrue(self.view.on_trip)
        self.assertEqual(self.source.subscriber_count, 1)
        self.assertEqual(self.view.camera.snapshot().tracked, Point(580, 850))
        self.view.draw_frame(1 / 60)

    def test_reroute_replaces_subscription(self) -> None:
        self.view._handle_key(pygame.K_RETURN)
        old_camera = self.view.camera
        self.view._handle_key(pygame.K_n)
        self.assertIsNot(self.view.camera, old_camera)
        self.assertEqual(self.source.subscriber_count, 1)
        self.assertEqual(self.view.camera.snapshot().tracked, Point(400, 800))

    def test_new_scene_resets_gps_baseline(self) -> None:
        self.source.push_fix(GeoFix(19.0, 72.8, ts=self.source._clock()))
        self.assertTrue(self.source.has_baseline)
        self.view._handle_key(pygame.K_RETURN)
        self.assertFalse(self.source.has_baseline)

    def test_baseline_reset_before_new_camera_subscribes(self) -> None:
        events = []
        source = self.source
        original_reset = source.reset_baseline
        original_subscribe = source.subscribe

        def reset_baseline():
            events.append("reset")
            original_reset()

        def subscribe(handler):
            events.append("subscribe")
            return original_subscribe(handler)

        source.reset_baseline = reset_baseline
        source.subscribe = subscribe
        self.view._handle_key(pygame.K_RETURN)
        self.assertEqual(events, ["reset", "subscribe"])

    def test_debug_overlay_during_trip(self) -> None:
        self.view._handle_key(pygame.K_RETURN)
        self.view._handle_key(pygame.K_F3)
        self.assertTrue(self.view.show_debug)
        self.view.draw_frame(1 / 60)
        tf = self.view.camera.compute_transform(420, 780)
        centre = tf.screen_to_map((210, 390))
        self.assertAlmostEqual(centre.x, 580.0, places=6)
        self.assertAlmostEqual(centre.y, 850.0, places=6)

    def test_drift_reaches_active_camera_only(self) -> None:
        self.view._handle_key(pygame.K_RETURN)
        first = self.view.camera
        self.view._handle_key(pygame.K_n)
        self.source.publish((40, -20))
        self.assertEqual(self.view.camera.snapshot().drift, Point(40.0, -20.0))
        self.assertEqual(first.snapshot().drift, Point(0.0, 0.0))

    def test_advance_moves_tracked_position_along_route(self) -> None:
        self.view._handle_key(pygame.K_RETURN)
        self.view._advance(1.0)
        tracked = self.view.camera.snapshot().tracked
        self.assertNotEqual(tracked, Point(580, 850))
        self.view._handle_key(pygame.K_SPACE)
        self.view._advance(1.0)
        self.assertEqual(self.view.camera.snapshot().tracked, tracked)

    def test_zoom_keys_are_clamped(self) -> None:
        self.view._handle_key(pygame.K_RETURN)
        for _ in range(50):
            self.view._handle_key(pygame.K_EQUALS)
        self.assertEqual(self.view.zoom, self.view.MAX_ZOOM)
        self.assertEqual(self.view.camera.snapshot().zoom, self.view.MAX_ZOOM)

    def test_escape_closes(self) -> None:
        self.assertFalse(self.view._handle_key(pygame.K_ESCAPE))
        self.assertTrue(self.view._handle_key(pygame.K_F3))
        self.assertTrue(self.view.show_debug)
        self.view.draw_frame(1 / 60)


if __name__ == "__main__":
    unittest.main()
