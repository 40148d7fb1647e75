#!/usr/bin/env python3
"""
Tests for the follow-camera transform, drift clamping and the
controller's atomic state updates.
"""

from __future__ import annotations

import threading
import unittest

from citymap.geometry import Point
from ui.camera import (
    CameraController,
    CameraState,
    DriftBounds,
    MapTransform,
    clamp_drift,
    compute_transform,
)


class ComputeTransformTests(unittest.TestCase):
    def test_tracked_position_lands_on_screen_centre(self) -> None:
        for tracked, zoom in [((580, 850), 2.2), ((0, 0), 1.0), ((1199.5, 3.25), 0.7)]:
            state = CameraState(tracked=Point(*tracked), zoom=zoom)
            tf = compute_transform(420, 780, state)
            centre = tf.map_to_screen(tracked)
            self.assertAlmostEqual(centre.x, 210.0, places=9)
            self.assertAlmostEqual(centre.y, 390.0, places=9)

    def test_translation_formula(self) -> None:
        state = CameraState(tracked=Point(580, 850), drift=Point(12, -7), zoom=2.0)
        tf = compute_transform(400, 800, state)
        self.assertEqual(tf, MapTransform(400 / 2 - 580 * 2.0 + 12,
                                          800 / 2 - 850 * 2.0 - 7, 2.0))

    def test_drift_shifts_view_not_tracked_position(self) -> None:
        still = compute_transform(400, 800, CameraState(tracked=Point(100, 100), zoom=1.5))
        drifted = compute_transform(
            400, 800, CameraState(tracked=Point(100, 100), drift=Point(30, -40), zoom=1.5)
        )
        self.assertAlmostEqual(drifted.translate_x - still.translate_x, 30.0)
        self.assertAlmostEqual(drifted.translate_y - still.translate_y, -40.0)
        self.assertEqual(drifted.scale, still.scale)

    def test_screen_to_map_inverts_map_to_screen(self) -> None:
        tf = MapTransform(translate_x=-903.5, translate_y=-1480.0, scale=2.2)
        for p in [(0, 0), (580, 850), (1200, 1200), (33.3, 901.7)]:
            back = tf.screen_to_map(tf.map_to_screen(p))
            self.assertAlmostEqual(back.x, p[0], places=9)
            self.assertAlmostEqual(back.y, p[1], places=9)

    def test_non_positive_zoom_rejected(self) -> None:
        for zoom in (0.0, -1.0):
            with self.assertRaises(ValueError):
                CameraState(zoom=zoom)


class ClampDriftTests(unittest.TestCase):
    def test_out_of_bounds_offset_is_clamped(self) -> None:
        self.assertEqual(clamp_drift((500, -900)), Point(100.0, -150.0))
        self.assertEqual(clamp_drift((-101, 151)), Point(-100.0, 150.0))

    def test_in_bounds_offset_passes_through(self) -> None:
        self.assertEqual(clamp_drift((42.5, -149.0)), Point(42.5, -149.0))

    def test_custom_bounds(self) -> None:
        self.assertEqual(clamp_drift((20, 20), DriftBounds(5, 10)), Point(5.0, 10.0))


class CameraControllerTests(unittest.TestCase):
    def test_apply_drift_stores_clamped_value(self) -> None:
        cam = CameraController(tracked=Point(580, 850), zoom=2.2)
        stored = cam.apply_drift((500, -900))
        self.assertEqual(stored, Point(100.0, -150.0))
        self.assertEqual(cam.snapshot().drift, stored)
        self.assertEqual(cam.snapshot().tracked, Point(580, 850))

    def test_drift_survives_tracked_position_updates(self) -> None:
        cam = CameraController(tracked=Point(0, 0), zoom=1.0)
        cam.apply_drift((10, 20))
        cam.set_tracked_position((50, 60))
        state = cam.snapshot()
        self.assertEqual(state.tracked, Point(50.0, 60.0))
        self.assertEqual(state.drift, Point(10.0, 20.0))

    def test_compute_transform_reflects_latest_state(self) -> None:
        cam = CameraController(tracked=Point(100, 200), zoom=2.0)
        cam.apply_drift((5, 5))
        tf = cam.compute_transform(400, 800)
        self.assertAlmostEqual(tf.translate_x, 200 - 200 + 5)
        self.assertAlmostEqual(tf.translate_y, 400 - 400 + 5)

    def test_set_zoom_validates(self) -> None:
        cam = CameraController(zoom=1.0)
        cam.set_zoom(3.0)
        self.assertEqual(cam.snapshot().zoom, 3.0)
        with self.assertRaises(ValueError):
            cam.set_zoom(0.0)
        self.assertEqual(cam.snapshot().zoom, 3.0)

    def test_interleaved_writers_never_tear_state(self) -> None:
        """Drift and position writers race a reader; every snapshot is one
        of the written combinations."""
        cam = CameraController(tracked=Point(0, 0), zoom=1.0)
        stop = threading.Event()
        bad = []

        def drift_writer() -> None:
            i = 0
            while not stop.is_set():
                v = float(i % 50)
                cam.apply_drift((v, v))
                i += 1

        def position_writer() -> None:
            i = 0
            while not stop.is_set():
                v = float(i % 1000)
                cam.set_tracked_position((v, v))
                i += 1

        threads = [threading.Thread(target=drift_writer),
                   threading.Thread(target=position_writer)]
        for t in threads:
            t.start()
        try:
            for _ in range(20000):
                state = cam.snapshot()
                if state.drift.x != state.drift.y or state.tracked.x != state.tracked.y:
                    bad.append(state)
                tf = compute_transform(400, 800, state)
                if abs(tf.translate_x - (200 - state.tracked.x + state.drift.x)) > 1e-9:
                    bad.append(state)
        finally:
            stop.set()
            for t in threads:
                t.join()
        self.assertEqual(bad, [])


if __name__ == "__main__":
    unittest.main()
