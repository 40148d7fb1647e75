#!/usr/bin/env python3
"""
Main view class — the navigation screen as a runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, ColorRGBA, RenderOptions, ButtonRect
    ├── constants.py       – map palette + ViewConstants mixin
    ├── helpers.py         – alpha drawing, polylines, dashes, fonts
    ├── draw_map.py        – render_map() (roads, buildings, route, pins)
    ├── camera.py          – CameraState, compute_transform, CameraController
    ├── scenes.py          – SceneSpec presets and build_scene()
    ├── hud.py             – HudRenderer mixin (request card, header, debug)
    └── nav_view.py        – NavigationView (this file – main loop)

Each scene is rendered once into a map-sized surface and pre-scaled by
the zoom; per frame the view only advances the tracked position along
the route and blits the cached surface at the camera translation.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Callable, Optional

import pygame

from citymap.router import point_along_route
from config import NAV_SEED, NAV_ZOOM, TARGET_FPS, TRIP_SPEED, WINDOW_HEIGHT, WINDOW_WIDTH
from gps.drift_source import GeoDriftSource

from .camera import CameraController, DriftBounds
from .constants import ViewConstants
from .draw_map import draw_driver_dot, render_map
from .helpers import get_font
from .hud import HudRenderer
from .scenes import Scene, SceneSpec, build_scene, home_scene, reroute_scene, trip_scene

log = logging.getLogger("nav_view")


class NavigationView(ViewConstants, HudRenderer):
    """Ride-hailing navigation screen powered by Pygame.

    Parameters
    ----------
    drift_source : GeoDriftSource
        Source of drift offsets; the active trip's camera subscribes to it.
    width, height : int
        Window size.
    fps : int
        Frame cap.
    zoom : float
        Initial navigation zoom.
    trip_speed : float
        Speed of the tracked vehicle along the route, map units per second.
    nav_seed : int
        Building seed for the trip scenes.
    drift_bounds : DriftBounds, optional
        Clamp for the camera drift.
    """

    def __init__(
        self,
        drift_source: GeoDriftSource,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        fps: int = TARGET_FPS,
        zoom: float = NAV_ZOOM,
        trip_speed: float = TRIP_SPEED,
        nav_seed: int = NAV_SEED,
        drift_bounds: Optional[DriftBounds] = None,
    ):
        self.drift_source = drift_source
        self.width = width
        self.height = height
        self.fps = fps
        self.zoom = zoom
        self.trip_speed = trip_speed
        self.nav_seed = nav_seed
        self.drift_bounds = drift_bounds

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.time_seconds = 0.0
        self.paused = False
        self.show_debug = False

        self.scene: Optional[Scene] = None
        self.camera: Optional[CameraController] = None
        self._map_surface: Optional[pygame.Surface] = None
        self._scaled_map: Optional[pygame.Surface] = None
        self._scaled_zoom = 0.0
        self._unsubscribe_drift: Optional[Callable[[], None]] = None
        self._distance = 0.0
        self._screenshot_flash_until = 0.0

    # ------------------------------------------------------------------ #
    #  Scenes                                                              #
    # ------------------------------------------------------------------ #
    @property
    def on_trip(self) -> bool:
        return self.camera is not None

    def _render_scene(self, spec: SceneSpec) -> None:
        self.scene = build_scene(spec)
        surf = pygame.Surface((int(spec.extent_w), int(spec.extent_h)))
        render_map(surf, spec.extent_w, spec.extent_h, self.scene.grid,
                   self.scene.buildings, self.scene.options)
        self._map_surface = surf
        self._scaled_map = None

    def show_home(self) -> None:
        """Window-sized static map behind the ride request card."""
        self._end_trip()
        self._render_scene(home_scene(self.width, self.height))

    def start_trip(self, spec: SceneSpec) -> None:
        """Build a routed scene with a fresh camera following the route start."""
        self._end_trip()
        self._render_scene(spec)
        start = self.scene.route[0]
        self.camera = CameraController(tracked=start, zoom=self.zoom,
                                       bounds=self.drift_bounds)
        # reset first: the new camera must never see an old-baseline offset
        self.drift_source.reset_baseline()
        self._unsubscribe_drift = self.drift_source.subscribe(self.camera.apply_drift)
        self._distance = 0.0
        log.info("trip_started scene=%s start=(%.0f,%.0f) length=%.0f",
                 spec.name, start.x, start.y, self.scene.route_length)

    def _end_trip(self) -> None:
        if self._unsubscribe_drift is not None:
            self._unsubscribe_drift()
            self._unsubscribe_drift = None
        self.camera = None

    def _scaled(self) -> pygame.Surface:
        """Map surface pre-scaled by the current zoom (cached per zoom)."""
        if self._scaled_map is None or self._scaled_zoom != self.zoom:
            w, h = self._map_surface.get_size()
            self._scaled_map = pygame.transform.smoothscale(
                self._map_surface, (int(w * self.zoom), int(h * self.zoom))
            )
            self._scaled_zoom = self.zoom
        return self._scaled_map

    def _set_zoom(self, zoom: float) -> None:
        self.zoom = max(self.MIN_ZOOM, min(self.MAX_ZOOM, zoom))
        if self.camera is not None:
            self.camera.set_zoom(self.zoom)

    # ------------------------------------------------------------------ #
    #  Resize / screenshot                                                 #
    # ------------------------------------------------------------------ #
    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(320, new_w)
        self.height = max(480, new_h)
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        if not self.on_trip:
            self.show_home()

    def _take_screenshot(self) -> None:
        if self.screen is None:
            return
        os.makedirs(self.SCREENSHOT_DIR, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.SCREENSHOT_DIR, f"nav_{stamp}.png")
        pygame.image.save(self.screen, path)
        self._screenshot_flash_until = self.time_seconds + 0.35
        log.info("screenshot saved path=%s", path)

    # ------------------------------------------------------------------ #
    #  Frame                                                               #
    # ------------------------------------------------------------------ #
    def _advance(self, dt: float) -> None:
        if self.paused or not self.on_trip:
            return
        self._distance = min(self._distance + self.trip_speed * dt,
                             self.scene.route_length)
        self.camera.set_tracked_position(
            point_along_route(self.scene.route, self._distance)
        )

    def draw_frame(self, dt: float) -> None:
        self.screen.fill(self.BG_COLOR)

        if self.on_trip:
            tf = self.camera.compute_transform(self.width, self.height)
            self.screen.blit(self._scaled(), (round(tf.translate_x), round(tf.translate_y)))
            draw_driver_dot(self.screen, (self.width / 2, self.height / 2))
            length = self.scene.route_length
            progress = self._distance / length if length else 1.0
            self._draw_nav_header(self.screen, self.scene.spec.labels[-1].text, progress)
        else:
            self.screen.blit(self._map_surface, (0, 0))
            self._draw_request_card(self.screen)

        if self.show_debug:
            self._draw_debug_overlay(self.screen, dt)
        if self.paused:
            self._draw_pause_banner(self.screen)
        if self.time_seconds < self._screenshot_flash_until:
            flash = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
            flash.fill((255, 255, 255, 40))
            self.screen.blit(flash, (0, 0))

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def _handle_key(self, key: int) -> bool:
        """Apply a key press; returns False when the view should close."""
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_RETURN and not self.on_trip:
            self.start_trip(trip_scene(self.nav_seed))
        elif key == pygame.K_n and self.on_trip:
            self.start_trip(reroute_scene(self.nav_seed))
        elif key == pygame.K_h:
            self.show_home()
        elif key == pygame.K_SPACE:
            self.paused = not self.paused
        elif key == pygame.K_F3:
            self.show_debug = not self.show_debug
        elif key == pygame.K_F12:
            self._take_screenshot()
        elif key in (pygame.K_EQUALS, pygame.K_PLUS):
            self._set_zoom(self.zoom + self.ZOOM_STEP)
        elif key == pygame.K_MINUS:
            self._set_zoom(self.zoom - self.ZOOM_STEP)
        return True

    def run(self) -> None:
        pygame.init()
        pygame.display.set_caption("CAB NAV")
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()
        self.font_small = get_font("inter,arial,helvetica", 15)
        self.font_tiny = get_font("consolas,menlo,monospace", 12)
        self.font_title = get_font("inter,arial,helvetica", 24, bold=True)
        self.show_home()

        running = True
        while running:
            delta_time = self.clock.tick(self.fps) / 1000.0
            self.time_seconds += delta_time

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._handle_resize(event.w, event.h)
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_key(event.key) and running
                elif event.type == pygame.MOUSEBUTTONDOWN and not self.on_trip:
                    if self._accept_button().contains(*event.pos):
                        self.start_trip(trip_scene(self.nav_seed))

            self._advance(delta_time)
            self.draw_frame(delta_time)
            pygame.display.flip()

        self._end_trip()
        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_navigation_view(drift_source: GeoDriftSource, **kwargs) -> None:
    view = NavigationView(drift_source=drift_source, **kwargs)
    view.run()
