#!/usr/bin/env python3

from .types import ButtonRect, ColorRGB, ColorRGBA, RenderOptions
from .constants import ViewConstants
from .camera import CameraController, CameraState, DriftBounds, MapTransform, clamp_drift, compute_transform
from .draw_map import draw_driver_dot, render_map
from .scenes import Scene, SceneSpec, build_scene, home_scene, reroute_scene, trip_scene
from .hud import HudRenderer
from .nav_view import NavigationView, run_navigation_view

__all__ = [
    "ButtonRect",
    "ColorRGB",
    "ColorRGBA",
    "RenderOptions",
    "ViewConstants",
    "CameraController",
    "CameraState",
    "DriftBounds",
    "MapTransform",
    "clamp_drift",
    "compute_transform",
    "draw_driver_dot",
    "render_map",
    "Scene",
    "SceneSpec",
    "build_scene",
    "home_scene",
    "reroute_scene",
    "trip_scene",
    "HudRenderer",
    "NavigationView",
    "run_navigation_view",
]
