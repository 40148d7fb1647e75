"""
ui/camera.py
============
Follow-camera for the navigation map.

The map surface is drawn in virtual map space and shown on screen through
a translate-then-scale transform anchored at the surface's top-left::

    screen = (translate_x, translate_y) + zoom * map

:func:`compute_transform` picks the translation that puts the tracked
position at the screen centre and then adds the drift offset, a bounded
screen-space nudge fed by an external position signal.  Drift moves the
view, never the tracked position.

:class:`CameraController` owns the current :class:`CameraState` for one
scene.  The drift thread and the render loop both go through it; every
update swaps in a whole new state under a lock, so a transform is never
computed from a mix of old and new fields.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from citymap.geometry import Point

log = logging.getLogger("camera")


@dataclass(frozen=True)
class DriftBounds:
    """Symmetric clamp for the drift offset, in screen pixels."""
    max_x: float = 100.0
    max_y: float = 150.0


@dataclass(frozen=True)
class CameraState:
    """Snapshot of the camera for one scene.

    Parameters
    ----------
    tracked : Point
        Logical vehicle position (virtual map space).
    drift : Point
        Screen-space correction, already clamped.
    zoom : float
        Uniform scale from map units to screen pixels, strictly positive.
    """

    tracked: Point = Point(0.0, 0.0)
    drift: Point = Point(0.0, 0.0)
    zoom: float = 1.0

    def __post_init__(self) -> None:
        if not self.zoom > 0:
            raise ValueError(f"zoom must be positive, got {self.zoom}")


@dataclass(frozen=True)
class MapTransform:
    """Translate-then-scale transform from map space to screen space."""
    translate_x: float
    translate_y: float
    scale: float

    def map_to_screen(self, p: Tuple[float, float]) -> Point:
        return Point(self.translate_x + p[0] * self.scale,
                     self.translate_y + p[1] * self.scale)

    def screen_to_map(self, p: Tuple[float, float]) -> Point:
        return Point((p[0] - self.translate_x) / self.scale,
                     (p[1] - self.translate_y) / self.scale)


def compute_transform(screen_w: float, screen_h: float, state: CameraState) -> MapTransform:
    """Transform that centres ``state.tracked`` on a *screen_w* x *screen_h* view."""
    zoom = state.zoom
    return MapTransform(
        translate_x=screen_w / 2 - state.tracked.x * zoom + state.drift.x,
        translate_y=screen_h / 2 - state.tracked.y * zoom + state.drift.y,
        scale=zoom,
    )


def clamp_drift(raw: Tuple[float, float], bounds: DriftBounds = DriftBounds()) -> Point:
    """Clamp a raw offset to ``[-max_x, max_x] x [-max_y, max_y]``."""
    x = max(-bounds.max_x, min(bounds.max_x, float(raw[0])))
    y = max(-bounds.max_y, min(bounds.max_y, float(raw[1])))
    return Point(x, y)


class CameraController:
    """Single owner of a scene's :class:`CameraState`.

    Writers: the scene (``set_tracked_position``, ``set_zoom``) and the
    drift adapter (``apply_drift``).  Readers: the render loop
    (``compute_transform``, ``snapshot``).

    Parameters
    ----------
    tracked : Point
        Initial tracked position, usually the route start.
    zoom : float
        Initial zoom.
    bounds : DriftBounds, optional
        Drift clamp; defaults to +/-100 px horizontally, +/-150 px vertically.
    """

    def __init__(
        self,
        tracked: Point = Point(0.0, 0.0),
        zoom: float = 1.0,
        bounds: Optional[DriftBounds] = None,
    ) -> None:
        self.bounds = bounds or DriftBounds()
        self._lock = threading.Lock()
        self._state = CameraState(tracked=Point(*tracked), zoom=zoom)

    # ── Writers ───────────────────────────────────────────────────────────────

    def set_tracked_position(self, p: Tuple[float, float]) -> None:
        with self._lock:
            self._state = replace(self._state, tracked=Point(float(p[0]), float(p[1])))

    def apply_drift(self, raw: Tuple[float, float]) -> Point:
        """Clamp and store a raw drift offset; returns the stored value.

        Callers refresh the view by calling :meth:`compute_transform` again.
        """
        drift = clamp_drift(raw, self.bounds)
        with self._lock:
            self._state = replace(self._state, drift=drift)
        if drift.x != raw[0] or drift.y != raw[1]:
            log.debug("drift_clamped raw=(%.1f,%.1f) stored=(%.1f,%.1f)",
                      raw[0], raw[1], drift.x, drift.y)
        return drift

    def set_zoom(self, zoom: float) -> None:
        with self._lock:
            self._state = replace(self._state, zoom=zoom)

    # ── Readers ───────────────────────────────────────────────────────────────

    def snapshot(self) -> CameraState:
        with self._lock:
            return self._state

    def compute_transform(self, screen_w: float, screen_h: float) -> MapTransform:
        return compute_transform(screen_w, screen_h, self.snapshot())
