"""
DriftSource: push-style subscription feeding drift offsets to the camera.

Supports:
    - subscribe(handler) -> unsubscribe() registration
    - fan-out of raw (unclamped) screen-space offsets to every handler
    - conversion of geographic fixes into pixel offsets (GeoDriftSource)
    - staleness filtering and graceful handling of provider errors

Intended usage:
    - The scene subscribes ``camera.apply_drift`` when it starts and calls
      the returned unsubscribe function when it ends.
    - A location provider (simulated feed, HTTP endpoint, ...) calls
      ``push_fix`` on its own schedule, or ``report_error`` when it fails.
"""

import time
import logging
import threading
from typing import Callable, List, Optional, Tuple

from citymap.geometry import Point

from .fix import GeoFix
from .metrics import DriftMetrics
from .utils import geo_delta_m

log = logging.getLogger("drift")

DriftHandler = Callable[[Point], object]


class DriftSource:
    """
    Publish/subscribe hub for drift offsets.

    Handlers are called synchronously on the publishing thread. A handler
    that raises is logged and skipped; the others still receive the offset.
    """

    def __init__(self, metrics: Optional[DriftMetrics] = None):
        """
        Initialize a DriftSource with no subscribers.

        Args:
            metrics (Optional[DriftMetrics]): Shared counters; a fresh instance if omitted.
        """
        self._handlers: List[DriftHandler] = []
        self._lock = threading.Lock()
        self.metrics = metrics or DriftMetrics()

    def subscribe(self, handler: DriftHandler) -> Callable[[], None]:
        """
        Register a handler for drift offsets.

        Args:
            handler (Callable[[Point], object]): Called with each raw offset.

        Returns:
            Callable[[], None]: Unsubscribe function; calling it more than once is harmless.
        """
        with self._lock:
            self._handlers.append(handler)
        log.info("drift_subscribe handlers=%d", len(self._handlers))

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)
                    log.info("drift_unsubscribe handlers=%d", len(self._handlers))

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)

    def publish(self, offset: Tuple[float, float]) -> int:
        """
        Deliver a raw offset to every current subscriber.

        Args:
            offset (Tuple[float, float]): Screen-space offset in pixels, unclamped.

        Returns:
            int: Number of handlers that accepted the offset without raising.
        """
        point = Point(float(offset[0]), float(offset[1]))
        with self._lock:
            handlers = list(self._handlers)
        delivered = 0
        for handler in handlers:
            try:
                handler(point)
                delivered += 1
            except Exception:
                self.metrics.increment("errors")
                log.exception("drift handler failed offset=(%.1f,%.1f)", point.x, point.y)
        self.metrics.increment("published")
        log.debug("drift_publish offset=(%.1f,%.1f) delivered=%d", point.x, point.y, delivered)
        return delivered


# Outcomes of GeoDriftSource.submit_fix
FIX_BASELINE = "baseline"
FIX_STALE = "stale"
FIX_PUBLISHED = "published"


class GeoDriftSource(DriftSource):
    """
    DriftSource fed by geographic fixes.

    The first fix after construction or ``reset_baseline`` becomes the
    baseline and produces no offset. Each later fix is converted to metres
    relative to the baseline and scaled to pixels (screen y points down,
    so north is negative).

    The baseline is read and replaced under its own re-entrant lock, so a
    scene may call ``reset_baseline`` while a provider thread is pushing
    fixes; handlers run inside that lock and may query the source.

    Attributes:
        pixels_per_meter (float): Screen pixels per real metre at the nav zoom.
        max_age_s (float): Fixes older than this (by their timestamp) are discarded.
    """

    def __init__(
        self,
        pixels_per_meter: float = 3.0,
        max_age_s: float = 1.0,
        clock: Callable[[], float] = time.time,
        metrics: Optional[DriftMetrics] = None,
    ):
        """
        Initialize a GeoDriftSource.

        Args:
            pixels_per_meter (float): Conversion from metres to screen pixels.
            max_age_s (float): Staleness limit in seconds.
            clock (Callable[[], float]): Time source compared against fix timestamps.
            metrics (Optional[DriftMetrics]): Shared counters.
        """
        super().__init__(metrics)
        self.pixels_per_meter = pixels_per_meter
        self.max_age_s = max_age_s
        self._clock = clock
        self._base_lock = threading.RLock()
        self._base: Optional[Tuple[float, float]] = None
        self.last_offset: Optional[Point] = None

    @property
    def has_baseline(self) -> bool:
        with self._base_lock:
            return self._base is not None

    def reset_baseline(self):
        """Forget the baseline so the next fix starts fresh tracking."""
        with self._base_lock:
            self._base = None
            self.last_offset = None
        log.info("gps_baseline_reset")

    def to_offset(self, fix: GeoFix, base: Tuple[float, float]) -> Point:
        """
        Convert a fix to a raw pixel offset from *base*.

        Args:
            fix (GeoFix): Position fix.
            base (Tuple[float, float]): Baseline (lat, lng) in degrees.

        Returns:
            Point: Raw (unclamped) screen-space offset.
        """
        east_m, north_m = geo_delta_m(base[0], base[1], fix.lat, fix.lng)
        return Point(east_m * self.pixels_per_meter, -north_m * self.pixels_per_meter)

    def submit_fix(self, fix: GeoFix) -> Tuple[str, Optional[Point]]:
        """
        Accept a fix and report what became of it.

        Args:
            fix (GeoFix): The new position fix.

        Returns:
            Tuple[str, Optional[Point]]: ``(FIX_STALE, None)`` when the fix was
            discarded, ``(FIX_BASELINE, None)`` when it set the baseline, and
            ``(FIX_PUBLISHED, offset)`` otherwise.
        """
        self.metrics.increment("received")
        age = self._clock() - fix.ts
        if age > self.max_age_s:
            self.metrics.increment("stale")
            log.debug("gps_fix_stale age=%.2fs max=%.2fs", age, self.max_age_s)
            return FIX_STALE, None

        # Publishing inside the lock means no offset computed from a
        # baseline survives a reset_baseline() that returned before it.
        with self._base_lock:
            if self._base is None:
                self._base = (fix.lat, fix.lng)
                log.info("gps_baseline lat=%.6f lng=%.6f", fix.lat, fix.lng)
                return FIX_BASELINE, None
            offset = self.to_offset(fix, self._base)
            self.last_offset = offset
            self.publish(offset)
        return FIX_PUBLISHED, offset

    def push_fix(self, fix: GeoFix) -> Optional[Point]:
        """
        Accept a fix from the location provider.

        Args:
            fix (GeoFix): The new position fix.

        Returns:
            Optional[Point]: The published raw offset, or None when the fix only
            set the baseline or was discarded as stale.
        """
        return self.submit_fix(fix)[1]

    def report_error(self, error: BaseException):
        """
        Record a provider failure. Never raises: subscribers keep their last drift.

        Args:
            error (BaseException): The failure reported by the provider.
        """
        self.metrics.increment("errors")
        log.warning("GPS not available, map stays fixed (%s: %s)",
                    type(error).__name__, error)
