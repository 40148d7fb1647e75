"""
gps/feed.py
===========
Background-thread location provider that pushes simulated fixes into a
:class:`gps.drift_source.GeoDriftSource`.

It stands in for a device's position watcher: after an acquisition delay
it random-walks around a base position and pushes one fix per tick.  If
the first fix cannot be acquired within ``timeout_s`` it reports a
``TimeoutError`` to the source and stops pushing; the camera then holds
its last drift.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import Callable, Optional

from .drift_source import GeoDriftSource
from .fix import GeoFix
from .utils import maybe_drop, offset_geo

log = logging.getLogger("gps_feed")


class SimulatedGpsFeed:
    """Simulated location provider running in a background thread.

    Parameters
    ----------
    source : GeoDriftSource
        Receiver of the fixes.
    base_lat, base_lng : float
        Centre of the random walk, in degrees.
    update_hz : float
        Fixes per second.
    jitter_m : float
        Standard deviation of each random-walk step, in metres.
    drop_rate : float
        Probability that a tick produces no fix (signal loss).
    acquire_delay_s : float
        Time before the first fix is available.
    timeout_s : float
        Acquisition timeout; exceeding it ends the feed.
    seed : int or None
        Seed for the random walk.
    clock : callable
        Time source; also stamps the fixes.
    """

    def __init__(
        self,
        source: GeoDriftSource,
        base_lat: float,
        base_lng: float,
        update_hz: float = 1.0,
        jitter_m: float = 2.0,
        drop_rate: float = 0.0,
        acquire_delay_s: float = 0.0,
        timeout_s: float = 5.0,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.source = source
        self.base_lat = base_lat
        self.base_lng = base_lng
        self.update_hz = update_hz
        self.jitter_m = jitter_m
        self.drop_rate = drop_rate
        self.acquire_delay_s = acquire_delay_s
        self.timeout_s = timeout_s
        self._rng = random.Random(seed)
        self._clock = clock

        self._east_m = 0.0
        self._north_m = 0.0
        self._started_at: Optional[float] = None
        self._acquired = False
        self.gave_up = False

        self._thread: Optional[threading.Thread] = None
        self._running = False

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """Spawn the background feed thread."""
        if self._running:
            return
        self._running = True
        self._started_at = self._clock()
        self._thread = threading.Thread(
            target=self._loop, daemon=True, name="SimulatedGpsFeed"
        )
        self._thread.start()
        log.info("SimulatedGpsFeed started at %.2f Hz", self.update_hz)

    def stop(self) -> None:
        """Signal the thread to stop and wait for it to join."""
        self._running = False
        if self._thread:
            self._thread.join(timeout=2.0)
        log.info("SimulatedGpsFeed stopped")

    @property
    def running(self) -> bool:
        return self._running and not self.gave_up

    # ── Ticks ─────────────────────────────────────────────────────────────────

    def step(self) -> Optional[GeoFix]:
        """Run one tick; returns the fix pushed to the source, if any."""
        if self.gave_up:
            return None
        if self._started_at is None:
            self._started_at = self._clock()

        if not self._acquired:
            elapsed = self._clock() - self._started_at
            if elapsed < self.acquire_delay_s:
                if elapsed > self.timeout_s:
                    self.gave_up = True
                    self.source.report_error(
                        TimeoutError(f"no fix within {self.timeout_s:.1f}s")
                    )
                return None
            self._acquired = True
            log.info("gps_acquired after %.2fs", elapsed)

        self._east_m += self._rng.gauss(0.0, self.jitter_m)
        self._north_m += self._rng.gauss(0.0, self.jitter_m)

        if maybe_drop(self.drop_rate, self._rng):
            self.source.metrics.increment("dropped")
            return None

        lat, lng = offset_geo(self.base_lat, self.base_lng, self._east_m, self._north_m)
        fix = GeoFix(lat=lat, lng=lng, ts=self._clock(), accuracy_m=self.jitter_m)
        self.source.push_fix(fix)
        return fix

    def _loop(self) -> None:
        dt = 1.0 / self.update_hz
        while self._running and not self.gave_up:
            t0 = time.perf_counter()
            try:
                self.step()
            except Exception:
                log.exception("SimulatedGpsFeed tick error")
            time.sleep(max(0.0, dt - (time.perf_counter() - t0)))
