#!/usr/bin/env python3
"""
main.py
=======
Entry point: configure logging, start the GPS drift feed and open the
navigation window.

Environment overrides
---------------------
``CABNAV_SEED``           building seed of the trip scenes
``CABNAV_ZOOM``           navigation zoom
``CABNAV_GPS_HZ``         simulated fix rate (``0`` disables the feed)
``CABNAV_GPS_DROP_RATE``  probability of losing a simulated fix
``CABNAV_LOG_LEVEL``      ``DEBUG`` / ``INFO`` / ``WARNING`` …
``CABNAV_API``            ``1`` to also serve the HTTP fix ingest
"""

import logging
import os

import config
from logging_setup import setup_logging


def _env(name, cast, default):
    """Read an environment override, keeping *default* on a malformed value."""
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logging.getLogger("main").warning("Ignoring %s=%r (expected %s)",
                                          name, raw, cast.__name__)
        return default


def main():
    level_name = os.environ.get("CABNAV_LOG_LEVEL", "INFO").upper()
    setup_logging(getattr(logging, level_name, logging.INFO))
    log = logging.getLogger("main")

    seed = _env("CABNAV_SEED", int, config.NAV_SEED)
    zoom = _env("CABNAV_ZOOM", float, config.NAV_ZOOM)
    gps_hz = _env("CABNAV_GPS_HZ", float, config.GPS_UPDATE_HZ)
    drop_rate = _env("CABNAV_GPS_DROP_RATE", float, config.GPS_DROP_RATE)
    serve_api = os.environ.get("CABNAV_API", "0") in ("1", "true", "yes")
    log.info("Starting cab nav seed=%d zoom=%.2f gps_hz=%.2f drop_rate=%.2f api=%s",
             seed, zoom, gps_hz, drop_rate, serve_api)

    from gps import GeoDriftSource, SimulatedGpsFeed
    from ui.camera import DriftBounds
    from ui.nav_view import run_navigation_view

    source = GeoDriftSource(
        pixels_per_meter=config.GPS_PIXELS_PER_METER,
        max_age_s=config.GPS_MAX_AGE_S,
    )

    feed = None
    if gps_hz > 0:
        feed = SimulatedGpsFeed(
            source,
            base_lat=config.GPS_BASE_LAT,
            base_lng=config.GPS_BASE_LNG,
            update_hz=gps_hz,
            jitter_m=config.GPS_JITTER_M,
            drop_rate=drop_rate,
            timeout_s=config.GPS_TIMEOUT_S,
        )
        feed.start()

    if serve_api:
        from gps.api import serve_in_background
        serve_in_background(source, host=config.API_HOST, port=config.API_PORT)

    try:
        run_navigation_view(
            source,
            width=config.WINDOW_WIDTH,
            height=config.WINDOW_HEIGHT,
            fps=config.TARGET_FPS,
            zoom=zoom,
            trip_speed=config.TRIP_SPEED,
            nav_seed=seed,
            drift_bounds=DriftBounds(config.DRIFT_MAX_X, config.DRIFT_MAX_Y),
        )
    except KeyboardInterrupt:
        log.info("Shutting down...")
    finally:
        if feed is not None:
            feed.stop()
        log.info("Metrics: %s", source.metrics.report())


if __name__ == "__main__":
    main()
