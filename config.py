#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf — it never imports from
other project packages.
"""

# ── Map defaults ─────────────────────────────────────────────────────────────
NAV_EXTENT: int = 1200
HOME_SEED: int = 42
NAV_SEED: int = 77
NAV_ZOOM: float = 2.2
TRIP_SPEED: float = 12.0

# ── Camera drift clamp (screen pixels) ───────────────────────────────────────
DRIFT_MAX_X: float = 100.0
DRIFT_MAX_Y: float = 150.0

# ── GPS defaults ─────────────────────────────────────────────────────────────
GPS_BASE_LAT: float = 19.0176
GPS_BASE_LNG: float = 72.8562
GPS_UPDATE_HZ: float = 1.0
GPS_JITTER_M: float = 2.0
GPS_DROP_RATE: float = 0.0
GPS_PIXELS_PER_METER: float = 3.0
GPS_MAX_AGE_S: float = 1.0
GPS_TIMEOUT_S: float = 5.0

# ── HTTP ingest (optional) ───────────────────────────────────────────────────
API_HOST: str = "0.0.0.0"
API_PORT: int = 8000

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 420
WINDOW_HEIGHT: int = 780
TARGET_FPS: int = 60
