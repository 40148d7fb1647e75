"""
Utility functions for the GPS drift pipeline:
    - geographic delta to local metres
    - fault injection (signal drop)
"""

import math
import random
import logging
from typing import Optional, Tuple

log = logging.getLogger(__name__)

# Metres per degree of latitude (and of longitude at the equator).
METERS_PER_DEGREE = 111320.0

# ---------- Geo helpers ----------
def geo_delta_m(base_lat: float, base_lng: float, lat: float, lng: float) -> Tuple[float, float]:
    """
    Flat-earth displacement from a base position, in metres.

    Args:
        base_lat (float): Baseline latitude in degrees.
        base_lng (float): Baseline longitude in degrees.
        lat (float): Current latitude in degrees.
        lng (float): Current longitude in degrees.

    Returns:
        Tuple[float, float]: (east_m, north_m). The longitude scale uses the
        *current* latitude.
    """
    north_m = (lat - base_lat) * METERS_PER_DEGREE
    east_m = (lng - base_lng) * METERS_PER_DEGREE * math.cos(lat * math.pi / 180)
    return east_m, north_m

def offset_geo(lat: float, lng: float, east_m: float, north_m: float) -> Tuple[float, float]:
    """
    Move a position by a local displacement in metres (inverse of geo_delta_m).

    Args:
        lat (float): Start latitude in degrees.
        lng (float): Start longitude in degrees.
        east_m (float): Eastward displacement in metres.
        north_m (float): Northward displacement in metres.

    Returns:
        Tuple[float, float]: The displaced (lat, lng).
    """
    new_lat = lat + north_m / METERS_PER_DEGREE
    new_lng = lng + east_m / (METERS_PER_DEGREE * math.cos(new_lat * math.pi / 180))
    return new_lat, new_lng

# ---------- Fault helpers ----------
def maybe_drop(drop_rate: float, rng: Optional[random.Random] = None) -> bool:
    """
    Decide whether to randomly drop a fix based on the drop rate.

    Args:
        drop_rate (float): Probability (0.0–1.0) that the fix will be dropped.
        rng (Optional[random.Random]): Random source; the module RNG if omitted.

    Returns:
        bool: True if the fix should be dropped, False otherwise.
    """
    if drop_rate <= 0.0:
        return False
    result = (rng or random).random() < drop_rate
    if result:
        log.debug("Fix dropped by utils.maybe_drop")
    return result
