"""
gps — Drift signal plumbing
===========================

Turns position fixes from a location provider into bounded-by-the-camera
screen-space drift offsets, delivered through a subscription interface so
the map core stays synchronous.

Modules
-------
fix
    :class:`GeoFix` dataclass.
drift_source
    :class:`DriftSource` subscribe / publish hub and :class:`GeoDriftSource`.
feed
    :class:`SimulatedGpsFeed` background-thread provider.
metrics
    :class:`DriftMetrics` counter snapshot.
utils
    Geo delta conversion and fault injection.
api
    Optional FastAPI ingest endpoint (imported on demand).
"""

from .fix import GeoFix
from .drift_source import DriftSource, GeoDriftSource, FIX_BASELINE, FIX_PUBLISHED, FIX_STALE
from .feed import SimulatedGpsFeed
from .metrics import DriftMetrics
from .utils import geo_delta_m, offset_geo, maybe_drop

__all__ = [
    "GeoFix",
    "DriftSource",
    "GeoDriftSource",
    "FIX_BASELINE",
    "FIX_PUBLISHED",
    "FIX_STALE",
    "SimulatedGpsFeed",
    "DriftMetrics",
    "geo_delta_m",
    "offset_geo",
    "maybe_drop",
]
