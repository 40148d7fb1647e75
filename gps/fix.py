"""
GeoFix: Data structure representing one position fix from a location provider.
"""

from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class GeoFix:
    """
    Represents a single position fix delivered to a GeoDriftSource.

    Attributes:
        lat (float): Latitude in degrees.
        lng (float): Longitude in degrees.
        ts (float): Timestamp (in seconds) when the fix was acquired.
        accuracy_m (Optional[float]): Reported horizontal accuracy in metres, if known.
    """
    lat: float
    lng: float
    ts: float
    accuracy_m: Optional[float] = None
