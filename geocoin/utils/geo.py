"""Great-circle distance helper.

Uses the haversine formula on a spherical earth (mean radius 6 371 km), the
same model map front ends use for ``distanceTo``, so eviction distances agree
with what the player sees on the map.
"""

import math

from geocoin.components import LatLng

EARTH_RADIUS_M = 6371000.0


def distance(a: LatLng, b: LatLng) -> float:
    """Return the distance between ``a`` and ``b`` in metres."""
    rad = math.pi / 180
    lat1 = a.lat * rad
    lat2 = b.lat * rad
    sin_dlat = math.sin((b.lat - a.lat) * rad / 2)
    sin_dlng = math.sin((b.lng - a.lng) * rad / 2)
    h = sin_dlat * sin_dlat + math.cos(lat1) * math.cos(lat2) * sin_dlng * sin_dlng
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
