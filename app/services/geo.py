"""Great-circle helpers shared by the SQL layer and the query engine.

Distances use the haversine formula on a sphere of radius 6371.0 km. The
same formula is installed in the database as ``haversine_km`` so that radius
queries are evaluated server side (see ``app.db.init_db`` and
``app.db.session``).
"""

from __future__ import annotations

from dataclasses import dataclass
from math import asin, cos, degrees, radians, sin, sqrt

EARTH_RADIUS_KM = 6371.0

# Tiny widening of the prefilter box so float rounding never drops a candidate.
_PREFILTER_EPSILON_DEG = 1e-6


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lat/lng rectangle (no antimeridian wrap)."""

    sw_lat: float
    sw_lng: float
    ne_lat: float
    ne_lng: float

    def as_meta(self) -> dict:
        return {
            "southwest": {"lat": self.sw_lat, "lng": self.sw_lng},
            "northeast": {"lat": self.ne_lat, "lng": self.ne_lng},
        }


def haversine_km(
    lat1: float | None,
    lng1: float | None,
    lat2: float | None,
    lng2: float | None,
) -> float | None:
    """Great-circle distance in km; None when any coordinate is missing."""
    if lat1 is None or lng1 is None or lat2 is None or lng2 is None:
        return None

    phi1, phi2 = radians(lat1), radians(lat2)
    dphi = phi2 - phi1
    dlambda = radians(lng2 - lng1)

    a = sin(dphi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * asin(sqrt(min(1.0, a)))


def radius_prefilter(center: GeoPoint, radius_km: float) -> tuple[tuple[float, float], tuple[float, float] | None]:
    """Return ``(lat_range, lng_range)`` enclosing every point within ``radius_km``.

    ``lng_range`` is None when the circle reaches a pole or crosses the
    antimeridian; callers then only constrain latitude.
    """
    angular = radius_km / EARTH_RADIUS_KM
    delta_lat = degrees(angular) + _PREFILTER_EPSILON_DEG
    lat_min = center.latitude - delta_lat
    lat_max = center.latitude + delta_lat

    if lat_min <= -90 or lat_max >= 90:
        return (max(lat_min, -90.0), min(lat_max, 90.0)), None

    ratio = sin(angular) / cos(radians(center.latitude))
    if ratio >= 1:
        return (lat_min, lat_max), None

    delta_lng = degrees(asin(ratio)) + _PREFILTER_EPSILON_DEG
    lng_min = center.longitude - delta_lng
    lng_max = center.longitude + delta_lng
    if lng_min < -180 or lng_max > 180:
        return (lat_min, lat_max), None
    return (lat_min, lat_max), (lng_min, lng_max)
