"""Great-circle bearing and distance toward the Kaaba."""

import math

from prayercompass.astronomy import normalize_360
from prayercompass.models import GeoPoint, QiblaBearing

KAABA = GeoPoint(latitude=21.4225, longitude=39.8262)
EARTH_RADIUS_KM = 6371.0

# Below this the bearing is numerically meaningless (about 1 cm)
_COINCIDENT_KM = 1e-5


def bearing_and_distance(observer: GeoPoint, target: GeoPoint = KAABA) -> QiblaBearing:
    """Initial great-circle bearing (true north, clockwise) and haversine distance.

    An observer standing on the target has no defined bearing; that case
    returns bearing 0 and distance 0.
    """
    lat1 = math.radians(observer.latitude)
    lat2 = math.radians(target.latitude)
    d_lon = math.radians(target.longitude - observer.longitude)
    d_lat = lat2 - lat1

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1 - a)))
    distance = EARTH_RADIUS_KM * c
    if distance < _COINCIDENT_KM:
        return QiblaBearing(bearing_degrees=0.0, distance_km=0.0)

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return QiblaBearing(
        bearing_degrees=normalize_360(math.degrees(math.atan2(y, x))),
        distance_km=distance,
    )
