"""UTC offset resolution for a location, using an offline timezone polygon lookup."""

from datetime import date, datetime, time

from pytz import timezone
from timezonefinder import TimezoneFinder

from prayercompass.models import GeoPoint

_tf = TimezoneFinder()


class TimezoneLookupError(Exception):
    """No IANA timezone could be resolved for a location."""


def timezone_name(location: GeoPoint) -> str:
    """IANA timezone name at a location (e.g. ``America/New_York``).

    Raises:
        TimezoneLookupError: When the point has no timezone (open ocean, poles).
    """
    tz_str = _tf.timezone_at(lat=location.latitude, lng=location.longitude)
    if tz_str is None:
        raise TimezoneLookupError(
            f"Timezone not found: lat={location.latitude}, lng={location.longitude}"
        )
    return tz_str


def utc_offset_hours(location: GeoPoint, on_date: date) -> float:
    """UTC offset in hours in effect at local noon on ``on_date``.

    Noon avoids the ambiguous and non-existent hours around DST transitions.
    """
    local_tz = timezone(timezone_name(location))
    local_noon = local_tz.localize(datetime.combine(on_date, time(12, 0)), is_dst=None)
    offset = local_noon.utcoffset()
    assert offset is not None
    return offset.total_seconds() / 3600.0


def location_now(location: GeoPoint) -> datetime:
    """Current wall-clock time in the location's own timezone (tz-aware)."""
    return datetime.now(timezone(timezone_name(location)))
