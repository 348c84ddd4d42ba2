"""Solar position primitives — Julian dates, declination, transit and hour angles.

Low-order series accurate to well under a degree, which is enough for
minute-resolution prayer times. Not intended for survey-grade astronomy.
"""

import math
from datetime import date

from prayercompass.models import MINUTES_PER_DAY, ClockTime

J2000 = 2451545.0  # Julian Date of 2000-01-01 12:00 TT
UNIX_EPOCH_JD = 2440587.5  # Julian Date of 1970-01-01 00:00 UTC
SUNRISE_ELEVATION_DEG = -0.833  # Refraction + solar semi-diameter


def normalize_360(degrees: float) -> float:
    """Map any angle into [0, 360)."""
    result = ((degrees % 360.0) + 360.0) % 360.0
    # -1e-15 % 360 rounds up to exactly 360.0 in floating point
    return 0.0 if result >= 360.0 else result


def normalize_to_180(degrees: float) -> float:
    """Map any angle into (-180, 180]."""
    result = normalize_360(degrees)
    if result > 180.0:
        result -= 360.0
    return result


def to_julian_date(day: date) -> float:
    """Julian Date at 0h UT of a proleptic Gregorian calendar date."""
    year, month = day.year, day.month
    if month <= 2:
        year -= 1
        month += 12
    a = year // 100
    b = 2 - a + a // 4
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day.day
        + b
        - 1524.5
    )


def solar_declination(julian_date: float) -> float:
    """Declination of the sun in radians.

    Mean longitude plus a two-term equation of centre gives the ecliptic
    longitude; obliquity drifts linearly with Julian centuries since J2000.
    """
    d = julian_date - J2000
    centuries = d / 36525.0
    g = math.radians((357.529 + 0.98560028 * d) % 360.0)
    q = (280.459 + 0.98564736 * d) % 360.0
    ecliptic_longitude = math.radians(q + 1.915 * math.sin(g) + 0.020 * math.sin(2 * g))
    obliquity = math.radians(23.439 - 0.0130042 * centuries)
    return math.asin(math.sin(obliquity) * math.sin(ecliptic_longitude))


def solar_noon(julian_date: float, longitude: float) -> float:
    """Julian Date of the sun's transit on the civil date of ``julian_date``.

    Args:
        julian_date: Any Julian Date on the target civil date (normally 0h UT).
        longitude: Observer longitude in degrees, east positive.

    Returns:
        Julian Date (UT) of local solar noon, including the equation of time.
    """
    # Whole days from J2000 to this date's noon UT
    n = math.ceil(julian_date - J2000 + 0.0008)
    mean_transit = n - longitude / 360.0
    mean_anomaly = (357.5291 + 0.98560028 * mean_transit) % 360.0
    m = math.radians(mean_anomaly)
    centre = 1.9148 * math.sin(m) + 0.0200 * math.sin(2 * m) + 0.0003 * math.sin(3 * m)
    ecliptic_longitude = math.radians(
        (280.466 + 0.98564736 * mean_transit + centre) % 360.0
    )
    return (
        J2000
        + mean_transit
        + 0.0053 * math.sin(m)
        - 0.0069 * math.sin(2 * ecliptic_longitude)
    )


def hour_angle_for_elevation(
    latitude: float, declination: float, elevation_degrees: float
) -> float | None:
    """Hour angle (degrees) at which the sun crosses ``elevation_degrees``.

    Args:
        latitude: Observer latitude in degrees.
        declination: Solar declination in radians.
        elevation_degrees: Target solar elevation; negative is below the horizon.

    Returns:
        The hour angle in degrees, or None when the sun never reaches that
        elevation on this day (polar day or night).
    """
    phi = math.radians(latitude)
    denominator = math.cos(phi) * math.cos(declination)
    if denominator == 0.0:
        return None
    cos_h = (
        math.sin(math.radians(elevation_degrees))
        - math.sin(phi) * math.sin(declination)
    ) / denominator
    if not -1.0 <= cos_h <= 1.0:
        return None
    return math.degrees(math.acos(cos_h))


def _horizon_crossing(
    julian_date: float, latitude: float, longitude: float, rising: bool
) -> float | None:
    noon = solar_noon(julian_date, longitude)
    h = hour_angle_for_elevation(
        latitude, solar_declination(noon), SUNRISE_ELEVATION_DEG
    )
    if h is None:
        return None
    return noon - h / 360.0 if rising else noon + h / 360.0


def sunrise_julian(julian_date: float, latitude: float, longitude: float) -> float | None:
    """Julian Date of sunrise, or None if the sun does not rise or set."""
    return _horizon_crossing(julian_date, latitude, longitude, rising=True)


def sunset_julian(julian_date: float, latitude: float, longitude: float) -> float | None:
    """Julian Date of sunset, or None if the sun does not rise or set."""
    return _horizon_crossing(julian_date, latitude, longitude, rising=False)


def julian_to_local_clock(julian_date: float, utc_offset_hours: float) -> ClockTime:
    """Convert a Julian Date to local wall-clock time, truncated to the minute."""
    unix_seconds = (julian_date - UNIX_EPOCH_JD) * 86400.0
    local_seconds = unix_seconds + utc_offset_hours * 3600.0
    return ClockTime(math.floor(local_seconds / 60.0) % MINUTES_PER_DAY)
