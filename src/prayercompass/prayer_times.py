"""Prayer time calculation — combines the solar primitives with a method's angle table."""

import logging
import math
from datetime import date

from prayercompass import astronomy, hijri
from prayercompass.methods import (
    AsrJuristic,
    CalculationMethod,
    CalculationMethodParams,
    IshaInterval,
)
from prayercompass.models import ClockTime, DailyPrayerTimes, GeoPoint, PrayerName

logger = logging.getLogger(__name__)


def _asr_elevation(latitude: float, declination: float, shadow_factor: int) -> float:
    """Solar elevation (degrees) at which a shadow is ``shadow_factor`` + noon shadow."""
    zenith_at_noon = abs(math.radians(latitude) - declination)
    return math.degrees(math.atan(1.0 / (shadow_factor + math.tan(zenith_at_noon))))


def _isha_interval_minutes(rule: IshaInterval, day: date) -> int:
    if rule.ramadan_minutes is not None and hijri.is_ramadan(day):
        return rule.ramadan_minutes
    return rule.minutes


def compute(
    location: GeoPoint,
    day: date,
    method: CalculationMethod | CalculationMethodParams,
    utc_offset_hours: float,
    asr_juristic: AsrJuristic = AsrJuristic.STANDARD,
) -> DailyPrayerTimes:
    """Compute the six daily markers for one civil date.

    Where the sun never reaches an elevation (high latitudes), the marker falls
    back to its neighbour (Fajr → sunrise, Isha → sunset, Asr and the horizon
    crossings → solar noon) and is listed in ``approximated``. This follows the
    usual jurisprudential fallback and is approximate by nature.

    Args:
        location: Observer position.
        day: Civil date in the observer's calendar.
        method: A known calculation method or explicit parameters.
        utc_offset_hours: Local offset from UTC, e.g. -5.0 for EST.
        asr_juristic: Shadow rule for Asr.

    Returns:
        A complete DailyPrayerTimes; never raises for a valid GeoPoint.
    """
    params = method.params if isinstance(method, CalculationMethod) else method
    lat, lng = location.latitude, location.longitude

    jd = astronomy.to_julian_date(day)
    noon = astronomy.solar_noon(jd, lng)
    declination = astronomy.solar_declination(noon)
    approximated: list[PrayerName] = []

    def from_noon(elevation: float, morning: bool) -> float | None:
        h = astronomy.hour_angle_for_elevation(lat, declination, elevation)
        if h is None:
            return None
        return noon - h / 360.0 if morning else noon + h / 360.0

    sunrise = from_noon(astronomy.SUNRISE_ELEVATION_DEG, morning=True)
    sunset = from_noon(astronomy.SUNRISE_ELEVATION_DEG, morning=False)
    if sunrise is None or sunset is None:
        approximated += [PrayerName.SUNRISE, PrayerName.MAGHRIB]
        sunrise = sunset = noon

    fajr = from_noon(-params.fajr_angle, morning=True)
    if fajr is None:
        approximated.append(PrayerName.FAJR)
        fajr = sunrise

    if isinstance(params.isha, IshaInterval):
        isha: float | None = sunset + _isha_interval_minutes(params.isha, day) / 1440.0
    else:
        isha = from_noon(-params.isha.degrees, morning=False)
    if isha is None:
        approximated.append(PrayerName.ISHA)
        isha = sunset

    asr_elevation = _asr_elevation(lat, declination, asr_juristic.shadow_factor)
    # A negative elevation means the noon sun is below the horizon: no shadow rule applies
    asr = from_noon(asr_elevation, morning=False) if asr_elevation > 0 else None
    if asr is None:
        approximated.append(PrayerName.ASR)
        asr = noon

    if approximated:
        logger.warning(
            "Approximate prayer times at lat=%.4f on %s: fallback for %s",
            lat,
            day.isoformat(),
            ", ".join(p.value for p in approximated),
        )

    def clock(jd_value: float) -> ClockTime:
        return astronomy.julian_to_local_clock(jd_value, utc_offset_hours)

    return DailyPrayerTimes(
        fajr=clock(fajr),
        sunrise=clock(sunrise),
        dhuhr=clock(noon),
        asr=clock(asr),
        maghrib=clock(sunset),
        isha=clock(isha),
        approximated=tuple(sorted(set(approximated), key=list(PrayerName).index)),
    )


class PrayerTimeCalculator:
    """Binds a location and configuration so callers only supply the date."""

    def __init__(
        self,
        location: GeoPoint,
        utc_offset_hours: float,
        method: CalculationMethod | CalculationMethodParams = CalculationMethod.ISNA,
        asr_juristic: AsrJuristic = AsrJuristic.STANDARD,
    ):
        self.location = location
        self.utc_offset_hours = utc_offset_hours
        self.method = method
        self.asr_juristic = asr_juristic

    def for_date(self, day: date) -> DailyPrayerTimes:
        return compute(
            self.location,
            day,
            self.method,
            self.utc_offset_hours,
            asr_juristic=self.asr_juristic,
        )
