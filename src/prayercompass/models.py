"""Data model definitions — value types shared by the calculators and the compass engine."""

from dataclasses import dataclass, field
from datetime import time
from enum import Enum

MINUTES_PER_DAY = 24 * 60


class PrayerName(str, Enum):
    """The six daily markers. Sunrise is a marker, not a prayer."""

    FAJR = "fajr"
    SUNRISE = "sunrise"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"


PRAYER_ORDER: tuple[PrayerName, ...] = (
    PrayerName.FAJR,
    PrayerName.DHUHR,
    PrayerName.ASR,
    PrayerName.MAGHRIB,
    PrayerName.ISHA,
)


@dataclass(frozen=True)
class GeoPoint:
    """A point on the Earth's surface. Validated on construction."""

    latitude: float  # Decimal degrees, [-90, 90]
    longitude: float  # Decimal degrees, [-180, 180]
    accuracy_m: float | None = None  # Location provider accuracy (display only)

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")


@dataclass(frozen=True, order=True)
class ClockTime:
    """Local wall-clock time at minute resolution.

    This is the only place ``HH:MM`` strings are parsed or produced; everything
    else works on the integer minutes since midnight.
    """

    minutes: int  # Minutes since local midnight, [0, 1440)

    def __post_init__(self) -> None:
        if not 0 <= self.minutes < MINUTES_PER_DAY:
            raise ValueError(f"minutes out of range: {self.minutes}")

    @classmethod
    def from_hm(cls, hour: int, minute: int) -> "ClockTime":
        if not (0 <= hour < 24 and 0 <= minute < 60):
            raise ValueError(f"invalid clock time: {hour}:{minute}")
        return cls(hour * 60 + minute)

    @classmethod
    def from_time(cls, value: time) -> "ClockTime":
        return cls.from_hm(value.hour, value.minute)

    @classmethod
    def parse(cls, text: str) -> "ClockTime":
        """Parse a ``HH:MM`` (24-hour) string.

        Raises:
            ValueError: If the string is not a valid 24-hour clock time.
        """
        hours, sep, minutes = text.strip().partition(":")
        if not sep or not hours.isdigit() or not minutes.isdigit() or len(minutes) != 2:
            raise ValueError(f"expected HH:MM, got {text!r}")
        return cls.from_hm(int(hours), int(minutes))

    @property
    def hour(self) -> int:
        return self.minutes // 60

    @property
    def minute(self) -> int:
        return self.minutes % 60

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class DailyPrayerTimes:
    """One complete calculation pass for a (date, location, method, offset)."""

    fajr: ClockTime
    sunrise: ClockTime
    dhuhr: ClockTime
    asr: ClockTime
    maghrib: ClockTime
    isha: ClockTime
    # Markers that used a fallback value instead of a solved hour angle
    approximated: tuple[PrayerName, ...] = ()

    @property
    def approximate(self) -> bool:
        return bool(self.approximated)

    def time_of(self, name: PrayerName) -> ClockTime:
        return getattr(self, name.value)

    def as_dict(self) -> dict[str, str]:
        """Display form: marker name → ``HH:MM``."""
        return {name.value: str(self.time_of(name)) for name in PrayerName}


@dataclass(frozen=True)
class QiblaBearing:
    """Initial great-circle bearing and distance toward the target point."""

    bearing_degrees: float  # Clockwise from true north, [0, 360)
    distance_km: float  # Great-circle distance, >= 0


@dataclass(frozen=True)
class NextPrayerInfo:
    prayer: PrayerName
    time: ClockTime
    minutes_remaining: int


@dataclass(frozen=True)
class MagneticSample:
    """One raw 3-axis magnetometer reading (microtesla)."""

    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class CalibrationStatus:
    is_calibrated: bool
    progress: float  # Window fill ratio, [0, 1]


@dataclass(frozen=True)
class CompassReading:
    """Everything derived from a single accepted magnetometer sample."""

    heading: float  # Degrees clockwise from magnetic north, [0, 360)
    relative_offset: float  # Signed rotation toward the Qibla, (-180, 180]
    calibration: CalibrationStatus = field(
        default_factory=lambda: CalibrationStatus(is_calibrated=False, progress=0.0)
    )
    is_aligned: bool = False
