"""Calculation-method conventions for Fajr/Isha and the Asr shadow rule."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class IshaAngle:
    """Isha begins when the sun is ``degrees`` below the horizon."""

    degrees: float


@dataclass(frozen=True)
class IshaInterval:
    """Isha begins a fixed number of minutes after Maghrib."""

    minutes: int
    ramadan_minutes: int | None = None  # Replaces ``minutes`` during Ramadan


@dataclass(frozen=True)
class CalculationMethodParams:
    name: str  # Issuing authority, for display
    fajr_angle: float  # Degrees below the horizon
    isha: IshaAngle | IshaInterval


class CalculationMethod(str, Enum):
    """The recognized calculation authorities."""

    ISNA = "ISNA"
    MWL = "MWL"
    EGYPT = "Egypt"
    MAKKAH = "Makkah"
    KARACHI = "Karachi"

    @property
    def params(self) -> CalculationMethodParams:
        return _PARAMS[self]

    @classmethod
    def from_name(cls, name: str) -> "CalculationMethod":
        """Case-insensitive lookup by enum value or member name.

        Raises:
            ValueError: If the name matches no known method.
        """
        key = name.strip().lower()
        for method in cls:
            if key in (method.value.lower(), method.name.lower()):
                return method
        known = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown calculation method {name!r} (expected one of: {known})")


_PARAMS: dict[CalculationMethod, CalculationMethodParams] = {
    CalculationMethod.ISNA: CalculationMethodParams(
        name="Islamic Society of North America",
        fajr_angle=15.0,
        isha=IshaAngle(15.0),
    ),
    CalculationMethod.MWL: CalculationMethodParams(
        name="Muslim World League",
        fajr_angle=18.0,
        isha=IshaAngle(17.0),
    ),
    CalculationMethod.EGYPT: CalculationMethodParams(
        name="Egyptian General Authority of Survey",
        fajr_angle=19.5,
        isha=IshaAngle(17.5),
    ),
    # Umm al-Qura: Isha is 90 minutes after Maghrib, 120 during Ramadan
    CalculationMethod.MAKKAH: CalculationMethodParams(
        name="Umm Al-Qura University, Makkah",
        fajr_angle=18.5,
        isha=IshaInterval(minutes=90, ramadan_minutes=120),
    ),
    CalculationMethod.KARACHI: CalculationMethodParams(
        name="University of Islamic Sciences, Karachi",
        fajr_angle=18.0,
        isha=IshaAngle(18.0),
    ),
}


class AsrJuristic(str, Enum):
    """Shadow-length rule for the start of Asr."""

    STANDARD = "standard"  # Shafi'i, Maliki, Hanbali: shadow = 1x object length
    HANAFI = "hanafi"  # shadow = 2x object length

    @property
    def shadow_factor(self) -> int:
        return 2 if self is AsrJuristic.HANAFI else 1

    @classmethod
    def from_name(cls, name: str) -> "AsrJuristic":
        key = name.strip().lower()
        if key in ("shafi", "shafii", "standard"):
            return cls.STANDARD
        if key == "hanafi":
            return cls.HANAFI
        raise ValueError(f"Unknown Asr juristic method {name!r} (expected 'standard' or 'hanafi')")
