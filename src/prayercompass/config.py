"""Environment-driven defaults for the command-line entry point.

The calculators never read configuration themselves; everything is passed in
explicitly. Only the composition root (``cli``) builds a Settings.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from prayercompass.methods import AsrJuristic, CalculationMethod
from prayercompass.models import GeoPoint

_PREFIX = "PRAYERCOMPASS_"


@dataclass(frozen=True)
class Settings:
    method: CalculationMethod = CalculationMethod.ISNA
    asr_juristic: AsrJuristic = AsrJuristic.STANDARD
    lang: str = "en"
    location: GeoPoint | None = None  # None: must be given on the command line
    utc_offset_hours: float | None = None  # None: resolve from the location's timezone
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Read ``PRAYERCOMPASS_*`` variables, falling back to defaults.

        Raises:
            ValueError: On an unknown method, a malformed number or an
                out-of-range coordinate.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            value = env.get(_PREFIX + name)
            return value.strip() if value and value.strip() else None

        lat, lng = get("LAT"), get("LNG")
        if (lat is None) != (lng is None):
            raise ValueError(f"{_PREFIX}LAT and {_PREFIX}LNG must be set together")
        location = GeoPoint(float(lat), float(lng)) if lat and lng else None

        method = get("METHOD")
        asr = get("ASR")
        offset = get("UTC_OFFSET")
        return cls(
            method=CalculationMethod.from_name(method) if method else cls.method,
            asr_juristic=AsrJuristic.from_name(asr) if asr else cls.asr_juristic,
            lang=get("LANG") or cls.lang,
            location=location,
            utc_offset_hours=float(offset) if offset is not None else None,
            log_level=(get("LOG_LEVEL") or cls.log_level).upper(),
        )
