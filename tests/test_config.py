import pytest

from prayercompass.config import Settings
from prayercompass.methods import AsrJuristic, CalculationMethod
from prayercompass.models import GeoPoint


def test_defaults_when_nothing_is_set():
    settings = Settings.from_env({})
    assert settings.method is CalculationMethod.ISNA
    assert settings.asr_juristic is AsrJuristic.STANDARD
    assert settings.lang == "en"
    assert settings.location is None
    assert settings.utc_offset_hours is None
    assert settings.log_level == "WARNING"


def test_values_are_read_from_the_environment():
    settings = Settings.from_env(
        {
            "PRAYERCOMPASS_METHOD": "makkah",
            "PRAYERCOMPASS_ASR": "Hanafi",
            "PRAYERCOMPASS_LANG": "ar",
            "PRAYERCOMPASS_LAT": "21.4225",
            "PRAYERCOMPASS_LNG": " 39.8262 ",
            "PRAYERCOMPASS_UTC_OFFSET": "3",
            "PRAYERCOMPASS_LOG_LEVEL": "debug",
        }
    )
    assert settings.method is CalculationMethod.MAKKAH
    assert settings.asr_juristic is AsrJuristic.HANAFI
    assert settings.lang == "ar"
    assert settings.location == GeoPoint(21.4225, 39.8262)
    assert settings.utc_offset_hours == 3.0
    assert settings.log_level == "DEBUG"


def test_blank_values_fall_back_to_defaults():
    settings = Settings.from_env({"PRAYERCOMPASS_METHOD": "  ", "PRAYERCOMPASS_LANG": ""})
    assert settings.method is CalculationMethod.ISNA
    assert settings.lang == "en"


@pytest.mark.parametrize(
    "environ",
    [
        {"PRAYERCOMPASS_LAT": "21.4"},
        {"PRAYERCOMPASS_METHOD": "Jafari"},
        {"PRAYERCOMPASS_LAT": "north", "PRAYERCOMPASS_LNG": "0"},
        {"PRAYERCOMPASS_LAT": "95", "PRAYERCOMPASS_LNG": "0"},
    ],
)
def test_invalid_values_raise(environ):
    with pytest.raises(ValueError):
        Settings.from_env(environ)
