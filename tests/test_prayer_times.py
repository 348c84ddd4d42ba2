from datetime import date

import pytest

from prayercompass.methods import (
    AsrJuristic,
    CalculationMethod,
    CalculationMethodParams,
    IshaAngle,
)
from prayercompass.models import ClockTime, GeoPoint, PrayerName
from prayercompass.prayer_times import PrayerTimeCalculator, compute

NEW_YORK = GeoPoint(40.7128, -74.0060)


def _between(clock: ClockTime, earliest: str, latest: str) -> bool:
    return ClockTime.parse(earliest) <= clock <= ClockTime.parse(latest)


def test_new_york_midsummer_isna():
    times = compute(NEW_YORK, date(2024, 6, 21), CalculationMethod.ISNA, -4.0)

    assert _between(times.fajr, "03:35", "03:55")
    assert _between(times.sunrise, "05:20", "05:30")
    assert _between(times.dhuhr, "12:53", "13:01")
    assert _between(times.asr, "16:50", "17:05")
    assert _between(times.maghrib, "20:25", "20:35")
    assert _between(times.isha, "22:00", "22:20")
    assert not times.approximate


def test_as_dict_formats_every_marker():
    times = compute(NEW_YORK, date(2024, 6, 21), CalculationMethod.MWL, -4.0)
    display = times.as_dict()
    assert list(display) == ["fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha"]
    for value in display.values():
        assert ClockTime.parse(value)
        assert len(value) == 5


_LATITUDES = [-45.0, -30.0, -12.5, 0.0, 21.4225, 33.3, 45.0]
_LONGITUDES = [-120.0, -3.7, 39.8262, 151.2]
_DATES = [date(2024, 3, 20), date(2024, 6, 21), date(2024, 9, 22), date(2024, 12, 21)]


@pytest.mark.parametrize("method", list(CalculationMethod))
@pytest.mark.parametrize("latitude", _LATITUDES)
def test_markers_are_ordered_outside_polar_regions(method, latitude):
    for longitude in _LONGITUDES:
        for day in _DATES:
            times = compute(GeoPoint(latitude, longitude), day, method, round(longitude / 15))
            assert times.fajr < times.sunrise <= times.dhuhr < times.asr < times.maghrib <= times.isha, (
                latitude,
                longitude,
                day,
                times.as_dict(),
            )
            assert not times.approximate


def test_compute_is_idempotent():
    args = (GeoPoint(51.5074, -0.1278), date(2024, 10, 17), CalculationMethod.KARACHI, 1.0)
    assert compute(*args) == compute(*args)
    assert compute(*args).as_dict() == compute(*args).as_dict()


def test_stricter_fajr_angle_is_earlier():
    day = date(2024, 4, 1)
    isna = compute(NEW_YORK, day, CalculationMethod.ISNA, -4.0)
    egypt = compute(NEW_YORK, day, CalculationMethod.EGYPT, -4.0)
    assert egypt.fajr < isna.fajr
    assert egypt.isha > isna.isha


def test_makkah_isha_is_ninety_minutes_after_maghrib():
    times = compute(GeoPoint(21.4225, 39.8262), date(2024, 6, 21), CalculationMethod.MAKKAH, 3.0)
    assert abs((times.isha.minutes - times.maghrib.minutes) - 90) <= 1


def test_makkah_isha_is_two_hours_after_maghrib_in_ramadan():
    times = compute(GeoPoint(21.4225, 39.8262), date(2024, 3, 20), CalculationMethod.MAKKAH, 3.0)
    assert abs((times.isha.minutes - times.maghrib.minutes) - 120) <= 1


@pytest.mark.parametrize(
    "day,interval",
    [
        (date(2022, 4, 2), 120),  # 1 Ramadan 1443 in Umm al-Qura
        (date(2022, 5, 2), 90),  # 1 Shawwal 1443
        (date(2025, 3, 30), 90),  # 1 Shawwal 1446
    ],
)
def test_makkah_ramadan_follows_umm_al_qura_month_edges(day, interval):
    times = compute(GeoPoint(21.4225, 39.8262), day, CalculationMethod.MAKKAH, 3.0)
    assert abs((times.isha.minutes - times.maghrib.minutes) - interval) <= 1


def test_explicit_parameters_match_the_named_method():
    custom = CalculationMethodParams(name="custom", fajr_angle=18.0, isha=IshaAngle(17.0))
    day = date(2024, 1, 10)
    assert compute(NEW_YORK, day, custom, -5.0) == compute(NEW_YORK, day, CalculationMethod.MWL, -5.0)


def test_hanafi_asr_is_later_than_standard():
    day = date(2024, 5, 5)
    standard = compute(NEW_YORK, day, CalculationMethod.ISNA, -4.0)
    hanafi = compute(NEW_YORK, day, CalculationMethod.ISNA, -4.0, asr_juristic=AsrJuristic.HANAFI)
    assert hanafi.asr > standard.asr
    assert hanafi.dhuhr == standard.dhuhr


def test_fajr_falls_back_to_sunrise_at_75n_in_midsummer():
    times = compute(GeoPoint(75.0, 15.0), date(2024, 6, 21), CalculationMethod.MWL, 2.0)

    assert times.fajr == times.sunrise
    assert times.isha == times.maghrib
    assert PrayerName.FAJR in times.approximated
    assert PrayerName.ISHA in times.approximated
    assert times.approximate


def test_fajr_collapses_onto_sunrise_at_60n_in_midsummer():
    # The sun stays above -18 degrees all night; the window collapses rather than failing
    times = compute(GeoPoint(60.0, 10.75), date(2024, 6, 21), CalculationMethod.MWL, 2.0)
    assert times.fajr == times.sunrise
    assert times.sunrise < times.dhuhr < times.asr < times.maghrib
    assert times.approximated == (PrayerName.FAJR, PrayerName.ISHA)


def test_polar_night_never_raises():
    times = compute(GeoPoint(80.0, 15.0), date(2024, 12, 21), CalculationMethod.ISNA, 1.0)
    assert times.sunrise == times.dhuhr == times.maghrib
    assert PrayerName.SUNRISE in times.approximated
    assert PrayerName.ASR in times.approximated


@pytest.mark.parametrize("latitude", [-90.0, -89.9, 89.9, 90.0])
@pytest.mark.parametrize("longitude", [-180.0, 0.0, 180.0])
def test_extreme_coordinates_produce_a_complete_result(latitude, longitude):
    times = compute(GeoPoint(latitude, longitude), date(2024, 3, 1), CalculationMethod.ISNA, 0.0)
    assert all(isinstance(times.time_of(name), ClockTime) for name in PrayerName)


def test_calculator_binds_location_and_method():
    calculator = PrayerTimeCalculator(NEW_YORK, -5.0, CalculationMethod.EGYPT)
    day = date(2024, 2, 2)
    assert calculator.for_date(day) == compute(NEW_YORK, day, CalculationMethod.EGYPT, -5.0)
