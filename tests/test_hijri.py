from datetime import date

import pytest

from prayercompass import hijri
from prayercompass.hijri import HijriDate


def test_start_of_ramadan_1445():
    assert hijri.gregorian_to_hijri(date(2024, 3, 11)) == HijriDate(1445, 9, 1)
    assert hijri.hijri_to_gregorian(HijriDate(1445, 9, 1)) == date(2024, 3, 11)


def test_conversion_is_consistent_across_a_year():
    day = date(2024, 1, 1)
    previous = hijri.gregorian_to_hijri(day)
    for offset in range(1, 400):
        current = hijri.gregorian_to_hijri(date.fromordinal(day.toordinal() + offset))
        assert current > previous
        assert hijri.hijri_to_gregorian(current).toordinal() == day.toordinal() + offset
        previous = current


def test_is_ramadan():
    assert hijri.is_ramadan(date(2024, 3, 20))
    assert not hijri.is_ramadan(date(2024, 6, 21))


def test_ramadan_dates():
    assert hijri.ramadan_dates(1445) == (date(2024, 3, 11), date(2024, 4, 8))


def test_format_hijri():
    assert hijri.format_hijri(date(2024, 3, 11)) == "Al-Ithnayn, 1 Ramadan 1445 AH"
    assert hijri.format_hijri(date(2024, 3, 11), include_weekday=False) == "1 Ramadan 1445 AH"


def test_upcoming_events():
    events = hijri.upcoming_events(date(2024, 3, 1), limit=3)
    assert [e.id for e in events] == ["ramadan_start", "laylat_qadr", "eid_fitr"]
    assert events[2].gregorian_date == date(2024, 4, 10)


@pytest.mark.parametrize("fields", [(1445, 13, 1), (1445, 0, 1), (1445, 1, 31), (0, 1, 1)])
def test_hijri_date_validation(fields):
    with pytest.raises(ValueError):
        HijriDate(*fields)


@pytest.mark.parametrize(
    "day,expected",
    [
        (date(2022, 4, 2), HijriDate(1443, 9, 1)),
        (date(2022, 5, 2), HijriDate(1443, 10, 1)),
        (date(2023, 4, 21), HijriDate(1444, 10, 1)),
        (date(2025, 3, 30), HijriDate(1446, 10, 1)),
    ],
)
def test_month_edges_follow_umm_al_qura(day, expected):
    assert hijri.gregorian_to_hijri(day) == expected
    assert hijri.is_ramadan(day) == (expected.month == hijri.RAMADAN)


def test_nonexistent_day_is_rejected_on_conversion():
    # Ramadan 1446 has 29 days in Umm al-Qura
    with pytest.raises(ValueError):
        hijri.hijri_to_gregorian(HijriDate(1446, 9, 30))
