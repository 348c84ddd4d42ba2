"""Hijri calendar helpers on top of the Umm al-Qura tables from ``hijri_converter``.

Umm al-Qura is the calendar the Makkah method is defined against. Locally
sighted month starts may still differ by a day.
"""

from dataclasses import dataclass
from datetime import date

from hijri_converter import Gregorian, Hijri


HIJRI_MONTHS: tuple[str, ...] = (
    "Muharram",
    "Safar",
    "Rabi al-Awwal",
    "Rabi al-Thani",
    "Jumada al-Awwal",
    "Jumada al-Thani",
    "Rajab",
    "Shaban",
    "Ramadan",
    "Shawwal",
    "Dhu al-Qadah",
    "Dhu al-Hijjah",
)

# Sunday first
WEEKDAYS: tuple[str, ...] = (
    "Al-Ahad",
    "Al-Ithnayn",
    "Al-Thulatha",
    "Al-Arbia",
    "Al-Khamis",
    "Al-Jumua",
    "As-Sabt",
)

RAMADAN = 9
DHU_AL_HIJJAH = 12


@dataclass(frozen=True, order=True)
class HijriDate:
    year: int
    month: int  # 1 = Muharram
    day: int

    def __post_init__(self) -> None:
        if self.year < 1:
            raise ValueError(f"Hijri year out of range: {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"Hijri month out of range: {self.month}")
        if not 1 <= self.day <= 30:
            raise ValueError(f"Hijri day out of range: {self.day}")

    @property
    def month_name(self) -> str:
        return HIJRI_MONTHS[self.month - 1]


@dataclass(frozen=True)
class IslamicEvent:
    id: str
    title: str
    date: HijriDate
    gregorian_date: date


_EVENTS: tuple[tuple[str, str, int, int], ...] = (
    ("new_year", "Islamic New Year", 1, 1),
    ("ashura", "Day of Ashura", 1, 10),
    ("mawlid", "Mawlid an-Nabi", 3, 12),
    ("isra_miraj", "Isra and Mi'raj", 7, 27),
    ("ramadan_start", "First day of Ramadan", 9, 1),
    ("laylat_qadr", "Laylat al-Qadr", 9, 27),
    ("eid_fitr", "Eid al-Fitr", 10, 1),
    ("arafat", "Day of Arafat", 12, 9),
    ("eid_adha", "Eid al-Adha", 12, 10),
)


def gregorian_to_hijri(day: date) -> HijriDate:
    """Convert a Gregorian date to the Umm al-Qura calendar.

    Raises:
        OverflowError: Outside the published table (1343-1500 AH).
    """
    hijri = Gregorian(day.year, day.month, day.day).to_hijri()
    return HijriDate(hijri.year, hijri.month, hijri.day)


def hijri_to_gregorian(hijri: HijriDate) -> date:
    """Convert an Umm al-Qura date back to the Gregorian calendar.

    Raises:
        ValueError: If the day does not exist in that month (e.g. a 30th in a 29-day month).
    """
    gregorian = Hijri(hijri.year, hijri.month, hijri.day).to_gregorian()
    return date(gregorian.year, gregorian.month, gregorian.day)


def weekday_name(day: date) -> str:
    return WEEKDAYS[(day.weekday() + 1) % 7]


def is_ramadan(day: date) -> bool:
    return gregorian_to_hijri(day).month == RAMADAN


def is_dhu_al_hijjah(day: date) -> bool:
    return gregorian_to_hijri(day).month == DHU_AL_HIJJAH


def ramadan_dates(hijri_year: int) -> tuple[date, date]:
    """First and 29th day of Ramadan for a Hijri year, as Gregorian dates."""
    return (
        hijri_to_gregorian(HijriDate(hijri_year, RAMADAN, 1)),
        hijri_to_gregorian(HijriDate(hijri_year, RAMADAN, 29)),
    )


def format_hijri(day: date, include_weekday: bool = True) -> str:
    """Display form, e.g. ``Al-Ithnayn, 1 Ramadan 1445 AH``."""
    hijri = gregorian_to_hijri(day)
    text = f"{hijri.day} {hijri.month_name} {hijri.year} AH"
    return f"{weekday_name(day)}, {text}" if include_weekday else text


def islamic_events(hijri_year: int) -> tuple[IslamicEvent, ...]:
    """Fixed-date observances of a Hijri year, in calendar order."""
    events = []
    for event_id, title, month, day in _EVENTS:
        hijri = HijriDate(hijri_year, month, day)
        events.append(
            IslamicEvent(
                id=event_id,
                title=title,
                date=hijri,
                gregorian_date=hijri_to_gregorian(hijri),
            )
        )
    return tuple(events)


def upcoming_events(today: date, limit: int = 5) -> tuple[IslamicEvent, ...]:
    """The next ``limit`` observances on or after ``today``."""
    year = gregorian_to_hijri(today).year
    candidates = islamic_events(year) + islamic_events(year + 1)
    upcoming = sorted(
        (e for e in candidates if e.gregorian_date >= today),
        key=lambda e: e.gregorian_date,
    )
    return tuple(upcoming[:limit])
