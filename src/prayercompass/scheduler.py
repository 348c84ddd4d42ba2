"""Next-prayer lookup with rollover to tomorrow's Fajr."""

from prayercompass.models import (
    MINUTES_PER_DAY,
    PRAYER_ORDER,
    ClockTime,
    DailyPrayerTimes,
    NextPrayerInfo,
    PrayerName,
)


def next_prayer(times: DailyPrayerTimes, now: ClockTime) -> NextPrayerInfo:
    """The first prayer strictly after ``now``; tomorrow's Fajr once Isha has passed.

    Sunrise is skipped. Tomorrow's Fajr is approximated by today's. The caller
    re-invokes this (e.g. every minute) to keep a countdown fresh.
    """
    for name in PRAYER_ORDER:
        at = times.time_of(name)
        if at.minutes > now.minutes:
            return NextPrayerInfo(
                prayer=name, time=at, minutes_remaining=at.minutes - now.minutes
            )

    return NextPrayerInfo(
        prayer=PrayerName.FAJR,
        time=times.fajr,
        minutes_remaining=times.fajr.minutes + (MINUTES_PER_DAY - now.minutes),
    )


def format_countdown(minutes: int) -> str:
    """``45m`` below an hour, ``2h 15m`` otherwise."""
    if minutes < 60:
        return f"{minutes}m"
    hours, remainder = divmod(minutes, 60)
    return f"{hours}h {remainder}m"
