"""CLI entry point: today's prayer times, Hijri date, Qibla bearing and next prayer.

Defaults come from ``PRAYERCOMPASS_*`` variables (a ``.env`` file is honoured):
    uv run prayercompass --lat 40.7128 --lng -74.0060
"""

import argparse
import logging
import sys
from datetime import date, datetime, timedelta, timezone

from dotenv import load_dotenv

from prayercompass import hijri
from prayercompass.compass import format_heading
from prayercompass.config import Settings
from prayercompass.i18n import prayer_label, t
from prayercompass.methods import AsrJuristic, CalculationMethod
from prayercompass.models import ClockTime, GeoPoint, PrayerName
from prayercompass.prayer_times import PrayerTimeCalculator
from prayercompass.qibla import bearing_and_distance
from prayercompass.scheduler import format_countdown, next_prayer
from prayercompass.timezones import TimezoneLookupError, location_now, utc_offset_hours

logger = logging.getLogger("prayercompass")


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prayercompass", description=__doc__.splitlines()[0])
    parser.add_argument("--lat", type=float, help="Latitude in decimal degrees")
    parser.add_argument("--lng", type=float, help="Longitude in decimal degrees")
    parser.add_argument("--date", type=date.fromisoformat, help="YYYY-MM-DD (default: today)")
    parser.add_argument("--now", type=ClockTime.parse, help="HH:MM local (default: current time)")
    parser.add_argument(
        "--method",
        type=CalculationMethod.from_name,
        default=settings.method,
        help=", ".join(m.value for m in CalculationMethod),
    )
    parser.add_argument(
        "--asr", type=AsrJuristic.from_name, default=settings.asr_juristic, help="standard or hanafi"
    )
    parser.add_argument(
        "--utc-offset",
        type=float,
        default=settings.utc_offset_hours,
        help="Hours from UTC (default: resolved from the location)",
    )
    parser.add_argument("--lang", default=settings.lang, help="en, ar, ms or ur")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = _build_parser(settings).parse_args(argv)

    if args.lat is not None and args.lng is not None:
        location = GeoPoint(args.lat, args.lng)
    elif settings.location is not None:
        location = settings.location
    else:
        print("A location is required (--lat/--lng or PRAYERCOMPASS_LAT/LNG).", file=sys.stderr)
        return 2

    offset = args.utc_offset
    try:
        if offset is None:
            local_now = location_now(location)
            day = args.date or local_now.date()
            offset = utc_offset_hours(location, day)
        else:
            local_now = datetime.now(timezone.utc) + timedelta(hours=offset)
            day = args.date or local_now.date()
    except TimezoneLookupError as e:
        print(f"{e}; pass --utc-offset explicitly.", file=sys.stderr)
        return 2
    now = args.now or ClockTime.from_time(local_now.time())

    times = PrayerTimeCalculator(location, offset, args.method, args.asr).for_date(day)
    qibla = bearing_and_distance(location)
    upcoming = next_prayer(times, now)
    lang = args.lang

    print(f"{day.isoformat()}  ({hijri.format_hijri(day)})  UTC{offset:+g}")
    print(f"{args.method.params.name}")
    for name in PrayerName:
        print(f"  {prayer_label(name, lang):<12} {times.time_of(name)}")
    if times.approximate:
        logger.debug("Approximated markers: %s", times.approximated)
        print(t("approximate_note", lang).format(prayers=", ".join(p.value for p in times.approximated)))
    print(f"{t('label_qibla', lang)}: {format_heading(qibla.bearing_degrees)} ({qibla.bearing_degrees:.1f}°)")
    print(f"{t('label_distance', lang)}: {qibla.distance_km:,.0f} km")
    print(
        f"{t('label_next', lang)}: {prayer_label(upcoming.prayer, lang)} {upcoming.time}"
        f" (in {format_countdown(upcoming.minutes_remaining)})"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
