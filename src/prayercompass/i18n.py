"""Display strings for the supported languages (en/ar/ms/ur)."""

from prayercompass.models import PrayerName

_STRINGS: dict[str, dict[str, str]] = {
    "fajr": {
        "en": "Fajr",
        "ar": "الفجر",
        "ms": "Subuh",
        "ur": "فجر",
    },
    "sunrise": {
        "en": "Sunrise",
        "ar": "الشروق",
        "ms": "Syuruk",
        "ur": "طلوع آفتاب",
    },
    "dhuhr": {
        "en": "Dhuhr",
        "ar": "الظهر",
        "ms": "Zohor",
        "ur": "ظہر",
    },
    "asr": {
        "en": "Asr",
        "ar": "العصر",
        "ms": "Asar",
        "ur": "عصر",
    },
    "maghrib": {
        "en": "Maghrib",
        "ar": "المغرب",
        "ms": "Maghrib",
        "ur": "مغرب",
    },
    "isha": {
        "en": "Isha",
        "ar": "العشاء",
        "ms": "Isyak",
        "ur": "عشاء",
    },
    "label_qibla": {
        "en": "Qibla",
        "ar": "القبلة",
        "ms": "Kiblat",
        "ur": "قبلہ",
    },
    "label_next": {
        "en": "Next prayer",
        "ar": "الصلاة القادمة",
        "ms": "Solat seterusnya",
    },
    "label_distance": {
        "en": "Distance to the Kaaba",
        "ms": "Jarak ke Kaabah",
    },
    "approximate_note": {
        "en": "Approximate: the sun does not reach the required angle here today ({prayers}).",
        "ms": "Anggaran: matahari tidak mencapai sudut yang diperlukan hari ini ({prayers}).",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


def prayer_label(name: PrayerName, lang: str) -> str:
    return t(name.value, lang)
