# timings.py
from datetime import date, datetime, timedelta

from models.panchang import AlmanacRecord, DayDuration, NamedWindow, PanchangTimings, TimeWindow

# Eighth of the day in which each period starts, indexed by weekday number - 1 (Sunday first)
RAHU_KAAL_SLOTS = [7, 6, 5, 4, 3, 2, 1]
YAMAGANDA_SLOTS = [6, 5, 4, 3, 2, 1, 7]
GULIKA_KAAL_SLOTS = [5, 4, 3, 2, 1, 7, 6]

BRAHMA_MUHURTA_LEAD = timedelta(minutes=96)
ABHIJIT_HALF_WIDTH = timedelta(minutes=24)

DESCRIPTIONS = {
    "brahma_muhurta": "Most auspicious time for spiritual practices",
    "abhijit_muhurta": "Most favorable time for important activities",
    "rahu_kaal": "Inauspicious time, avoid starting new activities",
    "yamaganda": "Inauspicious time, avoid important decisions",
    "gulika_kaal": "Inauspicious time, avoid new ventures",
}


def parse_clock(value: str, on: date) -> datetime:
    parts = [int(p) for p in value.split(":")]
    hours, minutes = parts[0], parts[1]
    seconds = parts[2] if len(parts) > 2 else 0
    return datetime(on.year, on.month, on.day) + timedelta(hours=hours, minutes=minutes, seconds=seconds)


def fmt_clock(moment: datetime) -> str:
    return moment.strftime("%H:%M:%S")


def _slot(table, weekday_number: int) -> int:
    if 1 <= weekday_number <= 7:
        return table[weekday_number - 1]
    return table[0]


def calculate_timings(record: AlmanacRecord, on: date = date(2000, 1, 1)) -> PanchangTimings:
    """
    Derive the day's muhurta and kaal windows from sunrise and sunset.
    - Rahu Kaal, Yamaganda and Gulika Kaal each last (sunset - sunrise) / 8.
    - Their start eighth depends on the weekday.
    """
    sunrise = parse_clock(record.sunrise, on)
    sunset = parse_clock(record.sunset, on)
    if sunset <= sunrise:
        sunset += timedelta(days=1)

    day_length = sunset - sunrise
    part = day_length / 8
    weekday_number = record.weekday.number

    def window(key, start, end):
        return TimeWindow(start=fmt_clock(start), end=fmt_clock(end), description=DESCRIPTIONS[key])

    noon = sunrise + day_length / 2
    brahma_start = sunrise - BRAHMA_MUHURTA_LEAD
    rahu_start = sunrise + part * _slot(RAHU_KAAL_SLOTS, weekday_number)
    yamaganda_start = sunrise + part * _slot(YAMAGANDA_SLOTS, weekday_number)
    gulika_start = sunrise + part * _slot(GULIKA_KAAL_SLOTS, weekday_number)

    brahma = window("brahma_muhurta", brahma_start, sunrise)
    abhijit = window("abhijit_muhurta", noon - ABHIJIT_HALF_WIDTH, noon + ABHIJIT_HALF_WIDTH)
    rahu = window("rahu_kaal", rahu_start, rahu_start + part)
    yamaganda = window("yamaganda", yamaganda_start, yamaganda_start + part)
    gulika = window("gulika_kaal", gulika_start, gulika_start + part)

    total_minutes = int(day_length.total_seconds() // 60)

    return PanchangTimings(
        brahma_muhurta=brahma,
        abhijit_muhurta=abhijit,
        rahu_kaal=rahu,
        yamaganda=yamaganda,
        gulika_kaal=gulika,
        day_duration=DayDuration(hours=total_minutes // 60, minutes=total_minutes % 60),
        auspicious_times=[
            NamedWindow(name="Brahma Muhurta", type="spiritual", **brahma.model_dump()),
            NamedWindow(name="Abhijit Muhurta", type="general", **abhijit.model_dump()),
        ],
        inauspicious_times=[
            NamedWindow(name="Rahu Kaal", type="avoid", **rahu.model_dump()),
            NamedWindow(name="Yamaganda", type="avoid", **yamaganda.model_dump()),
            NamedWindow(name="Gulika Kaal", type="avoid", **gulika.model_dump()),
        ],
    )
