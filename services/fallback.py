# fallback.py
"""Offline panchang approximation.

Used when the astrology provider cannot be reached, and directly by the GET
endpoints. Everything here is calendar arithmetic plus a simple solar
declination model; none of it is ephemeris grade.
"""
import hashlib
import math
from datetime import date, datetime, timedelta, timezone as dt_timezone

from models.panchang import (
    ALMANAC_FIELDS,
    AlmanacRecord,
    Confidence,
    LunarMonth,
    Nakshatra,
    PeriodEntry,
    Ritu,
    Tithi,
    Weekday,
    YearInfo,
)

# Sunday first, matching the provider's weekday numbering
WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
VEDIC_WEEKDAY_NAMES = ["Ravi", "Soma", "Mangala", "Budha", "Guru", "Shukra", "Shani"]

TITHI_NAMES = [
    "Pratipada", "Dwitiya", "Tritiya", "Chaturthi", "Panchami", "Shashthi",
    "Saptami", "Ashtami", "Navami", "Dashami", "Ekadashi", "Dwadashi",
    "Trayodashi", "Chaturdashi", "Purnima",
]

NAKSHATRA_NAMES = [
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni",
    "Uttara Phalguni", "Hasta", "Chitra", "Swati", "Vishakha", "Anuradha",
    "Jyeshtha", "Mula", "Purva Ashadha", "Uttara Ashadha", "Shravana",
    "Dhanishta", "Shatabhisha", "Purva Bhadrapada", "Uttara Bhadrapada", "Revati",
]

LUNAR_MONTH_NAMES = [
    "Chaitra", "Vaishakha", "Jyeshtha", "Ashadha", "Shravana", "Bhadrapada",
    "Ashwin", "Kartik", "Margashirsha", "Paush", "Magh", "Phalgun",
]

RITU_NAMES = [
    "Vasant (Spring)", "Grishma (Summer)", "Varsha (Monsoon)",
    "Sharad (Autumn)", "Hemant (Pre-winter)", "Shishir (Winter)",
]

# Width of one standard time zone, in degrees of longitude
ZONE_WIDTH = 15.0

SAKA_YEAR_NAME = "SubhaKritu"
VIKRAM_YEAR_NAME = "Nala"


def civil_date(year: int, month: int, day: int) -> date:
    """Build a date, rolling overflowing months and days forward (31 Feb -> 2/3 Mar)."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def js_weekday(d: date) -> int:
    """Weekday index with Sunday = 0."""
    return (d.weekday() + 1) % 7


def seeded_percentage(d: date, latitude: float, longitude: float, field: str) -> float:
    """Stable stand-in for a 'percentage left' value, in [0, 100)."""
    key = f"{d.isoformat()}|{latitude:.6f}|{longitude:.6f}|{field}".encode("utf-8")
    digest = hashlib.sha256(key).digest()
    return int.from_bytes(digest[:8], "big") / 2**64 * 100


def format_hours(hour: float) -> str:
    h = math.floor(hour)
    minutes = (hour - h) * 60
    m = math.floor(minutes)
    s = math.floor((minutes - m) * 60)
    return f"{h % 24:02d}:{m:02d}:{s:02d}"


def zone_meridian(longitude: float) -> float:
    """Central meridian of the standard time zone a longitude falls in (75 for all of India)."""
    return math.floor(longitude / ZONE_WIDTH + 0.5) * ZONE_WIDTH


def sun_times(d: date, latitude: float, longitude: float) -> tuple:
    """Approximate (sunrise, sunset) as fractional hours of zone time.

    Solar noon is shifted by the distance to the zone meridian, which is at
    most half an hour, so both times stay on the same civil day for any
    longitude. Uses |latitude|, so the southern hemisphere gets northern
    seasons.
    """
    day_of_year = (d - date(d.year, 1, 1)).days + 1
    declination = 23.45 * math.sin((284 + day_of_year) * math.pi / 180)

    x = -math.tan(abs(latitude) * math.pi / 180) * math.tan(declination * math.pi / 180)
    # Polar day/night: clamp instead of failing on acos
    hour_angle = math.acos(max(-1.0, min(1.0, x)))

    half_day = hour_angle * 12 / math.pi
    shift = (longitude - zone_meridian(longitude)) / 15
    return 12 - half_day - shift, 12 + half_day - shift


def get_samvat(year: int) -> dict:
    saka = year - 78
    vikram = year + 57
    return {
        "saka_salivahana_number": saka,
        "saka_salivahana_name_number": saka % 60,
        "saka_salivahana_year_name": SAKA_YEAR_NAME,
        "vikram_chaitradi_number": vikram,
        "vikram_chaitradi_name_number": vikram % 60,
        "vikram_chaitradi_year_name": VIKRAM_YEAR_NAME,
    }


def compute_fallback_panchang(
    year: int,
    month: int,
    day: int,
    latitude: float,
    longitude: float,
    hours: int = 6,
    minutes: int = 0,
    seconds: int = 0,
    timezone: float = 5.5,
) -> AlmanacRecord:
    """Compute an approximate almanac record without any network access.

    Pure: identical inputs give identical records. The time of day only
    feeds the year timestamp.
    """
    d = civil_date(year, month, day)

    weekday = js_weekday(d)
    tithi_number = day % 15 + 1
    nakshatra_number = day % 27 + 1
    lunar_month_number = month % 12 + 1
    ritu_number = (month - 1) // 2 + 1

    sunrise, sunset = sun_times(d, latitude, longitude)

    def pct(field):
        return seeded_percentage(d, latitude, longitude, field)

    offset = timedelta(hours=max(-14.0, min(14.0, timezone)))
    requested_at = datetime(d.year, d.month, d.day, hours, minutes, seconds, tzinfo=dt_timezone(offset))

    return AlmanacRecord(
        sunrise=format_hours(sunrise),
        sunset=format_hours(sunset),
        weekday=Weekday(
            number=weekday + 1,
            name=WEEKDAY_NAMES[weekday],
            vedic_number=weekday + 1,
            vedic_name=VEDIC_WEEKDAY_NAMES[weekday],
        ),
        lunar_month=LunarMonth(
            number=lunar_month_number,
            name=LUNAR_MONTH_NAMES[lunar_month_number - 1],
            full_name=LUNAR_MONTH_NAMES[lunar_month_number - 1],
            adhika=0,
            nija=1,
            kshaya=0,
        ),
        ritu=Ritu(number=ritu_number, name=RITU_NAMES[ritu_number - 1]),
        aayanam="Uttarayanam" if 3 <= month <= 8 else "Dakshinayanam",
        tithi=Tithi(
            number=tithi_number,
            name=TITHI_NAMES[tithi_number - 1],
            paksha="shukla" if tithi_number <= 15 else "krishna",
            completes_at=None,
            left_percentage=pct("tithi"),
        ),
        nakshatra=Nakshatra(
            number=nakshatra_number,
            name=NAKSHATRA_NAMES[nakshatra_number - 1],
            starts_at=None,
            ends_at=None,
            left_percentage=pct("nakshatra"),
        ),
        yoga={
            1: PeriodEntry(
                number=(tithi_number + nakshatra_number) % 27 + 1,
                name="Vishkambha",
                completion=None,
                left_percentage=pct("yoga"),
            )
        },
        karana={
            1: PeriodEntry(
                number=(tithi_number * 2) % 11 + 1,
                name="Bava",
                completion=None,
                left_percentage=pct("karana"),
            )
        },
        year=YearInfo(status="success", timestamp=requested_at.isoformat(), **get_samvat(d.year)),
        confidence={name: Confidence.APPROXIMATED for name in ALMANAC_FIELDS},
    )
