# merger.py
from datetime import datetime, timezone
from typing import Any, Dict

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


def static_defaults() -> Dict[str, Any]:
    """Placeholder values for fields no provider endpoint delivered.

    Independent of the requested date; only the year timestamp changes.
    """
    return {
        "sunrise": "06:00:00",
        "sunset": "18:00:00",
        "weekday": Weekday(number=1, name="Monday", vedic_number=1, vedic_name="Monday"),
        "lunar_month": LunarMonth(number=1, name="Chaitra", full_name="Chaitra", adhika=0, nija=0, kshaya=0),
        "ritu": Ritu(number=1, name="Vasant (Spring)"),
        "aayanam": "Uttarayanam",
        "tithi": Tithi(number=1, name="Pratipada", paksha="shukla", completes_at=None, left_percentage=None),
        "nakshatra": Nakshatra(number=1, name="Ashwini", starts_at=None, ends_at=None, left_percentage=None),
        "yoga": {1: PeriodEntry(number=1, name="Vishkambha", completion=None, left_percentage=None)},
        "karana": {1: PeriodEntry(number=1, name="Bava", completion=None, left_percentage=None)},
        "year": YearInfo(
            status="success",
            timestamp=datetime.now(timezone.utc).isoformat(),
            saka_salivahana_number=1944,
            saka_salivahana_name_number=36,
            saka_salivahana_year_name="SubhaKritu",
            vikram_chaitradi_number=2079,
            vikram_chaitradi_name_number=50,
            vikram_chaitradi_year_name="Nala",
        ),
    }


def merge_fields(partial: Dict[str, Any]) -> AlmanacRecord:
    """Complete a partial record, tagging every field with its origin."""
    defaults = static_defaults()
    fields = {}
    confidence = {}
    for name in ALMANAC_FIELDS:
        value = partial.get(name)
        if value is None:
            fields[name] = defaults[name]
            confidence[name] = Confidence.STATIC_DEFAULT
        else:
            fields[name] = value
            confidence[name] = Confidence.PROVIDED
    return AlmanacRecord(**fields, confidence=confidence)
