# panchang-api/models/panchang.py
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Confidence(str, Enum):
    """Where a field of an almanac record came from."""

    PROVIDED = "provided"
    STATIC_DEFAULT = "static_default"
    APPROXIMATED = "approximated"


class Weekday(BaseModel):
    number: int = Field(..., ge=1, le=7)
    name: str
    vedic_number: int = Field(..., ge=1, le=7)
    vedic_name: str


class LunarMonth(BaseModel):
    number: int = Field(..., ge=1, le=12)
    name: str
    full_name: str
    adhika: int = 0
    nija: int = 1
    kshaya: int = 0


class Ritu(BaseModel):
    number: int = Field(..., ge=1, le=6)
    name: str


class Tithi(BaseModel):
    number: int
    name: str
    paksha: str
    completes_at: Optional[str] = None
    left_percentage: Optional[float] = None


class Nakshatra(BaseModel):
    number: int
    name: str
    starts_at: Optional[str] = None
    ends_at: Optional[str] = None
    left_percentage: Optional[float] = None


class PeriodEntry(BaseModel):
    """One yoga or karana span of the day."""

    number: int
    name: str
    completion: Optional[str] = None
    left_percentage: Optional[float] = None


class YearInfo(BaseModel):
    status: str = "success"
    timestamp: str
    saka_salivahana_number: int
    saka_salivahana_name_number: int
    saka_salivahana_year_name: str
    vikram_chaitradi_number: int
    vikram_chaitradi_name_number: int
    vikram_chaitradi_year_name: str


# Order used everywhere a record is assembled or tagged
ALMANAC_FIELDS = (
    "sunrise",
    "sunset",
    "weekday",
    "lunar_month",
    "ritu",
    "aayanam",
    "tithi",
    "nakshatra",
    "yoga",
    "karana",
    "year",
)


class AlmanacRecord(BaseModel):
    sunrise: str
    sunset: str
    weekday: Weekday
    lunar_month: LunarMonth
    ritu: Ritu
    aayanam: str
    tithi: Tithi
    nakshatra: Nakshatra
    yoga: Dict[int, PeriodEntry]
    karana: Dict[int, PeriodEntry]
    year: YearInfo
    confidence: Dict[str, Confidence] = {}


class TimeWindow(BaseModel):
    start: str
    end: str
    description: str


class NamedWindow(TimeWindow):
    name: str
    type: str


class DayDuration(BaseModel):
    hours: int
    minutes: int


class PanchangTimings(BaseModel):
    brahma_muhurta: TimeWindow
    abhijit_muhurta: TimeWindow
    rahu_kaal: TimeWindow
    yamaganda: TimeWindow
    gulika_kaal: TimeWindow
    day_duration: DayDuration
    auspicious_times: List[NamedWindow]
    inauspicious_times: List[NamedWindow]
