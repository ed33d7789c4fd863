# endpoints.py
"""Provider endpoint table.

Each entry names a provider path and, for the endpoints whose data ends up
in an AlmanacRecord, the record field it fills and the parser that turns
the provider's JSON into that field. Entries without a target are still
fetched during fan-out but their payloads are dropped.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from models.panchang import LunarMonth, Nakshatra, PeriodEntry, Ritu, Tithi, Weekday, YearInfo

Parser = Callable[[dict], Dict[str, Any]]


@dataclass(frozen=True)
class Endpoint:
    name: str
    path: str
    parser: Optional[Parser] = None
    targets: Tuple[str, ...] = ()

    @property
    def consumed(self) -> bool:
        return self.parser is not None


def _first(data: dict, *keys):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def parse_sun_rise_set(body: dict) -> Dict[str, Any]:
    out = {}
    if body.get("sun_rise"):
        out["sunrise"] = str(body["sun_rise"])
    if body.get("sun_set"):
        out["sunset"] = str(body["sun_set"])
    return out


def parse_tithi(body: dict) -> Dict[str, Any]:
    raw = body.get("tithi")
    if not raw:
        return {}
    return {
        "tithi": Tithi(
            number=raw["number"],
            name=raw["name"],
            paksha=raw["paksha"],
            completes_at=raw.get("completes_at"),
            # the provider spells it "precentage"
            left_percentage=_first(raw, "left_precentage", "left_percentage"),
        )
    }


def parse_nakshatra(body: dict) -> Dict[str, Any]:
    raw = body.get("nakshatra")
    if not raw:
        return {}
    return {
        "nakshatra": Nakshatra(
            number=raw["number"],
            name=raw["name"],
            starts_at=raw.get("starts_at"),
            ends_at=raw.get("ends_at"),
            left_percentage=raw.get("left_percentage"),
        )
    }


def _period_map(raw: dict, kind: str) -> Dict[int, PeriodEntry]:
    entries = {}
    for key, item in raw.items():
        entries[int(key)] = PeriodEntry(
            number=item["number"],
            name=item["name"],
            completion=item.get("completion"),
            left_percentage=_first(item, f"{kind}_left_percentage", "left_percentage"),
        )
    if 1 not in entries:
        raise ValueError(f"{kind} map has no entry 1")
    return entries


def parse_yoga(body: dict) -> Dict[str, Any]:
    raw = body.get("yoga")
    return {"yoga": _period_map(raw, "yoga")} if raw else {}


def parse_karana(body: dict) -> Dict[str, Any]:
    raw = body.get("karana")
    return {"karana": _period_map(raw, "karana")} if raw else {}


def parse_weekday(body: dict) -> Dict[str, Any]:
    raw = body.get("weekday")
    if not raw:
        return {}
    return {
        "weekday": Weekday(
            number=raw["weekday_number"],
            name=raw["weekday_name"],
            vedic_number=raw["vedic_weekday_number"],
            vedic_name=raw["vedic_weekday_name"],
        )
    }


def parse_lunar_month(body: dict) -> Dict[str, Any]:
    raw = body.get("lunar_month")
    if not raw:
        return {}
    return {
        "lunar_month": LunarMonth(
            number=raw["lunar_month_number"],
            name=raw["lunar_month_name"],
            full_name=raw.get("lunar_month_full_name") or raw["lunar_month_name"],
            adhika=raw.get("adhika") or 0,
            nija=raw.get("nija") or 0,
            kshaya=raw.get("kshaya") or 0,
        )
    }


def parse_ritu(body: dict) -> Dict[str, Any]:
    raw = body.get("ritu")
    return {"ritu": Ritu(number=raw["number"], name=raw["name"])} if raw else {}


def parse_samvat(body: dict) -> Dict[str, Any]:
    raw = body.get("year")
    return {"year": YearInfo.model_validate(raw)} if raw else {}


def parse_aayanam(body: dict) -> Dict[str, Any]:
    raw = body.get("aayanam")
    return {"aayanam": str(raw)} if raw else {}


SUB_ENDPOINTS = (
    Endpoint("sun_rise_set", "/sun-rise-set", parse_sun_rise_set, ("sunrise", "sunset")),
    Endpoint("tithi_timings", "/tithi-timings", parse_tithi, ("tithi",)),
    Endpoint("nakshatra_durations", "/nakshatra-durations", parse_nakshatra, ("nakshatra",)),
    Endpoint("yoga_timings", "/yoga-timings", parse_yoga, ("yoga",)),
    Endpoint("karana_timings", "/karana-timings", parse_karana, ("karana",)),
    Endpoint("vedic_weekday", "/vedic-weekday", parse_weekday, ("weekday",)),
    Endpoint("lunar_month_info", "/lunar-month-info", parse_lunar_month, ("lunar_month",)),
    Endpoint("ritu_information", "/ritu-information", parse_ritu, ("ritu",)),
    Endpoint("samvat_information", "/samvat-information", parse_samvat, ("year",)),
    Endpoint("aayanam", "/aayanam", parse_aayanam, ("aayanam",)),
    Endpoint("hora_timings", "/hora-timings"),
    Endpoint("choghadiya_timings", "/choghadiya-timings"),
    Endpoint("good_and_bad_times", "/good-and-bad-times"),
    Endpoint("abhijit_muhurat", "/abhijit-muhurat"),
    Endpoint("amrit_kaal", "/amrit-kaal"),
    Endpoint("brahma_muhurat", "/brahma-muhurat"),
    Endpoint("rahu_kalam", "/rahu-kalam"),
    Endpoint("yama_gandam", "/yama-gandam"),
    Endpoint("gulika_kalam", "/gulika-kalam"),
    Endpoint("dur_muhurat", "/dur-muhurat"),
    Endpoint("varjyam", "/varjyam"),
)

# Returns every consumed field at once; parsed with the sub-endpoint parsers
COMPLETE_ENDPOINT = Endpoint("complete_panchang", "/complete-panchang")

CONSUMED_ENDPOINTS = tuple(e for e in SUB_ENDPOINTS if e.consumed)
