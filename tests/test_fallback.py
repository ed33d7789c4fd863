import re
from datetime import date

import pytest

from models.panchang import Confidence
from services.fallback import civil_date, compute_fallback_panchang, format_hours, sun_times, zone_meridian

HMS = re.compile(r"^\d{2}:\d{2}:\d{2}$")


def _compute(year=2024, month=4, day=15, latitude=28.6, longitude=77.2):
    return compute_fallback_panchang(year, month, day, latitude=latitude, longitude=longitude)


@pytest.mark.parametrize("d", [date(2024, 4, 15), date(2023, 1, 1), date(2024, 2, 29), date(1999, 12, 31)])
def test_weekday_follows_civil_date_sunday_first(d):
    record = _compute(d.year, d.month, d.day)
    expected = (d.weekday() + 1) % 7 + 1
    assert record.weekday.number == expected
    assert record.weekday.vedic_number == expected


def test_weekday_ignores_location():
    numbers = {_compute(latitude=lat, longitude=lon).weekday.number for lat in (-40, 0, 51.5) for lon in (-120, 0, 77.2)}
    assert numbers == {2}


def test_monday_names():
    weekday = _compute().weekday
    assert weekday.name == "Monday"
    assert weekday.vedic_name == "Soma"


@pytest.mark.parametrize("day", range(1, 32))
def test_tithi_and_nakshatra_depend_on_day_only(day):
    record = _compute(month=1, day=day)
    assert record.tithi.number == day % 15 + 1
    assert record.nakshatra.number == day % 27 + 1
    assert record.tithi.paksha == "shukla"


def test_calendar_fields():
    record = _compute(year=2024, month=4, day=15)
    assert record.lunar_month.number == 5
    assert record.lunar_month.name == "Shravana"
    assert (record.lunar_month.adhika, record.lunar_month.nija, record.lunar_month.kshaya) == (0, 1, 0)
    assert record.ritu.number == 2
    assert record.ritu.name == "Grishma (Summer)"
    assert record.aayanam == "Uttarayanam"
    assert _compute(month=11).aayanam == "Dakshinayanam"
    assert _compute(month=12).lunar_month.number == 1


def test_era_years():
    year = _compute(year=2024).year
    assert year.saka_salivahana_number == 1946
    assert year.saka_salivahana_name_number == 1946 % 60
    assert year.vikram_chaitradi_number == 2081
    assert year.vikram_chaitradi_name_number == 2081 % 60
    assert year.saka_salivahana_year_name == "SubhaKritu"
    assert year.vikram_chaitradi_year_name == "Nala"
    assert year.timestamp == "2024-04-15T06:00:00+05:30"


def test_yoga_and_karana_entries():
    record = _compute(day=15)
    tithi, nakshatra = record.tithi.number, record.nakshatra.number
    assert record.yoga[1].number == (tithi + nakshatra) % 27 + 1
    assert record.karana[1].number == (tithi * 2) % 11 + 1


def test_identical_inputs_give_identical_records():
    assert _compute() == _compute()
    assert _compute().model_dump() == _compute().model_dump()


def test_percentages_are_bounded_and_vary_with_location():
    a = _compute()
    b = _compute(latitude=12.9, longitude=77.6)
    for record in (a, b):
        for value in (
            record.tithi.left_percentage,
            record.nakshatra.left_percentage,
            record.yoga[1].left_percentage,
            record.karana[1].left_percentage,
        ):
            assert 0 <= value < 100
    assert a.tithi.left_percentage != b.tithi.left_percentage


@pytest.mark.parametrize("latitude", [-55, -40, -23.5, -10, 0, 10, 23.5, 40, 55])
@pytest.mark.parametrize("longitude", [-179.9, -120, -74, -0.1, 0, 60, 68.5, 75, 82, 88.4, 95, 139.7, 180])
@pytest.mark.parametrize("d", [date(2024, 1, 15), date(2024, 3, 21), date(2024, 6, 21), date(2024, 9, 23), date(2024, 12, 21)])
def test_sunrise_before_sunset(latitude, longitude, d):
    record = _compute(d.year, d.month, d.day, latitude=latitude, longitude=longitude)
    assert HMS.match(record.sunrise)
    assert HMS.match(record.sunset)
    assert record.sunrise < record.sunset


def test_delhi_times_are_plausible():
    sunrise, sunset = sun_times(date(2024, 4, 15), 28.6, 77.2)
    assert 5 < sunrise < 6.5
    assert 18 < sunset < 19.5


@pytest.mark.parametrize(
    "year, month, day, latitude, longitude",
    [(2024, 6, 21, 51.5, -0.1), (2024, 4, 15, 40.7, -74.0), (2024, 12, 21, -33.9, 151.2)],
)
def test_far_from_india_times_stay_in_order(year, month, day, latitude, longitude):
    record = _compute(year, month, day, latitude=latitude, longitude=longitude)
    assert "03:00:00" < record.sunrise < "12:00:00" < record.sunset < "21:00:00"


def test_zone_meridian():
    assert zone_meridian(77.2) == 75
    assert zone_meridian(68.5) == 75
    assert zone_meridian(-74.0) == -75
    assert zone_meridian(-0.1) == 0
    assert zone_meridian(180) == 180


@pytest.mark.parametrize("latitude", [70, -80, 90, 120])
def test_polar_and_out_of_range_latitudes_degrade(latitude):
    record = _compute(month=6, day=21, latitude=latitude)
    assert HMS.match(record.sunrise)
    assert HMS.match(record.sunset)


def test_format_hours():
    assert format_hours(6.5) == "06:30:00"
    assert format_hours(18.75) == "18:45:00"
    assert format_hours(24.5) == "00:30:00"


def test_civil_date_rolls_over():
    assert civil_date(2023, 2, 31) == date(2023, 3, 3)
    assert civil_date(2024, 12, 15) == date(2024, 12, 15)


def test_every_field_is_approximated():
    confidence = _compute().confidence
    assert len(confidence) == 11
    assert set(confidence.values()) == {Confidence.APPROXIMATED}
