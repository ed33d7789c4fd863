from models.panchang import Confidence, Tithi
from services.merger import merge_fields


def test_missing_tithi_gets_fixed_default():
    record = merge_fields({"sunrise": "05:55:10"})
    assert record.tithi.model_dump() == {
        "number": 1,
        "name": "Pratipada",
        "paksha": "shukla",
        "completes_at": None,
        "left_percentage": None,
    }


def test_provided_fields_are_kept_and_tagged():
    tithi = Tithi(number=9, name="Navami", paksha="krishna", completes_at="2024-04-16 13:24:00", left_percentage=42.5)
    record = merge_fields({"tithi": tithi, "aayanam": "Dakshinayanam"})
    assert record.tithi == tithi
    assert record.aayanam == "Dakshinayanam"
    assert record.confidence["tithi"] == Confidence.PROVIDED
    assert record.confidence["aayanam"] == Confidence.PROVIDED
    assert record.confidence["nakshatra"] == Confidence.STATIC_DEFAULT
    assert record.sunrise == "06:00:00"
    assert record.sunset == "18:00:00"


def test_empty_partial_is_all_defaults():
    record = merge_fields({})
    assert set(record.confidence.values()) == {Confidence.STATIC_DEFAULT}
    assert record.weekday.name == "Monday"
    assert record.nakshatra.name == "Ashwini"
    assert record.yoga[1].name == "Vishkambha"
    assert record.karana[1].name == "Bava"
    assert record.year.saka_salivahana_number == 1944
    assert record.year.vikram_chaitradi_year_name == "Nala"


def test_defaults_are_not_shared_between_records():
    first = merge_fields({})
    first.tithi.left_percentage = 99.0
    first.yoga[2] = first.yoga[1]
    second = merge_fields({})
    assert second.tithi.left_percentage is None
    assert list(second.yoga) == [1]
