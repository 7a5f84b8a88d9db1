from datetime import date, datetime

from app.domain.care_schedule import days_until, next_due_date, parse_care_date
from app.domain.care_types import CareType


def test_prune_is_due_again_after_ninety_days():
    assert next_due_date(CareType.PRUNE, date(2024, 1, 1)) == date(2024, 3, 31)


def test_next_due_date_accepts_stored_strings():
    assert next_due_date("Water", date(2024, 2, 27)) == date(2024, 3, 1)
    assert next_due_date("Repot", date(2024, 3, 1)) == date(2025, 3, 1)


def test_next_due_date_for_unknown_stored_type_uses_one_week():
    assert next_due_date("Misting", date(2024, 12, 28)) == date(2025, 1, 4)


def test_days_until_is_signed():
    today = date(2024, 6, 15)
    assert days_until(date(2024, 6, 14), today) == -1
    assert days_until(today, today) == 0
    assert days_until(date(2024, 6, 20), today) == 5


def test_parse_care_date_forms():
    assert parse_care_date("2024-06-15") == date(2024, 6, 15)
    assert parse_care_date("2024-06-15 08:30:00") == date(2024, 6, 15)
    assert parse_care_date(datetime(2024, 6, 15, 23, 59)) == date(2024, 6, 15)
    assert parse_care_date("15/06/2024") is None
    assert parse_care_date(None) is None
    assert parse_care_date("") is None
