from datetime import date

import pytest

from babybook.core.age import age_parts, format_age


def test_days_only():
    assert format_age(date(2024, 5, 5), today=date(2024, 5, 10)) == "5 days old"


def test_born_today():
    assert format_age("2024-05-10", today=date(2024, 5, 10)) == "0 days old"


def test_months_and_days():
    assert format_age(date(2024, 2, 5), today=date(2024, 5, 15)) == "3 months 10 days"


def test_years_months_days():
    assert format_age(date(2022, 4, 15), today=date(2024, 5, 15)) == "2y 1m 0d"


def test_days_borrow_from_previous_month():
    # April has 30 days
    assert age_parts(date(2024, 3, 20), date(2024, 5, 10)) == (0, 1, 20)


def test_months_borrow_from_years():
    # January has 31 days
    assert age_parts(date(2023, 11, 20), date(2024, 2, 10)) == (0, 2, 21)


def test_january_borrows_from_december():
    assert format_age(date(2023, 12, 25), today=date(2024, 1, 5)) == "11 days old"


def test_timestamp_string_is_accepted():
    assert format_age("2024-05-05T08:30:00Z", today=date(2024, 5, 10)) == "5 days old"


def test_garbage_birth_date():
    with pytest.raises(ValueError):
        format_age("not a date", today=date(2024, 5, 10))
