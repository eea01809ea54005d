"""Unit tests for period keys, date arithmetic and display formatting"""

import pytest
from datetime import date
from decimal import Decimal
from finance_tracker.domain.exceptions import MalformedPeriodError
from finance_tracker.utils.date_utils import (
    add_months,
    first_day_of_month,
    parse_day,
    parse_period,
    period_due_date,
    year_month,
    year_month_day,
)
from finance_tracker.utils.formatters import format_currency, format_date, format_month_year


def test_period_keys():
    d = date(2024, 7, 5)

    assert year_month(d) == "2024-07"
    assert year_month_day(first_day_of_month(d)) == "2024-07-01"
    assert parse_period("2024-07") == (2024, 7)


def test_add_months_preserves_day():
    assert add_months(date(2024, 1, 15), 1) == date(2024, 2, 15)
    assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 15)
    assert add_months(date(2024, 3, 15), -3) == date(2023, 12, 15)


def test_add_months_snaps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 1, 31), 3) == date(2024, 4, 30)


def test_period_due_date():
    assert period_due_date("2024-03", 5) == date(2024, 3, 5)
    assert period_due_date("2024-04", 31) == date(2024, 4, 30)


@pytest.mark.parametrize("key", ["", "2024", "2024-7", "2024-00", "2024-13", "24-07", "2024-07-01"])
def test_parse_period_rejects_malformed(key):
    with pytest.raises(MalformedPeriodError):
        parse_period(key)


@pytest.mark.parametrize("key", ["2024-02-30", "2024/02/01", "yesterday"])
def test_parse_day_rejects_malformed(key):
    with pytest.raises(MalformedPeriodError):
        parse_day(key)


def test_format_currency():
    assert format_currency(Decimal("1234.5")) == "R$ 1.234,50"
    assert format_currency(Decimal("0")) == "R$ 0,00"
    assert format_currency(Decimal("-50.255")) == "-R$ 50,26"


def test_format_date_and_month():
    assert format_date("2024-07-15") == "15/07/2024"
    assert format_date("") == ""
    assert format_month_year("2024-03") == "março de 2024"
