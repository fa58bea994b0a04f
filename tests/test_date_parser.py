"""Tests for date parser with relative dates and reporting periods."""

import pytest
from datetime import date, datetime, timedelta
from dateutil.relativedelta import relativedelta
from ledgerbook.utils.date_parser import parse_date, get_date_range


def test_parse_absolute_date():
    """Test parsing ISO dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_iso_never_day_first():
    """Test that ISO dates are not reinterpreted day-first."""
    assert parse_date("2024-03-04") == date(2024, 3, 4)


def test_parse_day_first_formats():
    """Test parsing day-first and long formats via dateutil."""
    assert parse_date("15/01/2024") == date(2024, 1, 15)
    assert parse_date("04/03/2024") == date(2024, 3, 4)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_date_objects():
    """Test that spreadsheet date cells pass through."""
    assert parse_date(date(2024, 2, 29)) == date(2024, 2, 29)
    assert parse_date(datetime(2024, 2, 29, 13, 30)) == date(2024, 2, 29)


def test_parse_relative_words():
    """Test parsing relative words."""
    today = date.today()
    assert parse_date("today") == today
    assert parse_date("Yesterday") == today - timedelta(days=1)
    assert parse_date("tomorrow") == today + timedelta(days=1)
    assert parse_date("start of month") == today.replace(day=1)
    assert parse_date("end of year") == date(today.year, 12, 31)


def test_parse_end_of_month():
    """Test 'end of month' lands on the last day."""
    result = parse_date("end of month")
    assert result.month == date.today().month
    assert (result + timedelta(days=1)).day == 1


@pytest.mark.parametrize("value", ["", "   ", "last invalid", "31/02/2024"])
def test_parse_invalid(value):
    """Test parsing invalid dates."""
    with pytest.raises(ValueError):
        parse_date(value)


def test_get_date_range_this_month():
    """Test get_date_range for this-month."""
    start, end = get_date_range("this-month", today=date(2024, 5, 17))
    assert start == date(2024, 5, 1)
    assert end == date(2024, 5, 17)


def test_get_date_range_this_quarter():
    """Test get_date_range for this-quarter."""
    start, end = get_date_range("this-quarter", today=date(2024, 8, 9))
    assert start == date(2024, 7, 1)
    assert end == date(2024, 8, 9)


def test_get_date_range_this_year_defaults_to_today():
    """Test get_date_range for this-year without a reference date."""
    today = date.today()
    start, end = get_date_range("this-year")
    assert start == date(today.year, 1, 1)
    assert end == today


def test_get_date_range_last_month():
    """Test get_date_range for last-month across a year boundary."""
    start, end = get_date_range("last-month", today=date(2024, 1, 10))
    assert start == date(2023, 12, 1)
    assert end == date(2023, 12, 31)


def test_get_date_range_last_month_leap_february():
    """Test get_date_range for last-month ending in February."""
    start, end = get_date_range("last-month", today=date(2024, 3, 31))
    assert start == date(2024, 2, 1)
    assert end == date(2024, 2, 29)


@pytest.mark.parametrize(
    "today,expected",
    [
        (date(2024, 2, 15), (date(2023, 10, 1), date(2023, 12, 31))),
        (date(2024, 5, 1), (date(2024, 1, 1), date(2024, 3, 31))),
        (date(2024, 12, 31), (date(2024, 7, 1), date(2024, 9, 30))),
    ],
)
def test_get_date_range_last_quarter(today, expected):
    """Test get_date_range for last-quarter."""
    assert get_date_range("last-quarter", today=today) == expected


def test_get_date_range_last_year():
    """Test get_date_range for last-year."""
    today = date.today()
    start, end = get_date_range("last-year")
    expected_start = today.replace(month=1, day=1) - relativedelta(years=1)
    assert start == expected_start
    assert end == date(today.year - 1, 12, 31)


def test_get_date_range_invalid_period():
    """Test get_date_range with invalid period."""
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("this-week")
