"""Tests for date parsing and period helpers."""

from datetime import date, datetime, time, timedelta

import pytest
from dateutil.relativedelta import relativedelta

from ledgerbook.domain.errors import ValidationError
from ledgerbook.utils.date_parser import (
    end_of_day,
    get_date_range,
    month_bounds,
    parse_date,
    parse_datetime,
    start_of_day,
    validate_month,
)


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_standard_formats():
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("2024/01/15") == date(2024, 1, 15)


def test_parse_relative_words():
    today = date.today()
    assert parse_date("today") == today
    assert parse_date(" Yesterday ") == today - timedelta(days=1)
    assert parse_date("tomorrow") == today + timedelta(days=1)


def test_parse_invalid_date():
    with pytest.raises(ValidationError, match="Could not parse date"):
        parse_date("not a date")


def test_parse_datetime_keeps_time():
    assert parse_datetime("2024-03-05 14:30") == datetime(2024, 3, 5, 14, 30)


def test_parse_datetime_bare_date_is_midnight():
    assert parse_datetime("2024-03-05") == datetime(2024, 3, 5, 0, 0)
    assert parse_datetime("today") == datetime.combine(date.today(), time.min)


def test_parse_datetime_drops_timezone():
    assert parse_datetime("2024-03-05 10:00:00 +02:00").tzinfo is None


def test_parse_datetime_converts_offset_to_utc():
    assert parse_datetime("2024-03-31 23:30:00 -05:00") == datetime(2024, 4, 1, 4, 30)
    assert parse_datetime("2024-03-05 10:00:00 +02:00") == datetime(2024, 3, 5, 8, 0)


def test_parse_datetime_invalid():
    with pytest.raises(ValidationError):
        parse_datetime("soon-ish")


def test_day_bounds():
    day = date(2024, 2, 29)
    assert start_of_day(day) == datetime(2024, 2, 29, 0, 0)
    assert end_of_day(day) == datetime.combine(day, time.max)
    moment = datetime(2024, 2, 29, 8, 30)
    assert start_of_day(moment) is moment
    assert end_of_day(moment) is moment


@pytest.mark.parametrize("month", [0, 13, True, "3"])
def test_validate_month_rejects(month):
    with pytest.raises(ValidationError):
        validate_month(month)


def test_month_bounds_handles_leap_years():
    start, end = month_bounds(2, 2024)
    assert start == datetime(2024, 2, 1)
    assert end.date() == date(2024, 2, 29)
    assert month_bounds(2, 2023)[1].date() == date(2023, 2, 28)


def test_month_bounds_december():
    start, end = month_bounds(12, 2024)
    assert start == datetime(2024, 12, 1)
    assert end == datetime.combine(date(2024, 12, 31), time.max)


def test_get_date_range_this_month():
    start, end = get_date_range("this-month")
    today = date.today()
    assert start == today.replace(day=1)
    assert end == today


def test_get_date_range_last_month():
    start, end = get_date_range("last-month")
    first_this_month = date.today().replace(day=1)
    assert start == first_this_month - relativedelta(months=1)
    assert end == first_this_month - timedelta(days=1)


def test_get_date_range_this_year():
    start, end = get_date_range("this-year")
    assert start == date(date.today().year, 1, 1)
    assert end == date.today()


def test_get_date_range_last_year():
    start, end = get_date_range("last-year")
    year = date.today().year - 1
    assert start == date(year, 1, 1)
    assert end == date(year, 12, 31)


def test_get_date_range_invalid_period():
    with pytest.raises(ValidationError, match="Unknown period"):
        get_date_range("next-decade")
