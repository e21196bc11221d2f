from datetime import date, datetime

import pytest

from src.store_payroll.store_payroll.common.datetime_utils import (
    month_range,
    parse_iso_date,
    sunday_based_weekday,
    week_range,
)
from src.store_payroll.store_payroll.common.time_utils import (
    format_duration,
    is_night_hour,
    overtime_split,
    round_punch,
    round_to_nearest,
    working_hours,
)
from src.store_payroll.store_payroll.core.exceptions import InvalidInterval, ValidationError
from src.store_payroll.store_payroll.core.settings import PayrollSettings, parse_holidays


def test_working_hours_subtracts_break():
    assert working_hours(datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 19, 0), 60) == 9.0


def test_working_hours_is_clamped_at_zero():
    assert working_hours(datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 9, 30), 60) == 0.0


def test_working_hours_rejects_reversed_interval():
    with pytest.raises(InvalidInterval):
        working_hours(datetime(2026, 3, 2, 18, 0), datetime(2026, 3, 2, 9, 0))


@pytest.mark.parametrize("total", [0.0, 5.5, 8.0, 9.0, 13.25])
def test_overtime_split_adds_up(total):
    split = overtime_split(total)
    assert split.regular + split.overtime == pytest.approx(total)
    assert split.regular <= 8


def test_overtime_split_above_threshold():
    split = overtime_split(9.0)
    assert (split.regular, split.overtime) == (8.0, 1.0)


@pytest.mark.parametrize(
    "hour,minute,window,expected",
    [
        (23, 0, (22, 5), True),
        (3, 0, (22, 5), True),
        (10, 0, (22, 5), False),
        (5, 0, (22, 5), False),
        (1, 30, (1, 2), True),
        (0, 30, (1, 2), False),
    ],
)
def test_is_night_hour(hour, minute, window, expected):
    assert is_night_hour(datetime(2026, 3, 2, hour, minute), *window) is expected


def test_round_to_nearest_rounds_halves_up():
    assert round_to_nearest(7, 15) == 0
    assert round_to_nearest(7.5, 15) == 15
    assert round_to_nearest(8, 15) == 15
    assert round_to_nearest(8, 0) == 8


def test_round_punch_can_roll_into_next_day():
    assert round_punch(datetime(2026, 3, 2, 23, 53), 15) == datetime(2026, 3, 3, 0, 0)
    assert round_punch(datetime(2026, 3, 2, 8, 53, 40), 15) == datetime(2026, 3, 2, 9, 0)


def test_format_duration():
    assert format_duration(8.5) == "8時間30分"
    assert format_duration(2) == "2時間"
    assert format_duration(0.25) == "15分"


def test_weekdays_start_on_sunday():
    assert sunday_based_weekday(date(2026, 3, 1)) == 0
    assert sunday_based_weekday(date(2026, 3, 7)) == 6
    assert week_range(date(2026, 3, 4)) == (date(2026, 3, 1), date(2026, 3, 7))


def test_month_range():
    assert month_range(date(2026, 2, 10)) == (date(2026, 2, 1), date(2026, 2, 28))
    assert month_range(date(2026, 12, 31)) == (date(2026, 12, 1), date(2026, 12, 31))


def test_parse_iso_date_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_iso_date("2026/03/01")


def test_parse_holidays_from_csv():
    assert parse_holidays("2026-01-01, 2026-01-02,") == {date(2026, 1, 1), date(2026, 1, 2)}
    assert parse_holidays("") == frozenset()


def test_settings_reject_bad_hours():
    with pytest.raises(ValidationError):
        PayrollSettings(expected_start_hour=24)
