from datetime import date

import pytest

from time_window import (
    CONTINUOUS,
    LOADING_LABEL,
    WEEK,
    TimeWindow,
    clamp_cursor,
    day_within_week,
    format_date,
    format_window_label,
    hour_of_day,
    max_cursor,
    step_week,
    window_for,
    window_for_cursor,
    window_for_week,
)


def test_continuous_cursor_window():
    window = window_for_cursor(10.5)
    assert window == TimeWindow(10, 17)
    assert hour_of_day(10.5) == 12


def test_fraction_does_not_widen_window():
    assert window_for_cursor(10.99) == TimeWindow(10, 17)
    assert window_for_cursor(10.0) == TimeWindow(10, 17)


def test_week_index_window():
    assert window_for_week(3) == TimeWindow(21, 28)
    assert window_for(3, WEEK) == TimeWindow(21, 28)


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        window_for(1, "monthly")


def test_window_contains_is_half_open():
    window = TimeWindow(0, 7)
    assert window.contains(0)
    assert window.contains(6)
    assert not window.contains(7)
    assert not window.contains(-1)


def test_hour_is_truncated():
    # 0.99 * 24 = 23.76
    assert hour_of_day(4.99) == 23
    assert hour_of_day(4.0) == 0


def test_day_within_week():
    assert day_within_week(0.2) == 1
    assert day_within_week(6.9) == 7
    assert day_within_week(10.5) == 4


def test_format_date_has_no_zero_padding():
    assert format_date(date(2020, 3, 1)) == "Mar 1, 2020"


def test_continuous_label():
    label = format_window_label(10.5, date(2020, 3, 1), CONTINUOUS)
    assert label == "Week: Mar 11, 2020 - Mar 17, 2020 (Day 4 @ 12h)"


def test_week_label_spans_month_boundary():
    label = format_window_label(4, date(2020, 3, 1), WEEK)
    assert label == "Week: Mar 29, 2020 - Apr 4, 2020"


def test_label_placeholder_without_min_date():
    assert format_window_label(3.2, None) == LOADING_LABEL


def test_max_cursor_by_mode():
    assert max_cursor(27, CONTINUOUS) == 27
    assert max_cursor(27, WEEK) == 3


def test_caller_side_clamping():
    assert clamp_cursor(-2, 10) == 0
    assert clamp_cursor(12.5, 10) == 10
    assert step_week(0, -1, 3) == 0
    assert step_week(3, 1, 3) == 3
    assert step_week(1, 1, 3) == 2


def test_hour_survives_float_noise():
    # slider step of 1/3 day lands on 10.666666666666666
    assert hour_of_day(32 / 3) == 16
    cursor = 0.0
    for _ in range(30):
        cursor += 1 / 60
    assert hour_of_day(cursor) == 12
    assert hour_of_day(0.99999999999999) == 23


def test_label_for_third_of_a_day():
    label = format_window_label(32 / 3, date(2020, 3, 1), CONTINUOUS)
    assert label == "Week: Mar 11, 2020 - Mar 17, 2020 (Day 4 @ 16h)"


def test_format_date_uses_fixed_month_names():
    assert [format_date(date(2021, m, 9)) for m in (1, 5, 12)] == [
        "Jan 9, 2021", "May 9, 2021", "Dec 9, 2021",
    ]
