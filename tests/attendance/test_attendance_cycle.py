from datetime import date

import pytest

from src.messmate.messmate.attendance.cycle import current_cycle, cycle_window


def test_window_zero_covers_first_thirty_days():
    first = date(2026, 1, 1)

    assert cycle_window(first, date(2026, 1, 1)).index == 0
    assert cycle_window(first, date(2026, 1, 15)).index == 0
    assert cycle_window(first, date(2026, 1, 30)).index == 0


def test_window_one_starts_on_day_thirty_one():
    first = date(2026, 1, 1)

    w = cycle_window(first, date(2026, 1, 31))
    assert w.index == 1
    assert w.start == date(2026, 1, 31)
    assert w.end == date(2026, 3, 2)
    assert cycle_window(first, date(2026, 2, 9)).index == 1


def test_window_end_is_exclusive():
    w = cycle_window(date(2026, 1, 1), date(2026, 1, 10))

    assert w.contains(date(2026, 1, 30))
    assert not w.contains(date(2026, 1, 31))


def test_current_cycle_filters_records(repos):
    repo = repos.attendance_repo
    for day in (date(2026, 1, 1), date(2026, 1, 15), date(2026, 1, 31), date(2026, 2, 9)):
        repo.add(1, day)

    window, records = current_cycle(repo.list_for_user(1), date(2026, 2, 9))

    assert window.start == date(2026, 1, 31)
    assert [r.attend_date for r in records] == [date(2026, 1, 31), date(2026, 2, 9)]


def test_current_cycle_without_records():
    window, records = current_cycle([], date(2026, 2, 9))

    assert window is None
    assert records == []


def test_custom_cycle_length():
    w = cycle_window(date(2026, 1, 1), date(2026, 1, 8), cycle_days=7)

    assert w.index == 1
    assert w.start == date(2026, 1, 8)


def test_cycle_length_must_be_positive():
    with pytest.raises(ValueError):
        cycle_window(date(2026, 1, 1), date(2026, 1, 8), cycle_days=0)
