# tests/test_deadline.py
from datetime import date, datetime

import pytest

from packtrack.services.deadline import classify_deadline, days_until

TODAY = date(2026, 2, 5)


def test_no_deadline():
    assert classify_deadline(None, TODAY) is None


@pytest.mark.parametrize(
    "deadline, label, color, days_left",
    [
        (date(2026, 2, 4), "Expired!", "red", -1),
        (date(2026, 2, 5), "Today!", "red", 0),
        (date(2026, 2, 6), "1 day left", "orange", 1),
        (date(2026, 2, 8), "3 days left", "orange", 3),
        (date(2026, 2, 9), "4 days left", "green", 4),
    ],
)
def test_buckets(deadline, label, color, days_left):
    info = classify_deadline(deadline, TODAY)
    assert (info.label, info.color, info.days_left) == (label, color, days_left)


def test_time_of_day_is_ignored():
    late_evening = datetime(2026, 2, 5, 23, 59)
    assert classify_deadline(date(2026, 2, 5), late_evening).label == "Today!"
    assert days_until(date(2026, 2, 6), late_evening) == 1
