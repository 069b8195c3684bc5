from __future__ import annotations

from datetime import date, datetime

import pytest

from employee_tracker.common.datetime_utils import to_date, to_datetime
from employee_tracker.common.validators import require_email, require_min_length, require_rating
from employee_tracker.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2026-02-01", date(2026, 2, 1)),
        ("2026-02-01 10:30:00", date(2026, 2, 1)),
        (datetime(2026, 2, 1, 9, 0), date(2026, 2, 1)),
        (date(2026, 2, 1), date(2026, 2, 1)),
        ("", None),
        (None, None),
        ("yesterday", None),
    ],
)
def test_to_date(value, expected):
    assert to_date(value) == expected


def test_to_datetime_parses_stored_timestamps():
    assert to_datetime("2026-02-01 10:30:00") == datetime(2026, 2, 1, 10, 30)
    assert to_datetime("garbage") is None


def test_require_email():
    assert require_email(" manoj@company.com ") == "manoj@company.com"
    with pytest.raises(ValidationError):
        require_email("manoj@company")


def test_require_min_length():
    with pytest.raises(ValidationError):
        require_min_length("12345", "Password", 6)
    assert require_min_length("123456", "Password", 6) == "123456"


@pytest.mark.parametrize("value", [0, 2.5, "4.5", 5])
def test_require_rating_accepts_range(value):
    assert 0.0 <= require_rating(value, "Rating") <= 5.0


@pytest.mark.parametrize("value", [-0.1, 5.01, float("nan"), float("inf"), "x", None])
def test_require_rating_rejects(value):
    with pytest.raises(ValidationError):
        require_rating(value, "Rating")
