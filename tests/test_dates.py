from datetime import datetime, timezone

import pytest

from app.models.subscription import Subscription
from app.utils.dates import add_years


@pytest.mark.parametrize(
    "start,expected",
    [
        (datetime(2026, 10, 18, 9, 30), datetime(2027, 10, 18, 9, 30)),
        (datetime(2024, 2, 29), datetime(2025, 3, 1)),
        (datetime(2023, 2, 28), datetime(2024, 2, 28)),
        (datetime(2025, 12, 31, 23, 59), datetime(2026, 12, 31, 23, 59)),
    ],
)
def test_add_one_year(start, expected):
    assert add_years(start, 1) == expected


def test_leap_day_to_leap_year():
    assert add_years(datetime(2024, 2, 29), 4) == datetime(2028, 2, 29)


def test_subscription_window():
    start = datetime(2026, 1, 15, 8, 0, tzinfo=timezone.utc)
    subscription = Subscription.starting_at("uid-1", "basic", start)

    assert subscription.is_active
    assert subscription.to_dict() == {
        "userId": "uid-1",
        "planId": "basic",
        "status": "ACTIVE",
        "startDate": "2026-01-15T08:00:00+00:00",
        "endDate": "2027-01-15T08:00:00+00:00",
    }
