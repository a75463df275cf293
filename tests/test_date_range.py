from datetime import date, timedelta

import pytest

from weather_records.core.errors import ValidationError
from weather_records.services.date_range import validate_date_range


def test_start_after_end_rejected():
    with pytest.raises(ValidationError, match="Start date must be before end date"):
        validate_date_range(date(2024, 2, 1), date(2024, 1, 1))


def test_future_end_rejected():
    with pytest.raises(ValidationError, match="End date cannot be in the future"):
        validate_date_range(date(2020, 1, 1), date.today() + timedelta(days=1))


def test_range_longer_than_a_year_rejected():
    with pytest.raises(ValidationError, match="cannot exceed 1 year"):
        validate_date_range(date(2020, 1, 1), date(2021, 1, 3))


def test_valid_range_passes():
    validate_date_range(date(2023, 1, 1), date(2023, 6, 1))


def test_boundaries_are_inclusive():
    today = date(2024, 6, 30)
    # 365 days apart, ending today
    validate_date_range(date(2023, 7, 1), today, today=today)
    validate_date_range(today, today, today=today)


@pytest.mark.parametrize("start,end", [(None, date(2023, 1, 1)), (date(2023, 1, 1), None)])
def test_missing_dates_rejected(start, end):
    with pytest.raises(ValidationError, match="Both start and end dates are required"):
        validate_date_range(start, end)
