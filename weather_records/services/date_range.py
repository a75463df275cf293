from datetime import date, timedelta
from typing import Optional

from weather_records.core.errors import ValidationError

MAX_RANGE = timedelta(days=365)


def validate_date_range(start: Optional[date], end: Optional[date], today: Optional[date] = None) -> None:
    """
    Check a historical date range against the archive policy.

    Both bounds are inclusive. The end may not lie after `today` and the
    bounds may be at most 365 days apart (366 days of data).

    Raises:
        ValidationError: with the first violated rule as message.
    """
    if not start or not end:
        raise ValidationError("Both start and end dates are required")

    today = today or date.today()

    if start > end:
        raise ValidationError("Start date must be before end date")
    if end > today:
        raise ValidationError("End date cannot be in the future")
    if end - start > MAX_RANGE:
        raise ValidationError("Date range cannot exceed 1 year")
