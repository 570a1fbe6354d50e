"""Calendar helpers."""

from datetime import datetime


def add_years(moment: datetime, years: int) -> datetime:
    """Shift ``moment`` by whole calendar years, keeping month and day.

    A 29 February that does not exist in the target year rolls over to
    1 March.
    """
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, month=3, day=1)
