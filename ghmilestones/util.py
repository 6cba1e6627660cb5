"""Utility functions."""

from datetime import date, datetime
from typing import Union

DISPLAY_DATE_FORMAT = "%B %d %Y"


def format_display_date(value: Union[date, datetime]) -> str:
    """Format a date as 'Month D YYYY', e.g. 'March 5 2024'.

    Args:
        value: Date or datetime to format.

    Returns:
        Display string without zero padding on the day.
    """
    return f"{value:%B} {value.day} {value.year}"


def parse_display_date(text: str) -> date:
    """Parse a string produced by format_display_date.

    Raises:
        ValueError: If text is not in 'Month D YYYY' form.
    """
    return datetime.strptime(text, DISPLAY_DATE_FORMAT).date()
