"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

# Ledger cells are parsed against both defaults. A year or month that differs
# between the two results was missing from the cell; a missing day is the 1st.
_LEDGER_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a user-supplied date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative expressions (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    # Handle relative dates
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Handle "last/this/next" + time period
    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)
        elif period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7
            if days_ago == 0:
                days_ago = 7
            return today - timedelta(days=days_ago)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str, default=datetime(today.year, today.month, today.day))
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_ledger_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a date cell from a ledger export.

    Unlike parse_date this never raises: ledger cells that cannot be read
    yield None so the row drops out of date-based figures only.

    Order of attempts:
    1. ISO "YYYY-MM-DD" (optionally with a time part)
    2. dateutil, month-first ("03/04/2024" is March 4th). Cells missing
       the year or month ("30", "Mar", "10 Jan") yield None; "March 2024"
       is March 1st
    3. Day-first fallback: split on "/" or "-" and, when the first part is
       above 12 or the third above 31, read it as DD/MM/YYYY. Which of
       month-first and day-first is right for ambiguous cells is unknown,
       so the order above must not be changed without checking the
       exporting locale.
    """
    if not date_str:
        return None
    text = date_str.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    try:
        first_pass, second_pass = (
            date_parser.parse(text, default=default).date() for default in _LEDGER_DEFAULTS
        )
    except (ValueError, OverflowError):
        pass
    else:
        if (first_pass.year, first_pass.month) != (second_pass.year, second_pass.month):
            return None
        return first_pass

    parts = text.replace("-", "/").split("/")
    if len(parts) != 3:
        return None
    try:
        first, second, third = (int(part) for part in parts)
    except ValueError:
        return None
    if first > 12 or third > 31:
        try:
            return date(third, second, first)
        except ValueError:
            return None
    return None
