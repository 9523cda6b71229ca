"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Tried in order; the first format that yields a real calendar date wins.
# Day-first comes before month-first because the statements are Irish/UK.
STATEMENT_DATE_FORMATS = (
    "%d/%m/%Y",  # dd/MM/yyyy, also d/M/yyyy
    "%m/%d/%Y",  # MM/dd/yyyy
    "%Y-%m-%d",  # yyyy-MM-dd
    "%d-%m-%Y",  # dd-MM-yyyy
    "%d %b %Y",  # dd MMM yyyy
    # Revolut exports carry the time of day
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)


def parse_statement_date(date_str: Optional[str], default: Optional[date] = None) -> Optional[date]:
    """Parse a date cell from a bank statement export.

    Ambiguous values such as "01/03/2024" resolve day-first (1 March 2024);
    "12/25/2024" falls through to the month-first format.

    Args:
        date_str: Raw cell value
        default: Value returned when no format matches. Pass ``date.today()``
            to reproduce the old behaviour of silently importing as today.

    Returns:
        Parsed date, or ``default`` if the value matches no known format
    """
    if not date_str:
        return default
    value = date_str.strip()
    for fmt in STATEMENT_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return default


def parse_date(date_str: str) -> date:
    """Parse a command-line date argument.

    Accepts "today", "yesterday", "this month", "last month", "this year",
    "last year" and any absolute date dateutil understands.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    value = date_str.strip().lower()
    today = date.today()

    relative = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if value in relative:
        return relative[value]

    try:
        return date_parser.parse(value, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, last-month, this-year, last-year, tax-window

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return today.replace(day=1), today
    if period == "last-month":
        end = today.replace(day=1) - timedelta(days=1)
        return end.replace(day=1), end
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "last-year":
        start = today.replace(month=1, day=1) - relativedelta(years=1)
        return start, start.replace(month=12, day=31)
    if period == "tax-window":
        # Previous and current calendar year, as used when matching invoices
        return date(today.year - 1, 1, 1), date(today.year, 12, 31)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-month, last-month, "
        "this-year, last-year, tax-window"
    )
