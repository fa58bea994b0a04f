"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = (
    "this-month",
    "this-quarter",
    "this-year",
    "last-month",
    "last-quarter",
    "last-year",
)


def parse_date(value: "str | date | datetime") -> date:
    """Parse a date value into a date object.

    Accepts:
    - date or datetime objects (spreadsheet cells)
    - Absolute dates: "2024-01-15", "15 January 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "start of month",
      "end of month", "start of year", "end of year"

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip().lower()
    if not text:
        raise ValueError("Empty date string")
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "start of month": today.replace(day=1),
        "end of month": today + relativedelta(day=31),
        "start of year": today.replace(month=1, day=1),
        "end of year": today.replace(month=12, day=31),
    }
    if text in relative_dates:
        return relative_dates[text]

    try:
        # ISO dates first so 2024-03-04 is never read day-first
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return date_parser.parse(text, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}") from e


def _quarter_start(day: date) -> date:
    return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get start and end dates for a named reporting period.

    Current periods end today; past periods cover the whole month, quarter
    or year.

    Args:
        period: One of PERIODS
        today: Reference date (defaults to the current date)

    Raises:
        ValueError: If the period is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return today.replace(day=1), today
    if period == "this-quarter":
        return _quarter_start(today), today
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "last-month":
        start = (today - relativedelta(months=1)).replace(day=1)
        return start, today.replace(day=1) - timedelta(days=1)
    if period == "last-quarter":
        end = _quarter_start(today) - timedelta(days=1)
        return _quarter_start(end), end
    if period == "last-year":
        start = today.replace(month=1, day=1) - relativedelta(years=1)
        return start, start.replace(month=12, day=31)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
