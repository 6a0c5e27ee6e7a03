import calendar
from datetime import date, datetime, timedelta

from utils.errors import InvalidInputError


def normalize_date(value) -> date:
    """Coerce a date, datetime or ISO ``YYYY-MM-DD`` string to a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value)
    raise InvalidInputError(f"Invalid date value: {value!r}")


def parse_iso_date(raw: str, field: str = "date") -> date:
    if raw is None or not str(raw).strip():
        raise InvalidInputError(f"Missing {field}. Use YYYY-MM-DD.")
    try:
        return datetime.strptime(str(raw).strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise InvalidInputError(f"Invalid {field} format. Use YYYY-MM-DD.") from exc


def parse_month(raw: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` string into ``(year, month)``."""
    try:
        parsed = datetime.strptime((raw or "").strip(), "%Y-%m")
    except ValueError as exc:
        raise InvalidInputError("Invalid month format. Use YYYY-MM.") from exc
    return parsed.year, parsed.month


def clamped_date(year: int, month: int, day: int) -> date:
    """Compose a date, clamping ``day`` to the month's last day."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def add_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    return clamped_date(year, month, value.day)


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_end(value: date) -> date:
    return clamped_date(value.year, value.month, 31)


def iter_months(start: date, end: date):
    """Yield ``(year, month)`` for every calendar month touching ``[start, end]``."""
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        month += 1
        if month > 12:
            month = 1
            year += 1


def iter_days(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
