from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict


def _he_il(d: date) -> str:
    return f"{d.day}.{d.month}.{d.year}"


def _en_us(d: date) -> str:
    return f"{d.month}/{d.day}/{d.year}"


def _en_gb(d: date) -> str:
    return f"{d.day:02d}/{d.month:02d}/{d.year}"


LOCALE_DATE_FORMATS: Dict[str, Callable[[date], str]] = {
    "he-IL": _he_il,
    "en-US": _en_us,
    "en-GB": _en_gb,
}


def to_text(value: Any) -> str:
    """
    Natural string form of a record value.

    None renders empty, booleans lower-case, integral floats drop the
    trailing '.0', dates use ISO 8601.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def parse_date(value: Any) -> datetime:
    """
    Coerces a date-like value to datetime.
    Raises TypeError or ValueError when value is not date-like.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise TypeError(f"Not a date value: {value!r}")


def format_locale_date(value: Any, locale: str) -> str:
    try:
        parsed = parse_date(value)
    except (TypeError, ValueError):
        return to_text(value)

    formatter = LOCALE_DATE_FORMATS.get(locale)
    if formatter is None:
        return parsed.date().isoformat()
    return formatter(parsed.date())
