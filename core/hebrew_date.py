import logging
from datetime import date, datetime
from typing import Dict

from pyluach import dates

logger = logging.getLogger("donorbook.hebrew_date")

HEBREW_NUMERALS: Dict[int, str] = {
    1: "א'", 2: "ב'", 3: "ג'", 4: "ד'", 5: "ה'",
    6: "ו'", 7: "ז'", 8: "ח'", 9: "ט'", 10: "י'",
    11: 'י"א', 12: 'י"ב', 13: 'י"ג', 14: 'י"ד', 15: 'ט"ו',
    16: 'ט"ז', 17: 'י"ז', 18: 'י"ח', 19: 'י"ט', 20: "כ'",
    21: 'כ"א', 22: 'כ"ב', 23: 'כ"ג', 24: 'כ"ד', 25: 'כ"ה',
    26: 'כ"ו', 27: 'כ"ז', 28: 'כ"ח', 29: 'כ"ט', 30: "ל'",
}


def format_hebrew_number(num: int) -> str:
    return HEBREW_NUMERALS.get(num, str(num))


def _to_hebrew(gregorian_date: date) -> dates.HebrewDate:
    if isinstance(gregorian_date, datetime):
        gregorian_date = gregorian_date.date()
    return dates.HebrewDate.from_pydate(gregorian_date)


def to_hebrew_date(gregorian_date: date) -> str:
    """'<day> <month> <year>', e.g. for 2024-03-15: ה' אדר ב׳ תשפ״ד"""
    try:
        h_date = _to_hebrew(gregorian_date)
        day = format_hebrew_number(h_date.day)
        return f"{day} {h_date.month_name(hebrew=True)} {h_date.hebrew_year()}"
    except Exception as e:
        logger.error(f"Error converting to Hebrew date: {e}")
        return ""


def to_short_hebrew_date(gregorian_date: date) -> str:
    try:
        h_date = _to_hebrew(gregorian_date)
        return f"{format_hebrew_number(h_date.day)} {h_date.month_name(hebrew=True)}"
    except Exception as e:
        logger.error(f"Error converting to short Hebrew date: {e}")
        return ""
