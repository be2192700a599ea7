from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from core.formatting import parse_date, to_text
from models.interfaces.strategy_interface import IValueComparator


def _cmp(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


class TextComparator(IValueComparator):
    def coerce(self, value: Any) -> Any:
        if not isinstance(value, str):
            raise TypeError("Text column holds a non-string value")
        return value

    def compare(self, a: Any, b: Any) -> int:
        try:
            return _cmp(self.coerce(a), self.coerce(b))
        except (TypeError, ValueError):
            return _cmp(to_text(a), to_text(b))


class NumberComparator(TextComparator):
    def coerce(self, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise TypeError("Number column holds a non-numeric value")
        return value


class DateComparator(TextComparator):
    # naive vs aware datetimes raise TypeError in compare(), which falls back to text
    def coerce(self, value: Any) -> datetime:
        return parse_date(value)


class BooleanComparator(TextComparator):
    def coerce(self, value: Any) -> int:
        if not isinstance(value, bool):
            raise TypeError("Boolean column holds a non-boolean value")
        return int(value)


_text_comparator = TextComparator()

_comparators: Dict[str, IValueComparator] = {
    "text": _text_comparator,
    "email": _text_comparator,
    "phone": _text_comparator,
    "select": _text_comparator,
    "number": NumberComparator(),
    "date": DateComparator(),
    "boolean": BooleanComparator(),
}


def get_comparator(column_type: str) -> IValueComparator:
    return _comparators.get(column_type, _text_comparator)
