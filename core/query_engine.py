import csv
import io
import logging
from collections.abc import Mapping
from typing import Any, List, Sequence

from core.constants.main_values import DEFAULT_LOCALE
from core.formatting import format_locale_date, to_text
from models.processors.comparators import get_comparator
from models.query import QueryState
from models.structure.table import ColumnDescriptor, TableConfiguration

logger = logging.getLogger("donorbook.query")


def get_value(record: Any, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def _contains(value: Any, needle: str) -> bool:
    if value is None:
        return False
    return needle in to_text(value).lower()


def apply_search(records: List[Any], configuration: TableConfiguration, term: str) -> List[Any]:
    if not configuration.searchable or not term:
        return records

    needle = term.lower()
    keys = configuration.column_keys()
    return [
        record for record in records
        if any(_contains(get_value(record, key), needle) for key in keys)
    ]


def apply_filters(records: List[Any], configuration: TableConfiguration, filter_values: dict) -> List[Any]:
    if not configuration.filterable:
        return records

    results = records
    for key, filter_value in filter_values.items():
        if not filter_value:
            continue

        column = configuration.get_column(key)
        if column is None or not column.filterable:
            logger.debug(f"Ignoring filter on '{key}': no filterable column")
            continue

        needle = filter_value.lower()
        results = [record for record in results if _contains(get_value(record, key), needle)]

    return results


def apply_sort(records: List[Any], configuration: TableConfiguration, query_state: QueryState) -> List[Any]:
    sort = query_state.sort
    if sort is None or not configuration.sortable:
        return records

    column = configuration.get_column(sort.key)
    if column is None or not column.sortable:
        logger.debug(f"Ignoring sort on '{sort.key}': no sortable column")
        return records

    defined = [r for r in records if get_value(r, sort.key) is not None]
    missing = [r for r in records if get_value(r, sort.key) is None]
    values = [get_value(r, sort.key) for r in defined]
    reverse = sort.direction == "desc"

    comparator = get_comparator(column.type)
    try:
        ordered = _sort_by_keys(defined, [comparator.coerce(v) for v in values], reverse)
    except (TypeError, ValueError) as e:
        # one value that does not fit the column type moves the whole column to text order
        logger.debug(f"Sorting '{sort.key}' as text: {e}")
        ordered = _sort_by_keys(defined, [to_text(v) for v in values], reverse)
    return ordered + missing


def _sort_by_keys(records: List[Any], keys: List[Any], reverse: bool) -> List[Any]:
    # sorted() stays stable with reverse=True, so equal keys keep input order
    order = sorted(range(len(records)), key=keys.__getitem__, reverse=reverse)
    return [records[i] for i in order]


def apply_query(records: Sequence[Any], configuration: TableConfiguration,
                query_state: QueryState | None = None) -> List[Any]:
    """
    Search, then filter, then sort. The input sequence is never mutated;
    a new list is returned on every call.
    """
    if query_state is None:
        query_state = QueryState()

    results = list(records)
    results = apply_search(results, configuration, query_state.search_term)
    results = apply_filters(results, configuration, query_state.filter_values)
    results = apply_sort(results, configuration, query_state)
    return results


def _export_field(column: ColumnDescriptor, value: Any, locale: str) -> str:
    if value is None:
        return ""
    if column.type == "date":
        return format_locale_date(value, locale)
    return to_text(value)


def export_delimited(records: Sequence[Any], configuration: TableConfiguration,
                     query_state: QueryState | None = None, delimiter: str = ",",
                     locale: str = DEFAULT_LOCALE, quote: bool = False) -> str:
    """
    Serializes records to delimited text: a header row of column labels,
    then one row per record.

    With query_state the current view is exported, otherwise the full data set.
    quote=False joins fields as-is, so a field holding the delimiter or a
    newline corrupts its row. quote=True applies RFC 4180 quoting.
    """
    if query_state is not None:
        records = apply_query(records, configuration, query_state)

    rows = [configuration.column_labels()]
    for record in records:
        rows.append([
            _export_field(column, get_value(record, column.key), locale)
            for column in configuration.columns
        ])

    if not quote:
        return "\n".join(delimiter.join(row) for row in rows)

    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=delimiter, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def render_cell(column: ColumnDescriptor, value: Any, record: Any, locale: str = DEFAULT_LOCALE) -> Any:
    if column.format is not None:
        return column.format(value, record)

    if value is None:
        return "-"

    if column.type == "date":
        return format_locale_date(value, locale)
    if column.type == "number":
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value:.2f}"
        return to_text(value)
    if column.type == "boolean":
        return "כן" if value else "לא"
    return to_text(value)


def render_rows(records: Sequence[Any], configuration: TableConfiguration,
                locale: str = DEFAULT_LOCALE) -> List[List[Any]]:
    return [
        [render_cell(column, get_value(record, column.key), record, locale) for column in configuration.columns]
        for record in records
    ]
