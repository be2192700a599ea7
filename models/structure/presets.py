from typing import Any, Dict, List

from models.structure.table import ColumnDescriptor, TableConfiguration


def _shekels(value: Any, record: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"₪{value:,.2f}"
    return "-" if value is None else str(value)


DONORS_TABLE = TableConfiguration(
    columns=[
        ColumnDescriptor(key="name", label="שם", type="text", required=True),
        ColumnDescriptor(key="email", label="אימייל", type="email"),
        ColumnDescriptor(key="phone", label="טלפון", type="phone"),
        ColumnDescriptor(key="company", label="חברה", type="text"),
        ColumnDescriptor(key="address", label="כתובת", type="text", sortable=False),
        ColumnDescriptor(key="created_at", label="תאריך יצירה", type="date", filterable=False),
    ],
    addable=True,
    editable=True,
    deletable=True,
)

CHARGES_TABLE = TableConfiguration(
    columns=[
        ColumnDescriptor(key="description", label="תיאור", type="text"),
        ColumnDescriptor(key="customer_name", label="לקוח", type="text"),
        ColumnDescriptor(key="amount", label="סכום", type="number", filterable=False, format=_shekels),
        ColumnDescriptor(
            key="status", label="סטטוס", type="select",
            options=["completed", "pending", "failed", "refunded"],
        ),
        ColumnDescriptor(key="created_at", label="תאריך יצירה", type="date", filterable=False),
        ColumnDescriptor(key="receipt_number", label="מספר קבלה", type="text"),
    ],
)

FUNDS_TABLE = TableConfiguration(
    columns=[
        ColumnDescriptor(key="name", label="שם הקרן", type="text", required=True),
        ColumnDescriptor(key="fund_number", label="מספר קרן", type="text"),
        ColumnDescriptor(
            key="category", label="קטגוריה", type="select",
            options=["education", "health", "social", "religious", "emergency", "general"],
        ),
        ColumnDescriptor(
            key="status", label="סטטוס", type="select",
            options=["active", "inactive", "completed", "suspended"],
        ),
        ColumnDescriptor(key="manager_name", label="מנהל הקרן", type="text"),
        ColumnDescriptor(key="donation_count", label="מספר תרומות", type="number", filterable=False),
        ColumnDescriptor(key="start_date", label="תאריך התחלה", type="date", filterable=False),
        ColumnDescriptor(key="is_public", label="ציבורי", type="boolean"),
    ],
    addable=True,
    editable=True,
    deletable=True,
)

PRESETS: Dict[str, TableConfiguration] = {
    "donors": DONORS_TABLE,
    "charges": CHARGES_TABLE,
    "funds": FUNDS_TABLE,
}


def list_presets() -> List[str]:
    return list(PRESETS)


def get_preset(name: str) -> TableConfiguration | None:
    return PRESETS.get(name)
