import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal
from pydantic import BaseModel, Field


def _short_id() -> str:
    return uuid.uuid4().hex[:9]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Donor(BaseModel):
    # --- Header ---
    id: str = Field(default_factory=_short_id)
    name: str

    # --- Body ---
    email: str = ""
    phone: str = ""
    company: str | None = None
    address: str | None = None

    # --- Footer ---
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class Charge(BaseModel):
    # --- Header ---
    id: str = Field(default_factory=_short_id)
    customer_id: str
    customer_name: str

    # --- Body ---
    fund_id: str | None = None
    fund_name: str | None = None
    amount: float
    currency: str = "ILS"
    description: str = ""
    status: Literal["pending", "completed", "failed", "refunded"] = "pending"
    transaction_id: str | None = None
    receipt_number: str | None = None

    # --- Footer ---
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class ReceiptItem(BaseModel):
    id: str
    description: str
    quantity: float = 1
    unit_price: float
    total: float


class Receipt(BaseModel):
    """
    Receipt issued for one charge.

    Attributes:
        receipt_number: RCP-<year>-<6 digits>
        items: Line items; the VAT line is the one mentioning 'מע"מ'
        subtotal: Sum of the non-VAT items
        tax: Sum of the VAT items
        total: Amount charged
    """

    # --- Header ---
    id: str = Field(default_factory=_short_id)
    receipt_number: str
    charge_id: str

    # --- Donor ---
    customer_id: str
    customer_name: str
    customer_email: str = ""
    customer_phone: str = ""
    customer_address: str | None = None

    # --- Body ---
    amount: float
    currency: str = "ILS"
    description: str = ""
    transaction_id: str | None = None
    items: List[ReceiptItem] = Field(default_factory=list)
    subtotal: float = 0
    tax: float = 0
    total: float = 0
    notes: str | None = None
    custom_fields: Dict[str, Any] | None = None

    # --- Footer ---
    issue_date: datetime = Field(default_factory=_now)
    due_date: datetime | None = None
    status: Literal["issued", "sent", "paid"] = "issued"
