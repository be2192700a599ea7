import time
import logging
from datetime import datetime, timezone
from typing import Dict, List

from core.formatting import format_locale_date
from models.records import Charge, Donor, Receipt, ReceiptItem

logger = logging.getLogger("donorbook.receipts")

VAT_MARKER = 'מע"מ'
VAT_SHARE = 0.15


def generate_receipt_number(now: datetime | None = None) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
        millis = int(time.time() * 1000)
    else:
        millis = int(now.timestamp() * 1000)
    return f"RCP-{now.year}-{str(millis)[-6:]}"


def _is_vat(item: ReceiptItem) -> bool:
    return VAT_MARKER in item.description


def calculate_totals(items: List[ReceiptItem]) -> Dict[str, float]:
    subtotal = sum(item.total for item in items if not _is_vat(item))
    tax = sum(item.total for item in items if _is_vat(item))
    return {"subtotal": subtotal, "tax": tax, "total": subtotal + tax}


def _default_items(charge: Charge) -> List[ReceiptItem]:
    net = charge.amount * (1 - VAT_SHARE)
    vat = charge.amount * VAT_SHARE
    return [
        ReceiptItem(id="1", description=charge.description, quantity=1, unit_price=net, total=net),
        ReceiptItem(id="2", description=f"{VAT_MARKER} 17%", quantity=1, unit_price=vat, total=vat),
    ]


def create_receipt_from_charge(charge: Charge, donor: Donor,
                               items: List[ReceiptItem] | None = None) -> Receipt:
    if items is None:
        items = _default_items(charge)

    totals = calculate_totals(items)
    receipt = Receipt(
        receipt_number=charge.receipt_number or generate_receipt_number(),
        charge_id=charge.id,
        customer_id=donor.id,
        customer_name=donor.name,
        customer_email=donor.email,
        customer_phone=donor.phone,
        customer_address=donor.address,
        amount=charge.amount,
        currency=charge.currency,
        description=charge.description,
        transaction_id=charge.transaction_id,
        status="paid" if charge.status == "completed" else "issued",
        items=items,
        subtotal=totals["subtotal"],
        tax=totals["tax"],
        total=charge.amount,
    )
    logger.info(f"Receipt {receipt.receipt_number} created for charge {charge.id}")
    return receipt


def format_receipt_for_email(receipt: Receipt, locale: str = "he-IL") -> str:
    lines = [
        f"קבלה מספר: {receipt.receipt_number}",
        f"תאריך: {format_locale_date(receipt.issue_date, locale)}",
        f"תורם: {receipt.customer_name}",
        "",
        "פירוט:",
    ]
    for item in receipt.items:
        lines.append(
            f"{item.description} - כמות: {item.quantity:g} - "
            f"מחיר: ₪{item.unit_price:.2f} - סה\"כ: ₪{item.total:.2f}"
        )
    lines += [
        "",
        f"סכום ביניים: ₪{receipt.subtotal:.2f}",
        f"{VAT_MARKER}: ₪{receipt.tax:.2f}",
        f"סה\"כ לתשלום: ₪{receipt.total:.2f}",
    ]
    if receipt.notes:
        lines += ["", f"הערות: {receipt.notes}"]
    lines += ["", "תודה על התרומה הנדיבה!"]
    return "\n".join(lines)
