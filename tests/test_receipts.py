from datetime import date, datetime, timezone

import pytest

from core.hebrew_date import format_hebrew_number, to_hebrew_date, to_short_hebrew_date
from core.receipts import (calculate_totals, create_receipt_from_charge, format_receipt_for_email,
                           generate_receipt_number)
from models.records import Charge, Donor, ReceiptItem


@pytest.fixture
def donor():
    return Donor(id="d1", name="Dan Cohen", email="dan@example.com", phone="050-0000000")


@pytest.fixture
def charge():
    return Charge(id="c1", customer_id="d1", customer_name="Dan Cohen", amount=100,
                  description="Donation", status="completed", transaction_id="TZ123")


def test_receipt_number_format():
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    assert generate_receipt_number(now) == "RCP-2024-600000"
    assert generate_receipt_number().startswith(f"RCP-{datetime.now(timezone.utc).year}-")


def test_calculate_totals_splits_vat():
    items = [
        ReceiptItem(id="1", description="Donation", unit_price=80, total=80),
        ReceiptItem(id="2", description="Books", quantity=2, unit_price=5, total=10),
        ReceiptItem(id="3", description='מע"מ 17%', unit_price=15, total=15),
    ]
    assert calculate_totals(items) == {"subtotal": 90, "tax": 15, "total": 105}


def test_receipt_from_charge_uses_default_items(charge, donor):
    receipt = create_receipt_from_charge(charge, donor)

    assert receipt.status == "paid"
    assert receipt.total == 100
    assert receipt.subtotal == pytest.approx(85)
    assert receipt.tax == pytest.approx(15)
    assert [item.description for item in receipt.items] == ["Donation", 'מע"מ 17%']
    assert receipt.customer_email == "dan@example.com"
    assert receipt.receipt_number.startswith("RCP-")


def test_receipt_keeps_existing_number_and_items(charge, donor):
    pending = charge.model_copy(update={"status": "pending", "receipt_number": "RCP-2023-000001"})
    items = [ReceiptItem(id="1", description="Torah fund", unit_price=100, total=100)]

    receipt = create_receipt_from_charge(pending, donor, items)

    assert receipt.receipt_number == "RCP-2023-000001"
    assert receipt.status == "issued"
    assert receipt.subtotal == 100
    assert receipt.tax == 0


def test_receipt_with_empty_items_gets_no_default_items(charge, donor):
    receipt = create_receipt_from_charge(charge, donor, items=[])

    assert receipt.items == []
    assert receipt.subtotal == 0
    assert receipt.tax == 0
    assert receipt.total == 100


def test_receipt_email_text(charge, donor):
    receipt = create_receipt_from_charge(charge, donor).model_copy(update={"notes": "Thank you"})
    text = format_receipt_for_email(receipt)

    assert text.startswith(f"קבלה מספר: {receipt.receipt_number}")
    assert "תורם: Dan Cohen" in text
    assert 'סה"כ לתשלום: ₪100.00' in text
    assert "הערות: Thank you" in text
    assert text.endswith("תודה על התרומה הנדיבה!")


def test_hebrew_numerals():
    assert format_hebrew_number(1) == "א'"
    assert format_hebrew_number(15) == 'ט"ו'
    assert format_hebrew_number(30) == "ל'"
    assert format_hebrew_number(31) == "31"


def test_hebrew_date():
    # 2024-03-15 is 5 Adar II 5784
    full = to_hebrew_date(date(2024, 3, 15))
    short = to_short_hebrew_date(datetime(2024, 3, 15, 18, 0))

    assert full.startswith("ה' ")
    assert "תשפ" in full
    assert short.startswith("ה' ")
    assert full.startswith(short)
    assert "תשפ" not in short


def test_hebrew_date_of_invalid_value_is_empty():
    assert to_hebrew_date("not a date") == ""
    assert to_short_hebrew_date(None) == ""
