from datetime import datetime

from backoffice.order_utils import order_copy_text, order_status_text

ORDER = {
    "order_id": "ord_1001",
    "order_status": "shipped",
    "total_order_fee": "256",
    "remark": "ring twice",
    "created_at": "2024-04-01T09:30:00Z",
    "updated_at": datetime(2024, 4, 2, 10, 5),
    "order_detail": [
        {"product_name": "Green Tea", "product_id": "prd_green", "size": "2", "price": "128",
         "promotion_note": "spring sale"},
        {"product_name": "Oolong", "product_id": "prd_oolong", "size": "1", "price": "0"},
    ],
    "contact_info": {"email": "buyer@example.com", "phone": "0912345678", "address": "8 Tea Lane"},
}


def test_status_text(t):
    assert order_status_text("paid", t) == "Paid"
    assert order_status_text(None, t) == "New"
    assert order_status_text("lost", t) == "New"


def test_copy_text_sections(t):
    text = order_copy_text(ORDER, t)
    sections = text.split("\n\n")
    assert len(sections) == 3
    assert sections[0].splitlines() == [
        "Order number: ord_1001",
        "Remark: ring twice",
        "Status: Shipped",
        "Total amount: 256",
        "Created at: 2024-04-01 09:30",
        "Updated at: 2024-04-02 10:05",
    ]
    assert "  Discount remark: spring sale" in sections[1]
    assert sections[1].count("Discount remark") == 1
    assert sections[2].splitlines()[1] == "  Email: buyer@example.com"


def test_copy_text_without_contact(t):
    order = dict(ORDER, contact_info=None, created_at=None, updated_at=None)
    text = order_copy_text(order, t)
    assert "Contact information" not in text
    assert "Created at" not in text
