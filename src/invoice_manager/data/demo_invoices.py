"""Sample invoices covering every status, used by the demo store."""

from datetime import date, datetime, timezone

from invoice_manager.models.invoice import InvoiceDraft, InvoiceStatus, LineItem
from invoice_manager.services.invoice_manager import build_invoice


def _demo(
    number: str,
    customer: str,
    email: str,
    issued: date,
    due: date,
    items: list[LineItem],
    status: InvoiceStatus,
    created_at: datetime,
    notes: str = "",
):
    draft = InvoiceDraft(
        invoice_number=number,
        customer_name=customer,
        customer_email=email,
        customer_address="",
        issue_date=issued,
        due_date=due,
        items=items,
        notes=notes,
    )
    return build_invoice(draft, id=f"demo-{number}", status=status, created_at=created_at)


DEMO_INVOICES = [
    _demo(
        "INV-1001",
        "Acme Corporation",
        "billing@acme.example",
        date(2024, 1, 15),
        date(2024, 2, 14),
        [
            LineItem.from_input("Website redesign", 1, "2500", id="demo-1001-1"),
            LineItem.from_input("Hosting (monthly)", 3, "49.99", id="demo-1001-2"),
        ],
        InvoiceStatus.PAID,
        datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc),
    ),
    _demo(
        "INV-1002",
        "Globex Ltd",
        "accounts@globex.example",
        date(2024, 2, 1),
        date(2024, 3, 2),
        [LineItem.from_input("Consulting hours", "12.5", "120", id="demo-1002-1")],
        InvoiceStatus.SENT,
        datetime(2024, 2, 1, 14, 0, tzinfo=timezone.utc),
        notes="Net 30",
    ),
    _demo(
        "INV-1003",
        "Initech",
        "ap@initech.example",
        date(2024, 2, 20),
        date(2024, 3, 5),
        [
            LineItem.from_input("TPS report review", 4, "75", id="demo-1003-1"),
            LineItem.from_input("Printer maintenance", 1, "0.1", id="demo-1003-2"),
        ],
        InvoiceStatus.OVERDUE,
        datetime(2024, 2, 20, 8, 15, tzinfo=timezone.utc),
    ),
    _demo(
        "INV-1004",
        "Umbrella Health",
        "finance@umbrella.example",
        date(2024, 3, 10),
        date(2024, 4, 9),
        [LineItem.from_input("Data migration", 1, "1800", id="demo-1004-1")],
        InvoiceStatus.DRAFT,
        datetime(2024, 3, 10, 16, 45, tzinfo=timezone.utc),
    ),
]
