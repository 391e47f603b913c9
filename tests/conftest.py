from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from invoice_manager.models import Invoice, InvoiceDraft, InvoiceStatus, LineItem
from invoice_manager.services import InvoiceManager, MemoryInvoiceStore


def make_draft(**overrides) -> InvoiceDraft:
    values = dict(
        invoice_number="INV-001",
        customer_name="Test Customer",
        customer_email="test@test.com",
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 12, 31),
        items=[LineItem.from_input("Test Item", 1, 100, id="item-1")],
        tax_rate=Decimal("10"),
    )
    values.update(overrides)
    return InvoiceDraft(**values)


def make_invoice(
    id: str,
    *,
    number: str = "INV-001",
    customer: str = "Customer",
    email: str = "customer@example.com",
    status: InvoiceStatus = InvoiceStatus.DRAFT,
    created_at: datetime | None = datetime(2024, 1, 1, tzinfo=timezone.utc),
    due_date: date | None = date(2024, 2, 1),
    total: str = "0",
) -> Invoice:
    amount = Decimal(total)
    return Invoice(
        id=id,
        invoice_number=number,
        customer_name=customer,
        customer_email=email,
        issue_date=date(2024, 1, 1),
        due_date=due_date,
        items=[LineItem.from_input("Item", 1, amount, id=f"{id}-item")],
        tax_rate=Decimal("0"),
        subtotal=amount,
        tax_amount=Decimal("0.00"),
        total=amount,
        status=status,
        created_at=created_at,
    )


@pytest.fixture
def store() -> MemoryInvoiceStore:
    return MemoryInvoiceStore()


@pytest.fixture
def manager(store: MemoryInvoiceStore) -> InvoiceManager:
    return InvoiceManager(store)
