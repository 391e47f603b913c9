"""
Invoice domain models and serialization helpers.

The hierarchy is:

    Invoice
    ├── identifying fields (id, invoice number, status, created_at)
    ├── customer fields (name, email, address)
    ├── dates (issue, due)
    ├── LineItem[] (description, quantity, unit price)
    └── derived totals (subtotal, tax amount, total)

InvoiceDraft is the editable shape a form builds before the invoice is
validated and persisted. Serialization functions convert between the
dataclasses and the camelCase JSON records used for storage and for
import/export files.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Mapping, Sequence

from benedict import benedict

from invoice_manager.lib import logs
from invoice_manager.utils import (
    format_timestamp,
    parse_date,
    parse_datetime,
    parse_number,
)

LOG = logs.logger(__file__)

DEFAULT_TAX_RATE = Decimal("10")


class InvoiceStatus(str, Enum):
    """Lifecycle states; any state may be set from any other."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"

    @classmethod
    def parse(cls, value: Any) -> "InvoiceStatus | None":
        """Return the matching status, or None for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid.uuid4())


@dataclass(slots=True)
class LineItem:
    """
    One billable row of an invoice.

    quantity and unit_price are None when the entered value did not
    parse as a number; validation rejects such items and the calculation
    engine counts them as zero.
    """

    description: str = ""
    quantity: Decimal | None = Decimal("1")
    unit_price: Decimal | None = Decimal("0")
    id: str = field(default_factory=new_id)

    @classmethod
    def from_input(
        cls,
        description: Any = "",
        quantity: Any = 1,
        unit_price: Any = 0,
        id: str | None = None,
    ) -> "LineItem":
        """Build a line item from raw form values, parsing the numbers once."""
        return cls(
            description="" if description is None else str(description),
            quantity=parse_number(quantity),
            unit_price=parse_number(unit_price),
            id=id or new_id(),
        )

    def item_total(self) -> Decimal:
        """Unrounded display amount for this row."""
        return (self.quantity or Decimal("0")) * (self.unit_price or Decimal("0"))


@dataclass(slots=True)
class InvoiceDraft:
    """Editable invoice fields as entered by the user."""

    invoice_number: str = ""
    customer_name: str = ""
    customer_email: str = ""
    customer_address: str = ""
    issue_date: date | None = field(default_factory=date.today)
    due_date: date | None = None
    items: List[LineItem] = field(default_factory=lambda: [LineItem()])
    tax_rate: Decimal | None = DEFAULT_TAX_RATE
    notes: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "InvoiceDraft":
        """
        Build a draft from a camelCase form payload.

        Missing issue date defaults to today and a missing tax rate to
        the form default; every other absent field is left empty.
        """
        b = benedict(dict(payload), keypath_separator=None)
        issue_raw = b.get("issueDate")
        tax_raw = b.get("tax")
        return cls(
            invoice_number=_text(b.get("invoiceNumber")),
            customer_name=_text(b.get("customerName")),
            customer_email=_text(b.get("customerEmail")),
            customer_address=_text(b.get("customerAddress")),
            issue_date=date.today() if issue_raw in (None, "") else parse_date(issue_raw),
            due_date=parse_date(b.get("dueDate")),
            items=_parse_line_items(b.get("items")),
            tax_rate=DEFAULT_TAX_RATE if tax_raw in (None, "") else parse_number(tax_raw),
            notes=_text(b.get("notes")),
        )


@dataclass(slots=True)
class Totals:
    """Derived monetary amounts, each rounded to cents."""

    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


@dataclass(slots=True)
class Invoice:
    """A persisted invoice with derived totals."""

    id: str
    invoice_number: str
    customer_name: str
    customer_email: str
    issue_date: date | None
    due_date: date | None
    items: List[LineItem]
    tax_rate: Decimal
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    status: InvoiceStatus = InvoiceStatus.DRAFT
    created_at: datetime | None = None
    customer_address: str = ""
    notes: str = ""

    @property
    def totals(self) -> Totals:
        """Return the derived amounts as a Totals value."""
        return Totals(self.subtotal, self.tax_amount, self.total)

    def searchable_terms(self) -> List[str]:
        """Return the lowercased fields matched by free-text search."""
        terms = [self.invoice_number, self.customer_name, self.customer_email]
        return [value.lower() for value in terms if value]

    def to_draft(self) -> InvoiceDraft:
        """Return the editable fields as a draft for the edit form."""
        return InvoiceDraft(
            invoice_number=self.invoice_number,
            customer_name=self.customer_name,
            customer_email=self.customer_email,
            customer_address=self.customer_address,
            issue_date=self.issue_date,
            due_date=self.due_date,
            items=[
                LineItem(li.description, li.quantity, li.unit_price, li.id)
                for li in self.items
            ],
            tax_rate=self.tax_rate,
            notes=self.notes,
        )


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_line_item(li: Mapping[str, Any]) -> LineItem:
    """Parse a {id, description, quantity, price} record."""
    if not isinstance(li, Mapping):
        raise ValueError(f"Line item is not an object: {li!r}")
    return LineItem.from_input(
        description=li.get("description", ""),
        quantity=li.get("quantity"),
        unit_price=li.get("price"),
        id=_text(li.get("id")) or None,
    )


def _parse_line_items(raw: Any) -> List[LineItem]:
    """Parse the items array of a record; null means no items."""
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"Items is not an array: {raw!r}")
    return [_parse_line_item(li) for li in raw]


def _format_day(value: date | None) -> str:
    return value.isoformat() if value else ""


def serialize_line_item(item: LineItem) -> dict:
    """Convert a LineItem into its JSON record."""
    return {
        "id": item.id,
        "description": item.description,
        "quantity": item.quantity,
        "price": item.unit_price,
    }


def serialize_invoice(invoice: Invoice) -> dict:
    """Convert an Invoice dataclass into its camelCase JSON record."""
    return {
        "id": invoice.id,
        "invoiceNumber": invoice.invoice_number,
        "customerName": invoice.customer_name,
        "customerEmail": invoice.customer_email,
        "customerAddress": invoice.customer_address,
        "issueDate": _format_day(invoice.issue_date),
        "dueDate": _format_day(invoice.due_date),
        "items": [serialize_line_item(item) for item in invoice.items],
        "tax": invoice.tax_rate,
        "notes": invoice.notes,
        "subtotal": invoice.subtotal,
        "taxAmount": invoice.tax_amount,
        "total": invoice.total,
        "status": invoice.status.value,
        "createdAt": format_timestamp(invoice.created_at) if invoice.created_at else "",
    }


def deserialize_invoice(payload: Mapping[str, Any]) -> Invoice:
    """
    Convert a JSON record back into an Invoice dataclass.

    Uses benedict so absent or null keys fall back to defaults instead of
    raising KeyError. Dates that do not parse are kept as None. When any
    stored total is missing or not numeric, all three are re-derived from
    the items and tax rate.
    """
    from invoice_manager.calculations import compute_totals

    b = benedict(dict(payload), keypath_separator=None)
    items = _parse_line_items(b.get("items"))
    tax_rate = parse_number(b.get("tax")) or Decimal("0")

    stored = [parse_number(b.get(key)) for key in ("subtotal", "taxAmount", "total")]
    if any(value is None for value in stored):
        totals = compute_totals(items, tax_rate)
    else:
        totals = Totals(*stored)

    status = InvoiceStatus.parse(b.get("status", InvoiceStatus.DRAFT.value))
    if status is None:
        LOG.warning(
            "deserialize_invoice - unknown status:%s id:%s", b.get("status"), b.get("id")
        )
        status = InvoiceStatus.DRAFT

    return Invoice(
        id=_text(b.get("id")) or new_id(),
        invoice_number=_text(b.get("invoiceNumber")),
        customer_name=_text(b.get("customerName")),
        customer_email=_text(b.get("customerEmail")),
        customer_address=_text(b.get("customerAddress")),
        issue_date=parse_date(b.get("issueDate")),
        due_date=parse_date(b.get("dueDate")),
        items=items,
        tax_rate=tax_rate,
        subtotal=totals.subtotal,
        tax_amount=totals.tax_amount,
        total=totals.total,
        status=status,
        created_at=parse_datetime(b.get("createdAt")),
        notes=_text(b.get("notes")),
    )


def serialize_invoices(invoices: Sequence[Invoice]) -> List[dict]:
    """Serialize a collection, preserving order."""
    return [serialize_invoice(invoice) for invoice in invoices]


def deserialize_invoices(payload: Sequence[Mapping[str, Any]]) -> List[Invoice]:
    """Deserialize a collection, preserving order."""
    return [deserialize_invoice(record) for record in payload]
