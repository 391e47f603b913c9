"""
Data models and serialization helpers for the invoice manager.

This package provides:
- Invoice domain models (Invoice, InvoiceDraft, LineItem, Totals)
- Query models (QueryCriteria, DateRange, SortField, SortOrder)
- OperationResult returned by the invoice manager
- Serialization to and from the camelCase JSON records

All models use Python dataclasses.
"""

from invoice_manager.models.common import (
    STATUS_ALL,
    DateRange,
    OperationResult,
    QueryCriteria,
    SortField,
    SortOrder,
)
from invoice_manager.models.invoice import (
    DEFAULT_TAX_RATE,
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    LineItem,
    Totals,
    deserialize_invoice,
    deserialize_invoices,
    new_id,
    serialize_invoice,
    serialize_invoices,
)

__all__ = [
    "DEFAULT_TAX_RATE",
    "STATUS_ALL",
    "DateRange",
    "Invoice",
    "InvoiceDraft",
    "InvoiceStatus",
    "LineItem",
    "OperationResult",
    "QueryCriteria",
    "SortField",
    "SortOrder",
    "Totals",
    "deserialize_invoice",
    "deserialize_invoices",
    "new_id",
    "serialize_invoice",
    "serialize_invoices",
]
