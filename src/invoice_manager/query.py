"""
Filtering, search and sorting over an invoice collection.

query() applies the status filter, then the search filter, then the
created-at range, and finally sorts. The input sequence is never
modified; a new list is returned.

Ordering rules:
- total compares numerically.
- createdAt and dueDate compare as points in time. Invoices whose date is
  missing or did not parse always come after every dated invoice,
  whichever the direction.
- invoiceNumber and customerName compare as plain strings.
- Ties keep their original relative order.
"""

from datetime import datetime, time, timezone
from decimal import Decimal
from typing import Any, Callable, Iterable, List, Sequence, Tuple

from invoice_manager.models.common import (
    STATUS_ALL,
    DateRange,
    QueryCriteria,
    SortField,
    SortOrder,
)
from invoice_manager.models.invoice import Invoice, InvoiceStatus
from invoice_manager.utils import parse_datetime, parse_number, parse_range_bound

_ZERO = Decimal("0")


def matches_status(invoice: Invoice, status_filter: InvoiceStatus | str) -> bool:
    """True when the filter is "all" or equals the invoice status."""
    if status_filter == STATUS_ALL:
        return True
    return invoice.status == InvoiceStatus.parse(status_filter)


def matches_search(invoice: Invoice, search_term: str | None) -> bool:
    """Case-insensitive substring match on number, customer name or email."""
    normalized = (search_term or "").strip().lower()
    if not normalized:
        return True
    return any(normalized in value for value in invoice.searchable_terms())


def _range_start(bound: Any) -> datetime | None:
    bound = parse_range_bound(bound)
    if bound is None or isinstance(bound, datetime):
        return bound
    return datetime.combine(bound, time.min, tzinfo=timezone.utc)


def _range_end(bound: Any) -> datetime | None:
    bound = parse_range_bound(bound)
    if bound is None or isinstance(bound, datetime):
        return bound
    return datetime.combine(bound, time.max, tzinfo=timezone.utc)


def matches_date_range(invoice: Invoice, date_range: DateRange | None) -> bool:
    """
    True when created_at lies within the inclusive range.

    A date bound covers its whole UTC day. Invoices without a creation
    time are excluded as soon as either bound is set.
    """
    if date_range is None or date_range.is_open:
        return True
    created_at = parse_datetime(invoice.created_at)
    if created_at is None:
        return False
    if date_range.start is not None:
        start = _range_start(date_range.start)
        if start is not None and created_at < start:
            return False
    if date_range.end is not None:
        end = _range_end(date_range.end)
        if end is not None and created_at > end:
            return False
    return True


def _total_key(invoice: Invoice) -> Decimal:
    return parse_number(invoice.total) or _ZERO


def _time_key(value: Any) -> Tuple[bool, datetime]:
    """Sort key placing valid times first, in time order."""
    parsed = parse_datetime(value)
    if parsed is None:
        return True, datetime.min.replace(tzinfo=timezone.utc)
    return False, parsed


_SORT_KEYS: dict[SortField, Callable[[Invoice], Any]] = {
    SortField.INVOICE_NUMBER: lambda inv: inv.invoice_number or "",
    SortField.CUSTOMER_NAME: lambda inv: inv.customer_name or "",
    SortField.TOTAL: _total_key,
    SortField.CREATED_AT: lambda inv: _time_key(inv.created_at),
    SortField.DUE_DATE: lambda inv: _time_key(inv.due_date),
}


def sort_invoices(
    invoices: Iterable[Invoice],
    sort_field: SortField = SortField.CREATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
) -> List[Invoice]:
    """Return a stably sorted copy of the invoices."""
    sort_field = SortField(sort_field)
    key = _SORT_KEYS[sort_field]
    descending = SortOrder(sort_order) is SortOrder.DESC
    if sort_field in (SortField.CREATED_AT, SortField.DUE_DATE) and descending:
        # Undated invoices stay last, so only the time part is reversed
        dated, undated = [], []
        for invoice in invoices:
            (undated if key(invoice)[0] else dated).append(invoice)
        return sorted(dated, key=key, reverse=True) + undated
    return sorted(invoices, key=key, reverse=descending)


def query(invoices: Sequence[Invoice], criteria: QueryCriteria | None = None) -> List[Invoice]:
    """
    Filter and sort invoices for display.

    Args:
        invoices: The full collection.
        criteria: Filter, search and sort parameters; defaults when None.

    Returns:
        A new list; never longer than the input and never with duplicates.
    """
    criteria = criteria or QueryCriteria()
    selected = [
        invoice
        for invoice in invoices
        if matches_status(invoice, criteria.status_filter)
        and matches_search(invoice, criteria.search_term)
        and matches_date_range(invoice, criteria.date_range)
    ]
    return sort_invoices(selected, criteria.sort_field, criteria.sort_order)
