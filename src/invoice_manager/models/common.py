"""
Query criteria and operation result models.

This module defines the values a list view passes to the query engine
(status filter, search term, created-at range, sort field and order)
and the result object the invoice manager returns from every mutating
operation.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict

from invoice_manager.models.invoice import Invoice, InvoiceStatus
from invoice_manager.utils import parse_range_bound

STATUS_ALL = "all"


class SortField(str, Enum):
    """Fields the invoice list can be ordered by."""

    INVOICE_NUMBER = "invoiceNumber"
    CUSTOMER_NAME = "customerName"
    CREATED_AT = "createdAt"
    DUE_DATE = "dueDate"
    TOTAL = "total"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortOrder":
        """Return the opposite direction."""
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


@dataclass(slots=True)
class DateRange:
    """
    Inclusive bounds on an invoice's creation time.

    Either bound may be omitted. A plain date covers the whole day.
    from_dict accepts ISO or m/d/y strings; unparseable bounds are dropped.

    Attributes:
        start: Earliest accepted creation date or time.
        end: Latest accepted creation date or time.
    """

    start: date | datetime | None = None
    end: date | datetime | None = None

    @property
    def is_open(self) -> bool:
        """True when neither bound is set."""
        return self.start is None and self.end is None


@dataclass(slots=True)
class QueryCriteria:
    """
    Combined filter, search and sort parameters for the invoice list.

    Defaults match the list view's initial state: all statuses, no
    search, no range, newest first.

    Attributes:
        status_filter: "all" or an InvoiceStatus.
        search_term: Case-insensitive text matched against number, name, email.
        date_range: Bounds on created_at.
        sort_field: Field to order by.
        sort_order: Ascending or descending.
    """

    status_filter: InvoiceStatus | str = STATUS_ALL
    search_term: str = ""
    date_range: DateRange = field(default_factory=DateRange)
    sort_field: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    def sorted_by(self, sort_field: SortField) -> "QueryCriteria":
        """
        Return criteria re-sorted the way a column header click does.

        Selecting the active field flips the direction; selecting another
        field sorts it ascending.
        """
        if sort_field == self.sort_field:
            order = self.sort_order.toggled()
        else:
            order = SortOrder.ASC
        return QueryCriteria(
            status_filter=self.status_filter,
            search_term=self.search_term,
            date_range=self.date_range,
            sort_field=sort_field,
            sort_order=order,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "QueryCriteria":
        """Deserialize from a camelCase dictionary."""
        if not data:
            return cls()
        date_range = data.get("dateRange") or {}
        status = data.get("statusFilter", STATUS_ALL)
        return cls(
            status_filter=InvoiceStatus.parse(status) or STATUS_ALL,
            search_term=data.get("searchTerm") or "",
            date_range=DateRange(
                start=parse_range_bound(date_range.get("start")),
                end=parse_range_bound(date_range.get("end")),
            ),
            sort_field=SortField(data.get("sortField", SortField.CREATED_AT.value)),
            sort_order=SortOrder(data.get("sortOrder", SortOrder.DESC.value)),
        )


@dataclass(slots=True)
class OperationResult:
    """
    Outcome of an invoice manager operation.

    Attributes:
        success: Whether the operation took effect.
        invoice: The created or updated invoice, when there is one.
        count: Number of records imported.
        errors: Field-keyed validation messages.
        error: User-facing failure message.
    """

    success: bool
    invoice: Invoice | None = None
    count: int = 0
    errors: Dict[str, str] = field(default_factory=dict)
    error: str | None = None

    def __bool__(self) -> bool:
        return self.success
