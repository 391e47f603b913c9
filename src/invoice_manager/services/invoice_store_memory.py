"""
In-memory implementation of InvoiceStore.

Useful for tests and for the demo store, which starts from the sample
invoices in invoice_manager.data.
"""

from copy import deepcopy
from typing import List, Sequence

from invoice_manager.models.invoice import Invoice
from invoice_manager.services.invoice_store import InvoiceStore


class MemoryInvoiceStore(InvoiceStore):
    """Keeps a private copy of the last saved collection."""

    def __init__(self, invoices: Sequence[Invoice] | None = None) -> None:
        """
        Args:
            invoices: Initial collection, copied; empty when None.
        """
        self._invoices: List[Invoice] = deepcopy(list(invoices or []))
        self.save_count = 0

    def load(self) -> List[Invoice]:
        return deepcopy(self._invoices)

    def save(self, invoices: Sequence[Invoice]) -> bool:
        self._invoices = deepcopy(list(invoices))
        self.save_count += 1
        return True
