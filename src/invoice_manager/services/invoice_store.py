"""
Abstract base class defining the invoice persistence contract.

A store loads the whole collection and saves the whole collection;
there is no per-record access. Implementations:
- MemoryInvoiceStore: In-process list for tests and demos
- DiskInvoiceStore: JSON payload persisted with diskcache
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from invoice_manager.models.invoice import Invoice


class InvoiceStore(ABC):
    """
    Abstract base class for invoice persistence.

    load() returns an empty list when nothing was saved yet; save() must
    accept an empty collection.
    """

    @abstractmethod
    def load(self) -> List[Invoice]:
        """
        Return the saved invoices in their saved order.

        Raises:
            Exception: Implementations may raise when stored data cannot be
                read; the invoice manager reports this as a load failure.
        """

    @abstractmethod
    def save(self, invoices: Sequence[Invoice]) -> bool:
        """
        Replace the saved collection.

        Returns:
            True on success, False when the data could not be written.
        """

    def close(self) -> None:
        """Release any underlying resources."""
