"""
Service layer for the invoice manager.

get_invoice_store() returns the persistence provider selected by the
INVOICE_MANAGER_STORE environment variable:
- memory: Empty in-process store
- demo: In-process store seeded with the sample invoices
- disk: diskcache-backed store under INVOICE_MANAGER_DATA_DIR (default)

InvoiceManager wraps a store with the create/edit/delete, query and
import/export operations.
"""

import os
from typing import Callable, Dict

from invoice_manager.lib import logs
from invoice_manager.services.invoice_files import ImportFormatError
from invoice_manager.services.invoice_manager import (
    InvoiceManager,
    InvoiceNotFoundError,
)
from invoice_manager.services.invoice_store import InvoiceStore
from invoice_manager.services.invoice_store_disk import DiskInvoiceStore
from invoice_manager.services.invoice_store_memory import MemoryInvoiceStore

LOG = logs.logger(__file__)


def _demo_store() -> InvoiceStore:
    from invoice_manager.data.demo_invoices import DEMO_INVOICES

    return MemoryInvoiceStore(DEMO_INVOICES)


_STORE_REGISTRY: Dict[str, Callable[[], InvoiceStore]] = {
    "memory": MemoryInvoiceStore,
    "demo": _demo_store,
    "disk": DiskInvoiceStore,
}


def get_invoice_store(kind: str | None = None) -> InvoiceStore:
    """Return a new store of the configured kind."""
    resolved_kind = (kind or os.getenv("INVOICE_MANAGER_STORE", "disk")).lower()
    LOG.info("get_invoice_store - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _STORE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown invoice store kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


def get_invoice_manager(kind: str | None = None) -> InvoiceManager:
    """Return an InvoiceManager over a freshly created store."""
    return InvoiceManager(get_invoice_store(kind))


__all__ = [
    "DiskInvoiceStore",
    "ImportFormatError",
    "InvoiceManager",
    "InvoiceNotFoundError",
    "InvoiceStore",
    "MemoryInvoiceStore",
    "get_invoice_manager",
    "get_invoice_store",
]
