"""
diskcache-backed implementation of InvoiceStore.

The collection is stored as one JSON string under a single key, the same
camelCase records used for export files, so a stored collection can be
inspected or exported without conversion.
"""

from pathlib import Path
from typing import List, Sequence

from invoice_manager.lib import caches, logs, objects, paths
from invoice_manager.models.invoice import (
    Invoice,
    deserialize_invoices,
    serialize_invoices,
)
from invoice_manager.services.invoice_store import InvoiceStore

LOG = logs.logger(__file__)

STORAGE_KEY = "invoices"


class DiskInvoiceStore(InvoiceStore):
    """
    Persists invoices in a diskcache directory.

    Attributes:
        cache_dir: Directory holding the cache files.
    """

    def __init__(self, cache_dir: str | Path | None = None) -> None:
        """
        Args:
            cache_dir: Cache directory; defaults to paths.data_dir().
        """
        self.cache_dir = Path(cache_dir) if cache_dir else paths.data_dir()
        self._cache = caches.DiskCache(self.cache_dir)
        LOG.info("DiskInvoiceStore - cache_dir:%s", self.cache_dir)

    def load(self) -> List[Invoice]:
        payload = self._cache.get(STORAGE_KEY)
        if not payload:
            return []
        records = objects.from_json(payload)
        if not isinstance(records, list):
            raise ValueError(f"Stored invoices are not a list: {type(records).__name__}")
        invoices = deserialize_invoices(records)
        LOG.debug("load - count:%s", len(invoices))
        return invoices

    def save(self, invoices: Sequence[Invoice]) -> bool:
        try:
            self._cache.set(STORAGE_KEY, objects.to_json(serialize_invoices(invoices)))
        except Exception:
            LOG.exception("save - failed to write %s invoices", len(invoices))
            return False
        LOG.debug("save - count:%s", len(invoices))
        return True

    def close(self) -> None:
        self._cache.close()
