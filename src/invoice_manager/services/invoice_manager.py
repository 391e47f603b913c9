"""
Invoice collection management.

InvoiceManager owns the caller's invoice collection and a persistence
store. It validates drafts, derives totals, assigns identifiers and
creation times, and saves after every change. Expected failures come
back as OperationResult values and set the user-facing error message;
they are never raised.
"""

from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import List

from invoice_manager.calculations import compute_totals
from invoice_manager.lib import logs
from invoice_manager.models.common import OperationResult, QueryCriteria
from invoice_manager.models.invoice import (
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    new_id,
)
from invoice_manager.query import query
from invoice_manager.services.invoice_files import (
    ImportFormatError,
    export_json,
    parse_import,
    write_export,
)
from invoice_manager.services.invoice_store import InvoiceStore
from invoice_manager.utils import utc_now
from invoice_manager.validation import validate

LOG = logs.logger(__file__)

LOAD_FAILED = "Failed to load invoices from storage"
SAVE_FAILED = "Failed to save invoices to storage"
EXPORT_FAILED = "Failed to export invoices"
IMPORT_FAILED = "Failed to import invoices"
READ_FAILED = "Failed to read file"
NOT_FOUND = "Invoice not found"
INVALID_STATUS = "Invalid status"


class InvoiceNotFoundError(KeyError):
    """No invoice has the requested id."""


def build_invoice(
    draft: InvoiceDraft,
    *,
    id: str | None = None,
    status: InvoiceStatus = InvoiceStatus.DRAFT,
    created_at: datetime | None = None,
) -> Invoice:
    """
    Turn a validated draft into an Invoice with freshly derived totals.

    Totals are always recomputed here; callers cannot supply them.
    """
    totals = compute_totals(draft.items, draft.tax_rate)
    return Invoice(
        id=id or new_id(),
        invoice_number=draft.invoice_number.strip(),
        customer_name=draft.customer_name.strip(),
        customer_email=draft.customer_email.strip(),
        customer_address=draft.customer_address,
        issue_date=draft.issue_date,
        due_date=draft.due_date,
        items=[replace(item) for item in draft.items],
        tax_rate=draft.tax_rate,
        subtotal=totals.subtotal,
        tax_amount=totals.tax_amount,
        total=totals.total,
        status=status,
        created_at=created_at or utc_now(),
        notes=draft.notes,
    )


class InvoiceManager:
    """
    Create, edit, delete, list, import and export invoices.

    Attributes:
        error: Last user-facing failure message, or None.
    """

    def __init__(self, store: InvoiceStore) -> None:
        """
        Load the saved collection from store.

        Args:
            store: Persistence provider.
        """
        self._store = store
        self._invoices: List[Invoice] = []
        self.error: str | None = None
        self.reload()

    @property
    def invoices(self) -> List[Invoice]:
        """A copy of the current collection, in insertion order."""
        return list(self._invoices)

    def __len__(self) -> int:
        return len(self._invoices)

    def reload(self) -> bool:
        """Replace the collection with what the store holds."""
        try:
            self._invoices = list(self._store.load())
        except Exception:
            LOG.exception("reload - failed to load invoices")
            self._invoices = []
            self.error = LOAD_FAILED
            return False
        LOG.info("reload - count:%s", len(self._invoices))
        return True

    def clear_error(self) -> None:
        self.error = None

    def get_invoice(self, invoice_id: str) -> Invoice:
        """
        Return the invoice with the given id.

        Raises:
            InvoiceNotFoundError: If no invoice has that id.
        """
        return self._locate(invoice_id)[1]

    def list_invoices(self, criteria: QueryCriteria | None = None) -> List[Invoice]:
        """Return the filtered and sorted view of the collection."""
        return query(self._invoices, criteria)

    def create_invoice(self, draft: InvoiceDraft) -> OperationResult:
        """Validate the draft and append it as a new draft-status invoice."""
        self.error = None
        errors = validate(draft)
        if errors:
            LOG.info("create_invoice - rejected fields:%s", sorted(errors))
            return OperationResult(success=False, errors=errors)

        invoice = build_invoice(draft)
        self._invoices.append(invoice)
        LOG.info("create_invoice - id:%s number:%s", invoice.id, invoice.invoice_number)
        self._persist()
        return OperationResult(success=True, invoice=invoice)

    def update_invoice(self, invoice_id: str, draft: InvoiceDraft) -> OperationResult:
        """
        Replace an invoice's editable fields and re-derive its totals.

        The id, status and creation time are kept.
        """
        self.error = None
        try:
            index, current = self._locate(invoice_id)
        except InvoiceNotFoundError:
            return self._fail(NOT_FOUND)

        errors = validate(draft)
        if errors:
            LOG.info("update_invoice - id:%s rejected fields:%s", invoice_id, sorted(errors))
            return OperationResult(success=False, errors=errors)

        updated = build_invoice(
            draft,
            id=current.id,
            status=current.status,
            created_at=current.created_at,
        )
        self._invoices[index] = updated
        LOG.info("update_invoice - id:%s", invoice_id)
        self._persist()
        return OperationResult(success=True, invoice=updated)

    def set_status(self, invoice_id: str, status: InvoiceStatus | str) -> OperationResult:
        """Move an invoice to any status; no transition rules apply."""
        self.error = None
        resolved = InvoiceStatus.parse(status)
        if resolved is None:
            return self._fail(INVALID_STATUS)
        try:
            _, current = self._locate(invoice_id)
        except InvoiceNotFoundError:
            return self._fail(NOT_FOUND)

        current.status = resolved
        LOG.info("set_status - id:%s status:%s", invoice_id, resolved.value)
        self._persist()
        return OperationResult(success=True, invoice=current)

    def delete_invoice(self, invoice_id: str) -> OperationResult:
        """Remove an invoice permanently."""
        self.error = None
        try:
            index, _ = self._locate(invoice_id)
        except InvoiceNotFoundError:
            return self._fail(NOT_FOUND)

        del self._invoices[index]
        LOG.info("delete_invoice - id:%s", invoice_id)
        self._persist()
        return OperationResult(success=True)

    def export_invoices(self) -> str:
        """Return the whole collection as pretty-printed JSON."""
        return export_json(self._invoices)

    def export_to_file(self, directory: str | Path) -> OperationResult:
        """Write invoices-YYYY-MM-DD.json into directory."""
        self.error = None
        try:
            write_export(self._invoices, directory)
        except OSError:
            LOG.exception("export_to_file - directory:%s", directory)
            return self._fail(EXPORT_FAILED)
        return OperationResult(success=True, count=len(self._invoices))

    def import_invoices(self, payload: str | bytes) -> OperationResult:
        """
        Replace the collection with the invoices in payload.

        On any format error the current collection is kept.
        """
        self.error = None
        try:
            imported = parse_import(payload)
        except ImportFormatError as exc:
            LOG.warning("import_invoices - %s", exc)
            self.error = IMPORT_FAILED
            return OperationResult(success=False, error=str(exc))

        self._invoices = imported
        LOG.info("import_invoices - count:%s", len(imported))
        self._persist()
        return OperationResult(success=True, count=len(imported))

    def import_file(self, path: str | Path) -> OperationResult:
        """Read path and import its contents."""
        try:
            payload = Path(path).read_bytes()
        except OSError:
            LOG.exception("import_file - path:%s", path)
            return self._fail(READ_FAILED)
        return self.import_invoices(payload)

    def _locate(self, invoice_id: str) -> tuple[int, Invoice]:
        for index, invoice in enumerate(self._invoices):
            if invoice.id == invoice_id:
                return index, invoice
        raise InvoiceNotFoundError(invoice_id)

    def _persist(self) -> None:
        if not self._store.save(self._invoices):
            self.error = SAVE_FAILED

    def _fail(self, message: str) -> OperationResult:
        self.error = message
        return OperationResult(success=False, error=message)

