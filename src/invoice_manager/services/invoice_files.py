"""
Import and export of invoice collections as JSON files.

Exports are UTF-8 JSON arrays of invoice records with a 2-space indent.
Imports must be a JSON array of invoice objects; anything else raises
ImportFormatError and leaves the caller's collection alone.
"""

from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import List, Sequence

from invoice_manager.lib import logs, objects
from invoice_manager.models.invoice import (
    Invoice,
    deserialize_invoices,
    serialize_invoices,
)

LOG = logs.logger(__file__)

INVALID_FORMAT = "Invalid file format"


class ImportFormatError(ValueError):
    """The import payload is not a JSON array of invoice records."""

    def __init__(self, message: str = INVALID_FORMAT) -> None:
        super().__init__(message)


def export_json(invoices: Sequence[Invoice]) -> str:
    """Serialize the collection to pretty-printed JSON."""
    return objects.to_json(serialize_invoices(invoices), indent=2)


def export_filename(today: date | None = None) -> str:
    """Return the download name, e.g. invoices-2024-01-15.json."""
    return f"invoices-{(today or date.today()).isoformat()}.json"


def write_export(
    invoices: Sequence[Invoice], directory: str | Path, today: date | None = None
) -> Path:
    """Write the export file into directory and return its path."""
    destination = Path(directory) / export_filename(today)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(export_json(invoices), encoding="utf-8")
    LOG.info("write_export - count:%s path:%s", len(invoices), destination)
    return destination


def parse_import(payload: str | bytes) -> List[Invoice]:
    """
    Parse an import file's contents.

    Args:
        payload: Raw file text or bytes (UTF-8).

    Returns:
        The imported invoices in file order.

    Raises:
        ImportFormatError: If the payload is not valid JSON, is not an
            array, or contains a non-object entry.
    """
    try:
        data = objects.from_json(payload)
    except ValueError as exc:
        raise ImportFormatError() from exc
    if not isinstance(data, list):
        raise ImportFormatError()
    if not all(isinstance(record, Mapping) for record in data):
        raise ImportFormatError()
    try:
        return deserialize_invoices(data)
    except ValueError as exc:
        raise ImportFormatError() from exc


def read_import(path: str | Path) -> List[Invoice]:
    """Read and parse an import file."""
    return parse_import(Path(path).read_bytes())
