"""Filesystem locations used by the persistence layer."""

import os
import tempfile
from pathlib import Path

_DATA_DIR_KEY = "INVOICE_MANAGER_DATA_DIR"


def temp_dir() -> Path:
    """Return the system temporary directory as a Path."""
    return Path(tempfile.gettempdir())


def data_dir() -> Path:
    """
    Return the directory where invoices are persisted.

    Uses INVOICE_MANAGER_DATA_DIR when set, otherwise a folder named
    invoice_manager inside the system temporary directory.
    """
    configured = os.getenv(_DATA_DIR_KEY, "").strip()
    if configured:
        return Path(configured).expanduser()
    return temp_dir() / "invoice_manager"
