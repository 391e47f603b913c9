"""
Invoice Manager: billing documents with derived totals and list queries.

The package keeps a single user's invoices with locally persisted state
and JSON import/export. Its core is three pure engines:
- calculations: subtotal, tax and total with cent rounding
- validation: field-keyed error messages for invoice drafts
- query: status filter, text search, created-at range and sorting

Subpackages:
- models: Data models and serialization
- services: Persistence stores and the InvoiceManager
- lib: Logging, JSON and diskcache helpers
- utils: Parsing and formatting helpers
- data: Sample invoices
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
