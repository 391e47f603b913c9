"""
Sample data for the invoice manager.

Modules:
- demo_invoices: Invoice objects backing the "demo" store
"""
