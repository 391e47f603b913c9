"""
Business-rule validation for invoice drafts.

validate() checks every rule and returns all failures at once as a
mapping from field key to message; an empty mapping means the draft may
be saved. Item fields are keyed item_<index>_<field>. The draft is never
modified.
"""

import re
from decimal import Decimal
from typing import Dict

from invoice_manager.models.invoice import InvoiceDraft, LineItem

INVOICE_NUMBER_REQUIRED = "Invoice number is required"
CUSTOMER_NAME_REQUIRED = "Customer name is required"
CUSTOMER_EMAIL_REQUIRED = "Customer email is required"
CUSTOMER_EMAIL_INVALID = "Please enter a valid email address"
DUE_DATE_REQUIRED = "Due date is required"
DUE_DATE_BEFORE_ISSUE = "Due date must be after issue date"
ITEMS_REQUIRED = "At least one item is required"
ITEM_DESCRIPTION_REQUIRED = "Item description is required"
ITEM_QUANTITY_INVALID = "Quantity must be greater than 0"
ITEM_PRICE_INVALID = "Price cannot be negative"
TAX_RATE_INVALID = "Tax rate must be between 0 and 100"

_EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
_ZERO = Decimal("0")
_MAX_TAX_RATE = Decimal("100")


class ValidationFailure(Exception):
    """Raised by callers that prefer an exception to an error mapping."""

    def __init__(self, errors: Dict[str, str]) -> None:
        super().__init__("; ".join(f"{key}: {message}" for key, message in errors.items()))
        self.errors = dict(errors)


def item_key(index: int, field_name: str) -> str:
    """Return the error key for a line item field."""
    return f"item_{index}_{field_name}"


def is_valid_email(value: str) -> bool:
    """Loose shape check: something@something.something with no spaces."""
    return _EMAIL_PATTERN.search(value) is not None


def validate(draft: InvoiceDraft) -> Dict[str, str]:
    """
    Check a draft against the invoice rules.

    Args:
        draft: The invoice as entered.

    Returns:
        Field key to error message; empty when the draft is valid.
    """
    errors: Dict[str, str] = {}

    if not draft.invoice_number.strip():
        errors["invoiceNumber"] = INVOICE_NUMBER_REQUIRED

    if not draft.customer_name.strip():
        errors["customerName"] = CUSTOMER_NAME_REQUIRED

    email = draft.customer_email.strip()
    if not email:
        errors["customerEmail"] = CUSTOMER_EMAIL_REQUIRED
    elif not is_valid_email(email):
        errors["customerEmail"] = CUSTOMER_EMAIL_INVALID

    if draft.due_date is None:
        errors["dueDate"] = DUE_DATE_REQUIRED
    elif draft.issue_date is not None and draft.due_date < draft.issue_date:
        errors["dueDate"] = DUE_DATE_BEFORE_ISSUE

    if draft.tax_rate is None or not _ZERO <= draft.tax_rate <= _MAX_TAX_RATE:
        errors["tax"] = TAX_RATE_INVALID

    if not draft.items:
        errors["items"] = ITEMS_REQUIRED
    for index, item in enumerate(draft.items):
        errors.update(validate_item(index, item))

    return errors


def validate_item(index: int, item: LineItem) -> Dict[str, str]:
    """Validate a single line item; keys are namespaced by index."""
    errors: Dict[str, str] = {}
    if not item.description.strip():
        errors[item_key(index, "description")] = ITEM_DESCRIPTION_REQUIRED
    if item.quantity is None or item.quantity <= _ZERO:
        errors[item_key(index, "quantity")] = ITEM_QUANTITY_INVALID
    if item.unit_price is None or item.unit_price < _ZERO:
        errors[item_key(index, "price")] = ITEM_PRICE_INVALID
    return errors


def ensure_valid(draft: InvoiceDraft) -> None:
    """Raise ValidationFailure when the draft has any errors."""
    errors = validate(draft)
    if errors:
        raise ValidationFailure(errors)
