from copy import deepcopy
from datetime import date
from decimal import Decimal

import pytest
from conftest import make_draft

from invoice_manager.models import InvoiceDraft, LineItem
from invoice_manager.validation import (
    CUSTOMER_EMAIL_INVALID,
    CUSTOMER_EMAIL_REQUIRED,
    CUSTOMER_NAME_REQUIRED,
    DUE_DATE_BEFORE_ISSUE,
    DUE_DATE_REQUIRED,
    INVOICE_NUMBER_REQUIRED,
    ITEM_DESCRIPTION_REQUIRED,
    ITEM_PRICE_INVALID,
    ITEM_QUANTITY_INVALID,
    ITEMS_REQUIRED,
    TAX_RATE_INVALID,
    ValidationFailure,
    ensure_valid,
    validate,
)


def test_valid_draft_has_no_errors() -> None:
    assert validate(make_draft()) == {}


def test_missing_required_fields_reported_together() -> None:
    draft = make_draft(
        invoice_number="", customer_name="  ", customer_email="", due_date=None
    )

    assert validate(draft) == {
        "invoiceNumber": INVOICE_NUMBER_REQUIRED,
        "customerName": CUSTOMER_NAME_REQUIRED,
        "customerEmail": CUSTOMER_EMAIL_REQUIRED,
        "dueDate": DUE_DATE_REQUIRED,
    }


def test_messages_are_exact() -> None:
    assert INVOICE_NUMBER_REQUIRED == "Invoice number is required"
    assert CUSTOMER_EMAIL_INVALID == "Please enter a valid email address"
    assert DUE_DATE_BEFORE_ISSUE == "Due date must be after issue date"
    assert ITEM_QUANTITY_INVALID == "Quantity must be greater than 0"
    assert ITEM_PRICE_INVALID == "Price cannot be negative"


@pytest.mark.parametrize("email", ["plainaddress", "a@b", "name@domain", "@example.com"])
def test_malformed_email(email: str) -> None:
    errors = validate(make_draft(customer_email=email))

    assert errors == {"customerEmail": CUSTOMER_EMAIL_INVALID}


@pytest.mark.parametrize("email", ["test@test.com", "  first.last@sub.example.org "])
def test_accepted_email(email: str) -> None:
    assert validate(make_draft(customer_email=email)) == {}


def test_due_date_before_issue_date() -> None:
    draft = make_draft(issue_date=date(2024, 1, 15), due_date=date(2024, 1, 10))

    assert validate(draft) == {"dueDate": DUE_DATE_BEFORE_ISSUE}


def test_due_date_on_issue_date_is_allowed() -> None:
    draft = make_draft(issue_date=date(2024, 1, 15), due_date=date(2024, 1, 15))

    assert validate(draft) == {}


def test_missing_issue_date_skips_ordering_check() -> None:
    assert validate(make_draft(issue_date=None)) == {}


def test_zero_quantity() -> None:
    draft = make_draft(items=[LineItem.from_input("Test Item", 0, 10)])

    assert validate(draft) == {"item_0_quantity": ITEM_QUANTITY_INVALID}


def test_negative_price() -> None:
    draft = make_draft(items=[LineItem.from_input("Test Item", 1, -10)])

    assert validate(draft) == {"item_0_price": ITEM_PRICE_INVALID}


def test_unparseable_item_numbers_are_invalid() -> None:
    draft = make_draft(items=[LineItem.from_input("Test Item", "abc", "")])

    assert validate(draft) == {
        "item_0_quantity": ITEM_QUANTITY_INVALID,
        "item_0_price": ITEM_PRICE_INVALID,
    }


def test_item_errors_are_keyed_by_position() -> None:
    draft = make_draft(
        items=[
            LineItem.from_input("Good", 1, 1),
            LineItem.from_input(" ", "-2", 5),
        ]
    )

    assert validate(draft) == {
        "item_1_description": ITEM_DESCRIPTION_REQUIRED,
        "item_1_quantity": ITEM_QUANTITY_INVALID,
    }


def test_free_item_is_allowed() -> None:
    draft = make_draft(items=[LineItem.from_input("Sample", 1, 0)])

    assert validate(draft) == {}


def test_empty_items() -> None:
    assert validate(make_draft(items=[])) == {"items": ITEMS_REQUIRED}


@pytest.mark.parametrize("rate", [None, Decimal("-1"), Decimal("100.01")])
def test_tax_rate_out_of_range(rate) -> None:
    assert validate(make_draft(tax_rate=rate)) == {"tax": TAX_RATE_INVALID}


def test_validation_does_not_modify_draft() -> None:
    draft = make_draft(invoice_number="  INV-9  ", customer_email=" x@y.z ")
    before = deepcopy(draft)

    validate(draft)

    assert draft == before
    assert draft.invoice_number == "  INV-9  "


def test_ensure_valid_raises_with_errors() -> None:
    with pytest.raises(ValidationFailure) as excinfo:
        ensure_valid(make_draft(invoice_number=""))

    assert excinfo.value.errors == {"invoiceNumber": INVOICE_NUMBER_REQUIRED}


def test_draft_from_form_payload() -> None:
    draft = InvoiceDraft.from_dict(
        {
            "invoiceNumber": "INV-001",
            "customerName": "Test Customer",
            "customerEmail": "test@test.com",
            "issueDate": "2024-06-01",
            "dueDate": "2024-12-31",
            "items": [{"id": "1", "description": "Test Item", "quantity": 1, "price": -10}],
        }
    )

    assert draft.tax_rate == Decimal("10")
    assert draft.items[0].id == "1"
    assert validate(draft) == {"item_0_price": ITEM_PRICE_INVALID}


def test_draft_from_form_payload_defaults_issue_date_to_today() -> None:
    draft = InvoiceDraft.from_dict({"invoiceNumber": "INV-002"})

    assert draft.issue_date == date.today()
    assert draft.due_date is None
    assert draft.items == []


def test_out_of_range_item_numbers_are_invalid() -> None:
    draft = make_draft(items=[LineItem.from_input("Test Item", "1e500", "1e500")])

    assert validate(draft) == {
        "item_0_quantity": ITEM_QUANTITY_INVALID,
        "item_0_price": ITEM_PRICE_INVALID,
    }


def test_draft_from_form_payload_requires_item_array() -> None:
    with pytest.raises(ValueError):
        InvoiceDraft.from_dict({"invoiceNumber": "INV-003", "items": 5})
