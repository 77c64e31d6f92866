"""
Tests for `services/forms.py`.

Covers rules:
- Form fields accept snake_case and the browser's camelCase keys.
- Unknown fields, blank required fields and values outside enumerations are rejected.
- Only fields the form actually set are reported as changes.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from domain.customer import CustomerStatus
from services.forms import AttributeUpdate, NewCustomerForm


def test_attribute_update_reports_only_set_fields() -> None:
    """Verify changes() contains exactly the submitted fields as plain values."""

    update = AttributeUpdate.model_validate({"companySize": "large", "budget": "high"})

    assert update.changes() == {"company_size": "large", "budget": "high"}


def test_attribute_update_accepts_field_names() -> None:
    """Verify snake_case field names work alongside aliases."""

    update = AttributeUpdate.model_validate({"company_size": "medium"})

    assert update.changes() == {"company_size": "medium"}


@pytest.mark.parametrize(
    "payload",
    [
        {"unknown": "x"},
        {"budget": "enormous"},
        {"timeline": "yesterday"},
        {"name": "   "},
        {"status": "archived"},
    ],
)
def test_attribute_update_rejects_invalid_input(payload: dict) -> None:
    """Verify invalid edits are refused at the form boundary."""

    with pytest.raises(ValidationError):
        AttributeUpdate.model_validate(payload)


def test_new_customer_form_builds_lead_with_defaults(now) -> None:
    """Verify the add-customer form produces a lead with baseline attributes."""

    form = NewCustomerForm.model_validate(
        {"name": " Ana Ruiz ", "email": "ana@example.com", "company": "Ruiz Retail", "industry": "retail"}
    )

    customer = form.to_customer(now)

    assert customer.name == "Ana Ruiz"
    assert customer.status is CustomerStatus.LEAD
    assert customer.industry == "retail"
    assert customer.company_size == "small"
    assert customer.last_contact_at == now


def test_new_customer_form_requires_profile_fields() -> None:
    """Verify name, email and company are required."""

    with pytest.raises(ValidationError):
        NewCustomerForm.model_validate({"name": "Ana Ruiz", "email": "ana@example.com"})
    with pytest.raises(ValidationError):
        NewCustomerForm.model_validate({"name": "", "email": "ana@example.com", "company": "Ruiz"})
