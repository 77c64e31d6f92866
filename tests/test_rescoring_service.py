"""
Tests for `services/rescoring_service.py`.

Covers rules:
- rescore merges updates, stamps last_contact_at = now, then scores, classifies and runs the workflow.
- Invalid updates or an unknown scoring mode are rejected before anything on the customer changes.
- Batch scoring accepts five weights in factor order as well as a mapping.
- Batch scoring replaces weights only through the validator; a rejected
  candidate leaves the active weights and every customer untouched.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from domain.customer import CustomerStatus
from domain.temperature import LeadTemperature
from domain.weights import DEFAULT_WEIGHTS
from services.forms import AttributeUpdate
from services.rescoring_service import apply_batch_scoring, rescore
from services.scoring_service import ScoringMode, compute_score_weighted
from services.weight_service import ActiveWeightConfiguration


def test_rescore_merges_updates_and_promotes_hot_lead(make_customer, now) -> None:
    """Verify form updates are applied before scoring and a hot lead is promoted."""

    customer = make_customer(last_contact_at=now - timedelta(days=60))

    outcome = rescore(
        customer,
        {"companySize": "enterprise", "budget": "high", "timeline": "immediate", "industry": "healthcare"},
        DEFAULT_WEIGHTS,
        now=now,
    )

    assert outcome.customer is customer
    assert customer.company_size == "enterprise"
    assert customer.industry == "healthcare"
    assert customer.last_contact_at == now
    # 25 + 25 + 20 + 12 + 15 (contact just stamped)
    assert outcome.result.score == 97
    assert outcome.result.temperature is LeadTemperature.HOT
    assert customer.status is CustomerStatus.PROSPECT
    assert len(customer.automated_tasks) == 1
    assert outcome.notifications == outcome.workflow.notifications


def test_rescore_refreshes_stale_contact_before_classifying(make_customer, now) -> None:
    """Verify the engagement factor sees the refreshed contact time, not the stale one."""

    customer = make_customer(
        company_size="medium",
        budget="medium",
        timeline="medium",
        industry="technology",
        last_contact_at=now - timedelta(days=45),
    )
    assert compute_score_weighted(customer, DEFAULT_WEIGHTS, as_of=now) == 60

    outcome = rescore(customer, None, DEFAULT_WEIGHTS, now=now)

    assert outcome.result.score == 75
    assert outcome.result.temperature is LeadTemperature.WARM
    assert outcome.workflow.created_task.due_at == now + timedelta(days=2)


def test_rescore_accepts_validated_form(make_customer, now) -> None:
    """Verify an AttributeUpdate instance is accepted, including a status change."""

    customer = make_customer()
    update = AttributeUpdate(status="inactive", budget="low", timeline="long", industry="retail")

    outcome = rescore(customer, update, DEFAULT_WEIGHTS, now=now)

    assert customer.status is CustomerStatus.INACTIVE
    # 15 + 5 + 5 + 6 + 15
    assert outcome.result.score == 46
    assert outcome.result.temperature is LeadTemperature.LUKEWARM
    assert customer.tasks == []
    assert outcome.notifications == []


def test_rescore_rejects_unknown_fields_without_side_effects(make_customer, now) -> None:
    """Verify a bad update raises before the customer is touched."""

    contacted = now - timedelta(days=3)
    customer = make_customer(last_contact_at=contacted)

    with pytest.raises(ValidationError):
        rescore(customer, {"budget": "high", "favourite_colour": "blue"}, DEFAULT_WEIGHTS, now=now)

    assert customer.budget == "unknown"
    assert customer.last_contact_at == contacted
    assert customer.tasks == []


def test_rescore_rejects_values_outside_enumerations(make_customer, now) -> None:
    """Verify the form boundary refuses categorical values outside their set."""

    with pytest.raises(ValidationError):
        rescore(make_customer(), {"companySize": "galactic"}, DEFAULT_WEIGHTS, now=now)


def test_rescore_in_fixed_mode_adds_deal_bonus(make_customer, now) -> None:
    """Verify the fixed variant can be selected at the entry point."""

    customer = make_customer(company_size="large", budget="high", timeline="short", industry="technology")

    weighted = rescore(customer, None, DEFAULT_WEIGHTS, now=now)
    fixed = rescore(customer, None, DEFAULT_WEIGHTS, now=now, mode=ScoringMode.FIXED)

    assert weighted.result.score == 95
    assert fixed.result.score == 95  # no deals, no bonus


def test_batch_scoring_applies_weights_and_restamps(make_customer, now) -> None:
    """Verify accepted weights become active and every customer is re-stamped."""

    customers = [
        make_customer(customer_id="a", last_contact_at=now - timedelta(days=9)),
        make_customer(customer_id="b", last_contact_at=now - timedelta(days=40)),
    ]
    active = ActiveWeightConfiguration()

    result = apply_batch_scoring(
        customers,
        {"company_size": 20, "budget": 20, "timeline": 20, "industry": 20, "engagement": 20},
        active,
        restamp=True,
        now=now,
    )

    assert result.accepted is True
    assert result.customers_restamped == 2
    assert active.current.engagement == 20
    assert all(customer.last_contact_at == now for customer in customers)
    assert "2 leads" in result.notifications[0].message


def test_rejected_batch_scoring_leaves_state_intact(make_customer, now) -> None:
    """Verify a rejected configuration changes neither the weights nor any score."""

    contacted = now - timedelta(days=9)
    customer = make_customer(budget="high", last_contact_at=contacted)
    active = ActiveWeightConfiguration()
    accepted = apply_batch_scoring(
        [customer],
        {"company_size": 30, "budget": 30, "timeline": 20, "industry": 10, "engagement": 10},
        active,
        now=now,
    )
    assert accepted.accepted is True
    before = compute_score_weighted(customer, active.current, as_of=now)

    rejected = apply_batch_scoring(
        [customer],
        {"company_size": 30, "budget": 30, "timeline": 20, "industry": 10, "engagement": 9},
        active,
        restamp=True,
        now=now,
    )

    assert rejected.accepted is False
    assert rejected.validation.reason == "total must equal 100, got 99"
    assert rejected.customers_restamped == 0
    assert rejected.notifications == []
    assert active.current.as_dict() == {
        "company_size": 30,
        "budget": 30,
        "timeline": 20,
        "industry": 10,
        "engagement": 10,
    }
    assert customer.last_contact_at == contacted
    assert compute_score_weighted(customer, active.current, as_of=now) == before


def test_unknown_mode_leaves_customer_untouched(make_customer, now) -> None:
    """Verify an invalid scoring mode fails before updates are merged or contact is stamped."""

    contacted = now - timedelta(days=12)
    customer = make_customer(budget="low", last_contact_at=contacted)

    with pytest.raises(ValueError):
        rescore(customer, {"budget": "high"}, DEFAULT_WEIGHTS, now=now, mode="bogus")

    assert customer.budget == "low"
    assert customer.last_contact_at == contacted
    assert customer.tasks == []
    assert customer.status is CustomerStatus.LEAD


def test_fixed_mode_given_as_text(make_customer, now) -> None:
    """Verify the mode may be passed by value."""

    customer = make_customer(last_contact_at=now - timedelta(days=3))

    outcome = rescore(customer, None, DEFAULT_WEIGHTS, now=now, mode="fixed")

    assert customer.last_contact_at == now
    assert outcome.result.score == compute_score_weighted(customer, DEFAULT_WEIGHTS, as_of=now)


def test_batch_scoring_accepts_weights_in_factor_order(make_customer, now) -> None:
    """Verify five bare weights are validated and applied like a mapping."""

    active = ActiveWeightConfiguration()

    accepted = apply_batch_scoring([make_customer()], (30, 30, 20, 10, 10), active, now=now)
    rejected = apply_batch_scoring([make_customer()], [30, 30, 20, 10, 9], active, now=now)

    assert accepted.accepted is True
    assert active.current.company_size == 30
    assert active.current.engagement == 10
    assert rejected.accepted is False
    assert rejected.validation.reason == "total must equal 100, got 99"
    assert active.current.engagement == 10
