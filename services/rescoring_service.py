"""
Rescoring entry points.

`rescore` is the single call edit forms use after changing a customer:
merge the attribute updates, stamp last_contact_at, compute the score,
classify it and apply the workflow, in that order. Callers must not run the
calculator and the workflow separately, otherwise last_contact_at could be
stale when the temperature is reevaluated.

`apply_batch_scoring` replaces the active weights (only through the validator)
and optionally re-stamps every customer's last contact before a bulk redisplay.

Callers are responsible for serializing edits to the same customer and for
checking that the customer still exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from domain.customer import Customer, CustomerStatus
from domain.time import require_utc_timestamp, utc_now
from domain.weights import WeightConfiguration, WeightValidation
from services.forms import AttributeUpdate
from services.scoring_service import ScoreResult, ScoringMode, score_customer
from services.weight_service import ActiveWeightConfiguration
from services.workflow_service import (
    Notification,
    NotificationKind,
    WorkflowOutcome,
    apply_workflow,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RescoreResult:
    """Fully updated customer plus the derived score and trigger notifications."""

    customer: Customer
    result: ScoreResult
    workflow: WorkflowOutcome
    notifications: List[Notification]


@dataclass(frozen=True, slots=True)
class BatchScoringResult:
    """
    Outcome of a batch-scoring action.

    validation: result of validating the candidate weights
    customers_restamped: how many customers had last_contact_at refreshed
    notifications: messages for the caller (empty when rejected)
    """

    validation: WeightValidation
    customers_restamped: int = 0
    notifications: List[Notification] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.validation.accepted


def apply_attribute_updates(
    customer: Customer,
    attribute_updates: Union[AttributeUpdate, Mapping[str, Any], None],
) -> dict[str, Any]:
    """
    Merge validated form updates into `customer` in place.

    Raw mappings are validated through AttributeUpdate first (pydantic
    ValidationError on unknown fields or invalid values).

    Returns the changes that were applied.
    """

    if attribute_updates is None:
        return {}
    if not isinstance(attribute_updates, AttributeUpdate):
        attribute_updates = AttributeUpdate.model_validate(attribute_updates)

    changes = attribute_updates.changes()
    if "status" in changes:
        changes["status"] = CustomerStatus(changes["status"])

    for name, value in changes.items():
        setattr(customer, name, value)
    return changes


def rescore(
    customer: Customer,
    attribute_updates: Union[AttributeUpdate, Mapping[str, Any], None],
    weights: WeightConfiguration,
    *,
    now: Optional[datetime] = None,
    mode: ScoringMode = ScoringMode.WEIGHTED,
    include_deal_bonus: bool = False,
) -> RescoreResult:
    """
    Merge updates, refresh last contact, then score, classify and run the workflow.

    Args:
        customer: Customer to update in place
        attribute_updates: form updates (AttributeUpdate or raw mapping), or None
        weights: active weight configuration (read-only during evaluation)
        now: evaluation instant (default: current UTC time)
        mode: scoring variant to use
        include_deal_bonus: add the deal-value bonus in WEIGHTED mode

    Returns:
        RescoreResult with the updated customer, score/temperature and notifications

    Example:
        outcome = rescore(customer, {"budget": "high"}, active.current)
        print(outcome.result.score, outcome.result.temperature.value)
    """
    current = now if now is not None else utc_now()
    require_utc_timestamp("now", current)
    scoring_mode = ScoringMode(mode)

    changes = apply_attribute_updates(customer, attribute_updates)
    customer.touch(current)

    result = score_customer(
        customer,
        weights,
        as_of=current,
        mode=scoring_mode,
        include_deal_bonus=include_deal_bonus,
    )
    workflow = apply_workflow(customer, result.score, now=current)

    logger.info(
        f"Customer {customer.customer_id} rescored: {result.score} ({result.temperature.value})",
        extra={
            "customer_id": customer.customer_id,
            "score": result.score,
            "temperature": result.temperature.value,
            "changed_fields": sorted(changes),
            "scoring_mode": scoring_mode.value,
        },
    )

    return RescoreResult(
        customer=customer,
        result=result,
        workflow=workflow,
        notifications=list(workflow.notifications),
    )


def apply_batch_scoring(
    customers: Iterable[Customer],
    candidate: Union[WeightConfiguration, Mapping[str, Any], Sequence[int]],
    active: ActiveWeightConfiguration,
    *,
    restamp: bool = False,
    now: Optional[datetime] = None,
) -> BatchScoringResult:
    """
    Replace the active weights with `candidate` and optionally re-stamp every customer.

    A rejected candidate leaves both the active configuration and the customers untouched.
    """
    validation = active.replace(candidate)
    if not validation.accepted:
        return BatchScoringResult(validation=validation)

    current = now if now is not None else utc_now()
    customer_list = list(customers)

    restamped = 0
    if restamp:
        for customer in customer_list:
            customer.touch(current)
            restamped += 1

    logger.info(
        "Batch scoring applied",
        extra={
            "customers": len(customer_list),
            "restamped": restamped,
            "weights": active.current.as_dict(),
        },
    )

    return BatchScoringResult(
        validation=validation,
        customers_restamped=restamped,
        notifications=[
            Notification(
                kind=NotificationKind.SUCCESS,
                message=f"Batch scoring applied to {len(customer_list)} leads with new criteria",
            )
        ],
    )


__all__ = [
    "BatchScoringResult",
    "RescoreResult",
    "apply_attribute_updates",
    "apply_batch_scoring",
    "rescore",
]
