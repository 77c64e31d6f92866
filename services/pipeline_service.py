"""
Sales pipeline operations.

Deals live on their customers; this module groups them into pipeline stage
columns, totals each column and wraps the deal edits the board performs
(add, move to another stage, delete) with logging and user-facing messages.

A deal edit changes the customer's deal_value_total, which feeds the fixed
scoring mode. Callers that display fixed scores should rescore afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Union

from domain.customer import Customer, Deal, DealStage, DealValue
from services.workflow_service import Notification, NotificationKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineDeal:
    """A deal together with the customer it belongs to."""

    customer_id: str
    company: str
    deal: Deal


@dataclass(frozen=True, slots=True)
class DealChange:
    """Deal after an edit (or the removed deal) plus the message to display."""

    deal: Deal
    notification: Notification


def deals_by_stage(customers: Iterable[Customer]) -> Dict[DealStage, List[PipelineDeal]]:
    """
    Group every customer's deals by stage.

    All stages are present in pipeline order, empty ones as empty lists.
    Within a stage, deals keep customer order, then each customer's deal order.
    """
    columns: Dict[DealStage, List[PipelineDeal]] = {stage: [] for stage in DealStage}
    for customer in customers:
        for deal in customer.deals:
            columns[deal.stage].append(
                PipelineDeal(customer_id=customer.customer_id, company=customer.company, deal=deal)
            )
    return columns


def stage_total(customers: Iterable[Customer], stage: Union[DealStage, str]) -> Decimal:
    target = DealStage(stage)
    return sum(
        (deal.value for customer in customers for deal in customer.deals if deal.stage is target),
        Decimal("0"),
    )


def stage_totals(customers: Iterable[Customer]) -> Dict[DealStage, Decimal]:
    totals: Dict[DealStage, Decimal] = {stage: Decimal("0") for stage in DealStage}
    for customer in customers:
        for deal in customer.deals:
            totals[deal.stage] += deal.value
    return totals


def add_deal(
    customer: Customer,
    title: str,
    value: DealValue,
    stage: Union[DealStage, str] = DealStage.LEAD,
    probability: int = 0,
) -> DealChange:
    """Attach a new deal to `customer` (ValueError on invalid deal values)."""

    deal = customer.add_deal(title, value, DealStage(stage), probability)

    logger.info(
        f"Deal {deal.deal_id} added for customer {customer.customer_id}",
        extra={
            "customer_id": customer.customer_id,
            "deal_id": deal.deal_id,
            "stage": deal.stage.value,
            "value": str(deal.value),
        },
    )
    return DealChange(
        deal=deal,
        notification=Notification(
            kind=NotificationKind.SUCCESS,
            message="Deal added successfully",
            customer_id=customer.customer_id,
        ),
    )


def move_deal(customer: Customer, deal_id: str, stage: Union[DealStage, str]) -> DealChange:
    """Move one of `customer`'s deals to `stage` (KeyError if the deal is unknown)."""

    previous = customer.find_deal(deal_id)
    moved = customer.move_deal(deal_id, stage)

    logger.info(
        f"Deal {deal_id} moved to {moved.stage.value}",
        extra={
            "customer_id": customer.customer_id,
            "deal_id": deal_id,
            "from_stage": previous.stage.value if previous is not None else None,
            "to_stage": moved.stage.value,
        },
    )
    return DealChange(
        deal=moved,
        notification=Notification(
            kind=NotificationKind.SUCCESS,
            message=f"Deal moved to {moved.stage.label}",
            customer_id=customer.customer_id,
        ),
    )


def remove_deal(customer: Customer, deal_id: str) -> DealChange:
    """Delete one of `customer`'s deals (KeyError if the deal is unknown)."""

    removed = customer.remove_deal(deal_id)

    logger.info(
        f"Deal {deal_id} deleted",
        extra={"customer_id": customer.customer_id, "deal_id": deal_id},
    )
    return DealChange(
        deal=removed,
        notification=Notification(
            kind=NotificationKind.SUCCESS,
            message="Deal deleted successfully",
            customer_id=customer.customer_id,
        ),
    )


__all__ = [
    "DealChange",
    "PipelineDeal",
    "add_deal",
    "deals_by_stage",
    "move_deal",
    "remove_deal",
    "stage_total",
    "stage_totals",
]
