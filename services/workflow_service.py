"""
Workflow trigger for freshly scored customers.

Policy, evaluated against the temperature of the given score:
- hot:      if status is lead, promote to prospect and replace automated tasks
            with an urgent follow-up due now (high priority). A hot customer
            that is not a lead is left unchanged.
- warm:     replace automated tasks with a follow-up due in 2 days (medium).
- cold:     replace automated tasks with a nurture action due in 7 days (low).
- lukewarm: no change and no notification.

Replacing means removing every task with automated=True before inserting the
new one, so a customer never holds more than one automated task. User-created
tasks are never touched.

The customer is mutated in place; no I/O happens here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from domain.customer import Customer, CustomerStatus
from domain.task import Task, TaskPriority, is_automated
from domain.temperature import LeadTemperature, classify
from domain.time import require_utc_timestamp, utc_now

logger = logging.getLogger(__name__)

WARM_FOLLOW_UP_DAYS = 2
COLD_NURTURE_DAYS = 7


class NotificationKind(str, Enum):
    SUCCESS = "success"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Notification:
    """User-facing message for the host UI to present."""

    kind: NotificationKind
    message: str
    customer_id: Optional[str] = None


@dataclass(slots=True)
class WorkflowOutcome:
    """
    Result of applying the workflow to one customer.

    customer: the same (mutated) Customer instance that was passed in
    temperature: temperature the policy was evaluated against
    promoted: True if status moved from lead to prospect
    created_task: automated task inserted by this run, if any
    removed_tasks: automated tasks replaced by this run
    notifications: messages for the caller to display
    """

    customer: Customer
    temperature: LeadTemperature
    promoted: bool = False
    created_task: Optional[Task] = None
    removed_tasks: List[Task] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)


def _replace_automated_task(
    outcome: WorkflowOutcome,
    *,
    title: str,
    due_at: datetime,
    priority: TaskPriority,
) -> None:
    customer = outcome.customer
    outcome.removed_tasks = customer.remove_tasks_where(is_automated)
    task = Task.new(
        title,
        due_at,
        priority,
        automated=True,
        trigger=outcome.temperature,
    )
    customer.tasks.append(task)
    outcome.created_task = task


def apply_workflow(
    customer: Customer,
    score: int,
    *,
    now: Optional[datetime] = None,
) -> WorkflowOutcome:
    """
    Apply the temperature policy for `score` to `customer`.

    Args:
        customer: Customer to update in place
        score: freshly computed score for this customer
        now: evaluation instant used for task due dates (default: current UTC time)

    Returns:
        WorkflowOutcome describing the mutations and the notifications to show

    Example:
        outcome = apply_workflow(customer, 85)
        for note in outcome.notifications:
            print(note.message)
    """
    current = now if now is not None else utc_now()
    require_utc_timestamp("now", current)

    temperature = classify(score)
    outcome = WorkflowOutcome(customer=customer, temperature=temperature)

    if temperature is LeadTemperature.HOT:
        if customer.status is CustomerStatus.LEAD:
            customer.status = CustomerStatus.PROSPECT
            outcome.promoted = True
            _replace_automated_task(
                outcome,
                title=f"Urgent follow-up with {customer.name}",
                due_at=current,
                priority=TaskPriority.HIGH,
            )
            outcome.notifications.append(
                Notification(
                    kind=NotificationKind.SUCCESS,
                    message=f"{customer.name} promoted to hot prospect",
                    customer_id=customer.customer_id,
                )
            )
            logger.info(
                f"Customer {customer.customer_id} promoted to prospect",
                extra={"customer_id": customer.customer_id, "score": score},
            )

    elif temperature is LeadTemperature.WARM:
        _replace_automated_task(
            outcome,
            title=f"Follow up with warm lead {customer.name}",
            due_at=current + timedelta(days=WARM_FOLLOW_UP_DAYS),
            priority=TaskPriority.MEDIUM,
        )
        outcome.notifications.append(
            Notification(
                kind=NotificationKind.INFO,
                message=f"{customer.name} is a warm lead: follow-up scheduled in {WARM_FOLLOW_UP_DAYS} days",
                customer_id=customer.customer_id,
            )
        )

    elif temperature is LeadTemperature.COLD:
        _replace_automated_task(
            outcome,
            title=f"Send nurture content to {customer.name}",
            due_at=current + timedelta(days=COLD_NURTURE_DAYS),
            priority=TaskPriority.LOW,
        )
        outcome.notifications.append(
            Notification(
                kind=NotificationKind.INFO,
                message=f"{customer.name} is a cold lead: nurturing scheduled in {COLD_NURTURE_DAYS} days",
                customer_id=customer.customer_id,
            )
        )

    # Lukewarm leads have no automated action.

    return outcome


__all__ = [
    "COLD_NURTURE_DAYS",
    "Notification",
    "NotificationKind",
    "WARM_FOLLOW_UP_DAYS",
    "WorkflowOutcome",
    "apply_workflow",
]
