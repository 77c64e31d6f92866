"""
Domain: Customer entity.

A Customer is a mutable entity owned by the application's state container.
It carries:
- profile fields (name, email, company must be non-empty)
- the four categorical attributes used by scoring (company size, budget,
  timeline, industry)
- last_contact_at, refreshed whenever scoring-relevant contact occurs
- deals, whose values sum to deal_value_total (add, move between stages, remove)
- status (lead, prospect, active, inactive)
- an ordered task list owned exclusively by this customer

Categorical attributes are stored as given; values outside their enumerated
set are tolerated here and score as zero (see domain/scoring_rules.py).

Scores are never stored on the customer: they are computed on demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional, Union
from uuid import uuid4

from .scoring_rules import Budget, CompanySize, Industry, Timeline
from .task import Task, TaskPredicate, TaskPriority, remove_tasks_where
from .time import require_utc_timestamp


class CustomerStatus(str, Enum):
    LEAD = "lead"
    PROSPECT = "prospect"
    ACTIVE = "active"
    INACTIVE = "inactive"


class DealStage(str, Enum):
    LEAD = "lead"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed-won"
    CLOSED_LOST = "closed-lost"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()


DealValue = Union[Decimal, int, float, str]


@dataclass(frozen=True, slots=True)
class Deal:
    """
    Immutable sales opportunity associated with a customer.

    `value` is stored as a Decimal; ints, floats and numeric strings are
    converted on construction so deal totals always sum cleanly.
    """

    deal_id: str
    title: str
    value: Decimal
    stage: DealStage = DealStage.LEAD
    probability: int = 0  # percent

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("deal title must be non-empty")
        object.__setattr__(self, "value", _to_decimal(self.value))
        if self.value < 0:
            raise ValueError("deal value must be >= 0")
        if isinstance(self.probability, bool) or not isinstance(self.probability, int):
            raise ValueError(f"probability must be an integer, got {self.probability!r}")
        if not 0 <= self.probability <= 100:
            raise ValueError("probability must be within [0, 100]")
        object.__setattr__(self, "stage", DealStage(self.stage))

    @staticmethod
    def new(
        title: str,
        value: DealValue,
        stage: DealStage = DealStage.LEAD,
        probability: int = 0,
    ) -> "Deal":
        return Deal(
            deal_id=str(uuid4()),
            title=title,
            value=value,  # type: ignore[arg-type]
            stage=stage,
            probability=probability,
        )


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"deal value must be a number, got {value!r}")
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"deal value must be a number, got {value!r}") from None

    if not result.is_finite():
        raise ValueError(f"deal value must be finite, got {value!r}")
    return result


@dataclass(slots=True)
class Customer:
    """
    Mutable customer record.

    Use `Customer.create` for new customers; it applies the baseline scoring
    attributes a freshly added customer starts with.
    """

    customer_id: str
    name: str
    email: str
    company: str
    last_contact_at: datetime
    company_size: str = CompanySize.SMALL.value
    budget: str = Budget.UNKNOWN.value
    timeline: str = Timeline.MEDIUM.value
    industry: str = Industry.OTHER.value
    status: CustomerStatus = CustomerStatus.LEAD
    phone: Optional[str] = None
    source: Optional[str] = None
    notes: str = ""
    deals: List[Deal] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in ("name", "email", "company"):
            value = getattr(self, name)
            if not value or not value.strip():
                raise ValueError(f"{name} must be non-empty")
        require_utc_timestamp("last_contact_at", self.last_contact_at)
        self.status = CustomerStatus(self.status)

    @staticmethod
    def create(name: str, email: str, company: str, *, now: datetime, **profile: object) -> "Customer":
        """Create a new customer with a generated id and baseline scoring attributes."""

        return Customer(
            customer_id=str(uuid4()),
            name=name,
            email=email,
            company=company,
            last_contact_at=now,
            **profile,  # type: ignore[arg-type]
        )

    @property
    def deal_value_total(self) -> Decimal:
        return sum((deal.value for deal in self.deals), Decimal("0"))

    def add_deal(
        self,
        title: str,
        value: DealValue,
        stage: DealStage = DealStage.LEAD,
        probability: int = 0,
    ) -> Deal:
        """Attach a new deal; it counts towards deal_value_total immediately."""

        deal = Deal.new(title, value, stage, probability)
        self.deals.append(deal)
        return deal

    def find_deal(self, deal_id: str) -> Optional[Deal]:
        for deal in self.deals:
            if deal.deal_id == deal_id:
                return deal
        return None

    def remove_deal(self, deal_id: str) -> Deal:
        deal = self._require_deal(deal_id)
        self.deals.remove(deal)
        return deal

    def move_deal(self, deal_id: str, stage: Union[DealStage, str]) -> Deal:
        """Replace the deal with a copy in `stage`, keeping its position in the list."""

        deal = self._require_deal(deal_id)
        moved = replace(deal, stage=DealStage(stage))
        self.deals[self.deals.index(deal)] = moved
        return moved

    def _require_deal(self, deal_id: str) -> Deal:
        deal = self.find_deal(deal_id)
        if deal is None:
            raise KeyError(f"Deal {deal_id} not found for customer {self.customer_id}")
        return deal

    def touch(self, now: datetime) -> None:
        """Record scoring-relevant contact at `now`."""

        require_utc_timestamp("now", now)
        self.last_contact_at = now

    def add_task(
        self,
        title: str,
        due_at: datetime,
        priority: TaskPriority = TaskPriority.MEDIUM,
    ) -> Task:
        """Append a user-created task."""

        task = Task.new(title, due_at, priority)
        self.tasks.append(task)
        return task

    def complete_task(self, task_id: str) -> Task:
        for task in self.tasks:
            if task.task_id == task_id:
                task.completed = True
                return task
        raise KeyError(f"Task {task_id} not found for customer {self.customer_id}")

    def remove_tasks_where(self, predicate: TaskPredicate) -> List[Task]:
        return remove_tasks_where(self.tasks, predicate)

    @property
    def automated_tasks(self) -> List[Task]:
        return [task for task in self.tasks if task.automated]
