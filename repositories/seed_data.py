"""
Sample customers for demos.

Seeding is explicit: the host application calls `seed_repository` once on
startup. Contact dates are relative to the `now` passed in so the sample
board shows a spread of temperatures whenever it is loaded.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import List

from domain.customer import Customer, CustomerStatus, Deal, DealStage
from domain.task import Task, TaskPriority
from domain.time import require_utc_timestamp
from repositories.customer_repository import CustomerRepository


def load_seed_customers(now: datetime) -> List[Customer]:
    """Build the sample customers, most recently added first."""

    require_utc_timestamp("now", now)

    return [
        Customer(
            customer_id="1",
            name="Sarah Chen",
            email="sarah.chen@techcorp.com",
            company="TechCorp Solutions",
            phone="+1 (555) 123-4567",
            source="Website",
            status=CustomerStatus.PROSPECT,
            company_size="large",
            budget="high",
            timeline="short",
            industry="technology",
            last_contact_at=now - timedelta(days=1),
            notes="Interested in enterprise package. Follow up next week.",
            deals=[
                Deal(
                    deal_id="d1",
                    title="Enterprise License",
                    value=Decimal("25000"),
                    stage=DealStage.PROPOSAL,
                    probability=75,
                )
            ],
            tasks=[
                Task(
                    task_id="t1",
                    title="Send proposal",
                    due_at=now + timedelta(days=2),
                    priority=TaskPriority.HIGH,
                )
            ],
        ),
        Customer(
            customer_id="2",
            name="Marcus Johnson",
            email="m.johnson@innovate.io",
            company="Innovate Labs",
            phone="+1 (555) 987-6543",
            source="Referral",
            status=CustomerStatus.LEAD,
            company_size="medium",
            budget="medium",
            timeline="medium",
            industry="technology",
            last_contact_at=now - timedelta(days=5),
            notes="Cold lead from website form. Initial interest in consulting services.",
            tasks=[
                Task(
                    task_id="t2",
                    title="Initial qualification call",
                    due_at=now + timedelta(days=1),
                    priority=TaskPriority.MEDIUM,
                )
            ],
        ),
        Customer(
            customer_id="3",
            name="Emily Rodriguez",
            email="emily.r@startupxyz.com",
            company="StartupXYZ",
            phone="+1 (555) 456-7890",
            source="Event",
            status=CustomerStatus.LEAD,
            company_size="startup",
            budget="low",
            timeline="immediate",
            industry="technology",
            last_contact_at=now,
            notes="Met at tech conference. Very interested in our startup package.",
            deals=[
                Deal(
                    deal_id="d2",
                    title="Startup Package",
                    value=Decimal("5000"),
                    stage=DealStage.NEGOTIATION,
                    probability=60,
                )
            ],
        ),
        Customer(
            customer_id="4",
            name="David Wilson",
            email="d.wilson@healthplus.com",
            company="HealthPlus Medical",
            phone="+1 (555) 321-0987",
            source="LinkedIn",
            status=CustomerStatus.LEAD,
            company_size="large",
            budget="high",
            timeline="long",
            industry="healthcare",
            last_contact_at=now - timedelta(days=10),
        ),
        Customer(
            customer_id="5",
            name="Lisa Zhang",
            email="l.zhang@financetech.com",
            company="FinanceTech Inc",
            phone="+1 (555) 654-3210",
            source="Google Ads",
            status=CustomerStatus.PROSPECT,
            company_size="medium",
            budget="medium",
            timeline="short",
            industry="finance",
            last_contact_at=now - timedelta(days=3),
        ),
    ]


def seed_repository(repository: CustomerRepository, now: datetime) -> int:
    """
    Load the sample customers into an empty repository.

    Returns the number of customers loaded. Raises RuntimeError if the
    repository already holds customers.
    """

    if len(repository):
        raise RuntimeError("Repository is already populated; seed data loads only once at startup")

    # add() prepends, so insert in reverse to keep the listing order above.
    customers = load_seed_customers(now)
    for customer in reversed(customers):
        repository.add(customer)
    return len(customers)


__all__ = ["load_seed_customers", "seed_repository"]
