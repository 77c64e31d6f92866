"""
Customer repository (in-memory state container).

Holds the application's customers keyed by id for the lifetime of a session.
There is no persistence: the repository is created empty at startup and
optionally seeded through repositories.seed_data.

No scoring rules belong here; deleting a customer drops its tasks with it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterator, List, Optional

from domain.customer import Customer, CustomerStatus

logger = logging.getLogger(__name__)


class CustomerRepository:
    """Customers keyed by id, listed newest-added first."""

    def __init__(self) -> None:
        self._by_id: Dict[str, Customer] = {}
        self._order: List[str] = []

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Customer]:
        return iter(self.list())

    def __contains__(self, customer_id: object) -> bool:
        return customer_id in self._by_id

    def add(self, customer: Customer) -> Customer:
        """Insert a new customer at the front of the listing order."""

        if customer.customer_id in self._by_id:
            raise ValueError(f"Customer {customer.customer_id} already exists")
        self._by_id[customer.customer_id] = customer
        self._order.insert(0, customer.customer_id)
        logger.info(
            f"Customer {customer.customer_id} added",
            extra={"customer_id": customer.customer_id, "company": customer.company},
        )
        return customer

    def get(self, customer_id: str) -> Optional[Customer]:
        """Return the customer, or None if it does not exist."""

        return self._by_id.get(customer_id)

    def require(self, customer_id: str) -> Customer:
        customer = self._by_id.get(customer_id)
        if customer is None:
            raise KeyError(f"Customer {customer_id} not found")
        return customer

    def list(self) -> List[Customer]:
        return [self._by_id[customer_id] for customer_id in self._order]

    def delete(self, customer_id: str) -> Customer:
        """Remove a customer (and therefore its tasks). Raises KeyError if missing."""

        customer = self.require(customer_id)
        del self._by_id[customer_id]
        self._order.remove(customer_id)
        logger.info(
            f"Customer {customer_id} deleted",
            extra={"customer_id": customer_id, "tasks_dropped": len(customer.tasks)},
        )
        return customer

    def change_status(self, customer_id: str, status: CustomerStatus, *, now: datetime) -> Customer:
        """Set a customer's status by hand; counts as contact, so last_contact_at is stamped."""

        customer = self.require(customer_id)
        customer.status = CustomerStatus(status)
        customer.touch(now)
        return customer


__all__ = ["CustomerRepository"]
