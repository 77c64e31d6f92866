"""
Pytest configuration.

Adds the project root to the Python path so tests can import the domain,
services, repositories and config packages without installing the project,
and provides shared fixtures.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.customer import Customer  # noqa: E402


NOW = datetime(2025, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_customer():
    """Factory for customers with explicit attributes and a fixed contact time."""

    def _make(**overrides) -> Customer:
        fields = {
            "customer_id": "c-1",
            "name": "Sarah Chen",
            "email": "sarah.chen@techcorp.com",
            "company": "TechCorp Solutions",
            "last_contact_at": NOW,
        }
        fields.update(overrides)
        return Customer(**fields)

    return _make
