"""
Lead board read model.

Builds what the customer-list view displays: every customer with its
on-demand score and temperature, filtered by search text, score band,
temperature and status, sorted by score (highest first), plus summary statistics.

Read-only: customers are never mutated here.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from domain.customer import Customer, CustomerStatus
from domain.temperature import LeadTemperature
from domain.time import utc_now
from domain.weights import WeightConfiguration
from services.scoring_service import ScoreResult, ScoringMode, score_customer


class ScoreBand(str, Enum):
    ALL = "all"
    HIGH = "high"  # score >= 80
    MEDIUM = "medium"  # 40 <= score < 80
    LOW = "low"  # score < 40

    def contains(self, score: int) -> bool:
        if self is ScoreBand.HIGH:
            return score >= 80
        if self is ScoreBand.MEDIUM:
            return 40 <= score < 80
        if self is ScoreBand.LOW:
            return score < 40
        return True


@dataclass(frozen=True, slots=True)
class LeadBoardFilters:
    search_term: str = ""
    score_band: ScoreBand = ScoreBand.ALL
    temperature: Optional[LeadTemperature] = None  # None means all temperatures
    status: Optional[CustomerStatus] = None  # None means all statuses


@dataclass(frozen=True, slots=True)
class ScoredCustomer:
    customer: Customer
    result: ScoreResult

    @property
    def score(self) -> int:
        return self.result.score

    @property
    def temperature(self) -> LeadTemperature:
        return self.result.temperature


@dataclass(frozen=True, slots=True)
class ScoreStatistics:
    total: int
    average_score: int
    by_temperature: Dict[LeadTemperature, int] = field(default_factory=dict)

    def count(self, temperature: LeadTemperature) -> int:
        return self.by_temperature.get(temperature, 0)


def _matches_search(customer: Customer, search_term: str) -> bool:
    needle = search_term.strip().lower()
    if not needle:
        return True
    return any(
        needle in text.lower() for text in (customer.name, customer.company, customer.email)
    )


def score_customers(
    customers: Iterable[Customer],
    weights: WeightConfiguration,
    *,
    as_of: Optional[datetime] = None,
    mode: ScoringMode = ScoringMode.WEIGHTED,
    include_deal_bonus: bool = False,
) -> List[ScoredCustomer]:
    """Score every customer at the same instant, preserving input order."""

    evaluated_at = as_of if as_of is not None else utc_now()
    return [
        ScoredCustomer(
            customer=customer,
            result=score_customer(
                customer,
                weights,
                as_of=evaluated_at,
                mode=mode,
                include_deal_bonus=include_deal_bonus,
            ),
        )
        for customer in customers
    ]


def build_lead_board(
    customers: Iterable[Customer],
    weights: WeightConfiguration,
    filters: Optional[LeadBoardFilters] = None,
    *,
    as_of: Optional[datetime] = None,
    mode: ScoringMode = ScoringMode.WEIGHTED,
    include_deal_bonus: bool = False,
) -> List[ScoredCustomer]:
    """
    Filter and sort customers for display.

    Sorting is by score descending; ties keep their input order.
    """
    active_filters = filters or LeadBoardFilters()
    band = ScoreBand(active_filters.score_band)

    rows = [
        row
        for row in score_customers(
            customers,
            weights,
            as_of=as_of,
            mode=mode,
            include_deal_bonus=include_deal_bonus,
        )
        if _matches_search(row.customer, active_filters.search_term)
        and band.contains(row.score)
        and (active_filters.temperature is None or row.temperature == active_filters.temperature)
        and (active_filters.status is None or row.customer.status == active_filters.status)
    ]
    return sorted(rows, key=lambda row: row.score, reverse=True)


def score_statistics(
    customers: Iterable[Customer],
    weights: WeightConfiguration,
    *,
    as_of: Optional[datetime] = None,
    mode: ScoringMode = ScoringMode.WEIGHTED,
    include_deal_bonus: bool = False,
) -> ScoreStatistics:
    """Totals for the statistics header: count, rounded average score, count per temperature."""

    rows = score_customers(
        customers,
        weights,
        as_of=as_of,
        mode=mode,
        include_deal_bonus=include_deal_bonus,
    )
    if not rows:
        return ScoreStatistics(
            total=0,
            average_score=0,
            by_temperature={temperature: 0 for temperature in LeadTemperature},
        )

    average = Decimal(sum(row.score for row in rows)) / Decimal(len(rows))
    counts = Counter(row.temperature for row in rows)

    return ScoreStatistics(
        total=len(rows),
        average_score=int(average.quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
        by_temperature={temperature: counts.get(temperature, 0) for temperature in LeadTemperature},
    )


def parse_temperature_filter(value: Union[str, LeadTemperature, None]) -> Optional[LeadTemperature]:
    """Map the UI's temperature filter ('all' or a temperature name) to a filter value."""

    if value is None or value == "all":
        return None
    return LeadTemperature(value)


def parse_status_filter(value: Union[str, CustomerStatus, None]) -> Optional[CustomerStatus]:
    """Map the UI's status filter ('all' or a status name) to a filter value."""

    if value is None or value == "all":
        return None
    return CustomerStatus(value)


__all__ = [
    "LeadBoardFilters",
    "ScoreBand",
    "ScoreStatistics",
    "ScoredCustomer",
    "build_lead_board",
    "parse_status_filter",
    "parse_temperature_filter",
    "score_customers",
    "score_statistics",
]
