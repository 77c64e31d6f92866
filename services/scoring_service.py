"""
Score calculator for customers.

Two named variants share the same factor ramps (domain/scoring_rules.py):

- compute_score_weighted: configurable weights, no deal-value bonus unless the
  caller opts in with `include_deal_bonus=True`.
- compute_score_fixed: the display-only mode, always using DEFAULT_WEIGHTS and
  always adding the deal-value bonus.

Both are pure: customer attributes + weights + evaluation instant -> integer
score in [0, 100]. Nothing is written back to the customer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from domain.customer import Customer
from domain.scoring_rules import (
    deal_value_bonus,
    engagement_fraction,
    table_for,
    weighted_points,
)
from domain.temperature import LeadTemperature, classify
from domain.time import utc_now, whole_days_between
from domain.weights import DEFAULT_WEIGHTS, WeightConfiguration, WeightFactor

logger = logging.getLogger(__name__)

MAX_SCORE = 100

_CATEGORICAL_FACTORS = (
    WeightFactor.COMPANY_SIZE,
    WeightFactor.BUDGET,
    WeightFactor.TIMELINE,
    WeightFactor.INDUSTRY,
)


class ScoringMode(str, Enum):
    FIXED = "fixed"
    WEIGHTED = "weighted"


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Per-factor point contributions before clamping."""

    company_size: int
    budget: int
    timeline: int
    industry: int
    engagement: int
    deal_bonus: int = 0

    @property
    def raw_total(self) -> int:
        return (
            self.company_size
            + self.budget
            + self.timeline
            + self.industry
            + self.engagement
            + self.deal_bonus
        )

    @property
    def score(self) -> int:
        return min(self.raw_total, MAX_SCORE)


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Derived score and temperature; never stored on the customer."""

    score: int
    temperature: LeadTemperature

    @staticmethod
    def from_score(score: int) -> "ScoreResult":
        return ScoreResult(score=score, temperature=classify(score))


def score_breakdown(
    customer: Customer,
    weights: WeightConfiguration,
    *,
    as_of: Optional[datetime] = None,
    include_deal_bonus: bool = False,
) -> ScoreBreakdown:
    """
    Compute each factor's contribution for `customer` at `as_of` (default: now).

    Unknown categorical values contribute 0 and are logged as warnings.
    """

    evaluated_at = as_of if as_of is not None else utc_now()

    points = {}
    for factor in _CATEGORICAL_FACTORS:
        table = table_for(factor.value)
        value = getattr(customer, factor.value)
        if not table.knows(value):
            logger.warning(
                f"Unknown {factor.value} value scored as 0 for customer {customer.customer_id}",
                extra={
                    "customer_id": customer.customer_id,
                    "factor": factor.value,
                    "value": repr(value)[:100],
                },
            )
        points[factor.value] = table.points(value, weights.weight_for(factor))

    days_since_contact = whole_days_between(customer.last_contact_at, evaluated_at)
    engagement = weighted_points(
        weights.weight_for(WeightFactor.ENGAGEMENT),
        engagement_fraction(days_since_contact),
    )

    bonus = deal_value_bonus(customer.deal_value_total) if include_deal_bonus else 0

    breakdown = ScoreBreakdown(
        company_size=points[WeightFactor.COMPANY_SIZE.value],
        budget=points[WeightFactor.BUDGET.value],
        timeline=points[WeightFactor.TIMELINE.value],
        industry=points[WeightFactor.INDUSTRY.value],
        engagement=engagement,
        deal_bonus=bonus,
    )
    logger.debug(
        "Score breakdown computed",
        extra={
            "customer_id": customer.customer_id,
            "days_since_contact": days_since_contact,
            "raw_total": breakdown.raw_total,
        },
    )
    return breakdown


def compute_score_weighted(
    customer: Customer,
    weights: WeightConfiguration,
    *,
    as_of: Optional[datetime] = None,
    include_deal_bonus: bool = False,
) -> int:
    """Configurable-weights score in [0, 100]."""

    return score_breakdown(
        customer, weights, as_of=as_of, include_deal_bonus=include_deal_bonus
    ).score


def compute_score_fixed(customer: Customer, *, as_of: Optional[datetime] = None) -> int:
    """Display-only score: default weights plus the deal-value bonus, clamped to 100."""

    return score_breakdown(customer, DEFAULT_WEIGHTS, as_of=as_of, include_deal_bonus=True).score


def compute_score(
    customer: Customer,
    weights: WeightConfiguration,
    *,
    as_of: Optional[datetime] = None,
    mode: ScoringMode = ScoringMode.WEIGHTED,
    include_deal_bonus: bool = False,
) -> int:
    """
    Dispatch to the scoring variant named by `mode`.

    `weights` and `include_deal_bonus` are ignored in FIXED mode.
    """

    if ScoringMode(mode) is ScoringMode.FIXED:
        return compute_score_fixed(customer, as_of=as_of)
    return compute_score_weighted(
        customer, weights, as_of=as_of, include_deal_bonus=include_deal_bonus
    )


def score_customer(
    customer: Customer,
    weights: WeightConfiguration,
    *,
    as_of: Optional[datetime] = None,
    mode: ScoringMode = ScoringMode.WEIGHTED,
    include_deal_bonus: bool = False,
) -> ScoreResult:
    """Compute the score and its temperature in one call."""

    return ScoreResult.from_score(
        compute_score(
            customer,
            weights,
            as_of=as_of,
            mode=mode,
            include_deal_bonus=include_deal_bonus,
        )
    )


__all__ = [
    "MAX_SCORE",
    "ScoreBreakdown",
    "ScoreResult",
    "ScoringMode",
    "compute_score",
    "compute_score_fixed",
    "compute_score_weighted",
    "score_breakdown",
    "score_customer",
]
