"""
Domain: Scoring rule table.

Static mapping tables translating each categorical customer attribute into a
fraction of that factor's configured weight, plus the recency tiers for
engagement and the fixed deal-value bonus used by the display-only scoring mode.

Rules implemented here:
- Company size:  startup 0.4, small 0.6, medium 0.8, large 1.0, enterprise 1.0
- Budget:        unknown 0.4, low 0.2, medium 0.6, high 1.0
- Timeline:      immediate 1.0, short 0.75, medium 0.5, long 0.25
- Industry fit:  technology 1.0, healthcare 0.8, finance 0.67,
                 manufacturing 0.53, retail 0.4, other 0.2
- Engagement:    contacted within 1 day 1.0, within 7 days 0.67,
                 within 30 days 0.33, otherwise 0
- Deal value bonus (not weight-scaled): >= 50,000 +10, >= 20,000 +7,
  >= 5,000 +4, otherwise +0

Each table carries an explicit fallback fraction of 0 for values outside the
enumerated set, so a corrupted attribute degrades to a zero contribution
instead of failing the whole score.

Fractions are applied to integer weights with exact decimal arithmetic and
rounded half up (12.5 -> 13).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Mapping, Optional, Tuple


class CompanySize(str, Enum):
    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ENTERPRISE = "enterprise"


class Budget(str, Enum):
    UNKNOWN = "unknown"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Timeline(str, Enum):
    IMMEDIATE = "immediate"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class Industry(str, Enum):
    TECHNOLOGY = "technology"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    MANUFACTURING = "manufacturing"
    RETAIL = "retail"
    OTHER = "other"


def _plain(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    return value


def weighted_points(weight: int, fraction: Decimal) -> int:
    """Scale an integer weight by a fraction, rounding half up to a whole point."""

    return int((Decimal(weight) * fraction).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True, slots=True)
class RuleTable:
    """
    Lookup table for one categorical factor.

    `fractions` is keyed by the plain attribute values; enum members are
    normalized to their value before lookup.
    """

    factor: str
    fractions: Mapping[str, Decimal]
    fallback: Decimal = Decimal("0")

    def knows(self, value: object) -> bool:
        key = _plain(value)
        return isinstance(key, str) and key in self.fractions

    def fraction_for(self, value: object) -> Decimal:
        if not self.knows(value):
            return self.fallback
        return self.fractions[_plain(value)]  # type: ignore[index]

    def points(self, value: object, weight: int) -> int:
        return weighted_points(weight, self.fraction_for(value))


COMPANY_SIZE_RULES = RuleTable(
    factor="company_size",
    fractions={
        CompanySize.STARTUP.value: Decimal("0.4"),
        CompanySize.SMALL.value: Decimal("0.6"),
        CompanySize.MEDIUM.value: Decimal("0.8"),
        CompanySize.LARGE.value: Decimal("1"),
        CompanySize.ENTERPRISE.value: Decimal("1"),
    },
)

BUDGET_RULES = RuleTable(
    factor="budget",
    fractions={
        Budget.UNKNOWN.value: Decimal("0.4"),
        Budget.LOW.value: Decimal("0.2"),
        Budget.MEDIUM.value: Decimal("0.6"),
        Budget.HIGH.value: Decimal("1"),
    },
)

TIMELINE_RULES = RuleTable(
    factor="timeline",
    fractions={
        Timeline.IMMEDIATE.value: Decimal("1"),
        Timeline.SHORT.value: Decimal("0.75"),
        Timeline.MEDIUM.value: Decimal("0.5"),
        Timeline.LONG.value: Decimal("0.25"),
    },
)

INDUSTRY_RULES = RuleTable(
    factor="industry",
    fractions={
        Industry.TECHNOLOGY.value: Decimal("1"),
        Industry.HEALTHCARE.value: Decimal("0.8"),
        Industry.FINANCE.value: Decimal("0.67"),
        Industry.MANUFACTURING.value: Decimal("0.53"),
        Industry.RETAIL.value: Decimal("0.4"),
        Industry.OTHER.value: Decimal("0.2"),
    },
)

# (max days since last contact, fraction of the engagement weight), checked in order.
ENGAGEMENT_TIERS: Tuple[Tuple[int, Decimal], ...] = (
    (1, Decimal("1")),
    (7, Decimal("0.67")),
    (30, Decimal("0.33")),
)

# (minimum total deal value, bonus points), checked in order.
DEAL_VALUE_BONUS_TIERS: Tuple[Tuple[Decimal, int], ...] = (
    (Decimal("50000"), 10),
    (Decimal("20000"), 7),
    (Decimal("5000"), 4),
)


def engagement_fraction(days_since_contact: int) -> Decimal:
    """
    Fraction of the engagement weight earned for a contact `days_since_contact` ago.

    Negative values (a contact stamped in the future) count as within one day.
    """

    for max_days, fraction in ENGAGEMENT_TIERS:
        if days_since_contact <= max_days:
            return fraction
    return Decimal("0")


def deal_value_bonus(deal_value_total: Decimal) -> int:
    """Fixed bonus points for the customer's total deal value."""

    for minimum, bonus in DEAL_VALUE_BONUS_TIERS:
        if deal_value_total >= minimum:
            return bonus
    return 0


def table_for(factor: str) -> Optional[RuleTable]:
    """Resolve the categorical rule table for a factor name (None for engagement)."""

    return _TABLES_BY_FACTOR.get(factor)


_TABLES_BY_FACTOR: Mapping[str, RuleTable] = {
    table.factor: table
    for table in (COMPANY_SIZE_RULES, BUDGET_RULES, TIMELINE_RULES, INDUSTRY_RULES)
}
