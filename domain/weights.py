"""
Domain: Weight configuration and its validator.

A weight configuration assigns each of the five scoring factors an integer
point budget. Invariants:
- Every factor has a weight; no other keys are allowed.
- Each weight is a non-negative integer (booleans are not integers here).
- The five weights sum to exactly 100.

Validation is a precondition, not a correction: a configuration that fails is
rejected as a whole and never partially applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union


WEIGHT_TOTAL = 100


class WeightFactor(str, Enum):
    COMPANY_SIZE = "company_size"
    BUDGET = "budget"
    TIMELINE = "timeline"
    INDUSTRY = "industry"
    ENGAGEMENT = "engagement"


_FACTOR_NAMES = tuple(factor.value for factor in WeightFactor)


# Keys as sent by the browser forms.
_FACTOR_ALIASES: Mapping[str, str] = {
    "companySize": WeightFactor.COMPANY_SIZE.value,
}


class InvalidWeightConfiguration(ValueError):
    """Raised when a WeightConfiguration is constructed from invalid values."""

    pass


@dataclass(frozen=True, slots=True)
class WeightConfiguration:
    """
    Immutable per-factor point budgets.

    Construct through `validate_weights` when the values come from user input;
    direct construction raises InvalidWeightConfiguration on bad values.
    """

    company_size: int
    budget: int
    timeline: int
    industry: int
    engagement: int

    def __post_init__(self) -> None:
        reason = _check_values(
            {factor.value: getattr(self, factor.value) for factor in WeightFactor}
        )
        if reason is not None:
            raise InvalidWeightConfiguration(reason)

    def weight_for(self, factor: Union[WeightFactor, str]) -> int:
        name = factor.value if isinstance(factor, WeightFactor) else factor
        return getattr(self, name)

    def as_dict(self) -> Dict[str, int]:
        return {factor.value: getattr(self, factor.value) for factor in WeightFactor}

    @property
    def total(self) -> int:
        return sum(self.as_dict().values())


@dataclass(frozen=True, slots=True)
class WeightValidation:
    """Outcome of validating a candidate weight configuration."""

    accepted: bool
    reason: Optional[str] = None
    weights: Optional[WeightConfiguration] = None

    @staticmethod
    def ok(weights: WeightConfiguration) -> "WeightValidation":
        return WeightValidation(accepted=True, reason=None, weights=weights)

    @staticmethod
    def rejected(reason: str) -> "WeightValidation":
        return WeightValidation(accepted=False, reason=reason, weights=None)


def parse_weight_list(raw: str) -> List[int]:
    """
    Parse "25,25,20,15,15" into five weights in factor order.

    Only the shape is checked here; pass the result to `validate_weights`.
    Raises InvalidWeightConfiguration on the wrong count or a non-integer item.
    """

    parts = [part.strip() for part in raw.split(",")]
    if len(parts) != len(_FACTOR_NAMES):
        raise InvalidWeightConfiguration(
            f"expected {len(_FACTOR_NAMES)} comma-separated integers "
            f"({','.join(_FACTOR_NAMES)}), got {raw!r}"
        )
    try:
        return [int(part) for part in parts]
    except ValueError:
        raise InvalidWeightConfiguration(f"{raw!r} must contain integers only") from None


def validate_weights(
    candidate: Union[WeightConfiguration, Mapping[str, Any], Sequence[Any]],
) -> WeightValidation:
    """
    Validate a candidate configuration without raising.

    Accepts a WeightConfiguration, a mapping keyed by factor name (snake_case,
    or `companySize` as sent by the forms), or five values in factor order
    (company_size, budget, timeline, industry, engagement). Returns
    WeightValidation.ok(...) carrying the built configuration, or
    WeightValidation.rejected(reason).
    """

    if isinstance(candidate, WeightConfiguration):
        return WeightValidation.ok(candidate)

    if isinstance(candidate, Sequence) and not isinstance(candidate, (str, bytes)):
        if len(candidate) != len(_FACTOR_NAMES):
            return WeightValidation.rejected(
                f"expected {len(_FACTOR_NAMES)} weights "
                f"({', '.join(_FACTOR_NAMES)}), got {len(candidate)}"
            )
        candidate = dict(zip(_FACTOR_NAMES, candidate))

    if not isinstance(candidate, Mapping):
        return WeightValidation.rejected(
            f"weights must be a mapping or a sequence of {len(_FACTOR_NAMES)} values, "
            f"got {type(candidate).__name__}"
        )

    values: Dict[str, Any] = {}
    for key, value in candidate.items():
        name = _FACTOR_ALIASES.get(key, key)
        if name not in _FACTOR_NAMES:
            return WeightValidation.rejected(f"unknown weight factor '{key}'")
        if name in values:
            return WeightValidation.rejected(f"duplicate weight for '{name}'")
        values[name] = value

    reason = _check_values(values)
    if reason is not None:
        return WeightValidation.rejected(reason)
    return WeightValidation.ok(WeightConfiguration(**values))


def _check_values(values: Mapping[str, Any]) -> Optional[str]:
    for name in _FACTOR_NAMES:
        if name not in values:
            return f"missing weight for '{name}'"

        value = values[name]
        if isinstance(value, bool) or not isinstance(value, int):
            return f"weight '{name}' must be an integer, got {value!r}"
        if value < 0:
            return f"weight '{name}' must be non-negative, got {value}"

    total = sum(values[name] for name in _FACTOR_NAMES)
    if total != WEIGHT_TOTAL:
        return f"total must equal {WEIGHT_TOTAL}, got {total}"
    return None


# Weights of the lead-scoring view; the fixed (display-only) scoring mode uses the same budgets.
DEFAULT_WEIGHTS = WeightConfiguration(
    company_size=25,
    budget=25,
    timeline=20,
    industry=15,
    engagement=15,
)
