"""
Domain: Lead temperature.

Ordinal classification of a lead score, indicating conversion urgency:

    cold < lukewarm < warm < hot

Thresholds are inclusive lower bounds, checked in a single ordered table:
  - HOT:      score >= 80
  - WARM:     60 <= score < 80
  - LUKEWARM: 40 <= score < 60
  - COLD:     score < 40

The function is total over integers: anything below the lowest threshold is
cold and anything above 100 is still hot.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class LeadTemperature(str, Enum):
    HOT = "hot"
    WARM = "warm"
    LUKEWARM = "lukewarm"
    COLD = "cold"

    @property
    def rank(self) -> int:
        """Ordinal position, 0 for cold up to 3 for hot."""

        return _RANKS[self]

    def is_hotter_than(self, other: "LeadTemperature") -> bool:
        return self.rank > other.rank

    @staticmethod
    def for_score(score: int) -> "LeadTemperature":
        for minimum, temperature in TEMPERATURE_THRESHOLDS:
            if score >= minimum:
                return temperature
        return LeadTemperature.COLD


# (inclusive lower bound, temperature), hottest first.
TEMPERATURE_THRESHOLDS: Tuple[Tuple[int, LeadTemperature], ...] = (
    (80, LeadTemperature.HOT),
    (60, LeadTemperature.WARM),
    (40, LeadTemperature.LUKEWARM),
)

_RANKS = {
    LeadTemperature.COLD: 0,
    LeadTemperature.LUKEWARM: 1,
    LeadTemperature.WARM: 2,
    LeadTemperature.HOT: 3,
}


def classify(score: int) -> LeadTemperature:
    """Classify a numeric score into its lead temperature."""

    return LeadTemperature.for_score(score)
