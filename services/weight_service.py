"""
Active weight configuration for a session.

The holder only ever swaps in a configuration that passed validate_weights;
a rejected candidate leaves the previous configuration in place.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, Union

from domain.weights import (
    DEFAULT_WEIGHTS,
    WeightConfiguration,
    WeightValidation,
    validate_weights,
)

logger = logging.getLogger(__name__)


class ActiveWeightConfiguration:
    """Process-wide or per-session holder for the weights used by scoring."""

    def __init__(self, initial: WeightConfiguration = DEFAULT_WEIGHTS) -> None:
        self._current = initial

    @property
    def current(self) -> WeightConfiguration:
        return self._current

    def replace(
        self, candidate: Union[WeightConfiguration, Mapping[str, Any], Sequence[int]]
    ) -> WeightValidation:
        """
        Validate `candidate` and make it active if accepted.

        Returns the validation outcome; on rejection nothing changes.
        """
        result = validate_weights(candidate)

        if not result.accepted:
            logger.warning(
                f"Rejected weight configuration: {result.reason}",
                extra={"reason": result.reason, "active_weights": self._current.as_dict()},
            )
            return result

        previous = self._current
        self._current = result.weights  # type: ignore[assignment]
        logger.info(
            "Weight configuration replaced",
            extra={"previous": previous.as_dict(), "current": self._current.as_dict()},
        )
        return result


__all__ = ["ActiveWeightConfiguration"]
