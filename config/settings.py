"""
Application settings.

Values come from the environment, with a `.env` file at the project root
loaded first (existing environment variables take precedence).

Environment variables:
- CRM_SCORING_WEIGHTS: comma-separated weights in factor order
  company_size,budget,timeline,industry,engagement (default 25,25,20,15,15)
- CRM_WEIGHTED_DEAL_BONUS: add the deal-value bonus to weighted scoring (default false)
- CRM_SEED_ON_STARTUP: load the sample customers at startup (default true)
- CRM_LOG_LEVEL: logging level name (default INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from domain.weights import (
    DEFAULT_WEIGHTS,
    InvalidWeightConfiguration,
    WeightConfiguration,
    parse_weight_list,
    validate_weights,
)

_ENV_PATH = Path(__file__).parent.parent / ".env"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class Settings:
    default_weights: WeightConfiguration = DEFAULT_WEIGHTS
    weighted_deal_bonus: bool = False
    seed_on_startup: bool = True
    log_level: int = logging.INFO


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    text = raw.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise RuntimeError(f"Invalid value for {name}: {raw!r}. Use true/false.")


def _parse_weights(raw: Optional[str]) -> WeightConfiguration:
    if raw is None or raw.strip() == "":
        return DEFAULT_WEIGHTS

    try:
        values = parse_weight_list(raw)
    except InvalidWeightConfiguration as exc:
        raise RuntimeError(f"Invalid value for CRM_SCORING_WEIGHTS: {exc}") from None

    result = validate_weights(values)
    if not result.accepted:
        raise RuntimeError(f"Invalid value for CRM_SCORING_WEIGHTS: {result.reason}")
    return result.weights  # type: ignore[return-value]


def _parse_log_level(raw: Optional[str]) -> int:
    if raw is None or raw.strip() == "":
        return logging.INFO
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise RuntimeError(f"Invalid value for CRM_LOG_LEVEL: {raw!r}")
    return level


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """Load `.env` (if present) and build Settings from the environment."""

    load_dotenv(dotenv_path=env_path or _ENV_PATH)

    return Settings(
        default_weights=_parse_weights(os.getenv("CRM_SCORING_WEIGHTS")),
        weighted_deal_bonus=_parse_bool(
            "CRM_WEIGHTED_DEAL_BONUS", os.getenv("CRM_WEIGHTED_DEAL_BONUS"), False
        ),
        seed_on_startup=_parse_bool("CRM_SEED_ON_STARTUP", os.getenv("CRM_SEED_ON_STARTUP"), True),
        log_level=_parse_log_level(os.getenv("CRM_LOG_LEVEL")),
    )


__all__ = ["Settings", "load_settings"]
