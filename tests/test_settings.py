"""
Tests for `config/settings.py`.

Covers rules:
- Missing variables fall back to defaults.
- CRM_SCORING_WEIGHTS must hold five integers that pass weight validation.
- Boolean flags accept true/false style values only.
- Values can come from a .env file.
"""

from __future__ import annotations

import logging

import pytest

from config.settings import load_settings
from domain.weights import DEFAULT_WEIGHTS

_VARIABLES = (
    "CRM_SCORING_WEIGHTS",
    "CRM_WEIGHTED_DEAL_BONUS",
    "CRM_SEED_ON_STARTUP",
    "CRM_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Clear settings variables (restored afterwards) and point at a missing .env."""

    for name in _VARIABLES:
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return tmp_path / ".env"


def test_defaults(clean_env) -> None:
    """Verify defaults when nothing is configured."""

    settings = load_settings(clean_env)

    assert settings.default_weights == DEFAULT_WEIGHTS
    assert settings.weighted_deal_bonus is False
    assert settings.seed_on_startup is True
    assert settings.log_level == logging.INFO


def test_weights_and_flags_from_environment(clean_env, monkeypatch) -> None:
    """Verify values are parsed from environment variables."""

    monkeypatch.setenv("CRM_SCORING_WEIGHTS", "20, 20, 20, 20, 20")
    monkeypatch.setenv("CRM_WEIGHTED_DEAL_BONUS", "Yes")
    monkeypatch.setenv("CRM_SEED_ON_STARTUP", "off")
    monkeypatch.setenv("CRM_LOG_LEVEL", "debug")

    settings = load_settings(clean_env)

    assert settings.default_weights.as_dict() == {
        "company_size": 20,
        "budget": 20,
        "timeline": 20,
        "industry": 20,
        "engagement": 20,
    }
    assert settings.weighted_deal_bonus is True
    assert settings.seed_on_startup is False
    assert settings.log_level == logging.DEBUG


@pytest.mark.parametrize(
    "raw, message",
    [
        ("30,30,20,10,9", "total must equal 100, got 99"),
        ("25,25,25,25", "expected 5"),
        ("25,25,20,15,abc", "integers only"),
    ],
)
def test_invalid_weights_raise(clean_env, monkeypatch, raw: str, message: str) -> None:
    """Verify bad weight settings fail loudly with the reason."""

    monkeypatch.setenv("CRM_SCORING_WEIGHTS", raw)

    with pytest.raises(RuntimeError, match=message):
        load_settings(clean_env)


def test_invalid_flag_raises(clean_env, monkeypatch) -> None:
    """Verify unrecognised boolean values are rejected."""

    monkeypatch.setenv("CRM_SEED_ON_STARTUP", "maybe")

    with pytest.raises(RuntimeError, match="CRM_SEED_ON_STARTUP"):
        load_settings(clean_env)


def test_values_loaded_from_env_file(clean_env) -> None:
    """Verify a .env file supplies values that are not already set."""

    clean_env.write_text("CRM_WEIGHTED_DEAL_BONUS=true\nCRM_LOG_LEVEL=WARNING\n")

    settings = load_settings(clean_env)

    assert settings.weighted_deal_bonus is True
    assert settings.log_level == logging.WARNING
