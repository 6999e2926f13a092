from __future__ import annotations

import logging

import pytest

from slpcheck.config import (
    DEFAULT_ORDERING_PLAYER_COUNT,
    DEFAULT_ROLLBACK_LIMIT,
    ValidatorConfig,
    normalize_log_level,
)
from slpcheck.logs import configure_logging


def test_from_env_defaults() -> None:
    cfg = ValidatorConfig.from_env({})
    assert cfg == ValidatorConfig()
    assert cfg.rollback_limit == DEFAULT_ROLLBACK_LIMIT == 10
    assert cfg.ordering_player_count == DEFAULT_ORDERING_PLAYER_COUNT == 2
    assert cfg.check_legality is False
    assert cfg.log_level == "INFO"


def test_from_env_reads_overrides() -> None:
    cfg = ValidatorConfig.from_env(
        {
            "SLPCHECK_ROLLBACK_LIMIT": " 7 ",
            "SLPCHECK_ORDERING_PLAYERS": "0",
            "SLPCHECK_CHECK_LEGALITY": "yes",
            "SLPCHECK_LOG_LEVEL": "warn",
        }
    )
    assert cfg.rollback_limit == 7
    assert cfg.ordering_player_count == 0
    assert cfg.check_legality is True
    assert cfg.log_level == "WARNING"


@pytest.mark.parametrize("raw", ["abc", "-3", "", "1.5"])
def test_from_env_invalid_counts_fall_back(raw: str) -> None:
    cfg = ValidatorConfig.from_env({"SLPCHECK_ROLLBACK_LIMIT": raw, "SLPCHECK_CHECK_LEGALITY": "maybe"})
    assert cfg.rollback_limit == DEFAULT_ROLLBACK_LIMIT
    assert cfg.check_legality is False


def test_from_env_uses_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SLPCHECK_ROLLBACK_LIMIT", "3")
    assert ValidatorConfig.from_env().rollback_limit == 3


def test_with_overrides_only_replaces_given_values() -> None:
    base = ValidatorConfig(rollback_limit=4, log_level="DEBUG")
    cfg = base.with_overrides(ordering_player_count=3, log_level="nonsense")
    assert cfg.rollback_limit == 4
    assert cfg.ordering_player_count == 3
    assert cfg.log_level == "DEBUG"
    assert base.with_overrides() == base


def test_normalize_log_level() -> None:
    assert normalize_log_level("debug") == "DEBUG"
    assert normalize_log_level(None) == "INFO"
    assert normalize_log_level("loud", "ERROR") == "ERROR"


def test_configure_logging_replaces_its_handler() -> None:
    first = configure_logging("DEBUG")
    second = configure_logging("WARNING")
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.WARNING
