from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
import os
from typing import Final

DEFAULT_ROLLBACK_LIMIT: Final[int] = 10
# Ordering enforcement targets 1v1 matches; 0 enforces it for every roster size.
DEFAULT_ORDERING_PLAYER_COUNT: Final[int] = 2
DEFAULT_LOG_LEVEL: Final[str] = "INFO"

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_ROLLBACK_LIMIT: Final[str] = "SLPCHECK_ROLLBACK_LIMIT"
ENV_ORDERING_PLAYERS: Final[str] = "SLPCHECK_ORDERING_PLAYERS"
ENV_CHECK_LEGALITY: Final[str] = "SLPCHECK_CHECK_LEGALITY"
ENV_LOG_LEVEL: Final[str] = "SLPCHECK_LOG_LEVEL"

_TRUE_WORDS: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


def _env_count(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None:
        return int(default)
    try:
        value = int(raw.strip())
    except ValueError:
        return int(default)
    if value < 0:
        return int(default)
    return value


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return bool(default)
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return bool(default)


def normalize_log_level(raw: str | None, default: str = DEFAULT_LOG_LEVEL) -> str:
    if raw is None:
        return default
    level = raw.strip().upper()
    if level == "WARN":
        level = "WARNING"
    if level not in LOG_LEVELS:
        return default
    return level


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    rollback_limit: int = DEFAULT_ROLLBACK_LIMIT
    ordering_player_count: int = DEFAULT_ORDERING_PLAYER_COUNT
    check_legality: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ValidatorConfig:
        """Read overrides from `SLPCHECK_*` variables; unparseable values keep the defaults."""
        env = os.environ if environ is None else environ
        return cls(
            rollback_limit=_env_count(env, ENV_ROLLBACK_LIMIT, DEFAULT_ROLLBACK_LIMIT),
            ordering_player_count=_env_count(env, ENV_ORDERING_PLAYERS, DEFAULT_ORDERING_PLAYER_COUNT),
            check_legality=_env_flag(env, ENV_CHECK_LEGALITY, False),
            log_level=normalize_log_level(env.get(ENV_LOG_LEVEL)),
        )

    def with_overrides(
        self,
        *,
        rollback_limit: int | None = None,
        ordering_player_count: int | None = None,
        check_legality: bool | None = None,
        log_level: str | None = None,
    ) -> ValidatorConfig:
        out = self
        if rollback_limit is not None:
            out = replace(out, rollback_limit=max(0, int(rollback_limit)))
        if ordering_player_count is not None:
            out = replace(out, ordering_player_count=max(0, int(ordering_player_count)))
        if check_legality is not None:
            out = replace(out, check_legality=bool(check_legality))
        if log_level is not None:
            out = replace(out, log_level=normalize_log_level(log_level, out.log_level))
        return out
