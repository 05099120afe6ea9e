"""
shrdlite_config.py

Runtime configuration for the Shrdlite planner.

Defaults come from common.constants and can be overridden per process via
environment variables:

    SHRDLITE_MAX_EXPANSIONS   expansion budget of a single planning run
    SHRDLITE_CLEARANCE_COST   heuristic cost per object stacked above a target
    SHRDLITE_NARRATE_PLANS    "1"/"true" interleaves narration with actions

Usage:
    from shrdlite_config import get_config

    config = get_config()
    planner = BlocksWorldPlanner(max_expansions=config.max_expansions)
"""

import os
import threading
from dataclasses import dataclass
from typing import Mapping, Optional

from common.constants import (
    CACHE_MAXSIZE_HEURISTIC,
    CACHE_TTL_HEURISTIC,
    CLEARANCE_COST_PER_OBJECT,
    DEFAULT_MAX_EXPANSIONS,
)
from component_15_logging_config import get_logger
from shrdlite_exceptions import InvalidConfigError, wrap_exception

logger = get_logger(__name__)

ENV_MAX_EXPANSIONS = "SHRDLITE_MAX_EXPANSIONS"
ENV_CLEARANCE_COST = "SHRDLITE_CLEARANCE_COST"
ENV_NARRATE_PLANS = "SHRDLITE_NARRATE_PLANS"


@dataclass
class ShrdliteConfig:
    """
    Planner settings.

    Attributes:
        max_expansions: Hard ceiling on A* node expansions per planning run
        clearance_cost: Heuristic cost per object stacked above the object to move
        heuristic_cache_size: Max entries of the heuristic memo cache
        heuristic_cache_ttl: TTL (seconds) of heuristic memo entries
        narrate_plans: Interleave human-readable narration with action tokens
    """

    max_expansions: int = DEFAULT_MAX_EXPANSIONS
    clearance_cost: int = CLEARANCE_COST_PER_OBJECT
    heuristic_cache_size: int = CACHE_MAXSIZE_HEURISTIC
    heuristic_cache_ttl: int = CACHE_TTL_HEURISTIC
    narrate_plans: bool = False

    def __post_init__(self):
        if self.max_expansions <= 0:
            raise InvalidConfigError(
                f"max_expansions must be positive, got {self.max_expansions}"
            )
        if self.clearance_cost < 0:
            raise InvalidConfigError(
                f"clearance_cost must not be negative, got {self.clearance_cost}"
            )
        if self.heuristic_cache_size <= 0 or self.heuristic_cache_ttl <= 0:
            raise InvalidConfigError(
                "heuristic cache size and ttl must be positive",
                context={
                    "heuristic_cache_size": self.heuristic_cache_size,
                    "heuristic_cache_ttl": self.heuristic_cache_ttl,
                },
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ShrdliteConfig":
        """Build a config from defaults plus environment overrides."""
        env = os.environ if environ is None else environ

        kwargs = {}
        if env.get(ENV_MAX_EXPANSIONS):
            kwargs["max_expansions"] = _parse_int(env[ENV_MAX_EXPANSIONS], ENV_MAX_EXPANSIONS)
        if env.get(ENV_CLEARANCE_COST):
            kwargs["clearance_cost"] = _parse_int(env[ENV_CLEARANCE_COST], ENV_CLEARANCE_COST)
        if env.get(ENV_NARRATE_PLANS):
            kwargs["narrate_plans"] = env[ENV_NARRATE_PLANS].strip().lower() in {
                "1",
                "true",
                "yes",
                "on",
            }

        config = cls(**kwargs)
        if kwargs:
            logger.info("Configuration overrides applied", extra=kwargs)
        return config


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise wrap_exception(
            e, InvalidConfigError, f"{name} must be an integer", value=raw
        ) from e


_config_instance: Optional[ShrdliteConfig] = None
_config_lock = threading.Lock()


def get_config() -> ShrdliteConfig:
    """Return the process-wide configuration, created lazily from the environment."""
    global _config_instance

    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = ShrdliteConfig.from_env()

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration (next get_config() re-reads the environment)."""
    global _config_instance

    with _config_lock:
        _config_instance = None
