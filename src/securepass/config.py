"""
config.py - Argon2 cost parameters.

Responsibilities:
- Hold the memory cost (bytes) and operations cost used for hashing
- Bounds-check every value before a configuration exists
- Provide the interactive/moderate/sensitive presets
- Build a configuration from environment variables

A HashingConfiguration is immutable. "Changing" a cost returns a new object, so
a rejected value can never leave a half-updated configuration behind.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


# Memory cost, in bytes. Argon2 itself works in KiB.
MEM_LIMIT_MIN = 8192  # 8 KiB
MEM_LIMIT_MAX = 4398046510080  # 4 TiB minus 1 KiB
MEM_LIMIT_INTERACTIVE = 67108864  # 64 MiB
MEM_LIMIT_MODERATE = 268435456  # 256 MiB
MEM_LIMIT_SENSITIVE = 1073741824  # 1 GiB
MEM_LIMIT_DEFAULT = MEM_LIMIT_INTERACTIVE

# Operations cost is the Argon2 time_cost (number of passes).
OPS_LIMIT_MIN = 1
OPS_LIMIT_MAX = 4294967295
OPS_LIMIT_INTERACTIVE = 2
OPS_LIMIT_MODERATE = 3  # ~0.7s on a 2.8GHz Core i7
OPS_LIMIT_SENSITIVE = 4  # ~3.5s on a 2.8GHz Core i7
OPS_LIMIT_DEFAULT = OPS_LIMIT_INTERACTIVE

ENV_PRESET = "SECUREPASS_PRESET"
ENV_MEMORY_COST = "SECUREPASS_MEMORY_COST"
ENV_OPS_COST = "SECUREPASS_OPS_COST"


def _check(name: str, value: object, low: int, high: int) -> int:
    # bool is an int subclass but never a meaningful cost
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ConfigurationError(f"Invalid {name} configured. Value must be between {low} and {high}")
    return value


def check_memory_cost(value: object) -> int:
    """Return ``value`` if it is an allowed memory cost, else raise ConfigurationError."""
    return _check("memory cost", value, MEM_LIMIT_MIN, MEM_LIMIT_MAX)


def check_ops_cost(value: object) -> int:
    """Return ``value`` if it is an allowed operations cost, else raise ConfigurationError."""
    return _check("operations cost", value, OPS_LIMIT_MIN, OPS_LIMIT_MAX)


@dataclass(frozen=True)
class HashingConfiguration:
    """
    Validated Argon2 cost parameters.

    - ``memory_cost``: memory used per hash, in bytes.
    - ``ops_cost``: number of passes over that memory.
    """

    memory_cost: int = MEM_LIMIT_DEFAULT
    ops_cost: int = OPS_LIMIT_DEFAULT

    def __post_init__(self) -> None:
        check_memory_cost(self.memory_cost)
        check_ops_cost(self.ops_cost)

    @classmethod
    def create(cls, memory_cost: Optional[int] = None, ops_cost: Optional[int] = None) -> "HashingConfiguration":
        """Build a configuration; omitted values fall back to the interactive tier."""
        return cls(
            memory_cost=MEM_LIMIT_DEFAULT if memory_cost is None else memory_cost,
            ops_cost=OPS_LIMIT_DEFAULT if ops_cost is None else ops_cost,
        )

    @property
    def memory_cost_kib(self) -> int:
        """Memory cost in KiB, the unit Argon2 expects."""
        return self.memory_cost // 1024

    def with_memory_cost(self, value: int) -> "HashingConfiguration":
        """Return a copy with a new memory cost. ``self`` is never modified."""
        return HashingConfiguration(memory_cost=check_memory_cost(value), ops_cost=self.ops_cost)

    def with_ops_cost(self, value: int) -> "HashingConfiguration":
        """Return a copy with a new operations cost. ``self`` is never modified."""
        return HashingConfiguration(memory_cost=self.memory_cost, ops_cost=check_ops_cost(value))


PRESETS: Dict[str, HashingConfiguration] = {
    "interactive": HashingConfiguration(MEM_LIMIT_INTERACTIVE, OPS_LIMIT_INTERACTIVE),
    "moderate": HashingConfiguration(MEM_LIMIT_MODERATE, OPS_LIMIT_MODERATE),
    "sensitive": HashingConfiguration(MEM_LIMIT_SENSITIVE, OPS_LIMIT_SENSITIVE),
}


def preset(name: str) -> HashingConfiguration:
    """Look up a named preset. Raises ConfigurationError for unknown names."""
    try:
        return PRESETS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(f"Unknown preset {name!r}. Choose one of: {', '.join(PRESETS)}") from None


def _env_int(environ: Mapping[str, str], key: str) -> Optional[int]:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None


def load_configuration(environ: Optional[Mapping[str, str]] = None) -> HashingConfiguration:
    """
    Build a configuration from the environment.

    SECUREPASS_PRESET picks a starting preset (default: interactive).
    SECUREPASS_MEMORY_COST and SECUREPASS_OPS_COST override single values.
    """
    if environ is None:
        environ = os.environ

    name = environ.get(ENV_PRESET)
    cfg = preset(name) if name else HashingConfiguration.create()

    memory_cost = _env_int(environ, ENV_MEMORY_COST)
    if memory_cost is not None:
        cfg = cfg.with_memory_cost(memory_cost)

    ops_cost = _env_int(environ, ENV_OPS_COST)
    if ops_cost is not None:
        cfg = cfg.with_ops_cost(ops_cost)

    logger.debug("loaded hashing configuration memory_cost=%d ops_cost=%d", cfg.memory_cost, cfg.ops_cost)
    return cfg
