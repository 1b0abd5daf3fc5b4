"""
bench.py - Measure what a hashing configuration costs on this machine.

Responsibilities:
- Measure Argon2 hash and verify time for one configuration
- Sweep the named presets so operators can pick cost parameters
- Return results in structured dicts for printing/reporting
"""

from __future__ import annotations

import logging
import statistics
import time
from typing import Any, Dict, Iterable, List, Optional

from . import auth
from .config import PRESETS, HashingConfiguration

logger = logging.getLogger(__name__)

BENCH_PASSWORD = b"correct horse battery staple"


def _median_ms(rounds: int, fn, *args) -> float:
    timings = []
    for _ in range(rounds):
        t0 = time.perf_counter()
        fn(*args)
        t1 = time.perf_counter()
        timings.append((t1 - t0) * 1000.0)
    return float(statistics.median(timings))


def bench_config(config: HashingConfiguration, rounds: int = 5) -> Dict[str, Any]:
    """Benchmark Argon2 hashing and verification under ``config``."""
    if rounds <= 0:
        raise ValueError("rounds must be greater than 0.")

    stored_hash = auth.hash_password(BENCH_PASSWORD, config)
    hash_ms = _median_ms(rounds, auth.hash_password, BENCH_PASSWORD, config)
    verify_ms = _median_ms(rounds, auth.verify_hash, BENCH_PASSWORD, stored_hash, config)

    logger.debug("bench memory_cost=%d ops_cost=%d hash=%.1fms", config.memory_cost, config.ops_cost, hash_ms)
    return {
        "memory_cost": config.memory_cost,
        "ops_cost": config.ops_cost,
        "hash_median_ms": hash_ms,
        "verify_median_ms": verify_ms,
        "rounds": rounds,
    }


def bench_presets(names: Optional[Iterable[str]] = None, rounds: int = 5) -> List[Dict[str, Any]]:
    """Benchmark each named preset (all presets by default)."""
    results: List[Dict[str, Any]] = []
    for name in names or PRESETS:
        result = bench_config(PRESETS[name], rounds=rounds)
        result["preset"] = name
        results.append(result)
    return results
