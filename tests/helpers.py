"""Cheap cost parameters so the suite does not spend seconds per hash."""

from securepass.config import HashingConfiguration

FAST = HashingConfiguration(memory_cost=64 * 1024, ops_cost=1)
STRONG = HashingConfiguration(memory_cost=128 * 1024, ops_cost=2)
