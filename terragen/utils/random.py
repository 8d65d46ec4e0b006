"""
Seed utilities for terrain generation.

Seeds may be given as integers or strings (e.g. "demo123"). Strings are
hashed with a stable digest so the same string always yields the same
terrain, independent of Python's per-process hash randomization.
"""

import hashlib
import time
from typing import Optional, Union

Seed = Union[int, str]

# numpy's SeedSequence accepts arbitrary non-negative ints; 64 bits is plenty
_SEED_MASK = 0xFFFFFFFFFFFFFFFF


def seed_from_string(seed: str) -> int:
    """
    Convert a seed string into a non-negative 64-bit integer.

    Args:
        seed: Seed string to hash

    Returns:
        Integer seed derived from the first 8 bytes of the SHA-256 digest
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


def time_seed() -> int:
    """Seed taken from the wall clock, as a fresh process start would."""
    return time.time_ns() & _SEED_MASK


def resolve_seed(seed: Optional[Seed] = None) -> int:
    """
    Normalize a user supplied seed into an integer.

    Args:
        seed: Integer, string, or None for a time based seed

    Returns:
        Non-negative integer seed
    """
    if seed is None:
        return time_seed()
    if isinstance(seed, str):
        # Numeric strings behave like the integer they spell
        stripped = seed.strip()
        if stripped.isdigit():
            return int(stripped) & _SEED_MASK
        return seed_from_string(seed)
    return int(seed) & _SEED_MASK
