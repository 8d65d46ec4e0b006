"""
Utility helpers shared by the terrain modules.
"""

from .random import Seed, resolve_seed, seed_from_string, time_seed

__all__ = ['Seed', 'resolve_seed', 'seed_from_string', 'time_seed']
