"""
Core terrain generation functionality.
"""

from .heightfield import ConfigurationError, Heightfield, is_valid_size, subdivision_levels
from .height_range import HeightRange, reduce
from .noise import ConstantNoise, NoiseSource, UniformNoise
from .diamond_square import (
    DiamondSquareConfig,
    DiamondSquareGenerator,
    TerrainSnapshot,
    amplitude_schedule,
    generate,
)

__all__ = ['ConfigurationError', 'Heightfield', 'is_valid_size', 'subdivision_levels',
           'HeightRange', 'reduce', 'ConstantNoise', 'NoiseSource', 'UniformNoise',
           'DiamondSquareConfig', 'DiamondSquareGenerator', 'TerrainSnapshot',
           'amplitude_schedule', 'generate']
