"""Diamond-Square terrain generation with isometric rendering."""
from .core import (
    ConfigurationError,
    DiamondSquareConfig,
    DiamondSquareGenerator,
    Heightfield,
    HeightRange,
    UniformNoise,
    generate,
    reduce,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DiamondSquareConfig",
    "DiamondSquareGenerator",
    "Heightfield",
    "HeightRange",
    "UniformNoise",
    "generate",
    "reduce",
]
