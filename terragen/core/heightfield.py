"""
Square heightfield container.

The grid side must be one more than a power of two (3, 5, 9, ..., 257) so
repeated halving of the step length reaches 1. Cells are stored in a
float64 numpy array indexed ``heights[x, y]``.
"""

from typing import Optional, Tuple

import numpy as np

DEFAULT_SIZE = 257  # 2^8 + 1

Corners = Tuple[float, float, float, float]


class ConfigurationError(ValueError):
    """Raised when a grid size or generation parameter is malformed."""


def subdivision_levels(size: int) -> int:
    """
    Number of subdivision levels ``k`` for a grid of side ``2^k + 1``.

    Args:
        size: Grid side length

    Returns:
        k, at least 1

    Raises:
        ConfigurationError: If size is not of the form 2^k + 1 with k >= 1
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise ConfigurationError(f"Grid size must be an integer, got {size!r}")
    size = int(size)
    length = size - 1
    if length < 2 or length & (length - 1):
        raise ConfigurationError(
            f"Grid size must be 2^k + 1 with k >= 1 (3, 5, 9, 17, ...), got {size}"
        )
    return length.bit_length() - 1


def is_valid_size(size: int) -> bool:
    """Check whether ``size`` is an acceptable grid side length."""
    try:
        subdivision_levels(size)
    except ConfigurationError:
        return False
    return True


class Heightfield:
    """
    Explicitly sized elevation grid.

    The four corners are the only seed values of a generation pass;
    ``reset_corners`` sets them back to a common value before each pass.
    """

    def __init__(self, size: int = DEFAULT_SIZE, heights: Optional[np.ndarray] = None):
        """
        Initialize the heightfield.

        Args:
            size: Grid side length, 2^k + 1
            heights: Optional existing (size, size) array to wrap; copied as float64

        Raises:
            ConfigurationError: If size is malformed or heights has the wrong shape
        """
        self.levels = subdivision_levels(size)
        self.size = int(size)

        if heights is None:
            self.heights = np.zeros((self.size, self.size), dtype=np.float64)
        else:
            heights = np.asarray(heights, dtype=np.float64)
            if heights.shape != (self.size, self.size):
                raise ConfigurationError(
                    f"Heights shape {heights.shape} does not match grid size {self.size}"
                )
            self.heights = heights.copy()

    @classmethod
    def from_array(cls, heights: np.ndarray) -> "Heightfield":
        """Wrap a square array, validating its side length."""
        heights = np.asarray(heights)
        if heights.ndim != 2 or heights.shape[0] != heights.shape[1]:
            raise ConfigurationError(f"Heightfield must be square, got shape {heights.shape}")
        return cls(heights.shape[0], heights)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.heights.shape

    def __getitem__(self, key):
        return self.heights[key]

    def __setitem__(self, key, value):
        self.heights[key] = value

    def corner_indices(self) -> Tuple[Tuple[int, int], ...]:
        """Corner coordinates in the order (0,0), (0,N-1), (N-1,0), (N-1,N-1)."""
        last = self.size - 1
        return ((0, 0), (0, last), (last, 0), (last, last))

    def corners(self) -> Corners:
        """Current corner elevations, in ``corner_indices`` order."""
        return tuple(float(self.heights[x, y]) for x, y in self.corner_indices())

    def set_corners(self, values: Corners) -> None:
        """Seed the four corners, in ``corner_indices`` order."""
        if len(values) != 4:
            raise ConfigurationError(f"Expected 4 corner values, got {len(values)}")
        for (x, y), value in zip(self.corner_indices(), values):
            self.heights[x, y] = float(value)

    def reset_corners(self, value: float = 0.0) -> None:
        """Reset the four corners to ``value`` before a new generation pass."""
        self.set_corners((value, value, value, value))

    def copy(self) -> "Heightfield":
        return Heightfield(self.size, self.heights)
