"""Minimum/maximum elevation of a generated heightfield."""

from typing import NamedTuple, Union

import numpy as np

from .heightfield import Heightfield


class HeightRange(NamedTuple):
    """Elevation extremes of one generation pass."""
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    def normalize(self, value):
        """
        Map an elevation (scalar or array) into [0, 1] relative to this range.

        A flat grid has no span; everything normalizes to 0.0 then.
        """
        if np.ndim(value):
            values = np.asarray(value, dtype=np.float64)
            if self.span == 0:
                return np.zeros_like(values)
            return (values - self.min) / self.span

        if self.span == 0:
            return 0.0
        return (float(value) - self.min) / self.span


def reduce(grid: Union[Heightfield, np.ndarray]) -> HeightRange:
    """
    Scan every cell for the lowest and highest elevation.

    Args:
        grid: Heightfield or array of any non-empty shape (1x1 included)

    Returns:
        HeightRange(min, max)
    """
    heights = grid.heights if isinstance(grid, Heightfield) else np.asarray(grid)
    return HeightRange(float(np.min(heights)), float(np.max(heights)))
