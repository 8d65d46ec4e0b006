"""
Diamond-Square heightfield generation.

Starting from the four seeded corners, each subdivision level runs a
square step (centre of every square = mean of its corners + noise) and
then a diamond step (every edge midpoint = mean of its in-bounds axis
neighbours + noise). The step length halves and the noise amplitude is
scaled by 2^-roughness after each level.

Each step is vectorized over all cells of the level with NumPy slicing.
Cells written by a step only read cells written by earlier steps, so the
sequence of array operations is the barrier between steps and levels.
"""

import math
import time
from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np
import structlog

from .heightfield import DEFAULT_SIZE, ConfigurationError, Heightfield, subdivision_levels
from .height_range import HeightRange, reduce
from .noise import NoiseSource, UniformNoise
from ..utils.random import Seed

logger = structlog.get_logger()

DEFAULT_AMPLITUDE = 50.0
DEFAULT_ROUGHNESS = 1.20


def _level_amplitudes(levels: int, initial_amplitude: float, roughness: float) -> List[float]:
    # 2.0 ** x raises OverflowError for very negative roughness
    decay = 2.0 ** -roughness
    schedule = []
    amplitude = float(initial_amplitude)
    for _ in range(levels):
        schedule.append(amplitude)
        amplitude *= decay
    return schedule


def _check_parameters(
    initial_amplitude: float, roughness: float, levels: Optional[int] = None
) -> List[str]:
    errors = []
    if not math.isfinite(initial_amplitude) or initial_amplitude < 0:
        errors.append("initial_amplitude must be a finite, non-negative number")
    if not math.isfinite(roughness):
        errors.append("roughness must be a finite number")
    if errors or levels is None:
        return errors

    # A cell never exceeds the sum of all amplitudes, and a step adds up to
    # four cells before dividing.
    try:
        bound = 4.0 * sum(_level_amplitudes(levels, initial_amplitude, roughness))
    except OverflowError:
        bound = math.inf
    if not math.isfinite(bound):
        errors.append(
            f"initial_amplitude={initial_amplitude} with roughness={roughness} "
            f"overflows floating point heights over {levels} levels"
        )
    return errors


def amplitude_schedule(
    size: int,
    initial_amplitude: float = DEFAULT_AMPLITUDE,
    roughness: float = DEFAULT_ROUGHNESS,
) -> List[float]:
    """
    Noise amplitude used at each subdivision level, coarse to fine.

    Args:
        size: Grid side length, 2^k + 1
        initial_amplitude: Amplitude of the first level
        roughness: Decay exponent between levels

    Returns:
        List of k amplitudes; entry i equals initial_amplitude * 2^(-roughness * i)

    Raises:
        ConfigurationError: If the size is malformed or the decay overflows
    """
    levels = subdivision_levels(size)
    try:
        return _level_amplitudes(levels, initial_amplitude, roughness)
    except OverflowError as e:
        raise ConfigurationError(f"roughness={roughness} overflows the amplitude decay") from e


def _square_step(
    heights: np.ndarray, length: int, half: int, amplitude: float, noise: NoiseSource
) -> None:
    """Set the centre of every square of side ``length``."""
    corner_sum = (
        heights[0:-1:length, 0:-1:length]
        + heights[length::length, 0:-1:length]
        + heights[0:-1:length, length::length]
        + heights[length::length, length::length]
    )
    heights[half::length, half::length] = (
        corner_sum / 4.0 + noise.samples(amplitude, corner_sum.shape)
    )


def _diamond_step(
    heights: np.ndarray, length: int, half: int, amplitude: float, noise: NoiseSource
) -> None:
    """
    Set every edge midpoint of the current level.

    The midpoints split into two lattices: points between two corners in
    x (x odd multiple of ``half``) and points between two corners in y.
    Along the axis joining its two corners every point has both neighbours;
    along the other axis its neighbours are square centres, which are
    missing on the grid border. Dividing by the real neighbour count keeps
    border values from being pulled towards zero.
    """
    centers = heights[half::length, half::length]

    # x = half + i*length, y = j*length
    total = heights[0:-1:length, ::length] + heights[length::length, ::length]
    count = np.full(total.shape, 2.0)
    total[:, 1:] += centers
    count[:, 1:] += 1
    total[:, :-1] += centers
    count[:, :-1] += 1
    between_x = total / count + noise.samples(amplitude, total.shape)

    # x = i*length, y = half + j*length
    total = heights[::length, 0:-1:length] + heights[::length, length::length]
    count = np.full(total.shape, 2.0)
    total[1:, :] += centers
    count[1:, :] += 1
    total[:-1, :] += centers
    count[:-1, :] += 1
    between_y = total / count + noise.samples(amplitude, total.shape)

    heights[half::length, ::length] = between_x
    heights[::length, half::length] = between_y


def _as_heights(grid: Union[Heightfield, np.ndarray]) -> np.ndarray:
    if isinstance(grid, Heightfield):
        return grid.heights

    if not isinstance(grid, np.ndarray):
        raise ConfigurationError("Grid must be a Heightfield or a numpy array")
    if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
        raise ConfigurationError(f"Grid must be square, got shape {grid.shape}")
    if not np.issubdtype(grid.dtype, np.floating):
        raise ConfigurationError(f"Grid must hold floating point values, got {grid.dtype}")
    subdivision_levels(grid.shape[0])
    return grid


def generate(
    grid: Union[Heightfield, np.ndarray],
    initial_amplitude: float = DEFAULT_AMPLITUDE,
    roughness: float = DEFAULT_ROUGHNESS,
    noise: Optional[NoiseSource] = None,
) -> Union[Heightfield, np.ndarray]:
    """
    Run Diamond-Square over ``grid`` in place.

    The four corners must already be seeded; they are never written.

    Args:
        grid: Heightfield, or square float array of side 2^k + 1
        initial_amplitude: Noise amplitude of the coarsest level
        roughness: Amplitude decay exponent per level (lower = rougher)
        noise: Perturbation source; a time seeded UniformNoise if omitted

    Returns:
        The same ``grid`` object, now fully populated

    Raises:
        ConfigurationError: If the grid size or parameters are malformed
    """
    heights = _as_heights(grid)
    size = heights.shape[0]
    errors = _check_parameters(initial_amplitude, roughness, subdivision_levels(size))
    if errors:
        raise ConfigurationError("; ".join(errors))
    if noise is None:
        noise = UniformNoise()

    length = size - 1
    amplitude = float(initial_amplitude)
    decay = 2.0 ** -roughness

    while length > 1:
        half = length // 2

        _square_step(heights, length, half, amplitude, noise)
        _diamond_step(heights, length, half, amplitude, noise)
        logger.debug("Subdivision level complete", length=length, amplitude=amplitude)

        length //= 2
        amplitude *= decay

    return grid


@dataclass
class DiamondSquareConfig:
    """Configuration for Diamond-Square generation."""

    size: int = DEFAULT_SIZE
    initial_amplitude: float = DEFAULT_AMPLITUDE
    roughness: float = DEFAULT_ROUGHNESS

    @property
    def levels(self) -> int:
        return subdivision_levels(self.size)

    @classmethod
    def from_settings(cls, settings) -> "DiamondSquareConfig":
        """Build a config from the application settings object."""
        return cls(
            size=settings.grid_size,
            initial_amplitude=settings.initial_amplitude,
            roughness=settings.roughness,
        )

    def validate(self) -> List[str]:
        """
        Validate configuration parameters.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        levels = None
        try:
            levels = subdivision_levels(self.size)
        except ConfigurationError as e:
            errors.append(str(e))
        errors.extend(_check_parameters(self.initial_amplitude, self.roughness, levels))
        return errors


@dataclass
class TerrainSnapshot:
    """Read-only result of one generation pass, handed to consumers."""

    heights: np.ndarray
    height_range: HeightRange
    size: int
    seed: Optional[int]
    generation_time_seconds: float
    config: DiamondSquareConfig = field(default_factory=DiamondSquareConfig)


class DiamondSquareGenerator:
    """
    Owns one heightfield and regenerates it on demand.

    Every pass resets the corners to 0.0, runs Diamond-Square and then
    scans the height range, in that order. Successive passes continue the
    same noise stream unless a new seed is given, so each regeneration
    looks different while a fixed seed stays reproducible.
    """

    def __init__(
        self,
        config: Optional[DiamondSquareConfig] = None,
        noise: Optional[NoiseSource] = None,
        seed: Optional[Seed] = None,
    ):
        """
        Initialize the generator.

        Args:
            config: Generation parameters (defaults: 257, 50.0, 1.20)
            noise: Perturbation source; UniformNoise(seed) if omitted
            seed: Optional seed applied to the noise source

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = config or DiamondSquareConfig()
        errors = self.config.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))

        self.heightfield = Heightfield(self.config.size)

        if noise is None:
            noise = UniformNoise(seed)
        elif seed is not None:
            noise.reseed(seed)
        self.noise = noise

        self.snapshot: Optional[TerrainSnapshot] = None

    def regenerate(self, seed: Optional[Seed] = None) -> TerrainSnapshot:
        """
        Produce a fresh terrain.

        Args:
            seed: Reseed the noise source first; None continues the stream

        Returns:
            TerrainSnapshot with a read-only copy of the heights and their range
        """
        if seed is not None:
            self.noise.reseed(seed)

        start = time.perf_counter()
        self.heightfield.reset_corners(0.0)
        generate(
            self.heightfield,
            self.config.initial_amplitude,
            self.config.roughness,
            self.noise,
        )
        height_range = reduce(self.heightfield)
        elapsed = time.perf_counter() - start

        heights = self.heightfield.heights.copy()
        heights.setflags(write=False)

        self.snapshot = TerrainSnapshot(
            heights=heights,
            height_range=height_range,
            size=self.config.size,
            seed=self.noise.seed,
            generation_time_seconds=elapsed,
            config=self.config,
        )

        logger.info(
            "Terrain generated",
            size=self.config.size,
            seed=self.noise.seed,
            min_height=height_range.min,
            max_height=height_range.max,
            elapsed=round(elapsed, 4),
        )
        return self.snapshot
