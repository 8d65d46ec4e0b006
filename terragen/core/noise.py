"""
Noise sources for midpoint displacement.

A noise source returns perturbations uniformly distributed in
[-amplitude, +amplitude]. The generator never touches a global random
state; it only talks to the source it was handed, so tests can pin the
stream with a seed or replace it with a constant.
"""

from typing import Optional, Tuple, Union

import numpy as np
import structlog

from ..utils.random import Seed, resolve_seed

logger = structlog.get_logger()

Shape = Union[int, Tuple[int, ...]]


class NoiseSource:
    """
    Base class for perturbation sources.

    Subclasses must implement ``sample``. ``samples`` draws a whole block
    at once and falls back to repeated ``sample`` calls in C order.
    """

    def __init__(self):
        # Number of values handed out since construction or the last reseed
        self.call_count = 0
        self.seed: Optional[int] = None

    def reseed(self, seed: Optional[Seed] = None) -> Optional[int]:
        """Restart the stream; sources without randomness ignore the seed."""
        self.call_count = 0
        return self.seed

    def sample(self, amplitude: float) -> float:
        """Return one perturbation scaled by ``amplitude``."""
        raise NotImplementedError

    def samples(self, amplitude: float, shape: Shape) -> np.ndarray:
        """
        Return an array of perturbations scaled by ``amplitude``.

        Args:
            amplitude: Maximum magnitude of the perturbation
            shape: Shape of the returned array

        Returns:
            float64 array of the requested shape
        """
        out = np.empty(shape, dtype=np.float64)
        flat = out.reshape(-1)
        for i in range(flat.size):
            flat[i] = self.sample(amplitude)
        return out


class UniformNoise(NoiseSource):
    """
    Uniform noise backed by a numpy PCG64 generator.

    The same seed always produces the same stream. Without a seed the
    generator is seeded from the wall clock, so successive runs produce
    different terrain.
    """

    def __init__(self, seed: Optional[Seed] = None):
        super().__init__()
        self.seed = resolve_seed(seed)
        self._rng = np.random.default_rng(self.seed)

    def reseed(self, seed: Optional[Seed] = None) -> int:
        """
        Restart the stream from a new seed.

        Args:
            seed: Integer or string seed, None for a time based seed

        Returns:
            The integer seed actually used
        """
        self.seed = resolve_seed(seed)
        self._rng = np.random.default_rng(self.seed)
        self.call_count = 0
        logger.debug("Noise source reseeded", seed=self.seed)
        return self.seed

    def sample(self, amplitude: float) -> float:
        self.call_count += 1
        return float(self._rng.uniform(-1.0, 1.0)) * amplitude

    def samples(self, amplitude: float, shape: Shape) -> np.ndarray:
        values = self._rng.uniform(-1.0, 1.0, size=shape) * amplitude
        self.call_count += values.size
        return values


class ConstantNoise(NoiseSource):
    """Noise source that always returns the same value, whatever the amplitude."""

    def __init__(self, value: float = 0.0):
        super().__init__()
        self.value = float(value)

    def sample(self, amplitude: float) -> float:
        self.call_count += 1
        return self.value

    def samples(self, amplitude: float, shape: Shape) -> np.ndarray:
        values = np.full(shape, self.value, dtype=np.float64)
        self.call_count += values.size
        return values
