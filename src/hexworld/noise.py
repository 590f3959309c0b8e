"""Coherent noise used to texture coastlines.

Provides an immutable fractal (fBm) field over OpenSimplex noise that can be
evaluated per tile or sampled over a whole grid at once.
"""

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

from .config import SEED_MASK_31

COAST_OCTAVES = 4
COAST_LACUNARITY = 2.0
COAST_GAIN = 0.5
COAST_FREQUENCY = 0.07


@dataclass(frozen=True)
class CoastNoise:
    """Fractal noise field returning values in [-1, 1] for integer coordinates.

    The field is fully determined by its parameters; evaluating it has no
    side effects, so one instance can be shared freely.
    """

    seed: int
    octaves: int = COAST_OCTAVES
    lacunarity: float = COAST_LACUNARITY
    gain: float = COAST_GAIN
    frequency: float = COAST_FREQUENCY
    _generator: OpenSimplex = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "seed", self.seed & SEED_MASK_31)
        object.__setattr__(self, "_generator", OpenSimplex(seed=self.seed))

    @classmethod
    def for_seed(cls, seed: int) -> "CoastNoise":
        """Build the coastline noise field for a world seed."""
        return cls(seed=seed)

    def _octave_params(self) -> list[tuple[float, float]]:
        """(frequency, amplitude) for each octave."""
        params = []
        frequency = self.frequency
        amplitude = 1.0
        for _ in range(self.octaves):
            params.append((frequency, amplitude))
            frequency *= self.lacunarity
            amplitude *= self.gain
        return params

    def value(self, x: float, y: float) -> float:
        """Evaluate the field at a coordinate.

        Args:
            x: Column.
            y: Row.

        Returns:
            Noise value in [-1, 1].
        """
        total = 0.0
        max_amplitude = 0.0
        for frequency, amplitude in self._octave_params():
            total += amplitude * self._generator.noise2(x * frequency, y * frequency)
            max_amplitude += amplitude

        if max_amplitude == 0.0:
            return 0.0
        return min(1.0, max(-1.0, total / max_amplitude))

    def value01(self, x: float, y: float) -> float:
        """Evaluate the field remapped to [0, 1]."""
        return 0.5 * (self.value(x, y) + 1.0)

    def sample(self, width: int, height: int) -> NDArray[np.float32]:
        """Evaluate the field over a whole grid.

        Args:
            width: Grid width.
            height: Grid height.

        Returns:
            float32 array of shape (height, width) with values in [-1, 1].
        """
        xs = np.arange(width, dtype=np.float64)
        ys = np.arange(height, dtype=np.float64)

        result = np.zeros((height, width), dtype=np.float64)
        max_amplitude = 0.0
        for frequency, amplitude in self._octave_params():
            # noise2array returns shape (len(ys), len(xs))
            result += amplitude * self._generator.noise2array(xs * frequency, ys * frequency)
            max_amplitude += amplitude

        if max_amplitude > 0.0:
            result /= max_amplitude
        return np.clip(result, -1.0, 1.0).astype(np.float32)
