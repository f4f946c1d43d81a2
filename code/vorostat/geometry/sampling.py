from __future__ import annotations

import numpy as np

from .point import POINT_DTYPE, Array, FixedPoint, chebyshev_norm


class RandomPointSource:
    """Uniform points inside the closed L∞ unit ball.

    Coordinates are drawn from [-1, 1) and the whole point is redrawn while
    its norm exceeds 1. Under the Chebyshev norm every draw already satisfies
    ``norm() <= 1``, so the rejection loop never repeats; it is kept so that
    the acceptance test is explicit and survives a change of metric.
    """

    def __init__(self, dim: int) -> None:
        if int(dim) <= 0:
            raise ValueError("dim must be positive")
        self.dim = int(dim)

    def _draw(self, rng: np.random.Generator, n: int) -> Array:
        return rng.uniform(-1.0, 1.0, size=(n, self.dim)).astype(POINT_DTYPE)

    def sample(self, rng: np.random.Generator) -> FixedPoint:
        while True:
            point = FixedPoint(self._draw(rng, 1)[0])
            if point.norm() <= 1.0:
                return point

    def sample_batch(self, rng: np.random.Generator, n: int) -> Array:
        """``n`` accepted points as an ``(n, dim)`` float32 array."""
        n = int(n)
        out = self._draw(rng, n)
        rejected = np.flatnonzero(chebyshev_norm(out) > 1.0)
        while rejected.size:
            out[rejected] = self._draw(rng, rejected.size)
            rejected = rejected[chebyshev_norm(out[rejected]) > 1.0]
        return out
