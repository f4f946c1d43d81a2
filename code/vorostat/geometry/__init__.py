from __future__ import annotations

from .point import POINT_DTYPE, FixedPoint, chebyshev_distance, chebyshev_norm
from .sampling import RandomPointSource

__all__ = [
    "POINT_DTYPE",
    "FixedPoint",
    "RandomPointSource",
    "chebyshev_distance",
    "chebyshev_norm",
]
