from __future__ import annotations

from .dispersion import (
    STATISTICS,
    centroid,
    diameter,
    distances_to_centroid,
    get_statistic,
    median,
    stddev,
)

__all__ = [
    "STATISTICS",
    "centroid",
    "diameter",
    "distances_to_centroid",
    "get_statistic",
    "median",
    "stddev",
]
