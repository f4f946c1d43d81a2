from __future__ import annotations

from typing import Callable, Dict

import numpy as np

from vorostat.geometry import POINT_DTYPE, FixedPoint, chebyshev_distance
from vorostat.geometry.point import Array

StatFn = Callable[[Array], float]


def _as_partition(partition) -> Array:
    x = np.asarray(partition, dtype=POINT_DTYPE)
    if x.ndim == 1:
        x = x.reshape(1, -1) if x.size else x.reshape(0, 0)
    return x


def centroid(partition) -> FixedPoint:
    """Component-wise mean, accumulated as the sum of ``point / size``.

    The partition must be non-empty.
    """
    pts = _as_partition(partition)
    size = pts.shape[0]
    if size == 0:
        raise ValueError("centroid of an empty partition is undefined")
    return FixedPoint((pts / POINT_DTYPE(size)).sum(axis=0, dtype=POINT_DTYPE))


def distances_to_centroid(partition) -> Array:
    pts = _as_partition(partition)
    return chebyshev_distance(pts, np.asarray(centroid(pts)))


def stddev(partition) -> float:
    """Population standard deviation of L∞ distances to the centroid.

    Returns 0.0 for an empty partition.
    """
    pts = _as_partition(partition)
    size = pts.shape[0]
    if size == 0:
        return 0.0
    d = distances_to_centroid(pts)
    return float(np.sqrt(((d * d) / POINT_DTYPE(size)).sum(dtype=POINT_DTYPE)))


def median(partition) -> float:
    """Median L∞ distance to the centroid.

    Uses selection at index ``size // 2``, so for an even count this is the
    upper of the two middle values rather than their mean. Returns 0.0 for
    an empty partition.
    """
    pts = _as_partition(partition)
    size = pts.shape[0]
    if size == 0:
        return 0.0
    d = distances_to_centroid(pts)
    k = size // 2
    return float(np.partition(d, k)[k])


def diameter(partition) -> float:
    """Largest pairwise L∞ distance; 0.0 below two points. Quadratic in size."""
    pts = _as_partition(partition)
    best = 0.0
    for i in range(1, pts.shape[0]):
        best = max(best, float(chebyshev_distance(pts[:i], pts[i]).max()))
    return best


STATISTICS: Dict[str, StatFn] = {
    "stddev": stddev,
    "median": median,
    "diameter": diameter,
}


def get_statistic(name: str) -> StatFn:
    key = str(name).strip().lower()
    try:
        return STATISTICS[key]
    except KeyError:
        allowed = ", ".join(sorted(STATISTICS))
        raise ValueError(f"Unknown statistic {name!r}; expected one of: {allowed}") from None
