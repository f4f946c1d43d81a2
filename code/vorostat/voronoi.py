from __future__ import annotations

from typing import Iterator

import numpy as np

from vorostat.geometry import POINT_DTYPE, FixedPoint, RandomPointSource
from vorostat.geometry.point import Array

# Points resolved per broadcast block in nearest_indices; bounds the
# (block, N, D) temporary.
_QUERY_BLOCK = 4096


class SeedSet:
    """Immutable Voronoi generators with exact nearest-seed lookup.

    Lookup is a brute-force linear scan under the L∞ distance. A strict ``<``
    comparison keeps the first minimum, so ties go to the lowest seed index.
    The seed array is read-only after construction and may be shared by any
    number of reader threads.
    """

    def __init__(self, points: Array) -> None:
        pts = np.array(points, dtype=POINT_DTYPE)
        if pts.ndim != 2 or pts.shape[1] == 0:
            raise ValueError("seed points must have shape (N, D) with D >= 1")
        if pts.shape[0] == 0:
            raise ValueError("SeedSet needs at least one seed")
        pts.setflags(write=False)
        self._points = pts

    @classmethod
    def generate(cls, size: int, rng: np.random.Generator, dim: int) -> "SeedSet":
        if int(size) < 1:
            raise ValueError(f"voronoi size must be >= 1, got {size}")
        source = RandomPointSource(dim)
        return cls(np.stack([np.asarray(source.sample(rng)) for _ in range(int(size))]))

    @property
    def dim(self) -> int:
        return int(self._points.shape[1])

    @property
    def points(self) -> Array:
        return self._points

    def __len__(self) -> int:
        return int(self._points.shape[0])

    def __iter__(self) -> Iterator[FixedPoint]:
        return (FixedPoint(p) for p in self._points)

    def __getitem__(self, i: int) -> FixedPoint:
        return FixedPoint(self._points[i])

    def nearest_index(self, point: FixedPoint) -> int:
        x = np.asarray(point, dtype=POINT_DTYPE).reshape(-1)
        if x.shape[0] != self.dim:
            raise ValueError(f"Point has dim {x.shape[0]}, expected {self.dim}")
        min_index = 0
        min_dist = np.finfo(POINT_DTYPE).max
        for i, seed in enumerate(self._points):
            dist = np.abs(seed - x).max()
            if dist < min_dist:
                min_dist = dist
                min_index = i
        return min_index

    def nearest_indices(self, points: Array) -> Array:
        """Vectorised ``nearest_index`` for an ``(n, D)`` array.

        ``argmin`` returns the first occurrence of the minimum, which matches
        the tie-break of the scalar scan.
        """
        pts = np.asarray(points, dtype=POINT_DTYPE)
        if pts.ndim != 2 or pts.shape[1] != self.dim:
            raise ValueError(f"points must have shape (n, {self.dim})")
        out = np.empty((pts.shape[0],), dtype=np.int64)
        for start in range(0, pts.shape[0], _QUERY_BLOCK):
            block = pts[start : start + _QUERY_BLOCK]
            dists = np.abs(block[:, None, :] - self._points[None, :, :]).max(axis=2)
            out[start : start + block.shape[0]] = dists.argmin(axis=1)
        return out
