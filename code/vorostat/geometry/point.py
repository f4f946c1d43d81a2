from __future__ import annotations

from typing import Iterable, Iterator, Union

import numpy as np

Array = np.ndarray
Coords = Union[Iterable[float], Array]

POINT_DTYPE = np.float32


def chebyshev_norm(points: Array) -> Array:
    """Row-wise L∞ norm of an ``(..., D)`` array."""
    x = np.asarray(points, dtype=POINT_DTYPE)
    return np.abs(x).max(axis=-1)


def chebyshev_distance(points: Array, other: Array) -> Array:
    """Row-wise L∞ distance between ``points`` and ``other`` (broadcast)."""
    a = np.asarray(points, dtype=POINT_DTYPE)
    b = np.asarray(other, dtype=POINT_DTYPE)
    return np.abs(a - b).max(axis=-1)


class FixedPoint:
    """A point with a fixed number of float32 coordinates.

    Behaves as a mutable value: ``add``, ``subtract`` and ``divide_by`` work in
    place and return ``self``; the ``+``, ``-`` and ``/`` operators return new
    points. The dimension never changes after construction. Norms and
    distances use the Chebyshev (L∞) metric, not the Euclidean one.
    """

    __slots__ = ("_data",)

    def __init__(self, coords: Coords) -> None:
        data = np.array(coords, dtype=POINT_DTYPE).reshape(-1)
        if data.shape[0] == 0:
            raise ValueError("FixedPoint needs at least one coordinate")
        self._data = data

    @classmethod
    def zeros(cls, dim: int) -> "FixedPoint":
        if int(dim) <= 0:
            raise ValueError("dim must be positive")
        return cls(np.zeros((int(dim),), dtype=POINT_DTYPE))

    @property
    def dim(self) -> int:
        return int(self._data.shape[0])

    def __len__(self) -> int:
        return self.dim

    def __getitem__(self, i: int) -> float:
        return float(self._data[i])

    def __setitem__(self, i: int, value: float) -> None:
        self._data[i] = value

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._data)

    def __array__(self, dtype=None, copy=None) -> Array:
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    def tolist(self) -> list[float]:
        return [float(v) for v in self._data]

    def copy(self) -> "FixedPoint":
        return FixedPoint(self._data)

    def _coerce(self, other: "FixedPoint") -> Array:
        o = other._data if isinstance(other, FixedPoint) else np.asarray(other, dtype=POINT_DTYPE)
        if o.shape != self._data.shape:
            raise ValueError(f"Point has dim {o.reshape(-1).shape[0]}, expected {self.dim}")
        return o

    def norm(self) -> float:
        return float(np.abs(self._data).max())

    def distance(self, other: "FixedPoint") -> float:
        return float(np.abs(self._data - self._coerce(other)).max())

    def add(self, other: "FixedPoint") -> "FixedPoint":
        self._data += self._coerce(other)
        return self

    def subtract(self, other: "FixedPoint") -> "FixedPoint":
        self._data -= self._coerce(other)
        return self

    def divide_by(self, scalar: float) -> "FixedPoint":
        # IEEE semantics: x / 0 gives inf or nan, no check
        with np.errstate(divide="ignore", invalid="ignore"):
            self._data /= POINT_DTYPE(scalar)
        return self

    def __add__(self, other: "FixedPoint") -> "FixedPoint":
        return self.copy().add(other)

    def __sub__(self, other: "FixedPoint") -> "FixedPoint":
        return self.copy().subtract(other)

    def __truediv__(self, scalar: float) -> "FixedPoint":
        return self.copy().divide_by(scalar)

    def __iadd__(self, other: "FixedPoint") -> "FixedPoint":
        return self.add(other)

    def __isub__(self, other: "FixedPoint") -> "FixedPoint":
        return self.subtract(other)

    def __itruediv__(self, scalar: float) -> "FixedPoint":
        return self.divide_by(scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedPoint):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        coords = ", ".join(f"{v:g}" for v in self._data.tolist())
        return f"FixedPoint({coords})"
