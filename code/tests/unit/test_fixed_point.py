from __future__ import annotations

import math

import numpy as np
import pytest

from vorostat.geometry import FixedPoint, chebyshev_distance, chebyshev_norm


def _random_points(n: int, dim: int = 8, seed: int = 0) -> list[FixedPoint]:
    rng = np.random.default_rng(seed)
    return [FixedPoint(x) for x in rng.uniform(-1.0, 1.0, size=(n, dim))]


def test_norm_is_max_abs_coordinate_not_euclidean() -> None:
    p = FixedPoint([0.5, -0.75, 0.25])
    assert p.norm() == pytest.approx(0.75)
    assert FixedPoint.zeros(4).norm() == 0.0


def test_distance_symmetric_and_zero_on_self() -> None:
    pts = _random_points(200)
    for p, q in zip(pts[:-1], pts[1:]):
        assert p.distance(q) == q.distance(p)
        assert p.distance(p) == 0.0


def test_distance_satisfies_triangle_inequality() -> None:
    pts = _random_points(300, seed=1)
    for p, q, r in zip(pts[0::3], pts[1::3], pts[2::3]):
        assert p.distance(r) <= p.distance(q) + q.distance(r) + 1e-6


def test_in_place_arithmetic_and_operators() -> None:
    p = FixedPoint([1.0, 2.0, 3.0])
    q = FixedPoint([0.5, 0.5, 0.5])

    s = p + q
    assert s == FixedPoint([1.5, 2.5, 3.5])
    assert p == FixedPoint([1.0, 2.0, 3.0])
    assert (p - q) == FixedPoint([0.5, 1.5, 2.5])
    assert (p / 2) == FixedPoint([0.5, 1.0, 1.5])

    same = p.add(q)
    assert same is p
    assert p == FixedPoint([1.5, 2.5, 3.5])
    p.subtract(q).divide_by(4)
    assert p == FixedPoint([0.25, 0.5, 0.75])
    assert p.dim == 3


def test_divide_by_zero_follows_ieee() -> None:
    p = FixedPoint([1.0, -1.0, 0.0]) / 0
    assert p[0] == math.inf
    assert p[1] == -math.inf
    assert math.isnan(p[2])


def test_dimension_mismatch_is_rejected() -> None:
    with pytest.raises(ValueError):
        FixedPoint([1.0, 2.0]).distance(FixedPoint([1.0, 2.0, 3.0]))
    with pytest.raises(ValueError):
        FixedPoint([])


def test_equality_is_structural() -> None:
    assert FixedPoint([1.0, 2.0]) == FixedPoint(np.array([1.0, 2.0]))
    assert FixedPoint([1.0, 2.0]) != FixedPoint([2.0, 1.0])
    assert FixedPoint([1.0, 2.0]) != FixedPoint([1.0, 2.0, 0.0])


def test_batch_helpers_match_scalar_methods() -> None:
    rng = np.random.default_rng(2)
    pts = rng.uniform(-1.0, 1.0, size=(50, 5)).astype(np.float32)
    ref = pts[0]

    norms = chebyshev_norm(pts)
    dists = chebyshev_distance(pts, ref)
    for i, row in enumerate(pts):
        assert norms[i] == pytest.approx(FixedPoint(row).norm())
        assert dists[i] == pytest.approx(FixedPoint(row).distance(FixedPoint(ref)))
