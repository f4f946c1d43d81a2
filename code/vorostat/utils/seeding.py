from __future__ import annotations

import os

import numpy as np

__all__ = ["resolve_workers", "spawn_generators"]


def resolve_workers(workers: int | None = None) -> int:
    """Worker count for a fork-join phase; hardware parallelism when unset."""
    if workers is None:
        return max(1, int(os.cpu_count() or 1))
    w = int(workers)
    if w < 1:
        raise ValueError(f"workers must be >= 1, got {w}")
    return w


def spawn_generators(seed: int | np.random.SeedSequence, n: int) -> list[np.random.Generator]:
    """``n`` independent generator streams derived from one master seed.

    Child ``i`` depends only on ``seed`` and ``i``, not on ``n``.
    """
    ss = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(int(seed))
    return [np.random.default_rng(child) for child in ss.spawn(int(n))]
