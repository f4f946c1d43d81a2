from __future__ import annotations

from time import perf_counter
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from vorostat.parallel import fork_join
from vorostat.utils.loggers import log_phase_timing
from vorostat.utils.seeding import resolve_workers

P = TypeVar("P")
R = TypeVar("R")


def chunk_bounds(n: int, workers: int) -> List[Tuple[int, int]]:
    """Contiguous ``[begin, end)`` ranges, one per worker.

    Every range has ``n // workers`` items except the last, which also takes
    the remainder. Ranges are disjoint and cover ``[0, n)`` exactly.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    step = n // workers
    return [
        (i * step, n if i + 1 == workers else (i + 1) * step)
        for i in range(workers)
    ]


def parallel_reduce(
    partitions: Sequence[P],
    fn: Callable[[P], R],
    *,
    workers: Optional[int] = None,
) -> List[R]:
    """Apply ``fn`` to every partition concurrently; ``out[i] == fn(partitions[i])``."""
    w = resolve_workers(workers)
    n = len(partitions)
    results: List[Optional[R]] = [None] * n

    def _run(begin: int, end: int) -> None:
        # each worker owns [begin, end) of the pre-sized list; no lock needed
        for ix in range(begin, end):
            results[ix] = fn(partitions[ix])

    tasks = [lambda b=b, e=e: _run(b, e) for b, e in chunk_bounds(n, w)]
    t0 = perf_counter()
    fork_join(tasks, name="vorostat-reduce")
    log_phase_timing(
        f"reduce[{getattr(fn, '__name__', 'fn')}]",
        perf_counter() - t0,
        workers=w,
        partitions=n,
    )
    return results  # type: ignore[return-value]
