from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from time import perf_counter
from typing import List, Optional, Tuple

import numpy as np

from vorostat.geometry import POINT_DTYPE, RandomPointSource
from vorostat.geometry.point import Array
from vorostat.parallel import fork_join
from vorostat.utils.loggers import get_logger, log_phase_timing
from vorostat.utils.seeding import resolve_workers, spawn_generators
from vorostat.voronoi import SeedSet

logger = get_logger("partition")

DEFAULT_BATCH_SIZE = 65_536

WorkerBuffer = Tuple[Array, Array]


@dataclass(frozen=True)
class Partitioning:
    seeds: SeedSet
    partitions: List[Array]
    workers: int
    requested_samples: int

    @property
    def sizes(self) -> List[int]:
        return [int(p.shape[0]) for p in self.partitions]

    @property
    def total_assigned(self) -> int:
        return int(sum(self.sizes))

    @property
    def dropped(self) -> int:
        return int(self.requested_samples - self.total_assigned)


def _sample_worker(
    seeds: SeedSet,
    source: RandomPointSource,
    rng: np.random.Generator,
    work_amount: int,
    batch_size: int,
) -> WorkerBuffer:
    points = np.empty((work_amount, source.dim), dtype=POINT_DTYPE)
    nearest = np.empty((work_amount,), dtype=np.int64)
    for start in range(0, work_amount, batch_size):
        n = min(batch_size, work_amount - start)
        batch = source.sample_batch(rng, n)
        points[start : start + n] = batch
        nearest[start : start + n] = seeds.nearest_indices(batch)
    return points, nearest


def merge_worker_buffers(buffers: List[WorkerBuffer], num_partitions: int, dim: int) -> List[Array]:
    """Single-threaded merge of per-worker ``(points, nearest)`` buffers.

    Within a partition, points keep worker order, then sample order. The
    buffers are popped from ``buffers`` as they are copied into one
    preallocated array, so each is released once copied.
    """
    counts = np.zeros((num_partitions,), dtype=np.int64)
    for _, nearest in buffers:
        counts += np.bincount(nearest, minlength=num_partitions)
    offsets = np.concatenate(([0], np.cumsum(counts)))
    merged = np.empty((int(offsets[-1]), dim), dtype=POINT_DTYPE)

    cursor = offsets[:-1].copy()
    while buffers:
        points, nearest = buffers.pop(0)
        order = np.argsort(nearest, kind="stable")
        sorted_ix = nearest[order]
        per_part = np.bincount(nearest, minlength=num_partitions)
        starts = np.concatenate(([0], np.cumsum(per_part)[:-1]))
        rank = np.arange(order.shape[0]) - starts[sorted_ix]
        merged[cursor[sorted_ix] + rank] = points[order]
        cursor += per_part
        del points, nearest, order, sorted_ix

    return np.split(merged, offsets[1:-1])


class PartitionEngine:
    """Samples a point cloud and groups it by nearest seed.

    One seed set is built up front from a dedicated generator stream. ``W``
    sampling workers then each draw ``M // W`` points from their own stream
    and resolve nearest seeds against the shared, read-only seed set; the
    ``M % W`` remainder is dropped. Worker buffers are merged on the calling
    thread after the join.
    """

    def __init__(
        self,
        voronoi_size: int,
        point_cloud_size: int,
        *,
        dim: int = 8,
        workers: Optional[int] = None,
        seed: int = 1234,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if int(voronoi_size) < 1:
            raise ValueError(f"voronoi_size must be >= 1, got {voronoi_size}")
        if int(point_cloud_size) < 0:
            raise ValueError(f"point_cloud_size must be >= 0, got {point_cloud_size}")
        if int(batch_size) < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.voronoi_size = int(voronoi_size)
        self.point_cloud_size = int(point_cloud_size)
        self.dim = int(dim)
        self.workers = resolve_workers(workers)
        self.seed = int(seed)
        self.batch_size = int(batch_size)
        self.source = RandomPointSource(self.dim)

    def run(self) -> Partitioning:
        rngs = spawn_generators(self.seed, self.workers + 1)
        seeds = SeedSet.generate(self.voronoi_size, rngs[0], self.dim)

        work_amount = self.point_cloud_size // self.workers
        if work_amount * self.workers != self.point_cloud_size:
            logger.debug(
                "Dropping %d sample(s): %d not divisible by %d workers",
                self.point_cloud_size - work_amount * self.workers,
                self.point_cloud_size,
                self.workers,
            )

        tasks = [
            partial(_sample_worker, seeds, self.source, rng, work_amount, self.batch_size)
            for rng in rngs[1:]
        ]
        t0 = perf_counter()
        buffers = fork_join(tasks, name="vorostat-sample")
        log_phase_timing("sampling", perf_counter() - t0, workers=self.workers, per_worker=work_amount)

        t0 = perf_counter()
        partitions = merge_worker_buffers(buffers, self.voronoi_size, self.dim)
        log_phase_timing("merge", perf_counter() - t0, partitions=len(partitions))

        empty = sum(1 for p in partitions if p.shape[0] == 0)
        if empty:
            logger.debug("%d of %d partition(s) received no samples", empty, len(partitions))

        return Partitioning(
            seeds=seeds,
            partitions=partitions,
            workers=self.workers,
            requested_samples=self.point_cloud_size,
        )
