from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import Dict, List

from vorostat.cfg import ExperimentConfig, validate_config
from vorostat.partition import PartitionEngine
from vorostat.reduce import parallel_reduce
from vorostat.stats import get_statistic
from vorostat.utils.loggers import get_logger

logger = get_logger("pipeline")


@dataclass
class ExperimentResult:
    cfg: ExperimentConfig
    workers: int
    sizes: List[int]
    results: Dict[str, List[float]] = field(default_factory=dict)
    timings_s: Dict[str, float] = field(default_factory=dict)

    @property
    def total_assigned(self) -> int:
        return int(sum(self.sizes))


def run_experiment(cfg: ExperimentConfig) -> ExperimentResult:
    """Partition the point cloud, then reduce each statistic and sort it ascending."""
    validate_config(cfg)
    engine = PartitionEngine(
        cfg.voronoi_size,
        cfg.point_cloud_size,
        dim=cfg.dim,
        workers=cfg.workers,
        seed=cfg.seed,
        batch_size=cfg.batch_size,
    )
    logger.info(
        "Partitioning %d sample(s) among %d seed(s) in %d dimension(s) with %d worker(s)",
        cfg.point_cloud_size,
        cfg.voronoi_size,
        cfg.dim,
        engine.workers,
    )

    t0 = perf_counter()
    partitioning = engine.run()
    out = ExperimentResult(cfg=cfg, workers=partitioning.workers, sizes=partitioning.sizes)
    out.timings_s["partition"] = perf_counter() - t0

    for name in cfg.statistics:
        fn = get_statistic(name)
        t0 = perf_counter()
        values = parallel_reduce(partitioning.partitions, fn, workers=partitioning.workers)
        out.timings_s[name] = perf_counter() - t0
        out.results[name] = sorted(float(v) for v in values)

    return out
