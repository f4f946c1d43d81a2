from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

StatisticLiteral = Literal["stddev", "median", "diameter"]


@dataclass(frozen=True)
class ExperimentConfig:
    dim: int = 8
    voronoi_size: int = 128
    point_cloud_size: int = 1 << 26
    seed: int = 1234
    workers: Optional[int] = None
    batch_size: int = 65_536
    statistics: tuple[StatisticLiteral, ...] = field(default_factory=lambda: ("stddev", "median"))
