from ._version import __version__
from .cfg import ConfigError, ExperimentConfig, load_config
from .geometry import FixedPoint, RandomPointSource
from .partition import PartitionEngine, Partitioning
from .pipeline import ExperimentResult, run_experiment
from .reduce import parallel_reduce
from .voronoi import SeedSet

__all__ = (
    "__version__",
    "ConfigError",
    "ExperimentConfig",
    "ExperimentResult",
    "FixedPoint",
    "PartitionEngine",
    "Partitioning",
    "RandomPointSource",
    "SeedSet",
    "load_config",
    "parallel_reduce",
    "run_experiment",
)
