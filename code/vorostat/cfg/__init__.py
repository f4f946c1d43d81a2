from __future__ import annotations

from .schema import ExperimentConfig
from .loader import ConfigError, load_config, loads_config, to_dict, validate_config

__all__ = [
    "ExperimentConfig",
    "ConfigError",
    "load_config",
    "loads_config",
    "validate_config",
    "to_dict",
]
