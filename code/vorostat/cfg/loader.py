from __future__ import annotations

import sys
from collections.abc import Sequence as ABCSequence
from dataclasses import MISSING, asdict, fields, is_dataclass
from pathlib import Path
from types import UnionType
from typing import (
    Any,
    Literal,
    Mapping,
    MutableMapping,
    Sequence,
    Type,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

import yaml

from .schema import ExperimentConfig

_STATISTICS = ("stddev", "median", "diameter")


class ConfigError(ValueError):
    pass


_UNION_TYPES = (Union, UnionType)


def load_config(path: Union[str, Path]) -> ExperimentConfig:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config file: {p}") from exc
    return loads_config(text)


def loads_config(yaml_text: str) -> ExperimentConfig:
    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid configuration data: {exc}") from exc

    if not isinstance(data, Mapping):
        raise ConfigError(f"Top-level configuration must be a mapping, got {type(data).__name__}")

    cfg = _from_mapping(ExperimentConfig, data, path="config")
    validate_config(cfg)
    return cfg


def validate_config(cfg: ExperimentConfig) -> None:
    if cfg.dim < 1:
        raise ConfigError("dim must be >= 1")
    if cfg.voronoi_size < 1:
        raise ConfigError("voronoi_size must be >= 1")
    if cfg.point_cloud_size < 0:
        raise ConfigError("point_cloud_size must be >= 0")
    if cfg.workers is not None and cfg.workers < 1:
        raise ConfigError("workers must be >= 1 (or null for hardware parallelism)")
    if cfg.batch_size < 1:
        raise ConfigError("batch_size must be >= 1")

    stats = tuple(cfg.statistics)
    if not stats:
        raise ConfigError("statistics must list at least one statistic")
    for i, s in enumerate(stats):
        if s not in _STATISTICS:
            raise ConfigError(
                f"statistics[{i}]: expected one of {list(_STATISTICS)}, got {s!r}"
            )
    if len(set(stats)) != len(stats):
        raise ConfigError(f"statistics must not repeat entries, got {list(stats)}")


def to_dict(cfg: ExperimentConfig) -> dict:
    return asdict(cfg)


def _from_mapping(cls: Type[Any], data: Mapping[str, Any], path: str) -> Any:
    if not is_dataclass(cls):
        raise ConfigError(f"Internal error: target {cls!r} is not a dataclass")

    allowed = {f.name for f in fields(cls)}
    unknown = set(data.keys()) - allowed
    if unknown:
        pretty = ", ".join(sorted(map(str, unknown)))
        raise ConfigError(f"Unknown field(s) at {path}: {pretty}")

    mod = sys.modules.get(cls.__module__)
    gns = mod.__dict__ if mod is not None else None
    type_hints = get_type_hints(cls, globalns=gns, localns=None)

    kwargs: MutableMapping[str, Any] = {}
    for f in fields(cls):
        key = f.name
        target_type = type_hints.get(key, f.type)
        if key in data:
            kwargs[key] = _coerce_value_to_type(data[key], target_type, f"{path}.{key}")
        else:
            if f.default is not MISSING or f.default_factory is not MISSING:
                continue
            raise ConfigError(f"Missing required field: {path}.{key}")

    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise ConfigError(f"Failed to construct {cls.__name__} at {path}: {exc}") from exc


def _coerce_value_to_type(value: Any, typ: Any, path: str) -> Any:
    origin = get_origin(typ)
    args = get_args(typ)

    if origin in _UNION_TYPES and type(None) in args:
        if value is None:
            return None
        non_none = [a for a in args if a is not type(None)]
        last_err: Exception | None = None
        for a in non_none:
            try:
                return _coerce_value_to_type(value, a, path)
            except ConfigError as exc:
                last_err = exc
        raise ConfigError(f"Could not coerce value at {path}: {last_err}") from last_err

    if origin is Literal:
        literals = set(args)
        if value not in literals:
            raise ConfigError(f"{path}: expected one of {sorted(map(repr, literals))}, got {value!r}")
        return value

    if origin in (list, tuple, ABCSequence):
        elem_type = args[0] if args else Any
        if isinstance(value, str) or not isinstance(value, Sequence):
            raise ConfigError(f"Expected sequence at {path}, got {type(value).__name__}")
        items = [_coerce_value_to_type(v, elem_type, f"{path}[{i}]") for i, v in enumerate(value)]
        return tuple(items) if origin is tuple else items

    if typ is int:
        if isinstance(value, bool):
            raise ConfigError(f"Expected int at {path}, got bool")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and float(value).is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Expected int at {path}, got {value!r}")

    return value
