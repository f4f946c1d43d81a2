from __future__ import annotations

from .loggers import get_logger
from .seeding import resolve_workers, spawn_generators

__all__ = ["get_logger", "resolve_workers", "spawn_generators"]
