from __future__ import annotations

import logging
from logging import Logger

_DEFAULT_LOGGER_NAME = "vorostat"


def get_logger(name: str | None = None) -> Logger:
    base = logging.getLogger(_DEFAULT_LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        base.addHandler(handler)
        base.setLevel(logging.INFO)
        base.propagate = False
    return base if name is None else base.getChild(str(name))


def set_verbosity(verbose: bool) -> None:
    get_logger().setLevel(logging.DEBUG if verbose else logging.INFO)


def log_phase_timing(phase: str, seconds: float, **fields: object) -> None:
    extra = " ".join(f"{k}={v}" for k, v in fields.items())
    msg = f"{phase} finished in {seconds:.3f}s"
    get_logger("timing").info("%s%s", msg, f" ({extra})" if extra else "")
