from __future__ import annotations

from typing import Iterable, Mapping, Sequence

REPORT_TITLES = {
    "stddev": "Stddevs from center:",
    "median": "Medians from center:",
    "diameter": "Diameters:",
}


def format_value(value: float) -> str:
    return f"{float(value):g}"


def format_vector(values: Iterable[float]) -> str:
    """Render values as ``{v1, v2, ..., vn}``."""
    return "{" + ", ".join(format_value(v) for v in values) + "}"


def render_report(results: Mapping[str, Sequence[float]]) -> str:
    blocks = []
    for name, values in results.items():
        title = REPORT_TITLES.get(name, f"{name}:")
        blocks.append(f"{title}\n{format_vector(values)}\n\n")
    return "".join(blocks)
