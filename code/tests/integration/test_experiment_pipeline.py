from __future__ import annotations

import importlib
import re

import numpy as np
import pytest
from typer.testing import CliRunner

from vorostat.cfg import ExperimentConfig
from vorostat.cli.app import app
from vorostat.geometry import RandomPointSource
from vorostat.partition import merge_worker_buffers
from vorostat.pipeline import ExperimentResult, run_experiment
from vorostat.reduce import parallel_reduce
from vorostat.voronoi import SeedSet

# vorostat.cli re-exports the Typer object as `app`, which shadows the submodule
# attribute, so `import vorostat.cli.app as ...` would bind the Typer object.
cli_app = importlib.import_module("vorostat.cli.app")


def _parse_vector(text: str) -> list[float]:
    body = text.strip()
    assert body.startswith("{") and body.endswith("}")
    inner = body[1:-1]
    return [float(v) for v in inner.split(", ")] if inner else []


def test_axis_seeds_partition_unit_square() -> None:
    seeds = SeedSet(np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]]))
    rng = np.random.default_rng(42)
    pts = RandomPointSource(2).sample_batch(rng, 1000)

    nearest = seeds.nearest_indices(pts)
    assert np.all((nearest >= 0) & (nearest < 4))

    partitions = merge_worker_buffers([(pts, nearest)], num_partitions=4, dim=2)
    sizes = parallel_reduce(partitions, len, workers=3)
    assert len(partitions) == 4
    assert sum(sizes) == 1000

    rows = np.concatenate(partitions, axis=0)
    assert np.unique(rows, axis=0).shape[0] == np.unique(pts, axis=0).shape[0]
    for ix, part in enumerate(partitions):
        assert np.all(seeds.nearest_indices(part) == ix)
        for other in range(ix + 1, 4):
            shared = {tuple(r) for r in part.tolist()} & {tuple(r) for r in partitions[other].tolist()}
            assert not shared


def test_run_experiment_sorted_results_per_statistic() -> None:
    cfg = ExperimentConfig(
        dim=3,
        voronoi_size=8,
        point_cloud_size=2000,
        seed=7,
        workers=3,
        batch_size=256,
        statistics=("stddev", "median", "diameter"),
    )
    res = run_experiment(cfg)

    assert res.workers == 3
    assert res.total_assigned == 3 * (2000 // 3)
    assert len(res.sizes) == 8
    assert list(res.results) == ["stddev", "median", "diameter"]
    for values in res.results.values():
        assert len(values) == 8
        assert values == sorted(values)
        assert all(np.isfinite(values))
    # L∞ distances inside the unit ball are bounded by 2
    assert max(res.results["diameter"]) <= 2.0
    assert set(res.timings_s) >= {"partition", "stddev", "median", "diameter"}


def test_cli_run_prints_both_blocks() -> None:
    runner = CliRunner()
    res = runner.invoke(
        app,
        ["run", "--dim", "2", "--seeds", "4", "--samples", "400", "--workers", "2", "--seed", "1"],
        color=False,
    )
    assert res.exit_code == 0, res.stdout

    m = re.search(r"Stddevs from center:\n(\{.*\})\n\nMedians from center:\n(\{.*\})", res.stdout)
    assert m is not None, res.stdout
    stddevs = _parse_vector(m.group(1))
    medians = _parse_vector(m.group(2))
    assert len(stddevs) == 4 and len(medians) == 4
    assert stddevs == sorted(stddevs)
    assert medians == sorted(medians)


def test_cli_stat_selection_and_config_file(tmp_path) -> None:
    cfg_path = tmp_path / "exp.yaml"
    cfg_path.write_text("dim: 2\nvoronoi_size: 3\npoint_cloud_size: 90\nworkers: 2\n", encoding="utf-8")

    runner = CliRunner()
    res = runner.invoke(app, ["run", "--config", str(cfg_path), "--stat", "diameter"], color=False)
    assert res.exit_code == 0, res.stdout
    assert res.stdout.startswith("Diameters:\n{")
    assert "Stddevs" not in res.stdout
    assert len(_parse_vector(res.stdout.splitlines()[1])) == 3


def test_cli_rejects_bad_overrides() -> None:
    runner = CliRunner()
    res = runner.invoke(app, ["run", "--samples", "10", "--stat", "variance"], color=False)
    assert res.exit_code != 0

    res = runner.invoke(app, ["run", "--seeds", "0", "--samples", "10"], color=False)
    assert res.exit_code != 0


def test_bare_entry_point_runs_default_experiment(monkeypatch, capsys) -> None:
    seen: list[ExperimentConfig] = []

    def fake_run(cfg: ExperimentConfig) -> ExperimentResult:
        seen.append(cfg)
        return ExperimentResult(
            cfg=cfg, workers=1, sizes=[1], results={"stddev": [0.5], "median": [0.25]}
        )

    monkeypatch.setattr(cli_app, "run_experiment", fake_run)
    with pytest.raises(SystemExit) as exc:
        cli_app.main([])

    assert exc.value.code == 0
    assert seen == [ExperimentConfig()]
    assert "Stddevs from center:\n{0.5}" in capsys.readouterr().out
