from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

import typer
from typer.main import get_command

from vorostat.cfg import ConfigError, ExperimentConfig, load_config, validate_config
from vorostat.pipeline import run_experiment
from vorostat.report import render_report
from vorostat.utils.loggers import set_verbosity

app = typer.Typer(add_completion=False, no_args_is_help=True, rich_markup_mode="rich")


@app.callback()
def _root() -> None:
    """Voronoi partition dispersion statistics under the L∞ metric."""


@app.command("run")
def cli_run(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, readable=True
    ),
    dim: Optional[int] = typer.Option(None, "--dim", "-d"),
    seeds: Optional[int] = typer.Option(None, "--seeds", "-k"),
    samples: Optional[int] = typer.Option(None, "--samples", "-n"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s"),
    batch_size: Optional[int] = typer.Option(None, "--batch-size"),
    stat: Optional[List[str]] = typer.Option(None, "--stat"),
    verbose: bool = typer.Option(False, "--verbose/--quiet"),
) -> None:
    set_verbosity(verbose)
    try:
        cfg = load_config(config) if config is not None else ExperimentConfig()
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    overrides = {
        "dim": dim,
        "voronoi_size": seeds,
        "point_cloud_size": samples,
        "workers": workers,
        "seed": seed,
        "batch_size": batch_size,
    }
    cfg = replace(cfg, **{k: int(v) for k, v in overrides.items() if v is not None})
    if stat:
        cfg = replace(cfg, statistics=tuple(str(s).strip().lower() for s in stat))

    try:
        validate_config(cfg)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    result = run_experiment(cfg)
    typer.echo(render_report(result.results), nl=False)


def run(argv: Sequence[str] | None = None, *, prog_name: str | None = None) -> None:
    cmd = get_command(app)
    cmd.main(args=None if argv is None else list(argv), prog_name=prog_name)


def main(argv: list[str] | None = None) -> None:
    import sys

    args = list(sys.argv[1:] if argv is None else argv)
    # bare invocation runs the reference experiment
    run(args or ["run"], prog_name="vorostat")


if __name__ == "__main__":
    main()
