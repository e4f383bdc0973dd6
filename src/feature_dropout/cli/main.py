"""Command-line interface for feature_dropout."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from ..common.errors import FeatureDropoutError
from ..config import SweepConfig, load_sweep_config
from ..utils import get_logger, json_log

# NOTE: Training and reporting modules pull in sklearn/pandas and are
# imported inside the command handlers to keep --help fast.

app = typer.Typer(help='Column-dropout feature importance sweeps', no_args_is_help=True)

log = get_logger(__name__)


def _apply_overrides(
    config: SweepConfig,
    iterations: int | None = None,
    results: Path | None = None,
) -> SweepConfig:
    if iterations is not None:
        config = replace(config, sweep=replace(config.sweep, iterations=iterations))
    if results is not None:
        config = replace(
            config,
            paths=replace(config.paths, results=Path(results).expanduser().resolve()),
        )
    return config


@app.command('sweep')
def sweep(
    config: Annotated[
        Path,
        typer.Option(
            '--config',
            '-c',
            exists=True,
            readable=True,
            help='Path to sweep configuration YAML.',
        ),
    ] = Path('configs/sweep.yaml'),
    iterations: Annotated[
        int | None,
        typer.Option('--iterations', '-n', help='Override sweep.iterations.'),
    ] = None,
    results: Annotated[
        Path | None,
        typer.Option('--results', '-r', help='Override the results log path.'),
    ] = None,
) -> None:
    """Run every label x feature set x iteration trial and append results."""
    from ..data import load_dataset
    from ..experiments import run_sweep
    from ..io import CsvResultsSink
    from ..models import GamTrainer

    log.info(json_log('cli.sweep.start', component='cli', config=str(config)))

    try:
        cfg = _apply_overrides(load_sweep_config(config), iterations=iterations, results=results)
        cfg.validate()
        dataset = load_dataset(cfg.paths.data, cfg.columns.features, cfg.columns.labels)
        outcome = run_sweep(
            cfg,
            dataset=dataset,
            trainer=GamTrainer(),
            sink=CsvResultsSink(cfg.paths.results),
        )
    except (FeatureDropoutError, OSError) as e:
        log.error(json_log('cli.sweep.failed', component='cli', error=str(e), error_type=type(e).__name__))
        typer.echo(f'Sweep failed: {e}', err=True)
        raise typer.Exit(code=1) from e

    log.info(
        json_log(
            'cli.sweep.completed',
            component='cli',
            job_id=outcome.job_id,
            trials=len(outcome),
            results=str(cfg.paths.results),
        )
    )
    typer.echo(f'Job ID: {outcome.job_id}')
    typer.echo(f'Wrote {len(outcome)} result row(s) to: {cfg.paths.results}')


@app.command('report')
def report(
    results: Annotated[
        Path,
        typer.Option(
            '--results',
            '-r',
            exists=True,
            readable=True,
            help='Path to the results log CSV.',
        ),
    ],
    job_id: Annotated[
        str | None,
        typer.Option('--job-id', help='Job to report on (default: most recent).'),
    ] = None,
    metric: Annotated[
        str,
        typer.Option('--metric', '-m', help='Metric to compare against the baseline.'),
    ] = 'mcc',
    output: Annotated[
        Path | None,
        typer.Option('--output', '-o', help='Optional CSV path for the table.'),
    ] = None,
) -> None:
    """Show how much each dropped column group moves a metric."""
    from ..io import read_results
    from ..reports import build_importance_table, export_importance_table

    try:
        table = build_importance_table(read_results(results), job_id=job_id, metric=metric)
    except ValueError as e:
        typer.echo(f'Report failed: {e}', err=True)
        raise typer.Exit(code=1) from e

    typer.echo(table.to_string(index=False))
    if output is not None:
        path = export_importance_table(table, output)
        typer.echo(f'Importance table written to: {path}')


if __name__ == '__main__':
    app()
