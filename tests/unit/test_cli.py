"""Tests for the feature-dropout CLI."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
from typer.testing import CliRunner

from feature_dropout.cli.main import app
from feature_dropout.experiments.artifacts import RESULT_COLUMNS


def _write_inputs(tmp_path: Path, drops: str = 'each') -> Path:
    rng = np.random.default_rng(3)
    hr = rng.normal(size=60)
    pd.DataFrame(
        {
            'HR': hr,
            'AB': rng.normal(size=60),
            'OnHallOfFameBallot': hr > 0,
        }
    ).to_csv(tmp_path / 'hof.csv', index=False)

    config = tmp_path / 'sweep.yaml'
    config.write_text(
        f"""
paths:
  data: hof.csv
  results: metrics/results.csv
columns:
  features: [HR, AB]
  labels: [OnHallOfFameBallot]
sweep:
  seed: 11
  iterations: 1
  folds: 3
  drops: {drops}
hyperparameters:
  iteration_count: [10, 10]
  learning_rate_raw: [1000, 1000]
  max_bin_count_per_feature: [16, 16]
""",
        encoding='utf-8',
    )
    return config


def test_cli_sweep_writes_results(tmp_path: Path) -> None:
    runner = CliRunner()
    config = _write_inputs(tmp_path)

    result = runner.invoke(app, ['sweep', '--config', str(config)])

    assert result.exit_code == 0, result.output
    assert 'Job ID:' in result.output
    lines = (tmp_path / 'metrics' / 'results.csv').read_text(encoding='utf-8').splitlines()
    assert lines[0] == ','.join(RESULT_COLUMNS)
    assert len(lines) == 4  # header + Baseline + 2 drops


def test_cli_sweep_overrides_results_and_iterations(tmp_path: Path) -> None:
    runner = CliRunner()
    config = _write_inputs(tmp_path)
    override = tmp_path / 'elsewhere.csv'

    result = runner.invoke(
        app,
        ['sweep', '--config', str(config), '--results', str(override), '--iterations', '2'],
    )

    assert result.exit_code == 0, result.output
    assert len(override.read_text(encoding='utf-8').splitlines()) == 1 + 3 * 2


def test_cli_sweep_reports_configuration_error(tmp_path: Path) -> None:
    runner = CliRunner()
    config = _write_inputs(tmp_path, drops='[{name: everything, columns: [HR, AB]}]')

    result = runner.invoke(app, ['sweep', '--config', str(config)])

    assert result.exit_code == 1
    assert 'Sweep failed' in result.output
    assert not (tmp_path / 'metrics' / 'results.csv').exists()


def test_cli_report_prints_table(tmp_path: Path) -> None:
    runner = CliRunner()
    config = _write_inputs(tmp_path)
    runner.invoke(app, ['sweep', '--config', str(config)])
    output_csv = tmp_path / 'importance.csv'

    result = runner.invoke(
        app,
        [
            'report',
            '--results',
            str(tmp_path / 'metrics' / 'results.csv'),
            '--metric',
            'f1',
            '--output',
            str(output_csv),
        ],
    )

    assert result.exit_code == 0, result.output
    assert 'Removed: HR' in result.output
    assert output_csv.exists()


def test_cli_report_rejects_unknown_metric(tmp_path: Path) -> None:
    runner = CliRunner()
    config = _write_inputs(tmp_path)
    runner.invoke(app, ['sweep', '--config', str(config)])

    result = runner.invoke(
        app,
        ['report', '--results', str(tmp_path / 'metrics' / 'results.csv'), '--metric', 'bogus'],
    )

    assert result.exit_code == 1
    assert 'Unknown metric' in result.output


def test_cli_sweep_reports_malformed_yaml(tmp_path: Path) -> None:
    runner = CliRunner()
    config = tmp_path / 'broken.yaml'
    config.write_text('paths:\n  data: [hof.csv\n', encoding='utf-8')

    result = runner.invoke(app, ['sweep', '--config', str(config)])

    assert result.exit_code == 1
    assert 'Sweep failed' in result.output
    assert 'Invalid YAML' in result.output
