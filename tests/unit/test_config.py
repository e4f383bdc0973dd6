"""Tests for sweep config loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from feature_dropout.common.errors import ConfigurationError
from feature_dropout.config import (
    DEFAULT_FEATURE_COLUMNS,
    DEFAULT_LABEL_COLUMNS,
    ColumnConfig,
    DropPlan,
    IntRange,
    NamedRemoval,
    PathConfig,
    SweepConfig,
    SweepSettings,
    load_sweep_config,
)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / 'sweep.yaml'
    path.write_text(text, encoding='utf-8')
    return path


class TestLoadSweepConfig:
    """Tests for load_sweep_config."""

    def test_defaults_mirror_baseball_job(self, tmp_path: Path) -> None:
        """Only paths.data is required; the rest falls back to defaults."""
        cfg = load_sweep_config(_write(tmp_path, 'paths:\n  data: data/hof.csv\n'))

        assert cfg.paths.data == (tmp_path / 'data' / 'hof.csv').resolve()
        assert cfg.paths.results == (tmp_path / 'metrics' / 'ModelPerformanceMetrics.csv').resolve()
        assert cfg.columns.features == DEFAULT_FEATURE_COLUMNS
        assert cfg.columns.labels == DEFAULT_LABEL_COLUMNS
        assert cfg.sweep.seed == 100
        assert cfg.sweep.folds == 5
        assert cfg.sweep.drops == DropPlan(mode='each')
        assert cfg.hyperparameters.iteration_count == IntRange(9500, 9500)

    def test_named_drops_parsed(self, tmp_path: Path) -> None:
        """A list of removals becomes a named drop plan."""
        cfg = load_sweep_config(
            _write(
                tmp_path,
                """
paths:
  data: hof.csv
columns:
  features: [HR, AB, TB]
  labels: [InductedToHallOfFame]
sweep:
  drops:
    - name: 'Removed: Power'
      columns: [HR, TB]
    - columns: AB
""",
            )
        )

        assert cfg.sweep.drops == DropPlan(
            mode='named',
            removals=(
                NamedRemoval(name='Removed: Power', columns=('HR', 'TB')),
                NamedRemoval(name='Removed: AB', columns=('AB',)),
            ),
        )

    def test_range_formats(self, tmp_path: Path) -> None:
        """Ranges accept [min, max], {min, max} or a single integer."""
        cfg = load_sweep_config(
            _write(
                tmp_path,
                """
paths:
  data: hof.csv
hyperparameters:
  iteration_count: [100, 200]
  learning_rate_raw: {min: 5, max: 50}
  max_bin_count_per_feature: 64
""",
            )
        )

        assert cfg.hyperparameters.iteration_count == IntRange(100, 200)
        assert cfg.hyperparameters.learning_rate_raw == IntRange(5, 50)
        assert cfg.hyperparameters.max_bin_count_per_feature == IntRange(64, 64)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing config file is reported."""
        with pytest.raises(FileNotFoundError):
            load_sweep_config(tmp_path / 'missing.yaml')

    def test_missing_data_path_rejected(self, tmp_path: Path) -> None:
        """paths.data is required."""
        with pytest.raises(ConfigurationError):
            load_sweep_config(_write(tmp_path, 'sweep:\n  seed: 1\n'))

    def test_empty_label_list_rejected(self, tmp_path: Path) -> None:
        """An empty label list fails validation at load time."""
        with pytest.raises(ConfigurationError, match='label'):
            load_sweep_config(_write(tmp_path, 'paths:\n  data: a.csv\ncolumns:\n  labels: []\n'))

    def test_unnamed_group_uses_pipe_separator(self, tmp_path: Path) -> None:
        """An unnamed multi-column removal is named with the columns joined by |."""
        cfg = load_sweep_config(
            _write(
                tmp_path,
                """
paths:
  data: hof.csv
columns:
  features: [HR, SluggingPct, AB]
sweep:
  drops:
    - columns: [HR, SluggingPct]
""",
            )
        )

        assert cfg.sweep.drops.removals == (
            NamedRemoval(name='Removed: HR|SluggingPct', columns=('HR', 'SluggingPct')),
        )

    def test_empty_removal_rejected(self, tmp_path: Path) -> None:
        """A removal must name at least one column."""
        with pytest.raises(ConfigurationError, match='no columns'):
            load_sweep_config(
                _write(
                    tmp_path,
                    'paths:\n  data: a.csv\nsweep:\n  drops:\n    - name: Nothing\n      columns: []\n',
                )
            )

    def test_malformed_yaml_rejected(self, tmp_path: Path) -> None:
        """YAML syntax errors surface as configuration errors."""
        with pytest.raises(ConfigurationError, match='Invalid YAML'):
            load_sweep_config(_write(tmp_path, 'paths:\n  data: [a.csv\n'))

    def test_non_mapping_yaml_rejected(self, tmp_path: Path) -> None:
        """The top level of the file must be a mapping."""
        with pytest.raises(ConfigurationError, match='mapping'):
            load_sweep_config(_write(tmp_path, '- a\n- b\n'))

    def test_range_missing_bound_rejected(self, tmp_path: Path) -> None:
        """A {min, max} range needs both keys."""
        with pytest.raises(ConfigurationError, match='integer range'):
            load_sweep_config(
                _write(
                    tmp_path,
                    'paths:\n  data: a.csv\nhyperparameters:\n  iteration_count: {min: 5}\n',
                )
            )

    def test_non_integer_setting_rejected(self, tmp_path: Path) -> None:
        """Integer sweep settings reject non-numeric values."""
        with pytest.raises(ConfigurationError, match='sweep.folds'):
            load_sweep_config(_write(tmp_path, 'paths:\n  data: a.csv\nsweep:\n  folds: five\n'))

    def test_bad_drops_value_rejected(self, tmp_path: Path) -> None:
        """drops must be 'each' or a list."""
        with pytest.raises(ConfigurationError):
            load_sweep_config(_write(tmp_path, 'paths:\n  data: a.csv\nsweep:\n  drops: some\n'))


class TestSweepConfigValidate:
    """Tests for SweepConfig.validate."""

    @staticmethod
    def _config(**settings) -> SweepConfig:
        return SweepConfig(
            paths=PathConfig(data=Path('a.csv'), results=Path('r.csv')),
            sweep=SweepSettings(**settings),
        )

    def test_default_config_is_valid(self) -> None:
        """Defaults pass validation."""
        self._config().validate()

    @pytest.mark.parametrize('folds', [1, 0, -1])
    def test_fewer_than_two_folds_rejected(self, folds: int) -> None:
        """Cross-validation needs at least two folds."""
        with pytest.raises(ConfigurationError, match='Fold'):
            self._config(folds=folds).validate()

    def test_non_positive_iterations_rejected(self) -> None:
        """Iteration count must be positive."""
        with pytest.raises(ConfigurationError):
            self._config(iterations=0).validate()

    def test_empty_features_rejected(self) -> None:
        """Feature list must not be empty."""
        cfg = SweepConfig(
            paths=PathConfig(data=Path('a.csv'), results=Path('r.csv')),
            columns=ColumnConfig(features=()),
        )

        with pytest.raises(ConfigurationError, match='feature'):
            cfg.validate()

    def test_label_used_as_feature_rejected(self) -> None:
        """A column cannot be both feature and label."""
        cfg = SweepConfig(
            paths=PathConfig(data=Path('a.csv'), results=Path('r.csv')),
            columns=ColumnConfig(features=('HR', 'InductedToHallOfFame')),
        )

        with pytest.raises(ConfigurationError):
            cfg.validate()

    def test_bin_limit_enforced(self, tmp_path: Path) -> None:
        """max_bin_count_per_feature cannot exceed 255."""
        with pytest.raises(ConfigurationError, match='255'):
            load_sweep_config(
                _write(
                    tmp_path,
                    'paths:\n  data: a.csv\nhyperparameters:\n  max_bin_count_per_feature: [300, 300]\n',
                )
            )
