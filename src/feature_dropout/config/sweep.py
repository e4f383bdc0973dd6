"""Config models and loader for feature dropout sweeps."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml

from ..common.errors import ConfigurationError

DEFAULT_FEATURE_COLUMNS: tuple[str, ...] = (
    'YearsPlayed',
    'AB',
    'R',
    'H',
    'Doubles',
    'Triples',
    'HR',
    'RBI',
    'SB',
    'BattingAverage',
    'SluggingPct',
    'AllStarAppearances',
    'MVPs',
    'TripleCrowns',
    'GoldGloves',
    'MajorLeaguePlayerOfTheYearAwards',
    'TB',
    'TotalPlayerAwards',
)

DEFAULT_LABEL_COLUMNS: tuple[str, ...] = ('OnHallOfFameBallot', 'InductedToHallOfFame')

# HistGradientBoostingClassifier bins features into at most 255 buckets.
MAX_BIN_LIMIT = 255


@dataclass(frozen=True)
class IntRange:
    """Inclusive integer range."""

    low: int
    high: int

    def validate(self, name: str) -> None:
        if self.low <= 0 or self.high <= 0:
            raise ConfigurationError(f'{name} bounds must be positive, got [{self.low}, {self.high}]')
        if self.low > self.high:
            raise ConfigurationError(f'{name} lower bound {self.low} exceeds upper bound {self.high}')


@dataclass(frozen=True)
class HyperparameterRanges:
    iteration_count: IntRange = field(default_factory=lambda: IntRange(9500, 9500))
    # Drawn as an integer and divided by 10000.
    learning_rate_raw: IntRange = field(default_factory=lambda: IntRange(20, 20))
    max_bin_count_per_feature: IntRange = field(default_factory=lambda: IntRange(255, 255))

    def validate(self) -> None:
        self.iteration_count.validate('iteration_count')
        self.learning_rate_raw.validate('learning_rate_raw')
        self.max_bin_count_per_feature.validate('max_bin_count_per_feature')
        if self.max_bin_count_per_feature.high > MAX_BIN_LIMIT:
            raise ConfigurationError(
                f'max_bin_count_per_feature upper bound must be <= {MAX_BIN_LIMIT}, '
                f'got {self.max_bin_count_per_feature.high}'
            )


@dataclass(frozen=True)
class NamedRemoval:
    """A reported name for a group of columns dropped together."""

    name: str
    columns: tuple[str, ...]


@dataclass(frozen=True)
class DropPlan:
    """How to derive feature-set variants from the full feature list.

    ``each`` drops every feature column on its own, in list order.
    ``named`` applies ``removals`` in the given order.
    """

    mode: Literal['each', 'named'] = 'each'
    removals: tuple[NamedRemoval, ...] = ()


@dataclass(frozen=True)
class PathConfig:
    data: Path
    results: Path


@dataclass(frozen=True)
class ColumnConfig:
    features: tuple[str, ...] = DEFAULT_FEATURE_COLUMNS
    labels: tuple[str, ...] = DEFAULT_LABEL_COLUMNS


@dataclass(frozen=True)
class SweepSettings:
    seed: int = 100
    iterations: int = 1
    folds: int = 5
    include_baseline: bool = True
    drops: DropPlan = field(default_factory=DropPlan)


@dataclass(frozen=True)
class SweepConfig:
    paths: PathConfig
    columns: ColumnConfig = field(default_factory=ColumnConfig)
    sweep: SweepSettings = field(default_factory=SweepSettings)
    hyperparameters: HyperparameterRanges = field(default_factory=HyperparameterRanges)

    def validate(self) -> None:
        """Raise ConfigurationError if the sweep cannot run."""
        if not self.columns.labels:
            raise ConfigurationError('At least one label column must be configured')
        if not self.columns.features:
            raise ConfigurationError('At least one feature column must be configured')
        overlap = set(self.columns.labels) & set(self.columns.features)
        if overlap:
            raise ConfigurationError(f'Columns configured as both feature and label: {sorted(overlap)}')
        if self.sweep.folds < 2:
            raise ConfigurationError(f'Fold count must be at least 2, got {self.sweep.folds}')
        if self.sweep.iterations <= 0:
            raise ConfigurationError(f'Iteration count must be positive, got {self.sweep.iterations}')
        if self.sweep.drops.mode not in ('each', 'named'):
            raise ConfigurationError(f"Unknown drop mode: {self.sweep.drops.mode!r}")
        self.hyperparameters.validate()


def load_sweep_config(config_path: str | Path) -> SweepConfig:
    """Load and validate a sweep config YAML file."""
    cfg_path = Path(config_path).expanduser().resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f'Config file not found: {cfg_path}')

    try:
        with cfg_path.open('r', encoding='utf-8') as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f'Invalid YAML in {cfg_path}: {e}') from e
    if not isinstance(data, dict):
        raise ConfigurationError(f'Sweep config must be a mapping, got {type(data).__name__}')

    base_dir = cfg_path.parent

    paths_section = data.get('paths') or {}
    columns_section = data.get('columns') or {}
    sweep_section = data.get('sweep') or {}
    hyper_section = data.get('hyperparameters') or {}

    data_path = paths_section.get('data')
    if not data_path:
        raise ConfigurationError('paths.data must be set in sweep config')

    paths = PathConfig(
        data=_resolve_path(base_dir, data_path),
        results=_resolve_path(
            base_dir,
            paths_section.get('results', 'metrics/ModelPerformanceMetrics.csv'),
        ),
    )

    columns = ColumnConfig(
        features=tuple(columns_section.get('features', DEFAULT_FEATURE_COLUMNS)),
        labels=tuple(columns_section.get('labels', DEFAULT_LABEL_COLUMNS)),
    )

    sweep = SweepSettings(
        seed=_as_int(sweep_section, 'seed', 100),
        iterations=_as_int(sweep_section, 'iterations', 1),
        folds=_as_int(sweep_section, 'folds', 5),
        include_baseline=bool(sweep_section.get('include_baseline', True)),
        drops=_parse_drops(sweep_section.get('drops', 'each')),
    )

    defaults = HyperparameterRanges()
    hyperparameters = HyperparameterRanges(
        iteration_count=_parse_range(hyper_section.get('iteration_count'), defaults.iteration_count),
        learning_rate_raw=_parse_range(
            hyper_section.get('learning_rate_raw'),
            defaults.learning_rate_raw,
        ),
        max_bin_count_per_feature=_parse_range(
            hyper_section.get('max_bin_count_per_feature'),
            defaults.max_bin_count_per_feature,
        ),
    )

    config = SweepConfig(
        paths=paths,
        columns=columns,
        sweep=sweep,
        hyperparameters=hyperparameters,
    )
    config.validate()
    return config


def _as_int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f'sweep.{key} must be an integer, got {value!r}') from e


def _parse_drops(value: Any) -> DropPlan:
    if value is None or value == 'each':
        return DropPlan(mode='each')
    if isinstance(value, list):
        removals = []
        for entry in value:
            if not isinstance(entry, dict) or 'columns' not in entry:
                raise ConfigurationError(f'Drop entries need a columns list, got {entry!r}')
            columns = entry['columns']
            if isinstance(columns, str):
                columns = [columns]
            if not columns:
                raise ConfigurationError(f'Drop entry names no columns: {entry!r}')
            name = entry.get('name') or f'Removed: {"|".join(columns)}'
            removals.append(NamedRemoval(name=str(name), columns=tuple(columns)))
        return DropPlan(mode='named', removals=tuple(removals))
    raise ConfigurationError(f"sweep.drops must be 'each' or a list of removals, got {value!r}")


def _parse_range(value: Any, default: IntRange) -> IntRange:
    if value is None:
        return default
    if isinstance(value, int):
        return IntRange(value, value)
    try:
        if isinstance(value, dict):
            return IntRange(int(value['min']), int(value['max']))
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return IntRange(int(value[0]), int(value[1]))
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f'Expected an integer range, got {value!r}') from e
    raise ConfigurationError(f'Expected an integer range, got {value!r}')


def _resolve_path(base: Path, value: str | Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = (base / path).resolve()
    return path
