"""Configuration utilities for feature_dropout."""

from .sweep import (
    DEFAULT_FEATURE_COLUMNS,
    DEFAULT_LABEL_COLUMNS,
    ColumnConfig,
    DropPlan,
    HyperparameterRanges,
    IntRange,
    NamedRemoval,
    PathConfig,
    SweepConfig,
    SweepSettings,
    load_sweep_config,
)

__all__ = [
    'DEFAULT_FEATURE_COLUMNS',
    'DEFAULT_LABEL_COLUMNS',
    'ColumnConfig',
    'DropPlan',
    'HyperparameterRanges',
    'IntRange',
    'NamedRemoval',
    'PathConfig',
    'SweepConfig',
    'SweepSettings',
    'load_sweep_config',
]
